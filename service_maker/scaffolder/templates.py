"""Jinja2 template rendering for PHP stubs.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``service_maker/scaffolder/templates/`` directory and renders them with the
typed :class:`~service_maker.scaffolder.models.StubParams` of an artifact.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .models import ArtifactKind, StubParams


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Default template for each artifact kind
DEFAULT_TEMPLATES: dict[ArtifactKind, str] = {
    ArtifactKind.INTERFACE: "interface.php.j2",
    ArtifactKind.REPOSITORY: "repository.php.j2",
    ArtifactKind.SERVICE: "service.php.j2",
    ArtifactKind.TRAIT: "trait.php.j2",
}

REPOSITORY_INTERFACE_TEMPLATE = "repository_interface.php.j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for PHP stubs.

    The renderer discovers ``.j2`` template files under a configurable
    template directory, so a project can ship its own stubs.  Undefined
    variables raise instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"service.php.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_stub(self, template_path: str, params: StubParams) -> str:
        """Render *template_path* with the fields of *params*."""
        return self.render(template_path, params.model_dump())
