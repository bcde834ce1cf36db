"""Artifact generation: target paths, namespaces and rendered stubs.

Turns a requested name such as ``Admin/User`` and an artifact kind into a
:class:`GeneratedArtifact` placed under the Laravel conventions held by
:class:`~service_maker.config.Config`::

    make:repository Admin/User
      -> app/Repositories/Admin/UserRepository.php
      -> namespace App\\Repositories\\Admin
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .models import ArtifactKind, GeneratedArtifact, StubParams
from .templates import DEFAULT_TEMPLATES, TemplateRenderer
from .writer import ArtifactExistsError

if TYPE_CHECKING:
    from service_maker.config import Config

_SEGMENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class InvalidNameError(ValueError):
    """Raised when a requested name cannot become a PHP type name."""


@dataclass(frozen=True)
class ArtifactTarget:
    """Where an artifact of a given kind and name lives."""

    kind: ArtifactKind
    path: Path
    namespace: str
    type_name: str

    @property
    def fqn(self) -> str:
        return f"{self.namespace}\\{self.type_name}"


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def split_name(raw_name: str) -> tuple[list[str], str]:
    """Split a requested name into nested segments and a base name.

    Both ``/`` and ``\\`` separate segments; empty segments are dropped.

    Examples::

        split_name("User")            -> ([], "User")
        split_name("Admin/Billing/Invoice") -> (["Admin", "Billing"], "Invoice")
        split_name("Admin\\\\User")     -> (["Admin"], "User")

    Raises:
        InvalidNameError: When no base name remains or a segment is not a
            valid PHP identifier.
    """
    parts = [p.strip() for p in raw_name.replace("\\", "/").split("/")]
    parts = [p for p in parts if p]
    if not parts:
        raise InvalidNameError(f"Invalid name: {raw_name!r}")
    for part in parts:
        if not _SEGMENT_RE.match(part):
            raise InvalidNameError(f"Invalid name segment {part!r} in {raw_name!r}")
    return parts[:-1], parts[-1]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ArtifactGenerator:
    """Computes artifact targets and renders their stubs."""

    def __init__(self, config: Config, renderer: Optional[TemplateRenderer] = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Targets -----------------------------------------------------------

    def resolve(self, kind: ArtifactKind, raw_name: str) -> ArtifactTarget:
        """Compute the path, namespace and type name for *raw_name*."""
        segments, base = split_name(raw_name)
        type_name = f"{base}{kind.suffix}"
        directory = self.config.base_dir(kind).joinpath(*segments)
        namespace = "\\".join([self.config.namespace_for(kind), *segments])
        return ArtifactTarget(
            kind=kind,
            path=directory / f"{type_name}.php",
            namespace=namespace,
            type_name=type_name,
        )

    def companion_interface(self, kind: ArtifactKind, raw_name: str) -> ArtifactTarget:
        """Interface target for a repository or service named *raw_name*.

        ``Admin/User`` as a repository maps to
        ``app/Interfaces/Admin/UserRepositoryInterface.php``.
        """
        segments, base = split_name(raw_name)
        return self.resolve(ArtifactKind.INTERFACE, "/".join([*segments, base + kind.suffix]))

    def model_fqn(self, model: str) -> str:
        """FQN of a model name, nested names included."""
        segments, base = split_name(model)
        return "\\".join([self.config.models_namespace, *segments, base])

    # -- Rendering ---------------------------------------------------------

    def generate(
        self,
        kind: ArtifactKind,
        raw_name: str,
        *,
        model: Optional[str] = None,
        interface: Optional[ArtifactTarget] = None,
        template: Optional[str] = None,
        target: Optional[ArtifactTarget] = None,
    ) -> GeneratedArtifact:
        """Render the artifact of *kind* named *raw_name*.

        Args:
            kind: Artifact kind.
            raw_name: Requested name, possibly nested.
            model: Model backing a repository or service; becomes a
                model-typed constructor parameter.
            interface: Interface the generated class implements.
            template: Template overriding the kind's default one.
            target: Precomputed target (from :meth:`resolve` or
                :meth:`companion_interface`).

        Raises:
            InvalidNameError: *raw_name* or *model* is not a valid name.
            ArtifactExistsError: The target file already exists.
        """
        target = target or self.resolve(kind, raw_name)
        if target.path.exists():
            raise ArtifactExistsError(target.path, kind.label)

        model_fqn = self.model_fqn(model) if model else None
        params = StubParams(
            namespace=target.namespace,
            class_name=target.type_name,
            interface_name=interface.type_name if interface else None,
            interface_fqn=interface.fqn if interface else None,
            model_name=model_fqn.rsplit("\\", 1)[-1] if model_fqn else None,
            model_fqn=model_fqn,
        )
        content = self.renderer.render_stub(template or DEFAULT_TEMPLATES[kind], params)

        return GeneratedArtifact(
            target_path=target.path,
            namespace=target.namespace,
            type_name=target.type_name,
            kind=kind,
            content=content,
        )
