"""Service Maker scaffolder -- renders and writes PHP stubs.

Computes where an interface, repository, service or trait lives under the
Laravel ``app/`` directory, renders its stub through Jinja2 templates and
writes it without ever overwriting an existing file.

Quick usage::

    from service_maker.config import Config
    from service_maker.scaffolder import ArtifactGenerator, ArtifactKind, ArtifactWriter

    generator = ArtifactGenerator(Config(app_path=Path("app")))
    artifact = generator.generate(ArtifactKind.SERVICE, "Billing/Invoice", model="Invoice")
    ArtifactWriter().write(artifact)
"""

from service_maker.scaffolder.generator import ArtifactGenerator, ArtifactTarget, InvalidNameError
from service_maker.scaffolder.models import (
    ArtifactKind,
    BindingMode,
    BindingSpec,
    GeneratedArtifact,
    StubParams,
)
from service_maker.scaffolder.templates import TemplateRenderer
from service_maker.scaffolder.writer import ArtifactExistsError, ArtifactWriteError, ArtifactWriter

__all__ = [
    "ArtifactExistsError",
    "ArtifactGenerator",
    "ArtifactKind",
    "ArtifactTarget",
    "ArtifactWriteError",
    "ArtifactWriter",
    "BindingMode",
    "BindingSpec",
    "GeneratedArtifact",
    "InvalidNameError",
    "StubParams",
    "TemplateRenderer",
]
