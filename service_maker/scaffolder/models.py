"""Pydantic v2 models shared by the generators and the provider patcher.

Defines the artifact kinds, the typed parameters every stub template is
rendered with, the generated artifact itself, and the binding description
consumed by :mod:`service_maker.provider`.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ArtifactKind(str, Enum):
    """Kind of PHP type a ``make:*`` command produces."""
    INTERFACE = "interface"
    REPOSITORY = "repository"
    SERVICE = "service"
    TRAIT = "trait"

    @property
    def directory(self) -> str:
        """Directory under ``app/`` and namespace segment under ``App``."""
        return _DIRECTORIES[self]

    @property
    def suffix(self) -> str:
        """Class-name suffix appended to the requested base name."""
        return _SUFFIXES[self]

    @property
    def label(self) -> str:
        """Capitalised name used in console messages."""
        return self.value.capitalize()


_DIRECTORIES: dict[ArtifactKind, str] = {
    ArtifactKind.INTERFACE: "Interfaces",
    ArtifactKind.REPOSITORY: "Repositories",
    ArtifactKind.SERVICE: "Services",
    ArtifactKind.TRAIT: "Traits",
}

_SUFFIXES: dict[ArtifactKind, str] = {
    ArtifactKind.INTERFACE: "Interface",
    ArtifactKind.REPOSITORY: "Repository",
    ArtifactKind.SERVICE: "Service",
    ArtifactKind.TRAIT: "",
}


class BindingMode(str, Enum):
    """Container resolution policy for a binding."""
    TRANSIENT = "transient"
    SINGLETON = "singleton"

    @property
    def method(self) -> str:
        """Name of the Laravel container method registering the binding."""
        return "singleton" if self is BindingMode.SINGLETON else "bind"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def short_name(fqn: str) -> str:
    """Return the unqualified class name of a PHP FQN.

    E.g. ``'App\\Services\\FooService'`` -> ``'FooService'``.
    """
    return fqn.strip("\\").rsplit("\\", 1)[-1]


def _normalize_fqn(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().strip("\\")
    if not value:
        raise ValueError("fully-qualified name must not be empty")
    return value


# ---------------------------------------------------------------------------
# Stub & artifact models
# ---------------------------------------------------------------------------

class StubParams(BaseModel):
    """Named fields a stub template is rendered with."""

    namespace: str = Field(..., description="Namespace of the generated type")
    class_name: str = Field(..., description="Unqualified name of the generated type")
    interface_name: Optional[str] = Field(default=None, description="Implemented interface, short name")
    interface_fqn: Optional[str] = Field(default=None, description="Implemented interface, imported FQN")
    model_name: Optional[str] = Field(default=None, description="Backing model, short name")
    model_fqn: Optional[str] = Field(default=None, description="Backing model, imported FQN")


class GeneratedArtifact(BaseModel):
    """A rendered source file not yet (or just) written to disk."""

    model_config = ConfigDict(frozen=True)

    target_path: Path
    namespace: str
    type_name: str
    kind: ArtifactKind
    content: str

    @property
    def fqn(self) -> str:
        """Fully-qualified name of the generated type."""
        return f"{self.namespace}\\{self.type_name}"


class BindingSpec(BaseModel):
    """What must be registered in the provider's registration function.

    ``model_fqn`` names the single model-typed constructor dependency of the
    implementation. It is only used when no interface is bound, in which
    case the binding becomes a factory closure resolving the model from the
    container when the closure runs.
    """

    model_config = ConfigDict(frozen=True)

    implementation_fqn: str
    interface_fqn: Optional[str] = None
    mode: BindingMode = BindingMode.TRANSIENT
    model_fqn: Optional[str] = None

    @field_validator("implementation_fqn", "interface_fqn", "model_fqn")
    @classmethod
    def _strip_leading_backslash(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_fqn(value)

    @property
    def abstract_fqn(self) -> str:
        """The type the container is asked for: the interface if any."""
        return self.interface_fqn or self.implementation_fqn

    @property
    def required_imports(self) -> list[str]:
        """FQNs the provider must import, implementation first."""
        imports = [self.implementation_fqn]
        if self.interface_fqn and self.interface_fqn != self.implementation_fqn:
            imports.append(self.interface_fqn)
        return imports

    def describe(self) -> str:
        """Human-readable ``Interface => Implementation`` summary."""
        impl = short_name(self.implementation_fqn)
        if self.interface_fqn:
            return f"{short_name(self.interface_fqn)} => {impl}"
        return impl


class PatchResult(BaseModel):
    """Outcome of patching a provider document."""

    content: str
    imports_added: list[str] = Field(default_factory=list)
    binding_added: bool = False
    binding: str = ""

    @property
    def changed(self) -> bool:
        return bool(self.imports_added) or self.binding_added
