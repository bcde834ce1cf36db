"""Service Maker configuration.

Centralised, typed configuration for the generators and the provider
patcher. All settings use Pydantic v2 models so they can be validated at
construction time and serialised to/from JSON or environment variables
without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from service_maker.provider.bindings import DEFAULT_INDENT
from service_maker.scaffolder.models import ArtifactKind


class Config(BaseModel):
    """Global Service Maker configuration.

    Mirrors the Laravel conventions the generated code lives in: an ``app/``
    directory mapped to the ``App`` namespace, models under ``App\\Models``
    and an ``AppServiceProvider`` whose ``register()`` method receives the
    container bindings.
    """

    app_path: Path = Field(default=Path("./app"))
    root_namespace: str = Field(default="App")
    models_namespace: str = Field(default="App\\Models")
    provider_file: str = Field(default="Providers/AppServiceProvider.php")
    registration_function: str = Field(default="register", pattern=r"^[A-Za-z_]\w*$")
    indent: str = Field(default=DEFAULT_INDENT, description="Fallback indent for binding statements")
    dedupe_bindings: bool = Field(
        default=True, description="Skip the binding when the abstract is already registered"
    )
    lock_timeout: float = Field(default=10.0, gt=0, description="Provider lock timeout in seconds")

    @field_validator("indent")
    @classmethod
    def _indent_is_whitespace(cls, value: str) -> str:
        if value.strip():
            raise ValueError("indent must only contain spaces or tabs")
        return value

    @field_validator("root_namespace", "models_namespace")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        return value.strip("\\")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def provider_path(self) -> Path:
        """Path to the bootstrap file the binding step patches."""
        return self.app_path / self.provider_file

    @property
    def provider_name(self) -> str:
        """File name of the provider, used in console messages."""
        return Path(self.provider_file).name

    def base_dir(self, kind: ArtifactKind) -> Path:
        """Directory holding every artifact of *kind*."""
        return self.app_path / kind.directory

    def namespace_for(self, kind: ArtifactKind) -> str:
        """Root namespace of every artifact of *kind*."""
        return f"{self.root_namespace}\\{kind.directory}"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SERVICE_MAKER_APP_PATH, SERVICE_MAKER_ROOT_NAMESPACE,
            SERVICE_MAKER_MODELS_NAMESPACE, SERVICE_MAKER_PROVIDER_FILE,
            SERVICE_MAKER_REGISTRATION_FUNCTION, SERVICE_MAKER_DEDUPE_BINDINGS,
            SERVICE_MAKER_LOCK_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SERVICE_MAKER_APP_PATH"):
            kwargs["app_path"] = Path(os.environ["SERVICE_MAKER_APP_PATH"])
        if os.environ.get("SERVICE_MAKER_ROOT_NAMESPACE"):
            kwargs["root_namespace"] = os.environ["SERVICE_MAKER_ROOT_NAMESPACE"]
        if os.environ.get("SERVICE_MAKER_MODELS_NAMESPACE"):
            kwargs["models_namespace"] = os.environ["SERVICE_MAKER_MODELS_NAMESPACE"]
        if os.environ.get("SERVICE_MAKER_PROVIDER_FILE"):
            kwargs["provider_file"] = os.environ["SERVICE_MAKER_PROVIDER_FILE"]
        if os.environ.get("SERVICE_MAKER_REGISTRATION_FUNCTION"):
            kwargs["registration_function"] = os.environ["SERVICE_MAKER_REGISTRATION_FUNCTION"]
        if os.environ.get("SERVICE_MAKER_DEDUPE_BINDINGS"):
            kwargs["dedupe_bindings"] = os.environ["SERVICE_MAKER_DEDUPE_BINDINGS"].strip().lower() not in (
                "0",
                "false",
                "no",
                "off",
            )
        if os.environ.get("SERVICE_MAKER_LOCK_TIMEOUT"):
            kwargs["lock_timeout"] = float(os.environ["SERVICE_MAKER_LOCK_TIMEOUT"])
        return cls(**kwargs)
