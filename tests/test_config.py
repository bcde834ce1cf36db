"""Unit tests for Config (service_maker.config).

Tests cover:
- Config defaults and validation
- Derived paths and namespaces per artifact kind
- save/load round-trip
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from service_maker.config import Config
from service_maker.provider.bindings import DEFAULT_INDENT
from service_maker.scaffolder.models import ArtifactKind


# ---------------------------------------------------------------------------
# Defaults & validation
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_default_values(self):
        config = Config()
        assert config.app_path == Path("./app")
        assert config.root_namespace == "App"
        assert config.models_namespace == "App\\Models"
        assert config.registration_function == "register"
        assert config.indent == DEFAULT_INDENT
        assert config.dedupe_bindings is True
        assert config.lock_timeout == 10.0

    @pytest.mark.unit
    def test_namespaces_are_trimmed(self):
        config = Config(root_namespace="\\Domain\\", models_namespace="\\Domain\\Entities")
        assert config.root_namespace == "Domain"
        assert config.models_namespace == "Domain\\Entities"

    @pytest.mark.unit
    def test_tab_indent_accepted(self):
        assert Config(indent="\t\t").indent == "\t\t"

    @pytest.mark.unit
    def test_non_whitespace_indent_rejected(self):
        with pytest.raises(ValidationError):
            Config(indent="  x")

    @pytest.mark.unit
    def test_invalid_registration_function_rejected(self):
        with pytest.raises(ValidationError):
            Config(registration_function="register()")

    @pytest.mark.unit
    def test_non_positive_lock_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Config(lock_timeout=0)


# ---------------------------------------------------------------------------
# Derived paths
# ---------------------------------------------------------------------------


class TestConfigDerivedPaths:
    @pytest.mark.unit
    def test_provider_path(self, tmp_path: Path):
        config = Config(app_path=tmp_path)
        assert config.provider_path == tmp_path / "Providers" / "AppServiceProvider.php"
        assert config.provider_name == "AppServiceProvider.php"

    @pytest.mark.unit
    def test_custom_provider_file(self, tmp_path: Path):
        config = Config(app_path=tmp_path, provider_file="Providers/RepositoryServiceProvider.php")
        assert config.provider_name == "RepositoryServiceProvider.php"

    @pytest.mark.unit
    def test_base_dir_per_kind(self, tmp_path: Path):
        config = Config(app_path=tmp_path)
        assert config.base_dir(ArtifactKind.REPOSITORY) == tmp_path / "Repositories"
        assert config.base_dir(ArtifactKind.TRAIT) == tmp_path / "Traits"

    @pytest.mark.unit
    def test_namespace_per_kind(self):
        config = Config()
        assert config.namespace_for(ArtifactKind.INTERFACE) == "App\\Interfaces"
        assert config.namespace_for(ArtifactKind.SERVICE) == "App\\Services"


# ---------------------------------------------------------------------------
# save / load
# ---------------------------------------------------------------------------


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_load_roundtrip(self, tmp_path: Path):
        original = Config(
            app_path=tmp_path / "app",
            root_namespace="Domain",
            indent="\t",
            dedupe_bindings=False,
        )
        path = original.save(tmp_path / "conf" / "service-maker.json")

        assert path.exists()
        loaded = Config.load(path)
        assert loaded == original

    @pytest.mark.unit
    def test_load_invalid_file(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text('{"lock_timeout": -1}', encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.load(path)


# ---------------------------------------------------------------------------
# from_env
# ---------------------------------------------------------------------------


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_defaults_when_no_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_app_path_from_env(self):
        env = {"SERVICE_MAKER_APP_PATH": "/srv/laravel/app"}
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.app_path == Path("/srv/laravel/app")

    @pytest.mark.unit
    def test_namespaces_from_env(self):
        env = {
            "SERVICE_MAKER_ROOT_NAMESPACE": "Domain",
            "SERVICE_MAKER_MODELS_NAMESPACE": "Domain\\Entities",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.root_namespace == "Domain"
        assert config.models_namespace == "Domain\\Entities"

    @pytest.mark.unit
    def test_provider_settings_from_env(self):
        env = {
            "SERVICE_MAKER_PROVIDER_FILE": "Providers/RepositoryServiceProvider.php",
            "SERVICE_MAKER_REGISTRATION_FUNCTION": "registerBindings",
            "SERVICE_MAKER_LOCK_TIMEOUT": "2.5",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.provider_file == "Providers/RepositoryServiceProvider.php"
        assert config.registration_function == "registerBindings"
        assert config.lock_timeout == 2.5

    @pytest.mark.unit
    @pytest.mark.parametrize("value, expected", [("0", False), ("off", False), ("yes", True)])
    def test_dedupe_from_env(self, value, expected):
        with patch.dict(os.environ, {"SERVICE_MAKER_DEDUPE_BINDINGS": value}, clear=True):
            config = Config.from_env()
        assert config.dedupe_bindings is expected
