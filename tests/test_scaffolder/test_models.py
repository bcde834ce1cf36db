"""Tests for the shared Pydantic models (service_maker.scaffolder.models)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from service_maker.scaffolder.models import (
    ArtifactKind,
    BindingMode,
    BindingSpec,
    GeneratedArtifact,
    PatchResult,
    short_name,
)


pytestmark = pytest.mark.unit


class TestArtifactKind:
    def test_conventions(self):
        assert ArtifactKind.REPOSITORY.directory == "Repositories"
        assert ArtifactKind.SERVICE.suffix == "Service"
        assert ArtifactKind.TRAIT.suffix == ""
        assert ArtifactKind.INTERFACE.label == "Interface"

    def test_binding_mode_method(self):
        assert BindingMode.TRANSIENT.method == "bind"
        assert BindingMode.SINGLETON.method == "singleton"


class TestBindingSpec:
    def test_leading_backslashes_are_stripped(self):
        spec = BindingSpec(
            implementation_fqn="\\App\\Services\\FooService",
            interface_fqn="\\App\\Interfaces\\FooServiceInterface",
        )
        assert spec.implementation_fqn == "App\\Services\\FooService"
        assert spec.abstract_fqn == "App\\Interfaces\\FooServiceInterface"

    def test_empty_fqn_is_rejected(self):
        with pytest.raises(ValidationError):
            BindingSpec(implementation_fqn="\\")

    def test_required_imports_implementation_first(self):
        spec = BindingSpec(
            implementation_fqn="App\\Services\\FooService",
            interface_fqn="App\\Interfaces\\FooServiceInterface",
            model_fqn="App\\Models\\Foo",
        )
        assert spec.required_imports == [
            "App\\Services\\FooService",
            "App\\Interfaces\\FooServiceInterface",
        ]

    def test_describe(self):
        with_interface = BindingSpec(
            implementation_fqn="App\\Services\\FooService",
            interface_fqn="App\\Interfaces\\FooServiceInterface",
        )
        assert with_interface.describe() == "FooServiceInterface => FooService"
        assert BindingSpec(implementation_fqn="App\\Services\\FooService").describe() == "FooService"

    def test_frozen(self):
        spec = BindingSpec(implementation_fqn="App\\Services\\FooService")
        with pytest.raises(ValidationError):
            spec.mode = BindingMode.SINGLETON


class TestMisc:
    def test_short_name(self):
        assert short_name("\\App\\Models\\User") == "User"
        assert short_name("User") == "User"

    def test_artifact_fqn(self, tmp_path):
        artifact = GeneratedArtifact(
            target_path=tmp_path / "X.php",
            namespace="App\\Traits",
            type_name="HasUuid",
            kind=ArtifactKind.TRAIT,
            content="",
        )
        assert artifact.fqn == "App\\Traits\\HasUuid"

    def test_patch_result_changed(self):
        assert not PatchResult(content="x").changed
        assert PatchResult(content="x", imports_added=["App\\A"]).changed
        assert PatchResult(content="x", binding_added=True).changed
