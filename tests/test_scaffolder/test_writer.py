"""Tests for artifact persistence (service_maker.scaffolder.writer)."""

from __future__ import annotations

from pathlib import Path

import pytest

from service_maker.scaffolder.models import ArtifactKind, GeneratedArtifact
from service_maker.scaffolder.writer import (
    ArtifactExistsError,
    ArtifactWriteError,
    ArtifactWriter,
)


pytestmark = pytest.mark.unit


def _artifact(path: Path, content: str = "<?php\n") -> GeneratedArtifact:
    return GeneratedArtifact(
        target_path=path,
        namespace="App\\Services\\Admin",
        type_name="UserService",
        kind=ArtifactKind.SERVICE,
        content=content,
    )


class TestArtifactWriter:
    def test_creates_missing_directories(self, tmp_path):
        path = tmp_path / "Services" / "Admin" / "UserService.php"

        written = ArtifactWriter().write(_artifact(path, "<?php\n\nclass UserService {}\n"))

        assert written == path
        assert path.read_text(encoding="utf-8") == "<?php\n\nclass UserService {}\n"

    def test_never_overwrites(self, tmp_path):
        path = tmp_path / "UserService.php"
        path.write_text("original", encoding="utf-8")

        with pytest.raises(ArtifactExistsError) as exc_info:
            ArtifactWriter().write(_artifact(path))

        assert exc_info.value.label == "Service"
        assert exc_info.value.path == path
        assert path.read_text(encoding="utf-8") == "original"

    def test_newlines_written_verbatim(self, tmp_path):
        path = tmp_path / "UserService.php"
        ArtifactWriter().write(_artifact(path, "<?php\r\n"))
        assert path.read_bytes() == b"<?php\r\n"

    def test_unwritable_parent(self, tmp_path):
        blocker = tmp_path / "Services"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(ArtifactWriteError):
            ArtifactWriter().write(_artifact(blocker / "UserService.php"))
