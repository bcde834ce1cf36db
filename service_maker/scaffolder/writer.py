"""Persists generated artifacts without ever overwriting existing files."""

from __future__ import annotations

from pathlib import Path

from .models import GeneratedArtifact


class WriterError(Exception):
    """Base class for failures while persisting an artifact."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


class ArtifactExistsError(WriterError):
    """Raised when the artifact's target file is already present."""

    def __init__(self, path: Path, label: str = "File") -> None:
        self.label = label
        super().__init__(f"{label} already exists: {path}", path)


class ArtifactWriteError(WriterError):
    """Raised when the backing store cannot be written."""


class ArtifactWriter:
    """Writes :class:`GeneratedArtifact` instances to disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write(self, artifact: GeneratedArtifact) -> Path:
        """Create the artifact's file, including missing parent directories.

        The file is opened in exclusive-create mode, so a file appearing
        between the generator's existence check and this call is reported
        instead of clobbered.

        Returns:
            The written path.

        Raises:
            ArtifactExistsError: The target file already exists.
            ArtifactWriteError: Directories or the file cannot be created.
        """
        path = Path(artifact.target_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArtifactWriteError(f"Could not create {path.parent}: {exc}", path) from exc
        try:
            with path.open("x", encoding=self.encoding, newline="") as fh:
                fh.write(artifact.content)
        except FileExistsError as exc:
            raise ArtifactExistsError(path, artifact.kind.label) from exc
        except OSError as exc:
            raise ArtifactWriteError(f"Could not write {path}: {exc}", path) from exc
        return path
