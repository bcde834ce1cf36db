"""Read/patch/write transaction on the provider file.

The provider is shared state between every ``make:*`` invocation, so it is
only ever touched here: a :class:`filelock.FileLock` in the system temp
directory, keyed on the resolved provider path, is held from the read to the
end of the write, and the new content replaces the old one atomically.  A
failed patch writes nothing and no lock file is left in the application tree.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path

from filelock import FileLock, Timeout

from service_maker.scaffolder.models import BindingSpec, PatchResult
from service_maker.scaffolder.writer import ArtifactWriteError

from .patcher import PatchError, ProviderPatcher


class ProviderNotFoundError(PatchError):
    """Raised when the provider file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path.name} not found!")


class ProviderFile:
    """The provider file, patched under an exclusive lock."""

    def __init__(
        self,
        path: str | Path,
        patcher: ProviderPatcher | None = None,
        lock_timeout: float = 10.0,
    ) -> None:
        self.path = Path(path)
        self.patcher = patcher or ProviderPatcher()
        self.lock_timeout = lock_timeout

    @property
    def lock_path(self) -> Path:
        """Lock file outside the application, one per resolved provider path."""
        digest = hashlib.sha256(str(self.path.resolve()).encode("utf-8")).hexdigest()[:16]
        return Path(tempfile.gettempdir()) / f"service-maker-{digest}.lock"

    def read(self) -> str:
        """Current provider text, read fresh from disk."""
        if not self.path.is_file():
            raise ProviderNotFoundError(self.path)
        try:
            with self.path.open("r", encoding="utf-8", newline="") as fh:
                return fh.read()
        except OSError as exc:
            raise ArtifactWriteError(f"Could not read {self.path}: {exc}", self.path) from exc

    def apply(self, spec: BindingSpec) -> PatchResult:
        """Register *spec* in the provider.

        Raises:
            ProviderNotFoundError: The provider file is missing.
            RegionNotFoundError: The registration function is missing.
            MalformedDocumentError: The provider cannot be parsed.
            ArtifactWriteError: The lock or the file cannot be acquired or
                written.
        """
        if not self.path.is_file():
            raise ProviderNotFoundError(self.path)

        lock = FileLock(str(self.lock_path), timeout=self.lock_timeout)
        try:
            with lock:
                original = self.read()
                result = self.patcher.apply(original, spec)
                if result.content != original:
                    self._replace(result.content)
        except Timeout as exc:
            raise ArtifactWriteError(
                f"Timed out after {self.lock_timeout}s waiting for {self.lock_path}",
                self.path,
            ) from exc
        return result

    def _replace(self, content: str) -> None:
        """Write *content* to a sibling temp file, then swap it in."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            os.chmod(tmp_path, self.path.stat().st_mode & 0o777)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise ArtifactWriteError(f"Could not write {self.path}: {exc}", self.path) from exc
