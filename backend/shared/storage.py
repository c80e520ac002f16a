"""Key-value storage for persisted session documents.

Each key maps to one UTF-8 text value. LocalFileStore keeps one file per key
with owner-only permissions (0o600) inside an owner-only directory (0o700).
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

# Owner-only directory permissions for stored documents.
_STORE_DIR_MODE = 0o700

# Owner-only file permissions for stored documents.
_STORE_FILE_MODE = 0o600

_VALUE_SUFFIX = ".json"


class KeyValueStore(Protocol):
    """Protocol for string-keyed document storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class LocalFileStore:
    """Stores each value as a file under a root directory."""

    def __init__(self, root_dir: str | Path) -> None:
        self._root_dir = Path(root_dir).expanduser().resolve()

    def _path_for(self, key: str) -> Path:
        """Resolve the file for ``key``, rejecting keys that escape the root."""
        target = (self._root_dir / f"{key}{_VALUE_SUFFIX}").resolve()
        if not target.is_relative_to(self._root_dir):
            raise ValueError(f"Path traversal rejected: '{key}' resolves outside store directory")
        return target

    def get(self, key: str) -> str | None:
        target = self._path_for(key)
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        """Write ``value`` under ``key``.

        Creates the directory lazily on first write with owner-only permissions
        (0o700). Writes atomically via temp-file-then-rename with owner-only
        permissions (0o600), so a crash never leaves a half-written document.
        """
        target = self._path_for(key)

        self._root_dir.mkdir(mode=_STORE_DIR_MODE, parents=True, exist_ok=True)
        self._root_dir.chmod(_STORE_DIR_MODE)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._root_dir), suffix=".tmp", prefix=".store_")
        fd_owned = True
        try:
            with os.fdopen(fd, "wb") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(value.encode("utf-8"))
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _STORE_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.info("saved document", key=key, path=str(target))

    def delete(self, key: str) -> None:
        target = self._path_for(key)
        with contextlib.suppress(FileNotFoundError):
            target.unlink()
            logger.info("deleted document", key=key, path=str(target))
