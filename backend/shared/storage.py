"""Key-value storage for local persistence.

Each key maps to one string value. LocalKeyValueStorage keeps one JSON file
per key with owner-only permissions (0o600) inside an owner-only directory
(0o700). There are no transactions across keys.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

# Owner-only directory permissions for the data directory.
_DATA_DIR_MODE = 0o700

# Owner-only file permissions for stored values.
_DATA_FILE_MODE = 0o600


class KeyValueStorage(Protocol):
    """Protocol for durable string storage keyed by name."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStorage:
    """Dict-backed storage that lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class LocalKeyValueStorage:
    """Stores each key as ``<key>.json`` under a local data directory."""

    def __init__(self, data_dir: str) -> None:
        self._data_dir = Path(data_dir).resolve()

    def _path_for(self, key: str) -> Path:
        target = (self._data_dir / f"{key}.json").resolve()
        if not target.is_relative_to(self._data_dir):
            raise ValueError(f"Path traversal rejected: '{key}' resolves outside data directory")
        return target

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key was never written."""
        target = self._path_for(key)
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        """Write ``value`` atomically via temp-file-then-rename.

        Creates the data directory lazily on first write.
        """
        target = self._path_for(key)

        self._data_dir.mkdir(mode=_DATA_DIR_MODE, parents=True, exist_ok=True)
        self._data_dir.chmod(_DATA_DIR_MODE)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._data_dir), suffix=".tmp", prefix=".kv_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _DATA_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("stored value", key=key, path=str(target))

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
