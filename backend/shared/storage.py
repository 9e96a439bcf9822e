"""Key-value storage abstraction for durable per-device state.

The core treats each stored value as one opaque serialized string under a
fixed key. Files are written with owner-only permissions (0o600) inside
an owner-only directory (0o700) as a filesystem hygiene measure.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

# Owner-only directory permissions for state storage.
_STATE_DIR_MODE = 0o700

# Owner-only file permissions for state files.
_STATE_FILE_MODE = 0o600


class KeyValueStore(Protocol):
    """Protocol for persisting one serialized value per key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    """Process-local store, used by tests and the unpersisted server mode."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class LocalFileStore:
    """Stores each key as a JSON file under a local directory.

    Readers never observe a partially written value: writes go to a temp
    file in the same directory which is then renamed over the target.
    """

    def __init__(self, state_dir: str | Path) -> None:
        self._state_dir = Path(state_dir).resolve()

    def _path_for(self, key: str) -> Path:
        """Resolve the file for a key, rejecting keys that escape the state directory."""
        target = (self._state_dir / f"{key}.json").resolve()
        if not target.is_relative_to(self._state_dir):
            raise ValueError(f"Path traversal rejected: '{key}' resolves outside state directory")
        return target

    def get(self, key: str) -> str | None:
        target = self._path_for(key)
        if not target.exists():
            return None
        return target.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Atomically replace the value for a key.

        Creates the directory lazily on first write with owner-only
        permissions (0o700).
        """
        target = self._path_for(key)

        self._state_dir.mkdir(mode=_STATE_DIR_MODE, parents=True, exist_ok=True)
        self._state_dir.chmod(_STATE_DIR_MODE)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._state_dir), suffix=".tmp", prefix=".state_")
        fd_owned = True
        try:
            with os.fdopen(fd, "wb") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(value.encode("utf-8"))
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _STATE_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("saved state", key=key, path=str(target))
