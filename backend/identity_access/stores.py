"""
Key-value stores for locally persisted session hints.

Why: The client remembers the chosen role and whether the profile form was
submitted, so a reload (or an unreachable backend) still lands the user in the
right view. The store is injected so tests can use the in-memory variant.

Keys are shared with the session resolver: `userType` holds the role string and
`hasCompletedProfile` holds "true" (or is absent).
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol
import json
import logging
import os
import tempfile

logger = logging.getLogger("tutormatch.identity.stores")

USER_TYPE_KEY = "userType"
PROFILE_COMPLETE_KEY = "hasCompletedProfile"
REDIRECT_AFTER_LOGIN_KEY = "redirectAfterLogin"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class FileKeyValueStore:
    """JSON-file backed store that survives process restarts.

    Parameters
    ----------
    path:
        Location of the JSON document. Parent directories are created lazily
        on first write.

    A missing, unreadable or non-object file reads as empty. Writes go to a
    temporary sibling first and are moved into place with `os.replace`.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("State file unreadable: %s", exc.__class__.__name__)
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("State file is not valid JSON; ignoring %s", self._path.name)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _dump(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".state-", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, sort_keys=True)
            os.replace(tmp, self._path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            data.pop(key)
            self._dump(data)


__all__ = [
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "PROFILE_COMPLETE_KEY",
    "REDIRECT_AFTER_LOGIN_KEY",
    "USER_TYPE_KEY",
]
