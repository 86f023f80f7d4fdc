"""Best-effort save record and the stores that hold it."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Protocol

from drone import CorruptStateError
from drone_awareness import AwarenessConfig

logger = logging.getLogger(__name__)

SAVE_VERSION = 1


@dataclass(frozen=True)
class SaveState:
    day: int = 1
    level: int = 1
    xp: int = 0
    changes_found: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": SAVE_VERSION,
            "day": self.day,
            "level": self.level,
            "xp": self.xp,
            "changes_found": self.changes_found,
        }


class SaveStore(Protocol):
    def load(self) -> Any: ...

    def save(self, data: dict[str, Any]) -> None: ...


class MemoryStore:
    def __init__(self, data: Any = None) -> None:
        self.data = data

    def load(self) -> Any:
        return self.data

    def save(self, data: dict[str, Any]) -> None:
        self.data = dict(data)


class JsonFileStore:
    """One JSON document on disk, replaced atomically on save."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Any:
        """The stored blob, or None when there is no save yet.

        Raises CorruptStateError when the file is not UTF-8 JSON.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise CorruptStateError(f"Save file {self._path} is not UTF-8: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise CorruptStateError(f"Save file {self._path} is not JSON: {exc}") from exc

    def save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_field(blob: Mapping[str, Any], key: str, minimum: int, default: int) -> int:
    value = blob.get(key, default)
    if not _is_int(value) or value < minimum:
        logger.warning("Ignoring saved %s=%r", key, value)
        return default
    return value


def _valid_progress(level: Any, xp: Any, awareness: AwarenessConfig) -> bool:
    if not (_is_int(level) and _is_int(xp)):
        return False
    if not 1 <= level <= awareness.max_level or xp < 0:
        return False
    limit = awareness.requirement(level)
    if level == awareness.max_level:
        return xp == limit
    return xp < limit


def parse_save(blob: Any, awareness: AwarenessConfig | None = None) -> SaveState:
    """Turn a loaded blob into a SaveState.

    ``None`` means a fresh start. Anything that is not a mapping raises
    CorruptStateError. Inside a mapping each bad field falls back to its
    default on its own, except level and xp which are only kept together.
    """
    if blob is None:
        return SaveState()
    if not isinstance(blob, Mapping):
        raise CorruptStateError(f"Save must be an object, got {type(blob).__name__}")

    awareness = awareness or AwarenessConfig()
    day = _int_field(blob, "day", 1, 1)
    changes_found = _int_field(blob, "changes_found", 0, 0)
    level = blob.get("level", 1)
    xp = blob.get("xp", 0)
    if not _valid_progress(level, xp, awareness):
        logger.warning("Ignoring saved level/xp pair (%r, %r)", level, xp)
        level, xp = 1, 0
    return SaveState(day=day, level=level, xp=xp, changes_found=changes_found)
