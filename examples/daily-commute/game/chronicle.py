"""JSONL chronicle of a commute, for replaying a session offline."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable

from drone_signal import EffectsBus
from drone_signal.bus import WILDCARD


class ChronicleRecorder:
    """Records every bus signal, stamped with engine milliseconds.

    *ignore* names signals that are too chatty to keep (phase updates by
    default). ``write`` appends a closing ``summary`` record if a summary
    function was given.
    """

    def __init__(
        self,
        bus: EffectsBus,
        clock_fn: Callable[[], int],
        summary_fn: Callable[[], dict[str, Any]] | None = None,
        ignore: Iterable[str] = ("level_up_phase",),
    ) -> None:
        self._records: list[dict[str, Any]] = []
        self._clock_fn = clock_fn
        self._summary_fn = summary_fn
        self._ignore = frozenset(ignore)
        bus.subscribe(WILDCARD, self._on_signal)

    def _on_signal(self, signal: str, data: dict[str, Any]) -> None:
        if signal in self._ignore:
            return
        self._records.append({"ms": self._clock_fn(), "type": signal, **data})

    @property
    def count(self) -> int:
        return len(self._records)

    def records(self, signal: str | None = None) -> list[dict[str, Any]]:
        if signal is None:
            return list(self._records)
        return [r for r in self._records if r["type"] == signal]

    def write(self, path: str | Path) -> int:
        """Write records as JSONL. Returns number of lines written."""
        lines = list(self._records)
        if self._summary_fn is not None:
            lines.append({"ms": self._clock_fn(), "type": "summary", **self._summary_fn()})
        with Path(path).open("w", encoding="utf-8") as f:
            for record in lines:
                f.write(json.dumps(record, default=str) + "\n")
        return len(lines)
