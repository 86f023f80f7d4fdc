"""drone-signal - Effects bus between the change engine and presentation."""
from __future__ import annotations

from drone_signal import signals
from drone_signal.bus import EffectsBus
from drone_signal.systems import make_flush_system

__all__ = ["EffectsBus", "make_flush_system", "signals"]
