"""Autoplay -- a headless commute played by a fallible bot.

Demonstrates:
- Building a session with a fixed seed
- Taking the train and clicking through DayCycle
- Driving deferred transitions with engine time
- Listening to EffectsBus signals

Run: python -m examples.autoplay
"""

import random

from drone_commute import DayState, build_session
from drone_signal import signals


def main() -> None:
    print("=== Autoplay ===\n")

    session = build_session(seed=7)
    cycle = session.day_cycle
    bot = random.Random(1)

    def on_level_up(signal: str, data: dict) -> None:
        print(f"  day {cycle.context.day:3d}  awareness {data['previous']} -> {data['new']}")

    def on_complete(signal: str, data: dict) -> None:
        print(f"\nDrone no more after {data['days']} days ({data['changes_found']} found).")

    session.bus.subscribe(signals.LEVEL_UP, on_level_up)
    session.bus.subscribe(signals.GAME_COMPLETE, on_complete)

    while cycle.context.state is not DayState.COMPLETED and cycle.context.day < 500:
        pending = cycle.pending
        # The bot notices three changes out of four.
        if pending is not None and cycle.context.can_click and bot.random() < 0.75:
            cycle.click(pending.target_id)
        cycle.take_train()
        session.engine.run_until_idle()

    session.engine.run_until_idle()
    session.step(0)
    print(f"Summary: {cycle.summary()}")


if __name__ == "__main__":
    main()
