"""Texts shown around the commute: day narration, lyrics, messages, hints."""
from __future__ import annotations

import random

from drone import Entity, EntityKind

from drone_change import ChangeAction, PendingChange

DAY_ONE_TEXT = "everyday the same..."

# Album lyrics that replace the narration on specific days.
SONG_LYRICS: dict[int, str] = {
    5: "Every day the same, rolling to a paycheck",
    10: "6:40 train, drink my 40 on the way back",
    15: "Soul's nearly drained, gotta be a way out",
    20: "Signal in my brain, stopping me with self-doubt",
    30: "Drone no more, I'm clean and free",
    40: "The Man ain't got his grip on me",
    50: "Drone no more, I'm my own man",
    60: "Gotta engineer a plan",
    75: "Time for a change, bell's ringing louder",
    90: "No one left to blame, 'cause I'm my biggest doubter",
    100: "Drone no more, I'm my own man",
}

DAY_THOUGHTS: dict[str, tuple[str, ...]] = {
    "early": (
        "Another day, another dollar.",
        "6:40 train again.",
        "Same commute, different day.",
        "This seat feels familiar.",
        "Two more stops to go.",
    ),
    "mid": (
        "Why do I do this every day?",
        "The train moves, but am I going anywhere?",
        "That person seems different today.",
        "I never noticed that building before.",
        "Time feels different when you pay attention.",
    ),
    "late": (
        "I don't have to do this forever.",
        "There's more to life than this cycle.",
        "I could engineer a plan to change things.",
        "My soul feels less drained today.",
        "The grip is loosening.",
    ),
    "final": (
        "I am not just a drone.",
        "The man ain't got his grip on me.",
        "I'm going to break this cycle.",
        "Today will be different.",
        "I'm my own person.",
    ),
}

LEVEL_UP_NARRATIVES: dict[str, tuple[str, ...]] = {
    "early": (
        "Someone new is waiting on the platform.",
        "Was that face always here?",
    ),
    "mid": (
        "The crowd is getting harder to ignore.",
        "More of them every morning. Or am I only now seeing them?",
    ),
    "late": (
        "Every one of them is on the same loop as me.",
        "I can see the pattern now.",
    ),
    "final": (
        "I'm awake. They're still dreaming.",
        "This is the last stretch of track.",
    ),
}

NOT_YET_TEXT = "everyday the same"
TAKE_THE_TRAIN_TEXT = "take the train to continue"

COMMUTER_CHANGE_TEXT = "I noticed something change with that commuter..."
PLATFORM_CHANGE_TEXT = "I noticed something change with the platform..."
UNPLACED_CHANGE_TEXT = "Something changed, but I can't quite place it..."

# Messages for specific changes, keyed by (from_variation, to_variation).
CHANGE_MESSAGES: dict[tuple[str, str], str] = {
    ("commuter1.png", "commuter1_a.png"): "That commuter picked up a coffee.",
    ("commuter1_a.png", "commuter1.png"): "That commuter finished their coffee.",
    ("commuter2.png", "commuter2_a.png"): "A hat appeared on that commuter.",
    ("commuter2_a.png", "commuter2.png"): "That commuter lost their hat.",
    ("caution.png", "caution_a.png"): "The caution sign got knocked over.",
    ("caution_a.png", "caution.png"): "Someone stood the caution sign back up.",
    ("bench.png", "bench_a.png"): "Someone left something on the bench.",
}

# Messages for newly added props, keyed by type.
NEW_PROP_MESSAGES: dict[str, str] = {
    "bench": "There's a new bench on the platform.",
    "bottle": "Someone left a bottle on the platform.",
    "caution": "A caution sign went up on the platform.",
    "trash": "There's new litter on the platform.",
    "trashcan": "They put in a new trash can.",
}

NO_CHANGE_HINT = "No changes to find yet. Take the train!"
ALL_FOUND_HINT = "No unfound changes left today"


def tier(level: int) -> str:
    if level >= 8:
        return "final"
    if level >= 5:
        return "late"
    if level >= 3:
        return "mid"
    return "early"


def day_text(day: int, level: int, rng: random.Random) -> tuple[str, str]:
    """Narration for the start of *day*. Returns ``(text, source)``."""
    if day == 1:
        return DAY_ONE_TEXT, "day"
    lyric = SONG_LYRICS.get(day)
    if lyric is not None:
        return lyric, "lyric"
    return rng.choice(DAY_THOUGHTS[tier(level)]), "thought"


def level_up_text(level: int, rng: random.Random) -> str:
    return rng.choice(LEVEL_UP_NARRATIVES[tier(level)])


def change_message(change: PendingChange, entity: Entity | None = None) -> str:
    """Describe what actually changed, falling back to a generic line."""
    if change.action is ChangeAction.ADD:
        if entity is not None and entity.type in NEW_PROP_MESSAGES:
            return NEW_PROP_MESSAGES[entity.type]
        return PLATFORM_CHANGE_TEXT
    message = CHANGE_MESSAGES.get((change.from_variation, change.to_variation))
    if message is not None:
        return message
    if change.kind is EntityKind.COMMUTER:
        return COMMUTER_CHANGE_TEXT
    return PLATFORM_CHANGE_TEXT


def hint_text(position: tuple[int, int]) -> str:
    """Quadrant hint for a ``(left %, bottom %)`` position slot."""
    left, bottom = position
    vertical = "top" if bottom >= 50 else "bottom"
    horizontal = "left" if left < 50 else "right"
    return f"Look for a change in the {vertical} {horizontal} area"
