"""Build the complete game state."""
from __future__ import annotations

from dataclasses import dataclass, replace

from drone import EntityKind
from drone_commute import (
    GameConfig,
    JsonFileStore,
    Session,
    WrongClickPolicy,
    build_session,
    load_config,
)

from ui.constants import HUD_H
from ui.scene import SceneRenderer


@dataclass
class GameState:
    """Holds the session plus UI-only state."""
    session: Session
    renderer: SceneRenderer
    narration: str = ""


def build_game(
    seed: int | None = None,
    save_path: str | None = None,
    hard_fail: bool = False,
    config_path: str | None = None,
) -> GameState:
    """Wire up the session with a scene renderer and return GameState."""
    config = load_config(config_path) if config_path else GameConfig()
    if hard_fail:
        config = replace(config, wrong_click_policy=WrongClickPolicy.GAME_OVER)

    renderer = SceneRenderer(
        {
            EntityKind.COMMUTER: config.commuter_positions,
            EntityKind.SET_DRESSING: config.set_dressing_positions,
        },
        top=HUD_H,
    )
    store = JsonFileStore(save_path) if save_path else None
    session = build_session(config, seed=seed, store=store, renderer=renderer)
    return GameState(session=session, renderer=renderer)
