"""Daily Commute - spot what changed on the platform.

Each morning the same commuters wait for the same train. From day four
something is different every day: click it to grow your awareness.

Controls:
  Left-click  Point at the change
  Space       Take the train
  H           Hint
  R           Restart
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from drone_change import Outcome
from drone_signal import signals
from game.setup import build_game
from ui.constants import COLOR_BG, FPS, HUD_H, LOG_H, SCENE_H, SCREEN_H, SCREEN_W
from ui.hud import draw_end_overlay, draw_fade, draw_hud
from ui.log_panel import LogPanel


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Daily Commute - drone-engine visual demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--save", type=str, default=None,
                   metavar="FILE", help="Load and save progress in FILE")
    p.add_argument("--config", type=str, default=None,
                   metavar="FILE", help="JSON file overriding game settings")
    p.add_argument("--hard-fail", action="store_true",
                   help="A wrong click ends the game")
    p.add_argument("--chronicle", type=str, default=None,
                   metavar="FILE", help="Save JSONL chronicle to FILE on quit")
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    state = build_game(
        seed=args.seed,
        save_path=args.save,
        hard_fail=args.hard_fail,
        config_path=args.config,
    )
    session = state.session
    cycle = session.day_cycle

    # JSONL chronicle recorder (opt-in via --chronicle)
    chronicle = None
    if args.chronicle:
        from game.chronicle import ChronicleRecorder
        chronicle = ChronicleRecorder(
            session.bus, lambda: session.engine.clock.now_ms, cycle.summary,
        )

    log_panel = LogPanel()

    def _on_narrative(signal: str, data: dict) -> None:
        state.narration = data["text"]
        log_panel.add(data["text"], "narrative")

    def _on_day(signal: str, data: dict) -> None:
        state.renderer.highlight = None
        log_panel.add(f"Day {data['day']}", "day")

    def _on_found(signal: str, data: dict) -> None:
        state.renderer.highlight = data["entity_id"]
        log_panel.add("You spotted it.", "found")

    def _on_missed(signal: str, data: dict) -> None:
        state.renderer.highlight = data["entity_id"]
        log_panel.add("You missed a change.", "missed")

    def _on_wrong(signal: str, data: dict) -> None:
        state.narration = data["message"]
        log_panel.add(data["message"], "wrong")

    def _on_level_up(signal: str, data: dict) -> None:
        log_panel.add(f"Awareness {data['previous']} -> {data['new']}", "level")

    def _on_end(signal: str, data: dict) -> None:
        log_panel.add(
            f"{signal.replace('_', ' ')}: {data['days']} days, {data['changes_found']} found",
            "end",
        )

    session.bus.subscribe(signals.NARRATIVE, _on_narrative)
    session.bus.subscribe(signals.DAY_STARTED, _on_day)
    session.bus.subscribe(signals.CHANGE_FOUND, _on_found)
    session.bus.subscribe(signals.CHANGE_MISSED, _on_missed)
    session.bus.subscribe(signals.WRONG_CLICK, _on_wrong)
    session.bus.subscribe(signals.LEVEL_UP, _on_level_up)
    session.bus.subscribe(signals.GAME_COMPLETE, _on_end)
    session.bus.subscribe(signals.GAME_OVER, _on_end)

    # Pygame init
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Drone: The Daily Commute")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)
    small_font = pygame.font.SysFont("monospace", 11)

    running = True
    while running:
        dt_ms = clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    cycle.take_train()
                elif event.key == pygame.K_h:
                    if cycle.hint() is None:
                        log_panel.add("Give it a moment...", "default")
                elif event.key == pygame.K_r:
                    state.renderer.clear()
                    cycle.reset()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                entity_id = state.renderer.hit_test(event.pos)
                if entity_id is not None:
                    outcome = cycle.click(entity_id)
                    if outcome is Outcome.WRONG_ENTITY:
                        state.renderer.highlight = None

        # --- Advance engine by real elapsed time ---
        session.step(dt_ms)

        # --- Render ---
        screen.fill(COLOR_BG)
        state.renderer.draw(screen, small_font)
        if cycle.context.is_transitioning:
            draw_fade(screen, HUD_H, 140)
        draw_end_overlay(screen, font, session, HUD_H)
        draw_hud(screen, font, session, state.narration)
        log_panel.draw(screen, small_font, 0, HUD_H + SCENE_H, SCREEN_W, LOG_H)

        pygame.display.flip()

    pygame.quit()

    # Write chronicle if requested
    if chronicle is not None and args.chronicle:
        n = chronicle.write(args.chronicle)
        print(f"Chronicle: {n} events written to {args.chronicle}")

    sys.exit()


if __name__ == "__main__":
    main()
