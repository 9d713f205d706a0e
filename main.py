"""
main.py - Entry point for Saber Duel.

Wires the pygame window to the simulation:
- Keyboard / mouse → PlayerIntent (keybinds.py)
- Encounter tick + collision resolution (systems/combat_system.py)
- Cosmetic particles from combat events (systems/vfx_system.py)
- Frame drawing (systems/renderer.py)
- Headless batch matches (ai/simulation_runner.py)

Run:  python main.py
      python main.py --simulate 50 --seed 7
"""
VERSION = "1.0.0"

import argparse
import logging
import sys

import pygame

logger = logging.getLogger(__name__)

# ── Project imports ───────────────────────────────────────
from settings import SCREEN_WIDTH, SCREEN_HEIGHT, FPS, TITLE
from entities import PlayerIntent
from systems.combat_system import Encounter
from systems.healthbar import clear_cache as clear_healthbar_cache
from systems.renderer import draw_frame
from systems.vfx_system import VFXSystem
from ai.simulation_runner import SimulationRunner
from keybinds import is_held, matches, hint_line


# ══════════════════════════════════════════════════════════
#  GAME CLASS
# ══════════════════════════════════════════════════════════

class Game:
    """Top-level game controller.  Owns the loop, events, and rendering."""

    def __init__(self, seed: int | None = None):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()

        self._seed = seed
        self.encounter: Encounter | None = None
        self.vfx = VFXSystem()
        self.running = True
        self.show_debug = True

        # Edge-triggered requests collected from this frame's events
        self._push_pressed = False
        self._dash_pressed = False

        self._reset()

    # ── Main loop ─────────────────────────────────────────

    def run(self):
        """Start the game loop."""
        while self.running:
            self.clock.tick(FPS)
            self._handle_events()
            self._update(self.clock.get_time())
            self._draw()

        pygame.quit()
        sys.exit()

    # ── Events ────────────────────────────────────────────

    def _handle_events(self):
        self._push_pressed = False
        self._dash_pressed = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if matches(event.key, "quit"):
                    self.running = False
                elif matches(event.key, "restart"):
                    self._reset()
                elif matches(event.key, "force_push"):
                    self._push_pressed = True
                elif event.key == pygame.K_F1:
                    self.show_debug = not self.show_debug

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._dash_pressed = True

    def _read_intent(self) -> PlayerIntent:
        pressed = pygame.key.get_pressed()
        return PlayerIntent.from_keys(
            left=is_held(pressed, "move_left"),
            right=is_held(pressed, "move_right"),
            up=is_held(pressed, "move_up"),
            down=is_held(pressed, "move_down"),
            aim=pygame.mouse.get_pos(),
            push=self._push_pressed,
            dash=self._dash_pressed,
        )

    # ── Update ────────────────────────────────────────────

    def _update(self, delta_ms: float):
        # Particles keep fading on the end screen
        self.vfx.update(delta_ms / 1000.0)

        if self.encounter is None or self.encounter.is_match_over():
            return
        events = self.encounter.tick(delta_ms, self._read_intent())
        self.vfx.handle_events(events)

    # ── Draw ──────────────────────────────────────────────

    def _draw(self):
        """Render everything to the screen."""
        if self.encounter is None:
            return
        debug_line = None
        if self.show_debug:
            brain = self.encounter.opponent.brain
            p = brain.personality
            debug_line = (
                f"AI: {brain.state.value} / {brain.stance.value}"
                f"  |  agg {p.aggression:.2f}  cau {p.caution:.2f}"
                f"  pred {p.prediction:.2f}"
            )
        draw_frame(self.screen, self.encounter.view(), self.vfx,
                   debug_line=debug_line, hint=hint_line())
        pygame.display.flip()

    # ── Reset ─────────────────────────────────────────────

    def _reset(self):
        """Restart the match without closing the window."""
        self.encounter = Encounter(seed=self._seed)
        self.vfx.clear()
        clear_healthbar_cache()
        logger.info("New match started (seed=%s)", self._seed)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--simulate", type=int, metavar="N", default=0,
                        help="run N headless matches against a scripted player")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for reproducible matches")
    parser.add_argument("--version", action="version", version=VERSION)
    return parser.parse_args(argv)


# ── Run ───────────────────────────────────────────────────
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    args = parse_args()
    if args.simulate > 0:
        SimulationRunner(n_matches=args.simulate, seed=args.seed).run()
    else:
        Game(seed=args.seed).run()
