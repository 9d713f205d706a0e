"""
player.py – Player combatant and the intent translator that drives it.

Controls are not read here.  The host turns keys / mouse into a
``PlayerIntent`` each frame; ``PlayerIntentTranslator`` turns that intent
into forces and ability activations on the player's body.

Controls (host): WASD / arrows (move), mouse (aim), click (dash), Space (push)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from settings import (
    PLAYER_START_X, PLAYER_START_Y, PLAYER_MAX_HEALTH,
    DIAGONAL_FACTOR,
    DASH_IMPULSE, DASH_WINDOW_MS, DASH_SUSTAIN_FORCE, DASH_FRICTION,
)
from entities.body import CombatantBody, CombatantId
from systems.ability_system import AbilityKind, AbilityState, create_ability
from systems.weapon import MeleeWeapon

logger = logging.getLogger(__name__)


@dataclass
class PlayerIntent:
    """One frame of player input, already stripped of device details.

    ``move_x`` / ``move_y`` form a direction whose length is at most 1.
    The two ability requests are edge-triggered: the host sets them on the
    frame the key/button went down and the translator consumes them once.
    """

    move_x: float = 0.0
    move_y: float = 0.0
    aim_x: float = 0.0
    aim_y: float = 0.0
    force_push_requested: bool = False
    force_dash_requested: bool = False

    @classmethod
    def from_keys(cls, left: bool = False, right: bool = False,
                  up: bool = False, down: bool = False,
                  aim: tuple[float, float] = (0.0, 0.0),
                  push: bool = False, dash: bool = False) -> "PlayerIntent":
        """Build an intent from four held direction keys."""
        move_x = float(right) - float(left)
        move_y = float(down) - float(up)
        # Normalise diagonal movement
        if move_x != 0 and move_y != 0:
            move_x *= DIAGONAL_FACTOR
            move_y *= DIAGONAL_FACTOR
        return cls(move_x, move_y, float(aim[0]), float(aim[1]), push, dash)

    @classmethod
    def idle(cls, aim: tuple[float, float] = (0.0, 0.0)) -> "PlayerIntent":
        return cls(aim_x=float(aim[0]), aim_y=float(aim[1]))


class PlayerIntentTranslator:
    """Maps intents to forces; owns the post-dash sustain window."""

    def __init__(self) -> None:
        self.dash_active = False
        self.dash_elapsed_ms = 0.0
        self.dash_angle = 0.0

    def apply(self, player: "Player", intent: PlayerIntent,
              delta_ms: float) -> list[AbilityKind]:
        """Run one tick of player control.  Returns abilities fired this tick."""
        body = player.body
        fired: list[AbilityKind] = []
        seconds = delta_ms / 1000.0

        # Aim first so a dash goes where the blade points right now
        player.saber.update_aim(intent.aim_x, intent.aim_y, body.x, body.y)

        if intent.force_push_requested and player.force_push.activate():
            fired.append(AbilityKind.FORCE_PUSH)

        if intent.force_dash_requested and player.force_dash.activate():
            fired.append(AbilityKind.FORCE_DASH)
            angle = player.saber.angle
            body.apply_force(math.cos(angle) * DASH_IMPULSE,
                             math.sin(angle) * DASH_IMPULSE)
            self.dash_active = True
            self.dash_elapsed_ms = 0.0
            self.dash_angle = angle

        # Decaying supplemental dash force
        if self.dash_active:
            if self.dash_elapsed_ms < DASH_WINDOW_MS:
                progress = self.dash_elapsed_ms / DASH_WINDOW_MS
                remaining = DASH_SUSTAIN_FORCE * (1.0 - progress)
                body.apply_force(math.cos(self.dash_angle) * remaining * seconds,
                                 math.sin(self.dash_angle) * remaining * seconds)
                self.dash_elapsed_ms += delta_ms
            else:
                self.dash_active = False

        # Movement
        body.apply_force(intent.move_x * body.speed * seconds,
                         intent.move_y * body.speed * seconds)

        body.integrate(delta_ms, DASH_FRICTION if self.dash_active else None)

        player.saber.update_aim(intent.aim_x, intent.aim_y, body.x, body.y)
        return fired

    def snapshot(self) -> dict:
        return {
            "dash_active": self.dash_active,
            "dash_elapsed_ms": self.dash_elapsed_ms,
            "dash_angle": self.dash_angle,
        }

    def restore(self, data: dict) -> None:
        self.dash_active = bool(data["dash_active"])
        self.dash_elapsed_ms = float(data["dash_elapsed_ms"])
        self.dash_angle = float(data["dash_angle"])


class Player:
    """Player-controlled combatant: body, blade, push and dash."""

    combatant_id = CombatantId.PLAYER

    def __init__(self, x: float = PLAYER_START_X, y: float = PLAYER_START_Y,
                 max_health: float = PLAYER_MAX_HEALTH):
        self.body = CombatantBody(x, y, max_health)
        self.saber = MeleeWeapon(CombatantId.PLAYER)
        self.force_push: AbilityState = create_ability(AbilityKind.FORCE_PUSH)
        self.force_dash: AbilityState = create_ability(AbilityKind.FORCE_DASH)
        self.translator = PlayerIntentTranslator()
        self.saber.refresh_tip(self.body.x, self.body.y)

    @property
    def abilities(self) -> dict[AbilityKind, AbilityState]:
        return {
            AbilityKind.FORCE_PUSH: self.force_push,
            AbilityKind.FORCE_DASH: self.force_dash,
        }

    def update(self, delta_ms: float, intent: PlayerIntent) -> list[AbilityKind]:
        """Tick abilities, then apply this frame's intent."""
        self.force_push.tick(delta_ms)
        self.force_dash.tick(delta_ms)
        return self.translator.apply(self, intent, delta_ms)

    # ── Serialization helpers ─────────────────────────────

    def get_state_snapshot(self) -> dict:
        return {
            "body": self.body.snapshot(),
            "saber": self.saber.snapshot(),
            "force_push": self.force_push.snapshot(),
            "force_dash": self.force_dash.snapshot(),
            "translator": self.translator.snapshot(),
        }

    def restore_snapshot(self, data: dict) -> None:
        self.body.restore(data["body"])
        self.saber.restore(data["saber"])
        self.force_push.restore(data["force_push"])
        self.force_dash.restore(data["force_dash"])
        self.translator.restore(data["translator"])
