"""
opponent.py – AI-controlled combatant.

Same body physics as the player; the OpponentAI brain replaces the
intent translator.  The opponent carries a force push but no dash, and
its blade is permanently active, always tracking where the brain
predicts the player will be.
"""

from __future__ import annotations

import logging
import random

from settings import (
    OPPONENT_START_X, OPPONENT_START_Y, OPPONENT_MAX_HEALTH,
)
from ai.ai_core import OpponentAI, OpponentConfig
from entities.body import CombatantBody, CombatantId
from systems.ability_system import AbilityKind, AbilityState, create_ability
from systems.weapon import MeleeWeapon

logger = logging.getLogger(__name__)


class Opponent:
    """Autonomous combatant driven by OpponentAI."""

    combatant_id = CombatantId.OPPONENT

    def __init__(self, rng: random.Random | None = None,
                 config: OpponentConfig | None = None,
                 x: float = OPPONENT_START_X, y: float = OPPONENT_START_Y,
                 max_health: float = OPPONENT_MAX_HEALTH):
        self.body = CombatantBody(x, y, max_health)
        self.saber = MeleeWeapon(CombatantId.OPPONENT)
        self.force_push: AbilityState = create_ability(AbilityKind.FORCE_PUSH)
        self.brain = OpponentAI(rng, config, start=(x, y))
        self.saber.refresh_tip(self.body.x, self.body.y)

    @property
    def abilities(self) -> dict[AbilityKind, AbilityState]:
        return {AbilityKind.FORCE_PUSH: self.force_push}

    def update(self, delta_ms: float, player: CombatantBody,
               now_ms: float) -> list[AbilityKind]:
        """Run one tick of AI + physics.  Returns abilities fired this tick."""
        self.force_push.tick(delta_ms)

        self.brain.decide(self.body, player, delta_ms, now_ms)

        fx, fy = self.brain.steer(self.body, delta_ms)
        self.body.apply_force(fx, fy)
        self.body.integrate(delta_ms)

        # Blade is never idle: always at the predicted player position
        self.saber.is_active = True
        aim_x, aim_y = self.brain.predicted_player_position()
        self.saber.update_aim(aim_x, aim_y, self.body.x, self.body.y)

        fired: list[AbilityKind] = []
        if self.brain.should_force_push(self.body, player) and self.force_push.activate():
            fired.append(AbilityKind.FORCE_PUSH)
        return fired

    # ── Serialization helpers ─────────────────────────────

    def get_state_snapshot(self) -> dict:
        return {
            "body": self.body.snapshot(),
            "saber": self.saber.snapshot(),
            "force_push": self.force_push.snapshot(),
            "brain": self.brain.snapshot(),
        }

    def restore_snapshot(self, data: dict) -> None:
        self.body.restore(data["body"])
        self.saber.restore(data["saber"])
        self.force_push.restore(data["force_push"])
        self.brain.restore(data["brain"])
