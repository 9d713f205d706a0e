"""
ai_core.py – Central AI brain for the opponent.

Architecture:
    ai_core.OpponentAI
      ├── personality.Personality      (trait roll + per-tick adaptation)
      ├── combat_memory.CombatMemory   (player observations / prediction)
      └── tactics                      (state enum, transitions, planners, stance)

The brain never touches a body directly except through ``steer`` (which
returns a force for the caller to apply) and read-only observation of
both bodies.  One tick of decision making is:

    observe player → adapt personality → stance (every 3 s)
    → transition → plan target

Blade aim and the force-push heuristic are separate calls so the
combatant can run them after physics.

All randomness comes from the injected ``random.Random``; with a fixed
seed two brains fed the same observations make identical decisions.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from settings import (
    OPPONENT_ARRIVE_RADIUS,
    PUSH_HEAVY_DAMAGE, PUSH_DESPERATE_HEALTH, PUSH_DESPERATE_DISTANCE,
    PUSH_RAPID_DAMAGE, PUSH_RAPID_HEALTH,
    MEMORY_CAPACITY,
)
from ai.combat_memory import CombatMemory
from ai.personality import Personality, PersonalityConfig
from ai.tactics import (
    AIState, Stance, TacticalContext, TacticsConfig,
    choose_stance, evaluate_transition, plan_target,
)
from utils.geometry import unit_vector

if TYPE_CHECKING:
    from entities.body import CombatantBody

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════
#  Configuration
# ══════════════════════════════════════════════════════════

@dataclass
class ForcePushConfig:
    """When the opponent reaches for its push."""

    heavy_damage: float = PUSH_HEAVY_DAMAGE
    desperate_health: float = PUSH_DESPERATE_HEALTH
    desperate_distance: float = PUSH_DESPERATE_DISTANCE
    rapid_damage: float = PUSH_RAPID_DAMAGE
    rapid_health: float = PUSH_RAPID_HEALTH


@dataclass
class OpponentConfig:
    personality: PersonalityConfig = field(default_factory=PersonalityConfig)
    tactics: TacticsConfig = field(default_factory=TacticsConfig)
    force_push: ForcePushConfig = field(default_factory=ForcePushConfig)
    memory_capacity: int = MEMORY_CAPACITY
    arrive_radius: float = OPPONENT_ARRIVE_RADIUS


# ══════════════════════════════════════════════════════════
#  Opponent brain
# ══════════════════════════════════════════════════════════

class OpponentAI:
    """Personality-driven, adaptive, predictive tactical controller."""

    def __init__(self, rng: random.Random | None = None,
                 config: OpponentConfig | None = None,
                 start: tuple[float, float] = (0.0, 0.0)):
        self.rng = rng if rng is not None else random.Random()
        self.cfg = config or OpponentConfig()

        self.personality = Personality.roll(self.rng, self.cfg.personality)
        self.memory = CombatMemory(self.cfg.memory_capacity)

        # ── FSM ───────────────────────────────────────────
        self.state: AIState = AIState.PATROL
        self.stance: Stance = Stance.BALANCED
        self.state_timer_ms: float = 0.0
        self.stance_timer_ms: float = 0.0
        self.strafe_direction: int = 1 if self.rng.random() > 0.5 else -1
        self.target_x, self.target_y = float(start[0]), float(start[1])
        self.transition_count: int = 0

        # Player health as seen last tick (push heuristic runs one tick stale)
        self.last_player_health: float | None = None

        logger.info(
            "Opponent personality: aggression=%.2f caution=%.2f "
            "prediction=%.2f adaptability=%.2f",
            self.personality.aggression, self.personality.caution,
            self.personality.prediction, self.personality.adaptability,
        )

    # ══════════════════════════════════════════════════════
    #  Decision making
    # ══════════════════════════════════════════════════════

    def decide(self, me: CombatantBody, player: CombatantBody,
               delta_ms: float, now_ms: float) -> None:
        """One tick of AI logic: update memory/traits/stance, then the FSM."""
        self.state_timer_ms += delta_ms
        self.stance_timer_ms += delta_ms

        self.memory.observe(player.x, player.y, now_ms)

        own_frac = me.health_fraction
        player_frac = player.health_fraction

        self.personality.adapt(own_frac, player_frac,
                               self.memory.defense_success_rate,
                               self.cfg.personality)
        self._update_stance(own_frac, player_frac)

        ctx = self._context(me, player)
        transition = evaluate_transition(self.state, ctx, self.rng, self.cfg.tactics)
        if transition is not None:
            self._enter(transition.state)
            if transition.reverse_strafe:
                self.strafe_direction *= -1
            ctx = self._context(me, player)

        plan = plan_target(self.state, ctx, self.rng, self.cfg.tactics)
        if plan.target is not None:
            self.target_x, self.target_y = plan.target
        self.strafe_direction = plan.strafe_direction
        if plan.reset_timer:
            self.state_timer_ms = 0.0

    def _enter(self, state: AIState) -> None:
        logger.info("Opponent AI %s → %s", self.state.value, state.value)
        self.state = state
        self.state_timer_ms = 0.0
        self.transition_count += 1

    def _update_stance(self, own_frac: float, player_frac: float) -> None:
        if self.stance_timer_ms <= self.cfg.tactics.stance_interval_ms:
            return
        new_stance = choose_stance(own_frac, player_frac, self.rng, self.cfg.tactics)
        if new_stance is not self.stance:
            logger.info("Opponent stance %s → %s", self.stance.value, new_stance.value)
        self.stance = new_stance
        self.stance_timer_ms = 0.0

    def _context(self, me: CombatantBody, player: CombatantBody) -> TacticalContext:
        predicted_x, predicted_y = self.predicted_player_position()
        return TacticalContext(
            self_x=me.x,
            self_y=me.y,
            player_x=player.x,
            player_y=player.y,
            distance=me.distance_to(player),
            own_health_frac=me.health_fraction,
            player_health_frac=player.health_fraction,
            predicted_x=predicted_x,
            predicted_y=predicted_y,
            player_vx=self.memory.velocity_x,
            player_vy=self.memory.velocity_y,
            stance=self.stance,
            strafe_direction=self.strafe_direction,
            state_timer_ms=self.state_timer_ms,
        )

    # ══════════════════════════════════════════════════════
    #  Movement / aim
    # ══════════════════════════════════════════════════════

    def steer(self, me: CombatantBody, delta_ms: float) -> tuple[float, float]:
        """Force that moves *me* toward the current target this tick."""
        dx = self.target_x - me.x
        dy = self.target_y - me.y
        if (dx * dx + dy * dy) <= self.cfg.arrive_radius ** 2:
            return 0.0, 0.0
        ux, uy = unit_vector(dx, dy)
        step = me.speed * (delta_ms / 1000.0)
        return ux * step, uy * step

    def predicted_player_position(self) -> tuple[float, float]:
        """Where the blade and engage distance aim: scaled by the prediction trait."""
        return self.memory.predict(self.personality.prediction)

    # ══════════════════════════════════════════════════════
    #  Force push heuristic
    # ══════════════════════════════════════════════════════

    def should_force_push(self, me: CombatantBody, player: CombatantBody) -> bool:
        """Decide whether to push this tick, then remember the player's health.

        Damage is measured against last tick's snapshot, so a big hit is
        noticed one tick after it lands.
        """
        cfg = self.cfg.force_push
        if self.last_player_health is None:
            damage_taken = 0.0
        else:
            damage_taken = self.last_player_health - player.health
        own_frac = me.health_fraction
        dist = me.distance_to(player)

        should_push = (
            damage_taken > cfg.heavy_damage
            or (own_frac < cfg.desperate_health and dist < cfg.desperate_distance)
            or (damage_taken > cfg.rapid_damage and own_frac < cfg.rapid_health)
        )

        self.last_player_health = player.health
        return should_push

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        return {
            "state": self.state.value,
            "stance": self.stance.value,
            "state_timer_ms": self.state_timer_ms,
            "stance_timer_ms": self.stance_timer_ms,
            "strafe_direction": self.strafe_direction,
            "target_x": self.target_x,
            "target_y": self.target_y,
            "transition_count": self.transition_count,
            "last_player_health": self.last_player_health,
            "personality": self.personality.snapshot(),
            "memory": self.memory.snapshot(),
            "rng_state": _rng_state_to_json(self.rng.getstate()),
        }

    def restore(self, data: dict) -> None:
        self.state = AIState(data["state"])
        self.stance = Stance(data["stance"])
        self.state_timer_ms = float(data["state_timer_ms"])
        self.stance_timer_ms = float(data["stance_timer_ms"])
        self.strafe_direction = int(data["strafe_direction"])
        self.target_x = float(data["target_x"])
        self.target_y = float(data["target_y"])
        self.transition_count = int(data["transition_count"])
        last = data["last_player_health"]
        self.last_player_health = None if last is None else float(last)
        self.personality.restore(data["personality"])
        self.memory.restore(data["memory"])
        self.rng.setstate(_rng_state_from_json(data["rng_state"]))


def _rng_state_to_json(state: tuple) -> list:
    version, internal, gauss_next = state
    return [version, list(internal), gauss_next]


def _rng_state_from_json(data: list) -> tuple:
    version, internal, gauss_next = data
    return version, tuple(internal), gauss_next
