"""
tactics.py – Opponent tactical state machine.

Five states, one enum, and two families of plain functions keyed on it:

  evaluate_transition(state, ctx, rng)  – where to go next (or stay)
  plan_target(state, ctx, rng)          – where to move while in a state

  PATROL  ──dist < 250──▶ ENGAGE
  ENGAGE  ──dist > 350──▶ PATROL
          ──hp < 30%───▶ RETREAT
          ──2% / tick──▶ FLANK | COUNTER (coin flip)
  RETREAT ──hp > 50% or dist > 400──▶ ENGAGE
  FLANK   ──dist > 300 or 2000 ms──▶ ENGAGE
  COUNTER ──dist > 300 or 1500 ms──▶ ENGAGE

Stance (Balanced / Aggressive / Defensive) is re-rolled on its own
3000 ms cadence and only changes how far away ENGAGE wants to stand.

Everything here is stateless; the brain in ai_core owns the timers, the
strafe direction and the current target, and passes them in through a
``TacticalContext``.  All randomness goes through the injected ``rng``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from settings import (
    AI_TARGET_MIN_X, AI_TARGET_MAX_X, AI_TARGET_MIN_Y, AI_TARGET_MAX_Y,
    PATROL_ENGAGE_DISTANCE, PATROL_REPLAN_MS, PATROL_OFFSET_RANGE,
    ENGAGE_DISENGAGE_DISTANCE, ENGAGE_RETREAT_HEALTH, ENGAGE_SWITCH_CHANCE,
    ENGAGE_DISTANCE_TOLERANCE, STRAFE_DISTANCE_RANGE, STRAFE_REVERSE_CHANCE,
    RETREAT_RECOVER_HEALTH, RETREAT_GIVE_UP_DISTANCE, RETREAT_DISTANCE,
    FLANK_BREAK_DISTANCE, FLANK_DURATION_MS, FLANK_DISTANCE,
    COUNTER_BREAK_DISTANCE, COUNTER_DURATION_MS, COUNTER_DISTANCE,
    COUNTER_PREDICTION_TICKS,
    STANCE_AGGRESSIVE_RANGE, STANCE_DEFENSIVE_RANGE, STANCE_BALANCED_RANGE,
    STANCE_INTERVAL_MS, STANCE_LOW_HEALTH,
    STANCE_BALANCED_WEIGHT, STANCE_AGGRESSIVE_WEIGHT,
)
from utils.geometry import clamp_point, direction_between, rotate_quarter


# ══════════════════════════════════════════════════════════
#  Enums
# ══════════════════════════════════════════════════════════

class AIState(str, Enum):
    PATROL = "patrol"
    ENGAGE = "engage"
    RETREAT = "retreat"
    FLANK = "flank"
    COUNTER = "counter"


class Stance(str, Enum):
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"


# ══════════════════════════════════════════════════════════
#  Configuration
# ══════════════════════════════════════════════════════════

@dataclass
class TacticsConfig:
    """Distances (units), durations (ms) and per-tick probabilities."""

    patrol_engage_distance: float = PATROL_ENGAGE_DISTANCE
    patrol_replan_ms: float = PATROL_REPLAN_MS
    patrol_offset_range: tuple[float, float] = PATROL_OFFSET_RANGE

    engage_disengage_distance: float = ENGAGE_DISENGAGE_DISTANCE
    engage_retreat_health: float = ENGAGE_RETREAT_HEALTH
    engage_switch_chance: float = ENGAGE_SWITCH_CHANCE
    engage_tolerance: float = ENGAGE_DISTANCE_TOLERANCE
    strafe_distance_range: tuple[float, float] = STRAFE_DISTANCE_RANGE
    strafe_reverse_chance: float = STRAFE_REVERSE_CHANCE

    retreat_recover_health: float = RETREAT_RECOVER_HEALTH
    retreat_give_up_distance: float = RETREAT_GIVE_UP_DISTANCE
    retreat_distance: float = RETREAT_DISTANCE

    flank_break_distance: float = FLANK_BREAK_DISTANCE
    flank_duration_ms: float = FLANK_DURATION_MS
    flank_distance: float = FLANK_DISTANCE

    counter_break_distance: float = COUNTER_BREAK_DISTANCE
    counter_duration_ms: float = COUNTER_DURATION_MS
    counter_distance: float = COUNTER_DISTANCE
    counter_prediction_ticks: float = COUNTER_PREDICTION_TICKS

    stance_interval_ms: float = STANCE_INTERVAL_MS
    stance_low_health: float = STANCE_LOW_HEALTH
    stance_balanced_weight: float = STANCE_BALANCED_WEIGHT
    stance_aggressive_weight: float = STANCE_AGGRESSIVE_WEIGHT


STANCE_DISTANCE_BANDS: dict[Stance, tuple[float, float]] = {
    Stance.AGGRESSIVE: STANCE_AGGRESSIVE_RANGE,
    Stance.DEFENSIVE: STANCE_DEFENSIVE_RANGE,
    Stance.BALANCED: STANCE_BALANCED_RANGE,
}


# ══════════════════════════════════════════════════════════
#  Inputs / outputs
# ══════════════════════════════════════════════════════════

@dataclass
class TacticalContext:
    """Everything a transition or planner may look at for one tick."""

    self_x: float
    self_y: float
    player_x: float
    player_y: float
    distance: float
    own_health_frac: float
    player_health_frac: float
    predicted_x: float          # last known + inferred velocity · prediction
    predicted_y: float
    player_vx: float            # inferred, units per tick
    player_vy: float
    stance: Stance
    strafe_direction: int
    state_timer_ms: float


@dataclass
class Transition:
    state: AIState
    reverse_strafe: bool = False


@dataclass
class Plan:
    """Planner output.  ``target`` None means keep the current target."""

    target: tuple[float, float] | None = None
    strafe_direction: int = 1
    reset_timer: bool = False


def _clamp_target(x: float, y: float) -> tuple[float, float]:
    return clamp_point(x, y, AI_TARGET_MIN_X, AI_TARGET_MAX_X,
                       AI_TARGET_MIN_Y, AI_TARGET_MAX_Y)


# ══════════════════════════════════════════════════════════
#  Transitions
# ══════════════════════════════════════════════════════════

def evaluate_transition(state: AIState, ctx: TacticalContext,
                        rng: random.Random,
                        cfg: TacticsConfig | None = None) -> Transition | None:
    """Return the transition to take this tick, or None to stay put."""
    cfg = cfg or TacticsConfig()

    if state is AIState.PATROL:
        if ctx.distance < cfg.patrol_engage_distance:
            return Transition(AIState.ENGAGE)
        return None

    if state is AIState.ENGAGE:
        if ctx.distance > cfg.engage_disengage_distance:
            return Transition(AIState.PATROL)
        if ctx.own_health_frac < cfg.engage_retreat_health:
            return Transition(AIState.RETREAT)
        if rng.random() < cfg.engage_switch_chance:
            return Transition(AIState.FLANK if rng.random() > 0.5 else AIState.COUNTER)
        return None

    if state is AIState.RETREAT:
        if (ctx.own_health_frac > cfg.retreat_recover_health
                or ctx.distance > cfg.retreat_give_up_distance):
            return Transition(AIState.ENGAGE)
        return None

    if state is AIState.FLANK:
        if ctx.distance > cfg.flank_break_distance:
            return Transition(AIState.ENGAGE)
        if ctx.state_timer_ms > cfg.flank_duration_ms:
            # Next flank swings round the other side
            return Transition(AIState.ENGAGE, reverse_strafe=True)
        return None

    if state is AIState.COUNTER:
        if (ctx.distance > cfg.counter_break_distance
                or ctx.state_timer_ms > cfg.counter_duration_ms):
            return Transition(AIState.ENGAGE)
        return None

    raise ValueError(f"unknown AI state: {state!r}")


# ══════════════════════════════════════════════════════════
#  Target planners
# ══════════════════════════════════════════════════════════

def plan_patrol(ctx: TacticalContext, rng: random.Random,
                cfg: TacticsConfig) -> Plan:
    """Every few seconds wander toward where the player probably is."""
    if ctx.state_timer_ms <= cfg.patrol_replan_ms:
        return Plan(strafe_direction=ctx.strafe_direction)
    ux, uy = direction_between(ctx.self_x, ctx.self_y, ctx.player_x, ctx.player_y)
    low, high = cfg.patrol_offset_range
    reach = rng.uniform(low, high)
    target = _clamp_target(ctx.self_x + ux * reach, ctx.self_y + uy * reach)
    return Plan(target, ctx.strafe_direction, reset_timer=True)


def stance_distance(stance: Stance, rng: random.Random) -> float:
    low, high = STANCE_DISTANCE_BANDS[stance]
    return rng.uniform(low, high)


def plan_engage(ctx: TacticalContext, rng: random.Random,
                cfg: TacticsConfig) -> Plan:
    """Hold the stance's preferred distance from the predicted player, or strafe."""
    desired = stance_distance(ctx.stance, rng)
    # Points from the player toward us
    away_x, away_y = direction_between(ctx.player_x, ctx.player_y,
                                       ctx.self_x, ctx.self_y)

    if (ctx.distance < desired - cfg.engage_tolerance
            or ctx.distance > desired + cfg.engage_tolerance):
        target = (ctx.predicted_x + away_x * desired,
                  ctx.predicted_y + away_y * desired)
        return Plan(target, ctx.strafe_direction)

    # Good distance: circle the player
    side_x, side_y = rotate_quarter(away_x, away_y, ctx.strafe_direction)
    low, high = cfg.strafe_distance_range
    step = rng.uniform(low, high)
    target = (ctx.self_x + side_x * step, ctx.self_y + side_y * step)

    strafe = ctx.strafe_direction
    if rng.random() < cfg.strafe_reverse_chance:
        strafe = -strafe
    return Plan(target, strafe)


def plan_retreat(ctx: TacticalContext, rng: random.Random,
                 cfg: TacticsConfig) -> Plan:
    away_x, away_y = direction_between(ctx.player_x, ctx.player_y,
                                       ctx.self_x, ctx.self_y)
    target = _clamp_target(ctx.self_x + away_x * cfg.retreat_distance,
                           ctx.self_y + away_y * cfg.retreat_distance)
    return Plan(target, ctx.strafe_direction)


def plan_flank(ctx: TacticalContext, rng: random.Random,
               cfg: TacticsConfig) -> Plan:
    away_x, away_y = direction_between(ctx.player_x, ctx.player_y,
                                       ctx.self_x, ctx.self_y)
    side_x, side_y = rotate_quarter(away_x, away_y, ctx.strafe_direction)
    target = _clamp_target(ctx.player_x + side_x * cfg.flank_distance,
                           ctx.player_y + side_y * cfg.flank_distance)
    return Plan(target, ctx.strafe_direction)


def plan_counter(ctx: TacticalContext, rng: random.Random,
                 cfg: TacticsConfig) -> Plan:
    """Intercept where the player is heading, stopping just short of them."""
    away_x, away_y = direction_between(ctx.player_x, ctx.player_y,
                                       ctx.self_x, ctx.self_y)
    lead = cfg.counter_prediction_ticks
    target = (ctx.player_x + ctx.player_vx * lead + away_x * cfg.counter_distance,
              ctx.player_y + ctx.player_vy * lead + away_y * cfg.counter_distance)
    return Plan(target, ctx.strafe_direction)


_PLANNERS = {
    AIState.PATROL: plan_patrol,
    AIState.ENGAGE: plan_engage,
    AIState.RETREAT: plan_retreat,
    AIState.FLANK: plan_flank,
    AIState.COUNTER: plan_counter,
}


def plan_target(state: AIState, ctx: TacticalContext, rng: random.Random,
                cfg: TacticsConfig | None = None) -> Plan:
    return _PLANNERS[state](ctx, rng, cfg or TacticsConfig())


# ══════════════════════════════════════════════════════════
#  Stance
# ══════════════════════════════════════════════════════════

def choose_stance(own_health_frac: float, player_health_frac: float,
                  rng: random.Random, cfg: TacticsConfig | None = None) -> Stance:
    """Pick the next stance: forced by low health, otherwise weighted random."""
    cfg = cfg or TacticsConfig()
    roll = rng.random()
    if own_health_frac < cfg.stance_low_health:
        return Stance.DEFENSIVE
    if player_health_frac < cfg.stance_low_health:
        return Stance.AGGRESSIVE
    if roll < cfg.stance_balanced_weight:
        return Stance.BALANCED
    if roll < cfg.stance_balanced_weight + cfg.stance_aggressive_weight:
        return Stance.AGGRESSIVE
    return Stance.DEFENSIVE
