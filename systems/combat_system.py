"""
combat_system.py – Per-tick encounter orchestration and collision resolution.

Responsibilities:
- Own both combatants for the length of a match
- Clamp the host's delta-time and advance the simulated clock
- Tick the player (intent) and the opponent (AI), in that order
- Resolve blade hits (damage gate, random damage, player knockback)
- Apply force pushes every tick a push stays active, at any range
- Report what happened as CombatEvents for the renderer's particles
- Decide when the match is over

The resolver holds no rendering state.  The host reads ``view()`` and the
returned event list, and never writes back into the simulation.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from settings import (
    MAX_DELTA_MS,
    SABER_HIT_RADIUS, SABER_DAMAGE_MIN, SABER_DAMAGE_MAX, SABER_KNOCKBACK,
    FORCE_PUSH_IMPULSE,
)
from ai.ai_core import OpponentConfig
from entities.body import CombatantBody, CombatantId
from entities.opponent import Opponent
from entities.player import Player, PlayerIntent
from systems.ability_system import AbilityKind
from systems.weapon import MeleeWeapon
from utils.geometry import direction_between

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════
#  Events
# ══════════════════════════════════════════════════════════

class EventKind(str, Enum):
    MELEE_HIT = "melee_hit"
    FORCE_PUSH = "force_push"
    ABILITY_FIRED = "ability_fired"


@dataclass(frozen=True)
class CombatEvent:
    """Something the renderer may want to show.  Fire-and-forget.

    ``category`` is a colour key (see ``settings.EVENT_COLORS``);
    ``amount`` is damage for hits and impulse magnitude for pushes.
    """

    kind: EventKind
    x: float
    y: float
    category: str
    source: CombatantId
    amount: float = 0.0
    ability: AbilityKind | None = None

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


# ══════════════════════════════════════════════════════════
#  Read-only frame view
# ══════════════════════════════════════════════════════════

@dataclass
class AbilityView:
    remaining_cooldown_ms: float
    is_active: bool
    seconds_until_ready: int


@dataclass
class CombatantView:
    x: float
    y: float
    health: float
    max_health: float
    is_alive: bool
    is_flashing: bool
    blade_tip: tuple[float, float]
    blade_angle: float
    blade_active: bool
    abilities: dict[AbilityKind, AbilityView] = field(default_factory=dict)


@dataclass
class FrameView:
    player: CombatantView
    opponent: CombatantView
    events: list[CombatEvent]
    match_over: bool
    winner: str | None
    elapsed_ms: float


def clamp_delta(delta_ms: float, max_delta_ms: float = MAX_DELTA_MS) -> float:
    """Negative / NaN → 0, spikes → *max_delta_ms*."""
    if delta_ms is None or math.isnan(delta_ms) or delta_ms < 0:
        return 0.0
    if delta_ms > max_delta_ms:
        logger.debug("Delta %.1f ms capped to %.1f ms", delta_ms, max_delta_ms)
        return float(max_delta_ms)
    return float(delta_ms)


# ══════════════════════════════════════════════════════════
#  Encounter
# ══════════════════════════════════════════════════════════

class Encounter:
    """One match: player vs opponent, advanced one tick at a time.

    Parameters
    ----------
    seed         : seeds the shared random source when *rng* is not given
    rng          : injected random source for AI choices and damage rolls
    clock        : optional monotonic ms clock; defaults to the simulated
                   clock (sum of clamped deltas), which keeps replays exact
    config       : opponent AI tuning
    max_delta_ms : spike cap for a single tick
    """

    def __init__(self, seed: int | None = None,
                 rng: random.Random | None = None,
                 clock: Callable[[], float] | None = None,
                 config: OpponentConfig | None = None,
                 max_delta_ms: float = MAX_DELTA_MS):
        self.rng = rng if rng is not None else random.Random(seed)
        self._clock = clock
        self.max_delta_ms = max_delta_ms

        self.player = Player()
        self.opponent = Opponent(self.rng, config)
        self.combatants = {
            CombatantId.PLAYER: self.player,
            CombatantId.OPPONENT: self.opponent,
        }

        self.elapsed_ms = 0.0
        self.tick_count = 0
        self.last_events: list[CombatEvent] = []
        self._match_over = False
        self._winner: str | None = None

    # ── Queries ───────────────────────────────────────────

    def now_ms(self) -> float:
        if self._clock is not None:
            return float(self._clock())
        return self.elapsed_ms

    def body(self, cid: CombatantId) -> CombatantBody:
        return self.combatants[cid].body

    def is_match_over(self) -> bool:
        return self._match_over

    def winner(self) -> str | None:
        """'player', 'opponent', 'draw', or None while the match runs."""
        return self._winner

    # ══════════════════════════════════════════════════════
    #  Tick
    # ══════════════════════════════════════════════════════

    def tick(self, delta_ms: float,
             intent: PlayerIntent | None = None) -> list[CombatEvent]:
        """Advance the match by one frame and return this frame's events."""
        dt = clamp_delta(delta_ms, self.max_delta_ms)
        self.elapsed_ms += dt
        now = self.now_ms()
        events: list[CombatEvent] = []

        player_body = self.player.body
        opponent_body = self.opponent.body

        if intent is None:
            # Hold the blade where it points
            intent = PlayerIntent.idle(aim=self.player.saber.tip)

        # 1. Player physics + abilities
        if player_body.is_alive():
            for kind in self.player.update(dt, intent):
                events.append(self._ability_event(CombatantId.PLAYER, kind))

        # 2. Opponent AI + physics + abilities
        if opponent_body.is_alive():
            for kind in self.opponent.update(dt, player_body, now):
                events.append(self._ability_event(CombatantId.OPPONENT, kind))

        # 3. Collisions
        self._resolve_collisions(now, events)

        player_body.update_flash(now)
        opponent_body.update_flash(now)

        # 4. Match end, checked once per tick after resolution
        self._check_match_over()

        self.tick_count += 1
        self.last_events = events
        return events

    # ══════════════════════════════════════════════════════
    #  Collision resolution
    # ══════════════════════════════════════════════════════

    def _resolve_collisions(self, now_ms: float, events: list[CombatEvent]) -> None:
        player_body = self.player.body
        opponent_body = self.opponent.body
        if not player_body.is_alive() or not opponent_body.is_alive():
            return

        # Player blade vs opponent (knocks back)
        self._resolve_melee(CombatantId.PLAYER, self.player.saber,
                            player_body, opponent_body, now_ms,
                            knockback=SABER_KNOCKBACK, events=events)

        # Opponent blade vs player (no knockback for the player)
        if opponent_body.is_alive():
            self._resolve_melee(CombatantId.OPPONENT, self.opponent.saber,
                                opponent_body, player_body, now_ms,
                                knockback=0.0, events=events)

        # Force pushes – reapplied every tick while active, any distance
        if self.player.force_push.is_active:
            self._apply_push(CombatantId.PLAYER, player_body, opponent_body, events)
        if self.opponent.force_push.is_active:
            self._apply_push(CombatantId.OPPONENT, opponent_body, player_body, events)

    def _resolve_melee(self, attacker_id: CombatantId, weapon: MeleeWeapon,
                       attacker: CombatantBody, defender: CombatantBody,
                       now_ms: float, knockback: float,
                       events: list[CombatEvent]) -> bool:
        """Apply one blade hit if the tip is on the defender.  Returns True on hit."""
        if not weapon.is_active:
            return False
        if weapon.distance_to(defender.x, defender.y) >= SABER_HIT_RADIUS:
            return False
        if not defender.can_take_damage(now_ms):
            return False

        damage = self.rng.uniform(SABER_DAMAGE_MIN, SABER_DAMAGE_MAX)
        actual = defender.take_damage(damage, now_ms)

        if knockback > 0:
            ux, uy = direction_between(attacker.x, attacker.y, defender.x, defender.y)
            defender.apply_force(ux * knockback, uy * knockback)

        logger.debug("%s blade hit for %.2f", attacker_id.value, actual)
        events.append(CombatEvent(
            kind=EventKind.MELEE_HIT,
            x=defender.x,
            y=defender.y,
            category=f"{attacker_id.other.value}_hit",
            source=attacker_id,
            amount=actual,
        ))
        return True

    @staticmethod
    def _apply_push(pusher_id: CombatantId, pusher: CombatantBody,
                    pushee: CombatantBody, events: list[CombatEvent]) -> None:
        ux, uy = direction_between(pusher.x, pusher.y, pushee.x, pushee.y)
        pushee.apply_force(ux * FORCE_PUSH_IMPULSE, uy * FORCE_PUSH_IMPULSE)
        logger.debug("%s force push impulse applied", pusher_id.value)
        events.append(CombatEvent(
            kind=EventKind.FORCE_PUSH,
            x=pusher.x,
            y=pusher.y,
            category=f"{pusher_id.value}_force",
            source=pusher_id,
            amount=FORCE_PUSH_IMPULSE,
        ))

    def _ability_event(self, cid: CombatantId, kind: AbilityKind) -> CombatEvent:
        body = self.body(cid)
        return CombatEvent(
            kind=EventKind.ABILITY_FIRED,
            x=body.x,
            y=body.y,
            category=f"{cid.value}_{kind.value}",
            source=cid,
            ability=kind,
        )

    def _check_match_over(self) -> None:
        if self._match_over:
            return
        player_alive = self.player.body.is_alive()
        opponent_alive = self.opponent.body.is_alive()
        if player_alive and opponent_alive:
            return
        self._match_over = True
        if not player_alive and not opponent_alive:
            self._winner = "draw"
        elif player_alive:
            self._winner = "player"
        else:
            self._winner = "opponent"
        logger.info("Match resolved after %.0f ms: %s", self.elapsed_ms, self._winner)

    # ══════════════════════════════════════════════════════
    #  Read-only output
    # ══════════════════════════════════════════════════════

    def view(self) -> FrameView:
        return FrameView(
            player=self._combatant_view(self.player),
            opponent=self._combatant_view(self.opponent),
            events=list(self.last_events),
            match_over=self._match_over,
            winner=self._winner,
            elapsed_ms=self.elapsed_ms,
        )

    @staticmethod
    def _combatant_view(combatant: Player | Opponent) -> CombatantView:
        body = combatant.body
        saber = combatant.saber
        return CombatantView(
            x=body.x,
            y=body.y,
            health=body.health,
            max_health=body.max_health,
            is_alive=body.is_alive(),
            is_flashing=body.is_flashing,
            blade_tip=saber.tip,
            blade_angle=saber.angle,
            blade_active=saber.is_active,
            abilities={
                kind: AbilityView(state.remaining_cooldown_ms, state.is_active,
                                  state.seconds_until_ready)
                for kind, state in combatant.abilities.items()
            },
        )

    # ── Serialization helpers ─────────────────────────────

    def get_state_snapshot(self) -> dict:
        """Plain, JSON-compatible state.  The shared RNG rides in the AI snapshot."""
        return {
            "elapsed_ms": self.elapsed_ms,
            "tick_count": self.tick_count,
            "match_over": self._match_over,
            "winner": self._winner,
            "player": self.player.get_state_snapshot(),
            "opponent": self.opponent.get_state_snapshot(),
        }

    def restore_snapshot(self, data: dict) -> None:
        self.elapsed_ms = float(data["elapsed_ms"])
        self.tick_count = int(data["tick_count"])
        self._match_over = bool(data["match_over"])
        self._winner = data["winner"]
        self.player.restore_snapshot(data["player"])
        self.opponent.restore_snapshot(data["opponent"])
        self.last_events = []
