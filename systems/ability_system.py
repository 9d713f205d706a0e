"""
ability_system.py – Cooldown / active-duration state machine for force abilities.

Both force abilities (push and dash) share the same lifecycle:

    ready ──activate()──▶ active + cooling ──duration──▶ cooling ──cooldown──▶ ready

The cooldown starts the moment the ability fires; it is *not* gated on
the active window ending.  Every transition is a total function of the
current state – activating an ability that is still cooling is a silent
no-op, never an error.

What an ability *does* while active lives elsewhere: the player's intent
translator owns the dash impulse, the encounter resolver owns the push.

Factory:
    create_ability(kind) → AbilityState
"""

from __future__ import annotations

import logging
from enum import Enum

from settings import (
    ABILITY_ACTIVE_MS,
    FORCE_PUSH_COOLDOWN_MS,
    FORCE_DASH_COOLDOWN_MS,
)

logger = logging.getLogger(__name__)


class AbilityKind(str, Enum):
    FORCE_PUSH = "force_push"
    FORCE_DASH = "force_dash"


class AbilityState:
    """Cooldown-gated, time-limited ability.

    Parameters
    ----------
    name               : label used in logs and snapshots
    cooldown_ms        : time between uses
    active_duration_ms : how long ``is_active`` stays True after firing
    """

    def __init__(self, name: str, cooldown_ms: float,
                 active_duration_ms: float = ABILITY_ACTIVE_MS) -> None:
        self.name = name
        self.cooldown_ms = float(cooldown_ms)
        self.active_duration_ms = float(active_duration_ms)
        self.remaining_cooldown_ms: float = 0.0
        self.is_active: bool = False
        self.active_elapsed_ms: float = 0.0

    # ── Queries ───────────────────────────────────────────

    def can_use(self) -> bool:
        return self.remaining_cooldown_ms <= 0.0

    @property
    def cooldown_fraction(self) -> float:
        """0.0 = ready, 1.0 = just used.  For UI display."""
        if self.cooldown_ms <= 0:
            return 0.0
        return max(0.0, min(1.0, self.remaining_cooldown_ms / self.cooldown_ms))

    @property
    def seconds_until_ready(self) -> int:
        """Whole seconds left on the cooldown, rounded up (0 when ready)."""
        remaining = max(0.0, self.remaining_cooldown_ms)
        return int(-(-remaining // 1000))

    # ── Transitions ───────────────────────────────────────

    def activate(self) -> bool:
        """Fire the ability if it is ready.  Returns True on success."""
        if not self.can_use():
            return False
        self.is_active = True
        self.active_elapsed_ms = 0.0
        self.remaining_cooldown_ms = self.cooldown_ms
        logger.info("Ability '%s' activated", self.name)
        return True

    def tick(self, delta_ms: float) -> None:
        """Advance cooldown and active timers.  Call once per tick."""
        # Allowed to go negative; can_use() only checks the sign.
        if self.remaining_cooldown_ms > 0:
            self.remaining_cooldown_ms -= delta_ms

        if self.is_active:
            self.active_elapsed_ms += delta_ms
            if self.active_elapsed_ms >= self.active_duration_ms:
                self.is_active = False
                self.active_elapsed_ms = 0.0

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        return {
            "remaining_cooldown_ms": self.remaining_cooldown_ms,
            "is_active": self.is_active,
            "active_elapsed_ms": self.active_elapsed_ms,
        }

    def restore(self, data: dict) -> None:
        self.remaining_cooldown_ms = float(data["remaining_cooldown_ms"])
        self.is_active = bool(data["is_active"])
        self.active_elapsed_ms = float(data["active_elapsed_ms"])


# ══════════════════════════════════════════════════════════
#  Factory
# ══════════════════════════════════════════════════════════

_ABILITY_COOLDOWNS: dict[AbilityKind, float] = {
    AbilityKind.FORCE_PUSH: FORCE_PUSH_COOLDOWN_MS,
    AbilityKind.FORCE_DASH: FORCE_DASH_COOLDOWN_MS,
}


def create_ability(kind: AbilityKind) -> AbilityState:
    """Factory: return a fresh, ready AbilityState for *kind*."""
    return AbilityState(kind.value, _ABILITY_COOLDOWNS[kind])
