"""
body.py – Shared physics / health model for both combatants.

A CombatantBody is a point mass with an impulse-style velocity, a
multiplicative friction decay, and hard clamping to the arena box.
It also owns the health pool and the damage-cooldown gate that keeps a
blade resting inside a body from dealing damage every single tick.

Time never comes from a global clock: every time-dependent call takes
``now_ms`` from the encounter's injected clock, which keeps matches
replayable.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from settings import (
    ARENA_MIN_X, ARENA_MAX_X, ARENA_MIN_Y, ARENA_MAX_Y,
    BODY_SPEED, BODY_FRICTION,
    DAMAGE_COOLDOWN_MS, DAMAGE_FLASH_MS,
)
from utils.geometry import clamp

logger = logging.getLogger(__name__)


class CombatantId(str, Enum):
    """Key into the encounter's combatant table."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "CombatantId":
        if self is CombatantId.PLAYER:
            return CombatantId.OPPONENT
        return CombatantId.PLAYER


class CombatantBody:
    """Position, velocity and health of one combatant."""

    def __init__(self, x: float, y: float, max_health: float,
                 speed: float = BODY_SPEED, friction: float = BODY_FRICTION,
                 damage_cooldown_ms: float = DAMAGE_COOLDOWN_MS):
        # Position / motion
        self.x = float(x)
        self.y = float(y)
        self.vx = 0.0
        self.vy = 0.0
        self.speed = float(speed)
        self.friction = float(friction)

        # Health
        self.max_health = float(max_health)
        self.health = float(max_health)

        # Damage gate + cosmetic flash
        self.damage_cooldown_ms = float(damage_cooldown_ms)
        self.last_damage_ms: float | None = None
        self.is_flashing = False

    # ── Properties ────────────────────────────────────────

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def health_fraction(self) -> float:
        return self.health / max(1.0, self.max_health)

    def is_alive(self) -> bool:
        return self.health > 0

    def distance_to(self, other: "CombatantBody") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    # ── Physics ───────────────────────────────────────────

    def apply_force(self, ax: float, ay: float) -> None:
        """Add an impulse straight into velocity (no mass scaling)."""
        self.vx += ax
        self.vy += ay

    def integrate(self, delta_ms: float,
                  friction_override: float | None = None) -> None:
        """Decay velocity, move, and clamp into the arena."""
        friction = self.friction if friction_override is None else friction_override
        self.vx *= friction
        self.vy *= friction

        seconds = delta_ms / 1000.0
        self.x += self.vx * seconds
        self.y += self.vy * seconds

        self.x = clamp(self.x, ARENA_MIN_X, ARENA_MAX_X)
        self.y = clamp(self.y, ARENA_MIN_Y, ARENA_MAX_Y)

    # ── Damage ────────────────────────────────────────────

    def can_take_damage(self, now_ms: float) -> bool:
        if self.last_damage_ms is None:
            return True
        return now_ms - self.last_damage_ms > self.damage_cooldown_ms

    def take_damage(self, amount: float, now_ms: float) -> float:
        """Apply *amount* if the damage gate is open.

        Returns the health actually removed (0 when gated).  Health is
        clamped into [0, max_health] whatever *amount* is.
        """
        if not self.can_take_damage(now_ms):
            return 0.0
        if math.isnan(amount):
            amount = 0.0
        before = self.health
        self.health = clamp(self.health - amount, 0.0, self.max_health)
        self.last_damage_ms = now_ms
        self.is_flashing = True
        logger.debug("Health reduced %.1f → %.1f (took %.2f)",
                     before, self.health, amount)
        return before - self.health

    def update_flash(self, now_ms: float) -> None:
        """Clear the damage flash once it has shown for its full duration."""
        if self.is_flashing and self.last_damage_ms is not None:
            if now_ms - self.last_damage_ms > DAMAGE_FLASH_MS:
                self.is_flashing = False

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "health": self.health,
            "last_damage_ms": self.last_damage_ms,
            "is_flashing": self.is_flashing,
        }

    def restore(self, data: dict) -> None:
        self.x = float(data["x"])
        self.y = float(data["y"])
        self.vx = float(data["vx"])
        self.vy = float(data["vy"])
        self.health = clamp(float(data["health"]), 0.0, self.max_health)
        last = data["last_damage_ms"]
        self.last_damage_ms = None if last is None else float(last)
        self.is_flashing = bool(data["is_flashing"])
