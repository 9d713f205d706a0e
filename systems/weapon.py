"""
weapon.py – Melee blade geometry.

The blade has no state machine: every tick its angle is recomputed from
the owner's position and an aim point, and the tip is derived from that.
The owner is referenced by id only; whoever ticks the blade passes the
owner's current position in.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from settings import SABER_REACH

if TYPE_CHECKING:
    from entities.body import CombatantId


class MeleeWeapon:
    """Lightsaber held by one combatant.

    Attributes
    ----------
    owner_id  : CombatantId – non-owning reference to the holder
    angle     : float – radians, 0 = pointing right (+x)
    reach     : float – blade length
    tip_x/y   : float – blade tip in arena coordinates
    is_active : bool  – structural gate for hits; always True for now
    """

    __slots__ = ("owner_id", "angle", "reach", "tip_x", "tip_y", "is_active")

    def __init__(self, owner_id: CombatantId, reach: float = SABER_REACH):
        self.owner_id = owner_id
        self.angle = 0.0
        self.reach = reach
        self.tip_x = 0.0
        self.tip_y = 0.0
        self.is_active = True

    @property
    def tip(self) -> tuple[float, float]:
        return self.tip_x, self.tip_y

    def update_aim(self, target_x: float, target_y: float,
                   owner_x: float, owner_y: float) -> None:
        """Point the blade from the owner at (target_x, target_y)."""
        # atan2(0, 0) is 0.0, so aiming at yourself points right
        self.angle = math.atan2(target_y - owner_y, target_x - owner_x)
        self.refresh_tip(owner_x, owner_y)

    def refresh_tip(self, owner_x: float, owner_y: float) -> None:
        """Recompute the tip for the current angle (owner moved, blade didn't)."""
        self.tip_x = owner_x + math.cos(self.angle) * self.reach
        self.tip_y = owner_y + math.sin(self.angle) * self.reach

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.tip_x, y - self.tip_y)

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        return {
            "angle": self.angle,
            "tip_x": self.tip_x,
            "tip_y": self.tip_y,
            "is_active": self.is_active,
        }

    def restore(self, data: dict) -> None:
        self.angle = float(data["angle"])
        self.tip_x = float(data["tip_x"])
        self.tip_y = float(data["tip_y"])
        self.is_active = bool(data["is_active"])
