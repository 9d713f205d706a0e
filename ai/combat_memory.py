"""
combat_memory.py – The opponent's rolling record of where the player was.

Only position is observed; velocity is *inferred* as the position delta
between two consecutive ticks (units per tick, not per second).  The
memory is a prediction aid, never ground truth.

The defence counters feed the personality's success-rate rule.  No event
increments them yet; ``record_defense`` is the hook for whatever
defence detection gets added later.
"""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass

from settings import MEMORY_CAPACITY


@dataclass
class Observation:
    """One tick's view of the player."""

    x: float
    y: float
    vx: float
    vy: float
    timestamp_ms: float


class CombatMemory:
    """Bounded ring buffer of player observations plus the latest estimate."""

    def __init__(self, capacity: int = MEMORY_CAPACITY):
        self.observations: deque[Observation] = deque(maxlen=capacity)
        self.last_x = 0.0
        self.last_y = 0.0
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self.has_observed = False

        self.successful_defenses = 0
        self.failed_defenses = 0

    @property
    def capacity(self) -> int:
        return self.observations.maxlen or 0

    def observe(self, x: float, y: float, now_ms: float) -> None:
        """Record the player's position for this tick."""
        if self.has_observed:
            self.velocity_x = x - self.last_x
            self.velocity_y = y - self.last_y
        else:
            # First sighting: no delta to infer from yet
            self.velocity_x = 0.0
            self.velocity_y = 0.0
            self.has_observed = True
        self.last_x = x
        self.last_y = y
        self.observations.append(
            Observation(x, y, self.velocity_x, self.velocity_y, now_ms),
        )

    def predict(self, lookahead: float) -> tuple[float, float]:
        """Last known position extrapolated by *lookahead* ticks of velocity."""
        return (self.last_x + self.velocity_x * lookahead,
                self.last_y + self.velocity_y * lookahead)

    # ── Defence record ────────────────────────────────────

    def record_defense(self, success: bool) -> None:
        if success:
            self.successful_defenses += 1
        else:
            self.failed_defenses += 1

    @property
    def defense_success_rate(self) -> float:
        total = self.successful_defenses + self.failed_defenses
        return self.successful_defenses / max(1, total)

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        return {
            "observations": [asdict(o) for o in self.observations],
            "last_x": self.last_x,
            "last_y": self.last_y,
            "velocity_x": self.velocity_x,
            "velocity_y": self.velocity_y,
            "has_observed": self.has_observed,
            "successful_defenses": self.successful_defenses,
            "failed_defenses": self.failed_defenses,
        }

    def restore(self, data: dict) -> None:
        self.observations.clear()
        for entry in data["observations"]:
            self.observations.append(Observation(**entry))
        self.last_x = float(data["last_x"])
        self.last_y = float(data["last_y"])
        self.velocity_x = float(data["velocity_x"])
        self.velocity_y = float(data["velocity_y"])
        self.has_observed = bool(data["has_observed"])
        self.successful_defenses = int(data["successful_defenses"])
        self.failed_defenses = int(data["failed_defenses"])
