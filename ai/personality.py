"""
personality.py – Opponent personality traits and their in-match drift.

Four traits, each in [0, 1]:

  aggression   – appetite for pressing the attack
  caution      – appetite for keeping distance
  prediction   – how far ahead the blade / engage target extrapolate
                 the player's observed motion
  adaptability – rolled and carried for tuning; no rule reads it yet

Traits are rolled once per match from fixed sub-ranges and then nudged
every tick by ``adapt`` according to relative health and the defence
success ratio.  They never reset mid-match.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass

from settings import (
    PERSONALITY_AGGRESSION_RANGE, PERSONALITY_CAUTION_RANGE,
    PERSONALITY_PREDICTION_RANGE, PERSONALITY_ADAPTABILITY_RANGE,
    ADAPT_HEALTH_THRESHOLD, ADAPT_STEP, ADAPT_SUCCESS_STEP,
    ADAPT_SUCCESS_HIGH, ADAPT_SUCCESS_LOW,
    ADAPT_AGGRESSION_FLOOR, ADAPT_AGGRESSION_CAP,
    ADAPT_CAUTION_FLOOR, ADAPT_CAUTION_CAP,
)
from utils.geometry import clamp


# ══════════════════════════════════════════════════════════
#  Configuration
# ══════════════════════════════════════════════════════════

@dataclass
class PersonalityConfig:
    """Roll ranges and adaptation knobs."""

    aggression_range: tuple[float, float] = PERSONALITY_AGGRESSION_RANGE
    caution_range: tuple[float, float] = PERSONALITY_CAUTION_RANGE
    prediction_range: tuple[float, float] = PERSONALITY_PREDICTION_RANGE
    adaptability_range: tuple[float, float] = PERSONALITY_ADAPTABILITY_RANGE

    health_threshold: float = ADAPT_HEALTH_THRESHOLD
    step: float = ADAPT_STEP
    success_step: float = ADAPT_SUCCESS_STEP
    success_high: float = ADAPT_SUCCESS_HIGH
    success_low: float = ADAPT_SUCCESS_LOW

    aggression_floor: float = ADAPT_AGGRESSION_FLOOR
    aggression_cap: float = ADAPT_AGGRESSION_CAP
    caution_floor: float = ADAPT_CAUTION_FLOOR
    caution_cap: float = ADAPT_CAUTION_CAP


# ══════════════════════════════════════════════════════════
#  Personality
# ══════════════════════════════════════════════════════════

@dataclass
class Personality:
    aggression: float = 0.75
    caution: float = 0.5
    prediction: float = 0.6
    adaptability: float = 0.7

    @classmethod
    def roll(cls, rng: random.Random,
             config: PersonalityConfig | None = None) -> "Personality":
        """Draw a fresh personality from the configured sub-ranges."""
        cfg = config or PersonalityConfig()

        def draw(bounds: tuple[float, float]) -> float:
            low, high = bounds
            return low + rng.random() * (high - low)

        return cls(
            aggression=draw(cfg.aggression_range),
            caution=draw(cfg.caution_range),
            prediction=draw(cfg.prediction_range),
            adaptability=draw(cfg.adaptability_range),
        )

    def adapt(self, own_health_frac: float, player_health_frac: float,
              success_rate: float, config: PersonalityConfig | None = None) -> None:
        """Nudge traits for one tick.

        Args:
            own_health_frac: opponent health as fraction 0.0–1.0.
            player_health_frac: player health as fraction 0.0–1.0.
            success_rate: successful / max(1, successful + failed) defences.
        """
        cfg = config or PersonalityConfig()

        # Health: losing makes the opponent careful, winning makes it bold
        if own_health_frac < cfg.health_threshold:
            self.aggression = max(cfg.aggression_floor, self.aggression - cfg.step)
            self.caution = min(cfg.caution_cap, self.caution + cfg.step)
        elif player_health_frac < cfg.health_threshold:
            self.aggression = min(cfg.aggression_cap, self.aggression + cfg.step)
            self.caution = max(cfg.caution_floor, self.caution - cfg.step)

        # Defence record
        if success_rate > cfg.success_high:
            self.aggression += cfg.success_step
        elif success_rate < cfg.success_low:
            self.caution += cfg.success_step

        self.aggression = clamp(self.aggression, 0.0, 1.0)
        self.caution = clamp(self.caution, 0.0, 1.0)

    # ── Serialization helpers ─────────────────────────────

    def snapshot(self) -> dict:
        return asdict(self)

    def restore(self, data: dict) -> None:
        self.aggression = float(data["aggression"])
        self.caution = float(data["caution"])
        self.prediction = float(data["prediction"])
        self.adaptability = float(data["adaptability"])
