"""
vfx_system.py – Cosmetic particles spawned from combat events.

Purely visual: particles never feed back into the simulation and use
their own random source, so they cannot disturb a seeded match.

- Blade hit   → small burst at the struck combatant
- Force push  → larger burst at the pusher

Each particle flies outward in a random direction and fades linearly.
"""

from __future__ import annotations

import math
import random

import pygame

from settings import (
    EVENT_COLORS, WHITE,
    DAMAGE_PARTICLE_COUNT, FORCE_PARTICLE_COUNT,
    PARTICLE_SPEED, PARTICLE_DECAY,
)
from systems.combat_system import CombatEvent, EventKind


# ══════════════════════════════════════════════════════════
#  Base Particle
# ══════════════════════════════════════════════════════════

class Particle:
    """Straight-line particle with linear fade."""

    __slots__ = ("x", "y", "vx", "vy", "color", "life", "size")

    def __init__(self, x: float, y: float, vx: float, vy: float,
                 color: tuple, size: float = 3.0):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.color = color
        self.life = 1.0
        self.size = size

    @property
    def alive(self) -> bool:
        return self.life > 0

    def update(self, dt: float):
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.life -= PARTICLE_DECAY

    def draw(self, surface: pygame.Surface):
        if not self.alive:
            return
        sz = max(1, int(self.size))
        alpha = int(255 * max(0.0, min(1.0, self.life)))
        ps = pygame.Surface((sz * 2, sz * 2), pygame.SRCALPHA)
        pygame.draw.circle(ps, (*self.color[:3], alpha), (sz, sz), sz)
        surface.blit(ps, (int(self.x) - sz, int(self.y) - sz))


# ══════════════════════════════════════════════════════════
#  VFX System
# ══════════════════════════════════════════════════════════

class VFXSystem:
    """Owns every live particle; fed once per frame with the tick's events."""

    def __init__(self, rng: random.Random | None = None):
        self.particles: list[Particle] = []
        self._rng = rng or random.Random()

    def spawn_burst(self, x: float, y: float, color: tuple, count: int):
        for _ in range(count):
            angle = self._rng.uniform(0, math.tau)
            speed = self._rng.uniform(0.5, 1.0) * PARTICLE_SPEED
            self.particles.append(Particle(
                x, y, math.cos(angle) * speed, math.sin(angle) * speed, color,
            ))

    def handle_events(self, events: list[CombatEvent]):
        for event in events:
            color = EVENT_COLORS.get(event.category, WHITE)
            if event.kind is EventKind.MELEE_HIT:
                self.spawn_burst(event.x, event.y, color, DAMAGE_PARTICLE_COUNT)
            elif event.kind is EventKind.FORCE_PUSH:
                self.spawn_burst(event.x, event.y, color, FORCE_PARTICLE_COUNT)

    def update(self, dt: float):
        for p in self.particles:
            p.update(dt)
        self.particles = [p for p in self.particles if p.alive]

    def draw(self, surface: pygame.Surface):
        for p in self.particles:
            p.draw(surface)

    def clear(self):
        self.particles.clear()
