"""
renderer.py – Draws one FrameView.

Rendering-only: reads the view, the particle system and (optionally)
the opponent brain for the debug line.  Never touches game logic.
"""

from __future__ import annotations

import math

import pygame

from settings import (
    BG_COLOR, WHITE, GOLD, GRAY, YELLOW,
    SCREEN_WIDTH, SCREEN_HEIGHT,
    BODY_RADIUS, PLAYER_BLADE_COLOR, OPPONENT_BLADE_COLOR,
    HEALTHBAR_Y, HEALTHBAR_HEIGHT, PLAYER_HB_X, OPPONENT_HB_X,
    FONT_SIZE, SMALL_FONT_SIZE, STAR_COUNT, STAR_TWINKLE_RATE,
)
from systems.ability_system import AbilityKind
from systems.combat_system import CombatantView, FrameView
from systems.healthbar import draw_health_bars
from systems.vfx_system import VFXSystem

_PLAYER_BODY = (40, 60, 140)
_OPPONENT_BODY = (140, 30, 30)

_ABILITY_LABELS = {
    AbilityKind.FORCE_PUSH: "Push",
    AbilityKind.FORCE_DASH: "Dash",
}

# Result banner per FrameView.winner
_END_MESSAGES = {
    "player":   ("Victory!", GOLD),
    "opponent": ("Defeated", WHITE),
    "draw":     ("Draw", WHITE),
}


# ══════════════════════════════════════════════════════════
#  Pure helpers (no display needed)
# ══════════════════════════════════════════════════════════

def star_field(elapsed_ms: float, width: int = SCREEN_WIDTH,
               height: int = SCREEN_HEIGHT, count: int = STAR_COUNT):
    """Fixed star positions with a size that twinkles between 0.5 and 1.5."""
    stars = []
    for i in range(count):
        x = (i * 37) % width
        y = (i * 73) % height
        size = math.sin(elapsed_ms * STAR_TWINKLE_RATE + i) * 0.5 + 1
        stars.append((x, y, size))
    return stars


def health_ring_color(health: float, max_health: float) -> tuple[int, int, int]:
    """Green at full health sliding through yellow to red at zero."""
    fraction = max(0.0, min(1.0, health / max_health)) if max_health > 0 else 0.0
    color = pygame.Color(0, 0, 0)
    color.hsva = (120.0 * fraction, 100, 100, 100)
    return color.r, color.g, color.b


def end_message(view: FrameView) -> tuple[str, tuple[int, int, int]]:
    return _END_MESSAGES.get(view.winner, _END_MESSAGES["draw"])


# ══════════════════════════════════════════════════════════
#  Drawing
# ══════════════════════════════════════════════════════════

def draw_text(surface, text, x, y, color=WHITE, size=FONT_SIZE):
    """Render a single line of text at (x, y)."""
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), (x, y))


def draw_glow(surface, pos, radius, color):
    """Soft radial glow centred on *pos*."""
    glow_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
    for i in range(radius, 0, -4):
        alpha = int(255 * (i / radius) * 0.2)
        pygame.draw.circle(glow_surface, (*color, alpha), (radius, radius), i)
    surface.blit(glow_surface, (pos[0] - radius, pos[1] - radius))


def draw_frame(surface: pygame.Surface, view: FrameView, vfx: VFXSystem,
               debug_line: str | None = None, hint: str | None = None):
    """Paint a complete frame: arena, combatants, particles, HUD."""
    surface.fill(BG_COLOR)
    for x, y, size in star_field(view.elapsed_ms):
        pygame.draw.rect(surface, WHITE, (x, y, max(1, round(size)), max(1, round(size))))
    pygame.draw.rect(surface, GRAY, (0, 0, SCREEN_WIDTH, SCREEN_HEIGHT), 2)

    _draw_combatant(surface, view.opponent, _OPPONENT_BODY, OPPONENT_BLADE_COLOR)
    _draw_combatant(surface, view.player, _PLAYER_BODY, PLAYER_BLADE_COLOR)
    vfx.draw(surface)

    draw_health_bars(surface, view)
    _draw_cooldowns(surface, view.player, PLAYER_HB_X)
    _draw_cooldowns(surface, view.opponent, OPPONENT_HB_X)

    if debug_line:
        draw_text(surface, debug_line, 10, SCREEN_HEIGHT - 24, YELLOW, SMALL_FONT_SIZE)
    if hint:
        draw_text(surface, hint, 10, SCREEN_HEIGHT - 44, GRAY, SMALL_FONT_SIZE)

    if view.match_over:
        _draw_end_screen(surface, *end_message(view))


def _draw_combatant(surface, cv: CombatantView, body_color, blade_color):
    if not cv.is_alive:
        return
    centre = (int(cv.x), int(cv.y))
    pygame.draw.circle(surface, health_ring_color(cv.health, cv.max_health),
                       centre, BODY_RADIUS + 2)
    pygame.draw.circle(surface, WHITE if cv.is_flashing else body_color,
                       centre, BODY_RADIUS - 1)

    if cv.blade_active:
        tip = (int(cv.blade_tip[0]), int(cv.blade_tip[1]))
        pygame.draw.line(surface, blade_color, centre, tip, 6)
        pygame.draw.line(surface, WHITE, centre, tip, 2)
        draw_glow(surface, tip, 16, blade_color)


def _draw_cooldowns(surface, cv: CombatantView, x: int):
    y = HEALTHBAR_Y + HEALTHBAR_HEIGHT + 6
    for kind, ability in cv.abilities.items():
        label = _ABILITY_LABELS.get(kind, kind.value)
        if ability.seconds_until_ready > 0:
            text, color = f"{label}: {ability.seconds_until_ready}s", GRAY
        else:
            text, color = f"{label}: Ready", WHITE
        draw_text(surface, text, x, y, color, SMALL_FONT_SIZE)
        y += SMALL_FONT_SIZE


def _draw_end_screen(surface, message, color):
    """Dark overlay with the result message plus a restart hint."""
    overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    overlay.set_alpha(180)
    overlay.fill((0, 0, 0))
    surface.blit(overlay, (0, 0))

    text = pygame.font.SysFont(None, 72).render(message, True, color)
    surface.blit(text, text.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 - 30)))

    hint = pygame.font.SysFont(None, 30).render(
        "Press R to Restart  |  ESC to Quit", True, WHITE)
    surface.blit(hint, hint.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 + 40)))
