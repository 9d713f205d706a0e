"""healthbar.py - Draws smoothly animated health bars for both combatants."""

import pygame
from settings import (
    WHITE, GREEN, RED, GRAY,
    HEALTHBAR_WIDTH, HEALTHBAR_HEIGHT, HEALTHBAR_Y,
    PLAYER_HB_X, OPPONENT_HB_X, SMALL_FONT_SIZE,
)

# ── Smooth display health (persists between frames) ──────
# keyed by label → displayed health
_bar_state: dict[str, float] = {}

_LERP_SPEED = 0.15  # interpolation factor per frame


def draw_health_bars(surface, view):
    """Render both health bars at the top of the screen from a FrameView."""
    _draw_bar(surface, PLAYER_HB_X, HEALTHBAR_Y, "Player",
              view.player.health, view.player.max_health, GREEN)
    _draw_bar(surface, OPPONENT_HB_X, HEALTHBAR_Y, "Opponent",
              view.opponent.health, view.opponent.max_health, RED)


def _draw_bar(surface, x, y, label, health, max_health, fill_color):
    displayed = _bar_state.setdefault(label, float(health))
    displayed += (health - displayed) * _LERP_SPEED
    _bar_state[label] = displayed

    radius = 6

    bg_rect = pygame.Rect(x, y, HEALTHBAR_WIDTH, HEALTHBAR_HEIGHT)
    pygame.draw.rect(surface, GRAY, bg_rect, border_radius=radius)

    fill_frac = max(0.0, min(1.0, displayed / max_health)) if max_health > 0 else 0.0
    fill_width = int(HEALTHBAR_WIDTH * fill_frac)
    if fill_width > 0:
        fill_rect = pygame.Rect(x, y, fill_width, HEALTHBAR_HEIGHT)
        pygame.draw.rect(surface, fill_color, fill_rect, border_radius=radius)

    pygame.draw.rect(surface, (180, 180, 180), bg_rect, 2, border_radius=radius)

    font = font_small()
    surface.blit(font.render(label, True, WHITE), (x, y - 18))
    hp_text = font.render(f"{int(round(health))}/{int(max_health)}", True, WHITE)
    tx = x + (HEALTHBAR_WIDTH - hp_text.get_width()) // 2
    ty = y + (HEALTHBAR_HEIGHT - hp_text.get_height()) // 2
    surface.blit(hp_text, (tx, ty))


def clear_cache():
    """Reset the displayed-health cache (call on match reset)."""
    _bar_state.clear()


# Small font helper (cached after first call)
_font_cache = None

def font_small():
    global _font_cache
    if _font_cache is None:
        _font_cache = pygame.font.SysFont(None, SMALL_FONT_SIZE)
    return _font_cache
