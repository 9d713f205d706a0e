"""
keybinds.py – Keyboard bindings for the duel.

Each action maps to one or more pygame key constants, so WASD and the
arrow keys both move.  Aim and dash live on the mouse and are read
straight from pygame in main.py.

Usage:
    from keybinds import KEYS, is_held
    if is_held(pygame.key.get_pressed(), "move_left"):
        ...
"""

from __future__ import annotations

import logging

import pygame

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════
#  Canonical action list
# ══════════════════════════════════════════════════════════

ACTIONS: list[str] = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "force_push",
    "restart",
    "quit",
]

# Human-friendly labels for the HUD hint line.  The four move_* actions
# share one "Move" entry.
ACTION_LABELS: dict[str, str] = {
    "move":       "Move",
    "force_push": "Force Push",
    "restart":    "Restart",
    "quit":       "Quit",
}

_MOVE_ACTIONS = ("move_up", "move_left", "move_down", "move_right")

# ══════════════════════════════════════════════════════════
#  Default bindings
# ══════════════════════════════════════════════════════════

_DEFAULT_KEYS: dict[str, tuple[int, ...]] = {
    "move_left":  (pygame.K_a, pygame.K_LEFT),
    "move_right": (pygame.K_d, pygame.K_RIGHT),
    "move_up":    (pygame.K_w, pygame.K_UP),
    "move_down":  (pygame.K_s, pygame.K_DOWN),
    "force_push": (pygame.K_SPACE,),
    "restart":    (pygame.K_r,),
    "quit":       (pygame.K_ESCAPE,),
}

KEYS: dict[str, tuple[int, ...]] = dict(_DEFAULT_KEYS)


def is_held(pressed, action: str) -> bool:
    """True if any key bound to *action* is down in *pressed*.

    *pressed* is whatever ``pygame.key.get_pressed()`` returns, or any
    mapping/sequence indexable by key code.
    """
    return any(pressed[key] for key in KEYS[action])


def matches(key: int, action: str) -> bool:
    """True if the KEYDOWN *key* triggers *action*."""
    return key in KEYS[action]


def rebind(action: str, *keys: int) -> None:
    if action not in KEYS:
        raise KeyError(f"Unknown action: {action}")
    if not keys:
        raise ValueError(f"No keys given for {action}")
    KEYS[action] = tuple(keys)
    logger.info("Rebound %s → %s", action, keys)


def reset_keybinds() -> None:
    """Restore factory defaults."""
    KEYS.clear()
    KEYS.update(_DEFAULT_KEYS)
    logger.info("Keybinds reset to defaults")


def key_name(key_code: int) -> str:
    """Return a short display name for a pygame key constant."""
    name = pygame.key.name(key_code)
    if not name:
        return f"Key {key_code}"
    return name.upper() if len(name) == 1 else name.title()


def hint_line() -> str:
    """One-line control summary for the HUD."""
    move = "/".join(key_name(KEYS[a][0]) for a in _MOVE_ACTIONS)
    parts = [f"{move} {ACTION_LABELS['move']}", "Mouse aim", "Click dash"]
    for action in ("force_push", "restart", "quit"):
        parts.append(f"{key_name(KEYS[action][0])} {ACTION_LABELS[action]}")
    return "  |  ".join(parts)
