from collections import defaultdict

import pygame
import pytest

import keybinds
from entities.body import CombatantId
from systems.combat_system import CombatEvent, EventKind
from systems.vfx_system import VFXSystem


def test_hit_and_push_spawn_bursts():
    vfx = VFXSystem()
    vfx.handle_events([
        CombatEvent(EventKind.MELEE_HIT, 100, 100, "opponent_hit", CombatantId.PLAYER),
        CombatEvent(EventKind.FORCE_PUSH, 200, 200, "player_force", CombatantId.PLAYER),
        CombatEvent(EventKind.ABILITY_FIRED, 200, 200, "player_force_push",
                    CombatantId.PLAYER),
    ])
    assert len(vfx.particles) == 8 + 15


def test_particles_fade_out():
    vfx = VFXSystem()
    vfx.spawn_burst(0, 0, (255, 255, 255), 5)
    for _ in range(21):
        vfx.update(1 / 60)
    assert vfx.particles == []


def test_wasd_and_arrows_both_move():
    pressed = defaultdict(bool)
    pressed[pygame.K_a] = True
    assert keybinds.is_held(pressed, "move_left")
    pressed = defaultdict(bool)
    pressed[pygame.K_LEFT] = True
    assert keybinds.is_held(pressed, "move_left")
    assert not keybinds.is_held(pressed, "move_right")


def test_rebind_and_reset():
    try:
        keybinds.rebind("force_push", pygame.K_f)
        assert keybinds.matches(pygame.K_f, "force_push")
        assert not keybinds.matches(pygame.K_SPACE, "force_push")
        with pytest.raises(KeyError):
            keybinds.rebind("fly", pygame.K_g)
    finally:
        keybinds.reset_keybinds()
    assert keybinds.matches(pygame.K_SPACE, "force_push")


def test_hint_line_follows_rebinds(monkeypatch):
    monkeypatch.setattr(keybinds, "key_name", lambda code: f"<{code}>")
    try:
        keybinds.rebind("force_push", pygame.K_f)
        hint = keybinds.hint_line()
    finally:
        keybinds.reset_keybinds()
    assert f"<{pygame.K_f}> Force Push" in hint
    assert f"<{pygame.K_w}>/<{pygame.K_a}>/<{pygame.K_s}>/<{pygame.K_d}> Move" in hint
    assert f"<{pygame.K_ESCAPE}> Quit" in hint
