import math

import pytest

from entities import Player, PlayerIntent
from systems.ability_system import AbilityKind


def test_diagonal_keys_are_normalised():
    intent = PlayerIntent.from_keys(right=True, down=True)
    assert intent.move_x == pytest.approx(0.707)
    assert intent.move_y == pytest.approx(0.707)


def test_opposite_keys_cancel():
    intent = PlayerIntent.from_keys(left=True, right=True, up=True)
    assert intent.move_x == 0.0
    assert intent.move_y == -1.0


def test_movement_intent_accelerates_player():
    player = Player()
    player.update(100, PlayerIntent.from_keys(right=True, aim=(500, 300)))
    # 1000 * 0.1 = 100 → friction 0.85 → 85 → moves 8.5 in 0.1 s
    assert player.body.vx == pytest.approx(85.0)
    assert player.body.x == pytest.approx(108.5)


def test_blade_tracks_aim_point():
    player = Player()
    player.update(16, PlayerIntent.idle(aim=(100, 500)))
    assert player.saber.angle == pytest.approx(math.pi / 2)
    assert player.saber.tip == pytest.approx((player.body.x, player.body.y + 80))


def test_push_request_fires_once_per_cooldown():
    player = Player()
    fired = player.update(16, PlayerIntent(aim_x=500, aim_y=300,
                                           force_push_requested=True))
    assert fired == [AbilityKind.FORCE_PUSH]
    assert player.force_push.is_active
    fired = player.update(16, PlayerIntent(aim_x=500, aim_y=300,
                                           force_push_requested=True))
    assert fired == []


def test_dash_launches_along_blade():
    player = Player()
    fired = player.update(16, PlayerIntent(aim_x=700, aim_y=300,
                                           force_dash_requested=True))
    assert fired == [AbilityKind.FORCE_DASH]
    assert player.translator.dash_active
    assert player.body.vx > 1000
    assert player.body.vy == pytest.approx(0.0)


def test_dash_sustain_window_expires():
    player = Player()
    player.update(100, PlayerIntent(aim_x=700, aim_y=300,
                                    force_dash_requested=True))
    for _ in range(4):
        player.update(100, PlayerIntent.idle(aim=(700, 300)))
    assert not player.translator.dash_active


def test_dash_uses_dash_friction():
    player = Player()
    player.update(0, PlayerIntent(aim_x=700, aim_y=300,
                                  force_dash_requested=True))
    # 0 ms tick: no sustain force, only impulse and friction 0.9
    assert player.body.vx == pytest.approx(1200 * 0.9)


def test_snapshot_restore_round_trip():
    player = Player()
    player.update(50, PlayerIntent(move_x=1, aim_x=600, aim_y=200,
                                   force_dash_requested=True))
    clone = Player()
    clone.restore_snapshot(player.get_state_snapshot())
    assert clone.get_state_snapshot() == player.get_state_snapshot()
