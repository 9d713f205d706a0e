import math

import pytest

from entities.body import CombatantBody, CombatantId
from settings import ARENA_MIN_X, ARENA_MAX_X, ARENA_MIN_Y, ARENA_MAX_Y


def make_body(**kw) -> CombatantBody:
    kw.setdefault("x", 400)
    kw.setdefault("y", 300)
    kw.setdefault("max_health", 100)
    return CombatantBody(**kw)


def test_ids_know_their_rival():
    assert CombatantId.PLAYER.other is CombatantId.OPPONENT
    assert CombatantId.OPPONENT.other is CombatantId.PLAYER


def test_integrate_applies_friction_then_moves():
    body = make_body()
    body.apply_force(100, 0)
    body.integrate(1000)
    assert body.vx == pytest.approx(85.0)
    assert body.x == pytest.approx(485.0)


def test_integrate_with_zero_delta_keeps_position():
    body = make_body()
    body.apply_force(500, 500)
    body.integrate(0)
    assert (body.x, body.y) == (400, 300)


@pytest.mark.parametrize("fx,fy", [(1e9, 1e9), (-1e9, -1e9), (1e9, -1e9)])
def test_position_stays_in_arena(fx, fy):
    body = make_body()
    body.apply_force(fx, fy)
    body.integrate(250)
    assert ARENA_MIN_X <= body.x <= ARENA_MAX_X
    assert ARENA_MIN_Y <= body.y <= ARENA_MAX_Y


def test_damage_gate_blocks_inside_cooldown():
    body = make_body()
    assert body.take_damage(10, now_ms=1000) == 10
    assert body.take_damage(10, now_ms=1050) == 0
    assert body.take_damage(10, now_ms=1100) == 0
    assert body.take_damage(10, now_ms=1101) == 10
    assert body.health == 80


def test_first_hit_at_time_zero_lands():
    body = make_body()
    assert body.can_take_damage(0)
    body.take_damage(5, 0)
    assert body.health == 95


@pytest.mark.parametrize("amounts", [
    [250],
    [-50],
    [30, -500],
    [float("nan"), 20],
])
def test_health_is_always_in_bounds(amounts):
    body = make_body()
    now = 0.0
    for amount in amounts:
        body.take_damage(amount, now)
        now += 1000
        assert 0.0 <= body.health <= body.max_health
        assert not math.isnan(body.health)


def test_death_and_flash():
    body = make_body()
    body.take_damage(150, 0)
    assert body.health == 0
    assert not body.is_alive()
    assert body.is_flashing
    body.update_flash(150)
    assert body.is_flashing
    body.update_flash(201)
    assert not body.is_flashing


def test_snapshot_restore():
    body = make_body()
    body.apply_force(10, -5)
    body.integrate(16)
    body.take_damage(7, 16)
    clone = make_body()
    clone.restore(body.snapshot())
    assert clone.snapshot() == body.snapshot()
