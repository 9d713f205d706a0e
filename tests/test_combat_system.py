import math

import pytest

from entities import PlayerIntent
from entities.body import CombatantId
from systems.ability_system import AbilityKind
from systems.combat_system import Encounter, EventKind, clamp_delta


def hits_by(events, source):
    return [e for e in events if e.kind is EventKind.MELEE_HIT and e.source is source]


def pushes_by(events, source):
    return [e for e in events if e.kind is EventKind.FORCE_PUSH and e.source is source]


def blade_on_opponent(encounter: Encounter) -> PlayerIntent:
    """Park the opponent exactly on the player's blade tip."""
    encounter.opponent.body.x = 180.0
    encounter.opponent.body.y = 300.0
    return PlayerIntent.idle(aim=(180.0, 300.0))


@pytest.mark.parametrize("raw,expected", [
    (-5.0, 0.0),
    (float("nan"), 0.0),
    (0.0, 0.0),
    (16.0, 16.0),
    (1000.0, 1000.0),
    (1500.0, 1000.0),
    (float("inf"), 1000.0),
])
def test_clamp_delta(raw, expected):
    assert clamp_delta(raw) == expected


def test_tick_advances_simulated_clock_by_clamped_delta(encounter):
    encounter.tick(1000)
    encounter.tick(1500)
    encounter.tick(-20)
    encounter.tick(float("nan"))
    assert encounter.elapsed_ms == 2000.0
    assert encounter.now_ms() == 2000.0
    assert encounter.tick_count == 4


def test_slow_frame_advances_cooldowns_in_full(encounter):
    encounter.tick(16, PlayerIntent(aim_x=700, aim_y=300, force_push_requested=True))
    encounter.tick(1000, PlayerIntent.idle(aim=(700, 300)))
    assert encounter.elapsed_ms == 1016.0
    assert encounter.player.force_push.remaining_cooldown_ms == 9000.0


def test_injected_clock_is_used():
    encounter = Encounter(seed=1, clock=lambda: 5000.0)
    encounter.tick(16)
    assert encounter.now_ms() == 5000.0


def test_melee_hit_applies_once_for_zero_ms_ticks(encounter):
    intent = blade_on_opponent(encounter)
    first = encounter.tick(0, intent)
    second = encounter.tick(0, intent)

    landed = hits_by(first, CombatantId.PLAYER)
    assert len(landed) == 1
    assert hits_by(second, CombatantId.PLAYER) == []

    lost = 100.0 - encounter.opponent.body.health
    assert 5.0 <= lost <= 10.0
    assert landed[0].amount == pytest.approx(lost)
    assert landed[0].category == "opponent_hit"


def test_player_hit_knocks_opponent_back(encounter):
    intent = blade_on_opponent(encounter)
    encounter.tick(0, intent)
    # Attacker at x=100, defender at x=180: pushed along +x
    assert encounter.opponent.body.vx == pytest.approx(800.0)
    assert encounter.opponent.body.vy == pytest.approx(0.0)


def test_opponent_hit_does_not_knock_player_back(encounter):
    intent = blade_on_opponent(encounter)
    events = encounter.tick(0, intent)
    assert len(hits_by(events, CombatantId.OPPONENT)) == 1
    assert encounter.player.body.vx == 0.0
    assert encounter.player.body.health < 200.0


def test_damage_gate_reopens_after_cooldown(encounter):
    intent = blade_on_opponent(encounter)
    encounter.tick(0, intent)
    before = encounter.opponent.body.health
    # Blade pointed away while the gate is closing
    encounter.tick(101, PlayerIntent.idle(aim=(100.0, 0.0)))
    assert encounter.opponent.body.health == before
    encounter.opponent.body.x, encounter.opponent.body.y = 180.0, 300.0
    encounter.opponent.body.vx = encounter.opponent.body.vy = 0.0
    events = encounter.tick(0, intent)
    assert len(hits_by(events, CombatantId.PLAYER)) == 1
    assert encounter.opponent.body.health < before


def test_push_applies_every_tick_while_active(encounter):
    total = []
    total += encounter.tick(100, PlayerIntent(aim_x=700, aim_y=300,
                                              force_push_requested=True))
    assert encounter.opponent.body.vx == pytest.approx(150.0)
    for _ in range(6):
        total += encounter.tick(100, PlayerIntent.idle(aim=(700, 300)))
    assert len(pushes_by(total, CombatantId.PLAYER)) == 5


def test_ability_fired_event(encounter):
    events = encounter.tick(16, PlayerIntent(aim_x=700, aim_y=300,
                                             force_push_requested=True))
    fired = [e for e in events if e.kind is EventKind.ABILITY_FIRED]
    assert len(fired) == 1
    assert fired[0].ability is AbilityKind.FORCE_PUSH
    assert fired[0].category == "player_force_push"
    assert fired[0].position == (encounter.player.body.x, encounter.player.body.y)


def test_view_reports_cooldowns(encounter):
    encounter.tick(16, PlayerIntent(aim_x=700, aim_y=300,
                                    force_push_requested=True))
    view = encounter.view()
    push = view.player.abilities[AbilityKind.FORCE_PUSH]
    assert push.is_active
    assert push.seconds_until_ready == 10
    assert view.player.abilities[AbilityKind.FORCE_DASH].seconds_until_ready == 0
    assert list(view.opponent.abilities) == [AbilityKind.FORCE_PUSH]
    assert view.winner is None
    assert not view.match_over


def test_match_ends_when_opponent_dies(encounter):
    intent = blade_on_opponent(encounter)
    encounter.opponent.body.health = 1.0
    encounter.tick(0, intent)
    assert encounter.is_match_over()
    assert encounter.winner() == "player"
    # Ticking afterwards is harmless
    encounter.tick(16, intent)
    assert encounter.winner() == "player"
    assert not encounter.opponent.body.is_alive()


def test_double_knockout_is_a_draw(encounter):
    encounter.player.body.health = 0.0
    encounter.opponent.body.health = 0.0
    encounter.tick(16)
    assert encounter.winner() == "draw"


def test_idle_ticks_never_produce_nan(encounter):
    for _ in range(100):
        encounter.tick(0)
        encounter.tick(16)
    for body in (encounter.player.body, encounter.opponent.body):
        assert all(math.isfinite(v) for v in (body.x, body.y, body.vx, body.vy))
