from systems.ability_system import AbilityKind, AbilityState, create_ability


def make_push() -> AbilityState:
    return create_ability(AbilityKind.FORCE_PUSH)


def test_fresh_ability_is_ready():
    push = make_push()
    assert push.can_use()
    assert not push.is_active
    assert push.seconds_until_ready == 0
    assert push.cooldown_fraction == 0.0


def test_activate_starts_cooldown_and_active_window():
    push = make_push()
    assert push.activate()
    assert push.is_active
    assert push.remaining_cooldown_ms == push.cooldown_ms == 10000.0
    assert not push.can_use()
    assert push.seconds_until_ready == 10


def test_activate_while_cooling_down_is_a_no_op():
    push = make_push()
    push.activate()
    push.tick(100)
    remaining = push.remaining_cooldown_ms
    assert not push.activate()
    assert push.remaining_cooldown_ms == remaining


def test_active_window_lasts_half_a_second():
    push = make_push()
    push.activate()
    for _ in range(4):
        push.tick(100)
        assert push.is_active
    push.tick(100)
    assert not push.is_active
    assert push.active_elapsed_ms == 0.0


def test_ready_again_after_full_cooldown():
    dash = create_ability(AbilityKind.FORCE_DASH)
    dash.activate()
    dash.tick(7999)
    assert not dash.can_use()
    assert dash.seconds_until_ready == 1
    dash.tick(1)
    assert dash.can_use()


def test_zero_delta_changes_nothing():
    push = make_push()
    push.activate()
    push.tick(0)
    assert push.remaining_cooldown_ms == 10000.0
    assert push.is_active


def test_snapshot_restore():
    push = make_push()
    push.activate()
    push.tick(250)
    other = make_push()
    other.restore(push.snapshot())
    assert other.snapshot() == push.snapshot()
