import pytest

from ai.combat_memory import CombatMemory


def test_first_observation_has_no_velocity():
    memory = CombatMemory()
    memory.observe(100, 200, now_ms=0)
    assert (memory.velocity_x, memory.velocity_y) == (0.0, 0.0)
    assert memory.predict(0.5) == (100, 200)


def test_velocity_is_per_tick_delta():
    memory = CombatMemory()
    memory.observe(100, 200, 0)
    memory.observe(110, 195, 16)
    assert (memory.velocity_x, memory.velocity_y) == (10, -5)
    assert memory.predict(0.5) == pytest.approx((115.0, 192.5))


def test_ring_buffer_is_bounded():
    memory = CombatMemory(capacity=10)
    for i in range(25):
        memory.observe(i, i, i * 16)
    assert len(memory.observations) == 10
    assert memory.observations[0].x == 15


def test_success_rate_without_defences_is_zero():
    memory = CombatMemory()
    assert memory.defense_success_rate == 0.0
    memory.record_defense(True)
    memory.record_defense(True)
    memory.record_defense(False)
    assert memory.defense_success_rate == pytest.approx(2 / 3)


def test_snapshot_restore():
    memory = CombatMemory()
    memory.observe(1, 2, 0)
    memory.observe(4, 6, 16)
    clone = CombatMemory()
    clone.restore(memory.snapshot())
    assert clone.snapshot() == memory.snapshot()
