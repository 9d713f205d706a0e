import json

from ai.simulation_runner import ScriptedPlayer
from systems.combat_system import Encounter


def run_ticks(encounter: Encounter, n: int, delta_ms: float = 1000.0 / 60):
    policy = ScriptedPlayer()
    states = []
    for _ in range(n):
        encounter.tick(delta_ms, policy.intent(encounter.view()))
        states.append(encounter.get_state_snapshot())
    return states


def test_snapshot_is_plain_json():
    encounter = Encounter(seed=11)
    run_ticks(encounter, 30)
    data = encounter.get_state_snapshot()
    assert json.loads(json.dumps(data)) == data


def test_restored_encounter_replays_identically():
    original = Encounter(seed=11)
    run_ticks(original, 120)
    saved = json.loads(json.dumps(original.get_state_snapshot()))

    expected = run_ticks(original, 300)

    replay = Encounter(seed=999)
    replay.restore_snapshot(saved)
    assert replay.get_state_snapshot() == saved
    assert run_ticks(replay, 300) == expected


def test_same_seed_same_match():
    a = run_ticks(Encounter(seed=4), 200)
    b = run_ticks(Encounter(seed=4), 200)
    assert a == b
