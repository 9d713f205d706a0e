import random

import pytest

from ai.personality import Personality, PersonalityConfig


def test_roll_stays_inside_ranges():
    rng = random.Random(5)
    cfg = PersonalityConfig()
    for _ in range(50):
        p = Personality.roll(rng, cfg)
        assert cfg.aggression_range[0] <= p.aggression <= cfg.aggression_range[1]
        assert cfg.caution_range[0] <= p.caution <= cfg.caution_range[1]
        assert cfg.prediction_range[0] <= p.prediction <= cfg.prediction_range[1]
        assert cfg.adaptability_range[0] <= p.adaptability <= cfg.adaptability_range[1]


def test_same_seed_same_personality():
    assert Personality.roll(random.Random(9)) == Personality.roll(random.Random(9))


def test_low_own_health_turns_cautious():
    p = Personality(aggression=0.75, caution=0.5)
    p.adapt(own_health_frac=0.2, player_health_frac=1.0, success_rate=0.5)
    assert p.aggression == pytest.approx(0.65)
    assert p.caution == pytest.approx(0.6)


def test_low_player_health_turns_aggressive():
    p = Personality(aggression=0.75, caution=0.5)
    p.adapt(own_health_frac=1.0, player_health_frac=0.2, success_rate=0.5)
    assert p.aggression == pytest.approx(0.85)
    assert p.caution == pytest.approx(0.4)


def test_no_defences_recorded_drifts_caution_up():
    p = Personality(aggression=0.75, caution=0.5)
    p.adapt(own_health_frac=1.0, player_health_frac=1.0, success_rate=0.0)
    assert p.aggression == pytest.approx(0.75)
    assert p.caution == pytest.approx(0.55)


def test_good_defence_record_drifts_aggression_up():
    p = Personality(aggression=0.75, caution=0.5)
    p.adapt(own_health_frac=1.0, player_health_frac=1.0, success_rate=0.8)
    assert p.aggression == pytest.approx(0.8)


def test_traits_stay_in_unit_interval():
    p = Personality(aggression=0.95, caution=0.1)
    for _ in range(100):
        p.adapt(own_health_frac=1.0, player_health_frac=0.1, success_rate=1.0)
    assert p.aggression == pytest.approx(1.0)
    assert p.caution == pytest.approx(0.1)
    for _ in range(100):
        p.adapt(own_health_frac=0.1, player_health_frac=1.0, success_rate=0.0)
    assert p.aggression == pytest.approx(0.2)
    # cap 0.9, then the poor defence record adds 0.05
    assert p.caution == pytest.approx(0.95)
