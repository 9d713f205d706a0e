import dataclasses

import pytest

from settings import SCREEN_WIDTH, SCREEN_HEIGHT, STAR_COUNT, GOLD, WHITE
from systems.renderer import end_message, health_ring_color, star_field


@pytest.mark.parametrize("health,expected", [
    (100, (0, 255, 0)),
    (50, (255, 255, 0)),
    (0, (255, 0, 0)),
    (-10, (255, 0, 0)),
])
def test_health_ring_slides_green_to_red(health, expected):
    assert health_ring_color(health, 100) == expected


def test_stars_stay_put_but_twinkle():
    early, late = star_field(0.0), star_field(1500.0)
    assert len(early) == STAR_COUNT
    assert [(x, y) for x, y, _ in early] == [(x, y) for x, y, _ in late]
    assert all(0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT for x, y, _ in early)
    assert all(0.5 <= size <= 1.5 for _, _, size in early + late)
    assert [s for *_, s in early] != [s for *_, s in late]


@pytest.mark.parametrize("winner,expected", [
    ("player", ("Victory!", GOLD)),
    ("opponent", ("Defeated", WHITE)),
    ("draw", ("Draw", WHITE)),
])
def test_end_message_follows_winner(encounter, winner, expected):
    view = dataclasses.replace(encounter.view(), match_over=True, winner=winner)
    assert end_message(view) == expected
