from dataclasses import replace

import pytest

from config import CATCH_LINE_Y, BOTTOM_BOUND_Y
from levels import LEVELS, LEVEL_ORDER, LevelConfig, WordEntry, get_level


def test_four_levels_in_order():
    assert LEVEL_ORDER == ["beginner", "intermediate", "advanced", "expert"]


@pytest.mark.parametrize("level_id", LEVEL_ORDER)
def test_each_level_has_targets_and_distractors(level_id):
    level = get_level(level_id)
    assert level.targets and level.distractors
    assert len({w.text for w in level.words}) == len(level.words)
    assert level.lane_count == 3
    assert level.round_duration_sec == 60


def test_levels_get_harder():
    levels = [LEVELS[i] for i in LEVEL_ORDER]
    spawns = [lvl.spawn_interval_ms for lvl in levels]
    steps = [lvl.fall_step for lvl in levels]
    assert spawns == sorted(spawns, reverse=True)
    assert steps == sorted(steps)


def test_advanced_level_constants():
    level = get_level("advanced")
    assert (level.spawn_interval_ms, level.tick_interval_ms, level.fall_step) == (1000, 80, 14)
    assert (level.catch_delta, level.miss_delta) == (5, 5)
    assert WordEntry("cat", True) in level.words
    assert WordEntry("cake", False) in level.words
    assert (level.catch_line, level.bottom_bound) == (CATCH_LINE_Y, BOTTOM_BOUND_Y)


def test_unknown_level():
    with pytest.raises(KeyError, match="unknown level"):
        get_level("impossible")


@pytest.mark.parametrize("changes", [
    {"words": ()},
    {"lane_count": 0},
    {"tick_interval_ms": 0},
    {"fall_step": 0},
    {"miss_delta": -1},
    {"catch_line": 700, "bottom_bound": 650},
])
def test_invalid_config_rejected(changes):
    with pytest.raises(ValueError):
        replace(get_level("beginner"), **changes)


def test_config_is_frozen():
    level = get_level("beginner")
    assert isinstance(level, LevelConfig)
    with pytest.raises(AttributeError):
        level.catch_delta = 100
