# levels.py - Level Catalog
"""
Word catalogs and tuning constants for each difficulty level.
Every level runs the same engine; only the values here differ.
"""

from dataclasses import dataclass

from config import CATCH_LINE_Y, BOTTOM_BOUND_Y


@dataclass(frozen=True)
class WordEntry:
    """One catalog word. Catching a target rewards, anything else penalizes."""

    text: str
    is_target: bool


@dataclass(frozen=True)
class LevelConfig:
    """Everything the engine needs to know about one level."""

    level_id: str
    title: str
    rule: str  # Phonics rule shown in the instructions
    words: tuple[WordEntry, ...]
    spawn_interval_ms: int
    tick_interval_ms: int
    fall_step: float  # Pixels per move tick
    catch_delta: int
    miss_delta: int
    round_duration_sec: int = 60
    lane_count: int = 3
    catch_line: float = CATCH_LINE_Y
    bottom_bound: float = BOTTOM_BOUND_Y

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError(f"level {self.level_id!r} has an empty word catalog")
        if self.lane_count < 1:
            raise ValueError(f"level {self.level_id!r} needs at least one lane")
        if self.spawn_interval_ms <= 0 or self.tick_interval_ms <= 0:
            raise ValueError(f"level {self.level_id!r} intervals must be positive")
        if self.fall_step <= 0:
            raise ValueError(f"level {self.level_id!r} fall step must be positive")
        if self.catch_delta < 0 or self.miss_delta < 0:
            raise ValueError(f"level {self.level_id!r} score deltas must not be negative")
        if self.round_duration_sec < 0:
            raise ValueError(f"level {self.level_id!r} round duration must not be negative")
        if self.catch_line >= self.bottom_bound:
            raise ValueError(f"level {self.level_id!r} catch line must sit above the bottom bound")

    @property
    def targets(self) -> list[str]:
        return [w.text for w in self.words if w.is_target]

    @property
    def distractors(self) -> list[str]:
        return [w.text for w in self.words if not w.is_target]


def _catalog(targets: str, distractors: str) -> tuple[WordEntry, ...]:
    """Build a catalog from two space-separated word lists."""
    return (tuple(WordEntry(w, True) for w in targets.split())
            + tuple(WordEntry(w, False) for w in distractors.split()))


LEVELS: dict[str, LevelConfig] = {
    "beginner": LevelConfig(
        level_id="beginner",
        title="Beginner",
        rule="Short A vowel sound",
        words=_catalog("cat bat hat map fan bag jam pan",
                       "dog sun pen pig cup bed"),
        spawn_interval_ms=2000,
        tick_interval_ms=100,
        fall_step=8,
        catch_delta=2,
        miss_delta=1,
    ),
    "intermediate": LevelConfig(
        level_id="intermediate",
        title="Intermediate",
        rule="Short A and I vowel sounds",
        words=_catalog("cat map fan bag sit pig fin lid",
                       "dog sun bed cake kite rope"),
        spawn_interval_ms=1500,
        tick_interval_ms=90,
        fall_step=10,
        catch_delta=3,
        miss_delta=2,
    ),
    "advanced": LevelConfig(
        level_id="advanced",
        title="Advanced",
        rule="Short A, I, U vowel sounds",
        words=_catalog("cat bat hat rat sit hit bit fit cup bus mug rug",
                       "cake kite rope cube team bed dog pen hope mule"),
        spawn_interval_ms=1000,
        tick_interval_ms=80,
        fall_step=14,
        catch_delta=5,
        miss_delta=5,
    ),
    "expert": LevelConfig(
        level_id="expert",
        title="Expert",
        rule="Long vowel sounds (silent e)",
        words=_catalog("cake kite rope cube bike lake hope mule time home game tune",
                       "cat sit hop cut bed pin tub map"),
        spawn_interval_ms=800,
        tick_interval_ms=70,
        fall_step=16,
        catch_delta=8,
        miss_delta=8,
    ),
}

LEVEL_ORDER = list(LEVELS)


def get_level(level_id: str) -> LevelConfig:
    """Look up a level by id."""
    try:
        return LEVELS[level_id]
    except KeyError:
        raise KeyError(f"unknown level {level_id!r}, expected one of {LEVEL_ORDER}") from None
