# engine.py - Falling-Word Game Session
"""
One GameSession plays one level: it spawns words, moves them down the lanes,
scores the ones the player catches and counts the round down.

The session never talks to tkinter directly. It schedules its periodic
processes through a ``scheduler`` object exposing ``after(ms, fn)`` and
``after_cancel(handle)`` - a tk widget in the game, a fake clock in tests.
All callbacks run on that single loop, one at a time.
"""

import itertools
import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from levels import LevelConfig

logger = logging.getLogger(__name__)


class Phase(Enum):
    READY = "ready"  # Instructions shown, nothing ticking yet
    RUNNING = "running"
    PAUSED = "paused"
    RESUMING = "resuming"  # 3-2-1 countdown before play continues
    OVER = "over"
    CLOSED = "closed"  # Player went Home


@dataclass
class FallingWord:
    id: int
    text: str
    is_target: bool
    lane: int
    y: float = 0.0
    consumed: bool = False


@dataclass
class ScoreMarker:
    """Transient "+5" / "-5" shown where a word was caught."""

    id: int
    text: str
    positive: bool
    lane: int


@dataclass
class RoundState:
    score: int = 0
    seconds_remaining: int = 0
    player_lane: int = 0
    active_words: dict[int, FallingWord] = field(default_factory=dict)
    used_word_indices: set[int] = field(default_factory=set)
    markers: list[ScoreMarker] = field(default_factory=list)
    countdown: int | None = None
    is_paused: bool = False
    is_over: bool = False
    has_reported_result: bool = False


class SessionListener:
    """Hooks the UI can override. All of them are optional."""

    def on_word_spawned(self, word: FallingWord) -> None:
        pass

    def on_word_caught(self, word: FallingWord, delta: int) -> None:
        pass

    def on_countdown(self, value: int | None) -> None:
        pass

    def on_round_over(self, score: int) -> None:
        pass


class GameSession:
    """Parameterized game loop shared by every level."""

    TIMER_INTERVAL_MS = 1000
    COUNTDOWN_FROM = 3
    COUNTDOWN_INTERVAL_MS = 1000
    REMOVAL_DELAY_MS = 300  # Caught words linger briefly before vanishing
    MARKER_LIFETIME_MS = 600
    REPORT_POLL_MS = 100  # How often the loop checks on a pending upload

    def __init__(self, level: LevelConfig, scheduler, reporter=None,
                 listener: SessionListener | None = None,
                 rng: random.Random | None = None) -> None:
        self.level = level
        self.scheduler = scheduler
        self.reporter = reporter
        self.listener = listener or SessionListener()
        self.rng = rng or random.Random()

        # Ids keep counting across Play Again so none is ever reused
        self._word_ids = itertools.count(1)
        self._marker_ids = itertools.count(1)

        self._handles: dict[str, object] = {}  # Periodic processes by name
        self._pending: set = set()  # One-shot removals and marker expiries
        self._report_future = None
        self._report_polls: set = set()  # Upload watchers, kept across Play Again

        self.phase = Phase.READY
        self.state = self._fresh_state()

    def _fresh_state(self) -> RoundState:
        return RoundState(seconds_remaining=self.level.round_duration_sec,
                          player_lane=self.level.lane_count // 2)

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    # ------------------------------------------------------------------ #
    # LIFECYCLE
    # ------------------------------------------------------------------ #
    def start(self) -> bool:
        """Leave the instructions screen and start the clock."""
        if self.phase is not Phase.READY:
            return False
        self.phase = Phase.RUNNING
        logger.info("Round started on %s (%ds)", self.level.level_id,
                    self.state.seconds_remaining)
        self._start_processes()
        return True

    def play_again(self) -> bool:
        """Start a fresh round after the previous one ended."""
        if self.phase is not Phase.OVER:
            return False
        self._cancel_all()
        # An upload still in flight keeps going for the round it belongs to
        self._report_future = None
        self.state = self._fresh_state()
        self.phase = Phase.RUNNING
        logger.info("Round restarted on %s", self.level.level_id)
        self._start_processes()
        return True

    def close(self) -> None:
        """Leave the session for good (Home)."""
        self._cancel_all()
        # A queued upload still runs; only the loop stops watching it
        for handle in self._report_polls:
            self.scheduler.after_cancel(handle)
        self._report_polls.clear()
        self.phase = Phase.CLOSED

    # ------------------------------------------------------------------ #
    # PAUSE / RESUME
    # ------------------------------------------------------------------ #
    def pause(self) -> bool:
        if self.phase is not Phase.RUNNING:
            return False
        self.state.is_paused = True
        self.phase = Phase.PAUSED
        self._cancel_processes()
        return True

    def resume(self) -> bool:
        """Start the 3-2-1 countdown; play continues when it reaches zero."""
        if self.phase is not Phase.PAUSED:
            return False
        self.phase = Phase.RESUMING
        self.state.countdown = self.COUNTDOWN_FROM
        self.listener.on_countdown(self.state.countdown)
        self._schedule("countdown", self.COUNTDOWN_INTERVAL_MS, self._countdown_tick)
        return True

    def _countdown_tick(self) -> None:
        self._handles.pop("countdown", None)
        if self.phase is not Phase.RESUMING:
            return
        self.state.countdown -= 1
        if self.state.countdown > 0:
            self.listener.on_countdown(self.state.countdown)
            self._schedule("countdown", self.COUNTDOWN_INTERVAL_MS, self._countdown_tick)
            return

        self.state.countdown = None
        self.state.is_paused = False
        self.phase = Phase.RUNNING
        self.listener.on_countdown(None)
        self._start_processes()

    # ------------------------------------------------------------------ #
    # PLAYER INPUT
    # ------------------------------------------------------------------ #
    def set_lane(self, lane: int) -> int:
        """Move the player, clamped to the lane range. Returns the lane."""
        if self.phase is not Phase.RUNNING:
            return self.state.player_lane
        lane = max(0, min(self.level.lane_count - 1, lane))
        if lane != self.state.player_lane:
            self.state.player_lane = lane
            self.evaluate_collisions()
        return self.state.player_lane

    def move_left(self) -> int:
        return self.set_lane(self.state.player_lane - 1)

    def move_right(self) -> int:
        return self.set_lane(self.state.player_lane + 1)

    # ------------------------------------------------------------------ #
    # SPAWNER
    # ------------------------------------------------------------------ #
    def _spawn_tick(self) -> None:
        self._handles.pop("spawn", None)
        if self.state.is_paused or self.state.is_over:
            return
        self.spawn_word()
        self._schedule("spawn", self.level.spawn_interval_ms, self._spawn_tick)

    def spawn_word(self, index: int | None = None, lane: int | None = None) -> FallingWord | None:
        """
        Drop one word at the top of a lane.

        Picks an unused catalog entry at random unless ``index`` is given.
        Once every entry has been used the pool is recycled and this tick
        spawns nothing.
        """
        state = self.state
        if state.is_paused or state.is_over:
            return None

        catalog = self.level.words
        if index is None:
            available = [i for i in range(len(catalog)) if i not in state.used_word_indices]
            if not available:
                state.used_word_indices.clear()
                logger.debug("Word pool exhausted on %s, recycling", self.level.level_id)
                return None
            index = self.rng.choice(available)
        if lane is None:
            lane = self.rng.randrange(self.level.lane_count)

        entry = catalog[index]
        state.used_word_indices.add(index)
        word = FallingWord(id=next(self._word_ids), text=entry.text,
                           is_target=entry.is_target, lane=lane)
        state.active_words[word.id] = word
        logger.debug("Spawned %r in lane %d", word.text, lane)
        self.listener.on_word_spawned(word)
        return word

    # ------------------------------------------------------------------ #
    # MOVER
    # ------------------------------------------------------------------ #
    def _move_tick(self) -> None:
        self._handles.pop("move", None)
        if self.state.is_paused or self.state.is_over:
            return
        self.advance_words()
        self._schedule("move", self.level.tick_interval_ms, self._move_tick)

    def advance_words(self) -> None:
        """Move every word one step down, drop the missed ones, then check catches."""
        state = self.state
        if state.is_paused or state.is_over:
            return
        for word in state.active_words.values():
            word.y += self.level.fall_step

        missed = [w.id for w in state.active_words.values() if w.y >= self.level.bottom_bound]
        for word_id in missed:
            word = state.active_words.pop(word_id)
            if not word.consumed:
                logger.debug("Missed %r", word.text)

        self.evaluate_collisions()

    # ------------------------------------------------------------------ #
    # COLLISION EVALUATOR
    # ------------------------------------------------------------------ #
    def evaluate_collisions(self) -> list[FallingWord]:
        """
        Score every unconsumed word in the player's lane inside the catch band.

        Several words can be caught in the same pass; each is scored on its own.
        Returns the words caught by this pass.
        """
        state = self.state
        if state.is_paused or state.is_over:
            return []

        caught = []
        for word in list(state.active_words.values()):
            if word.consumed or word.lane != state.player_lane:
                continue
            if not self.level.catch_line < word.y < self.level.bottom_bound:
                continue

            word.consumed = True
            if word.is_target:
                delta = self.level.catch_delta
                state.score += delta
                self._add_marker(f"+{delta}", True, word.lane)
            else:
                delta = -self.level.miss_delta
                state.score = max(0, state.score + delta)  # Never below zero
                self._add_marker(f"-{self.level.miss_delta}", False, word.lane)

            self._schedule_once(self.REMOVAL_DELAY_MS,
                                lambda word_id=word.id: self._remove_word(word_id))
            self.listener.on_word_caught(word, delta)
            caught.append(word)
        return caught

    def _remove_word(self, word_id: int) -> None:
        self.state.active_words.pop(word_id, None)  # May have fallen off already

    def _add_marker(self, text: str, positive: bool, lane: int) -> None:
        marker = ScoreMarker(id=next(self._marker_ids), text=text, positive=positive, lane=lane)
        self.state.markers.append(marker)
        self._schedule_once(self.MARKER_LIFETIME_MS,
                            lambda m=marker: self._remove_marker(m))

    def _remove_marker(self, marker: ScoreMarker) -> None:
        if marker in self.state.markers:
            self.state.markers.remove(marker)

    # ------------------------------------------------------------------ #
    # ROUND TIMER
    # ------------------------------------------------------------------ #
    def _timer_tick(self) -> None:
        self._handles.pop("timer", None)
        state = self.state
        if state.is_paused or state.is_over:
            return
        if state.seconds_remaining > 0:
            state.seconds_remaining -= 1
        if state.seconds_remaining <= 0:
            self.end_round()
            return
        self._schedule("timer", self.TIMER_INTERVAL_MS, self._timer_tick)

    def end_round(self) -> None:
        """Freeze the round and report the result. Safe to call repeatedly."""
        state = self.state
        if not state.is_over:
            state.is_over = True
            self.phase = Phase.OVER
            self._cancel_processes()
            logger.info("Round over on %s, score %d", self.level.level_id, state.score)
            self.listener.on_round_over(state.score)
        self._report_result()

    # ------------------------------------------------------------------ #
    # RESULT REPORTER HAND-OFF
    # ------------------------------------------------------------------ #
    def _report_result(self) -> None:
        state = self.state
        if state.has_reported_result or self._report_future is not None:
            return
        if self.reporter is None:
            logger.debug("No score store configured, result kept local")
            return
        future = self.reporter.report(state.score, self.level.level_id)
        self._report_future = future
        self._watch_report(state, future)

    def _watch_report(self, state: RoundState, future) -> None:
        """Check the upload from the loop so round state is only touched here."""
        if future.done():
            self._on_report_done(state, future)
            return
        handle = None

        def poll():
            self._report_polls.discard(handle)
            self._watch_report(state, future)

        handle = self.scheduler.after(self.REPORT_POLL_MS, poll)
        self._report_polls.add(handle)

    def _on_report_done(self, state: RoundState, future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Score report crashed: %s", error)
            return
        if future.result():
            state.has_reported_result = True

    # ------------------------------------------------------------------ #
    # TIMER HANDLES
    # ------------------------------------------------------------------ #
    def _schedule(self, name: str, delay_ms: int, callback) -> None:
        self._handles[name] = self.scheduler.after(delay_ms, callback)

    def _schedule_once(self, delay_ms: int, callback) -> None:
        handle = None

        def fire():
            self._pending.discard(handle)
            callback()

        handle = self.scheduler.after(delay_ms, fire)
        self._pending.add(handle)

    def _start_processes(self) -> None:
        self._schedule("spawn", self.level.spawn_interval_ms, self._spawn_tick)
        self._schedule("move", self.level.tick_interval_ms, self._move_tick)
        self._schedule("timer", self.TIMER_INTERVAL_MS, self._timer_tick)

    def _cancel_processes(self) -> None:
        for handle in self._handles.values():
            self.scheduler.after_cancel(handle)
        self._handles.clear()

    def _cancel_all(self) -> None:
        self._cancel_processes()
        for handle in self._pending:
            self.scheduler.after_cancel(handle)
        self._pending.clear()
