import random
from concurrent.futures import ThreadPoolExecutor

from engine import GameSession
from highscore import ScoreStoreError
from reporter import ResultReporter


class FlakyStore:
    """Fails the first ``failures`` uploads, then accepts."""

    def __init__(self, failures=0):
        self.failures = failures
        self.saved = []
        self.attempts = 0

    def save_score(self, score, level_id=None):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ScoreStoreError("network down")
        self.saved.append((score, level_id))


def test_successful_upload():
    store = FlakyStore()
    reporter = ResultReporter(store, retry_delay=0)
    assert reporter.report(15, "advanced").result(timeout=5) is True
    assert store.saved == [(15, "advanced")]
    reporter.shutdown()


def test_one_retry_recovers_from_a_single_failure(caplog):
    store = FlakyStore(failures=1)
    reporter = ResultReporter(store, retries=1, retry_delay=0)
    assert reporter.report(20, "expert").result(timeout=5) is True
    assert store.attempts == 2
    assert "attempt 1/2 failed" in caplog.text
    reporter.shutdown()


def test_gives_up_after_retries(caplog):
    store = FlakyStore(failures=5)
    reporter = ResultReporter(store, retries=1, retry_delay=0)
    assert reporter.report(20).result(timeout=5) is False
    assert store.attempts == 2
    assert store.saved == []
    assert "Giving up" in caplog.text
    reporter.shutdown()


def test_session_marks_result_reported(tiny_level, scheduler):
    executor = ThreadPoolExecutor(max_workers=1)
    store = FlakyStore()
    session = GameSession(tiny_level, scheduler,
                          reporter=ResultReporter(store, retry_delay=0, executor=executor),
                          rng=random.Random(3))
    session.start()
    session.state.score = 9
    session.end_round()
    session.end_round()
    executor.shutdown(wait=True)
    scheduler.advance(GameSession.REPORT_POLL_MS)

    assert store.saved == [(9, "test")]
    assert session.state.has_reported_result


def test_session_survives_failed_upload(tiny_level, scheduler):
    executor = ThreadPoolExecutor(max_workers=1)
    store = FlakyStore(failures=10)
    session = GameSession(tiny_level, scheduler,
                          reporter=ResultReporter(store, retries=1, retry_delay=0,
                                                  executor=executor))
    session.start()
    session.end_round()
    executor.shutdown(wait=True)
    scheduler.advance(GameSession.REPORT_POLL_MS)

    assert store.attempts == 2
    assert not session.state.has_reported_result
    assert session.play_again()
