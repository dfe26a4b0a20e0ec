# reporter.py - Result Reporter
"""
Uploads the final score of a round in the background.

Delivery runs on a single worker thread so the tk loop never waits on the
network. A failed upload is retried a bounded number of times, then logged
and dropped; the player is never told.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor

from highscore import ScoreStoreError

logger = logging.getLogger(__name__)


class ResultReporter:
    """Sends round results to a score store without blocking the caller."""

    def __init__(self, store, retries: int = 1, retry_delay: float = 0.5,
                 executor: ThreadPoolExecutor | None = None) -> None:
        self.store = store
        self.retries = max(0, retries)
        self.retry_delay = retry_delay
        self._executor = executor or ThreadPoolExecutor(max_workers=1,
                                                        thread_name_prefix="score-report")

    def report(self, score: int, level_id: str | None = None) -> Future:
        """
        Queue one upload and return right away.

        The returned future resolves to True once the store accepted the
        score, or False after the last attempt failed.
        """
        return self._executor.submit(self._deliver, score, level_id)

    def _deliver(self, score: int, level_id: str | None) -> bool:
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                self.store.save_score(score, level_id)
            except ScoreStoreError as exc:
                logger.warning("Score upload attempt %d/%d failed: %s", attempt, attempts, exc)
                if attempt < attempts:
                    time.sleep(self.retry_delay)
                continue
            logger.info("Saved score %d for %s", score, level_id or "game")
            return True

        logger.error("Giving up on score %d for %s after %d attempts",
                     score, level_id or "game", attempts)
        return False

    def shutdown(self) -> None:
        """Stop the worker; uploads not yet started are dropped."""
        self._executor.shutdown(wait=False, cancel_futures=True)
