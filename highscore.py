# highscore.py - Score Persistence Module
"""
Keeps the best score of each level in a local JSON file and uploads
finished rounds to a Firestore collection over its REST API.
"""

import json
import logging
from datetime import datetime, timezone

import requests

from config import (BEST_SCORES_FILE, FIREBASE_API_KEY, FIREBASE_PROJECT_ID,
                    SCORE_COLLECTION, UPLOAD_TIMEOUT)

logger = logging.getLogger(__name__)

FIRESTORE_URL = "https://firestore.googleapis.com/v1/projects/{project}/databases/(default)/documents/{collection}"


class ScoreStoreError(Exception):
    """The remote store did not accept a score."""


# --------- Local best scores --------- #
def load_best_scores(path: str = BEST_SCORES_FILE) -> dict[str, int]:
    """
    Load the best score of every level.
    Returns:
        dict: level id -> best score, empty if the file is missing or corrupted.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable best score file %s: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring best score file %s: not an object", path)
        return {}
    scores = {}
    for level_id, value in data.items():
        try:
            scores[str(level_id)] = max(0, int(value))  # Ensure non-negative score
        except (TypeError, ValueError):
            continue
    return scores


def save_best_score(level_id: str, score: int, path: str = BEST_SCORES_FILE) -> bool:
    """
    Record a score if it beats the level's best.
    Returns:
        bool: True if it was a new best (even if writing the file failed).
    """
    scores = load_best_scores(path)
    if score <= scores.get(level_id, 0):
        return False

    scores[level_id] = int(score)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(scores, f, indent=2, sort_keys=True)
    except OSError as exc:
        logger.warning("Could not write best scores to %s: %s", path, exc)
    return True


# --------- Remote store --------- #
class FirestoreScoreStore:
    """Writes one timestamped document per finished round."""

    def __init__(self, project_id: str, api_key: str = "",
                 collection: str = "obstacle_game", timeout: float = 5.0,
                 session: requests.Session | None = None) -> None:
        self.url = FIRESTORE_URL.format(project=project_id, collection=collection)
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls):
        """Build a store from the environment, or None when uploads are off."""
        if not FIREBASE_PROJECT_ID:
            logger.info("No Firestore project configured, scores stay local")
            return None
        return cls(FIREBASE_PROJECT_ID, FIREBASE_API_KEY,
                   collection=SCORE_COLLECTION, timeout=UPLOAD_TIMEOUT)

    def build_document(self, score: int, level_id: str | None = None) -> dict:
        fields = {
            "score": {"integerValue": str(int(score))},
            "timestamp": {"timestampValue": datetime.now(timezone.utc).isoformat()},
        }
        if level_id is not None:
            fields["level"] = {"stringValue": level_id}
        return {"fields": fields}

    def save_score(self, score: int, level_id: str | None = None) -> dict:
        """POST the score; raise ScoreStoreError on any failure."""
        params = {"key": self.api_key} if self.api_key else None
        try:
            r = self.session.post(self.url, params=params,
                                  json=self.build_document(score, level_id),
                                  timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except requests.RequestException as exc:
            raise ScoreStoreError(f"could not save score {score}: {exc}") from exc
