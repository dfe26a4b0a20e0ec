# config.py
import os

from dotenv import load_dotenv

# Base folders
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
AUDIO_DIR = os.path.join(BASE_DIR, "audio")

# Local overrides (.env next to this file, then the process environment)
load_dotenv(os.path.join(BASE_DIR, ".env"))

BEST_SCORES_FILE = os.getenv("WORDCATCH_BEST_SCORES_FILE",
                             os.path.join(BASE_DIR, "best_scores.json"))

# Dimensions of the window (portrait, like a phone)
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 800

# Play area geometry, in canvas pixels from the top
CATCH_LINE_Y = WINDOW_HEIGHT - 250  # Words below this line can be caught
BOTTOM_BOUND_Y = WINDOW_HEIGHT - 150  # Words at or past this line are missed
PLAYER_Y = WINDOW_HEIGHT - 120
MARKER_Y = WINDOW_HEIGHT - 220  # Where "+5" / "-5" markers appear
LANE_MARGIN = 0.2  # Outer lanes sit 20% in from each edge

# Remote score store (Firestore REST)
FIREBASE_PROJECT_ID = os.getenv("WORDCATCH_FIREBASE_PROJECT_ID", "")
FIREBASE_API_KEY = os.getenv("WORDCATCH_FIREBASE_API_KEY", "")
SCORE_COLLECTION = os.getenv("WORDCATCH_SCORE_COLLECTION", "obstacle_game")
UPLOAD_TIMEOUT = float(os.getenv("WORDCATCH_UPLOAD_TIMEOUT", "5"))
UPLOAD_RETRIES = int(os.getenv("WORDCATCH_UPLOAD_RETRIES", "1"))

LOG_LEVEL = os.getenv("WORDCATCH_LOG_LEVEL", "INFO").upper()


def asset_path(name: str) -> str:
    """path to an image, ex: background.jpg."""
    return os.path.join(BASE_DIR, name)


def audio_path(name: str) -> str:
    """path to the audio/."""
    return os.path.join(AUDIO_DIR, name)


def lane_x(lane: int, lane_count: int) -> float:
    """Horizontal centre of a lane on the canvas."""
    if lane_count <= 1:
        return WINDOW_WIDTH / 2
    usable = WINDOW_WIDTH * (1 - 2 * LANE_MARGIN)
    return WINDOW_WIDTH * LANE_MARGIN + usable * lane / (lane_count - 1)
