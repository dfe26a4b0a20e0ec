# main.py - Application Entry Point
"""
Main entry point for Word Catch.
Sets up logging and the score uploader, then opens the game window.
"""

import logging
import tkinter as tk  # GUI framework

import pygame  # Audio management

from config import WINDOW_WIDTH, WINDOW_HEIGHT, LOG_LEVEL, UPLOAD_RETRIES
from game import WordCatchGame
from highscore import FirestoreScoreStore
from reporter import ResultReporter


def build_reporter() -> ResultReporter | None:
    """Background uploader, or None when no remote store is configured."""
    store = FirestoreScoreStore.from_config()
    if store is None:
        return None
    return ResultReporter(store, retries=UPLOAD_RETRIES)


def main() -> None:
    """Create window, initialize game, and start event loop."""
    logging.basicConfig(level=LOG_LEVEL,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = tk.Tk()
    root.title("Word Catch")
    root.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
    root.resizable(False, False)
    root.configure(bg="black")

    reporter = build_reporter()
    game = WordCatchGame(root, reporter=reporter)
    game.show_menu("WORD CATCH", "START")

    def on_close():
        """Release audio and the upload worker before closing."""
        if reporter is not None:
            reporter.shutdown()
        pygame.mixer.quit()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    root.mainloop()


if __name__ == "__main__":
    main()
