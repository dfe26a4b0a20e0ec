# audio_manager.py - Audio Management System
"""
Manages all game audio using pygame.mixer.
Handles sound effects, background music, and volume control.
"""

import logging
import os

import pygame  # Audio library
from config import audio_path  # Helper function for audio file paths

logger = logging.getLogger(__name__)


class AudioManager:
    """Manages all game sounds and music via pygame.mixer."""

    def __init__(self) -> None:
        """Initialize audio system and load sound assets."""
        self.sound_enabled: bool = True  # Global sound on/off toggle

        # 44.1kHz, 16-bit, stereo, small buffer
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
        except pygame.error as exc:
            logger.info("Audio unavailable, playing silently: %s", exc)

        # Load all sound effects
        self.snd_begin = self._load_sound("begin.wav")  # Round start
        self.snd_menu = self._load_sound("menu.wav")  # Menu music loop
        self.snd_correct = self._load_sound("correct.wav")  # Target word caught
        self.snd_wrong = self._load_sound("wrong.wav")  # Distractor caught
        self.snd_countdown = self._load_sound("countdown.wav")  # 3-2-1 beep
        self.snd_times_up = self._load_sound("times_up.wav")  # Round over

        # Default game music
        self.music_file = audio_path("music1.wav")

    @staticmethod
    def mixer_ready() -> bool:
        return pygame.mixer.get_init() is not None

    def _load_sound(self, filename: str):
        """Load a sound file, return None if file missing or invalid."""
        path = audio_path(filename)
        if not os.path.exists(path) or not self.mixer_ready():
            return None
        try:
            return pygame.mixer.Sound(path)  # Load sound into memory
        except pygame.error as exc:
            logger.warning("Could not load %s: %s", filename, exc)
            return None

    # --------- Sound Effects --------- #
    def play_sfx(self, snd) -> None:
        """Play a sound effect if sound is enabled."""
        if not self.sound_enabled or snd is None:
            return
        snd.play()  # Non-blocking playback

    # --------- Menu Music --------- #
    def play_menu_music(self) -> None:
        """Play looping menu background music."""
        if not self.sound_enabled:
            return
        if self.snd_menu is not None:
            self.snd_menu.play(loops=-1)  # -1 = infinite loop

    def stop_menu_music(self) -> None:
        if self.snd_menu is not None:
            self.snd_menu.stop()

    # --------- Game Music --------- #
    def play_game_music(self) -> None:
        """Play background music for gameplay."""
        if not self.sound_enabled or not self.mixer_ready():
            return
        if os.path.exists(self.music_file):
            try:
                pygame.mixer.music.load(self.music_file)
                pygame.mixer.music.set_volume(0.7)  # 70% volume
                pygame.mixer.music.play(-1)  # Loop indefinitely
            except pygame.error as exc:
                logger.warning("Could not play %s: %s", self.music_file, exc)

    def pause_game_music(self) -> None:
        if self.mixer_ready():
            pygame.mixer.music.pause()

    def unpause_game_music(self) -> None:
        if self.sound_enabled and self.mixer_ready():
            pygame.mixer.music.unpause()

    def stop_game_music(self) -> None:
        if self.mixer_ready():
            pygame.mixer.music.stop()

    # --------- Global Sound Control --------- #
    def toggle_sound(self) -> bool:
        """
        Toggle sound on/off globally.

        Returns:
            bool: True if sound is enabled after toggle, False if disabled.
        """
        self.sound_enabled = not self.sound_enabled

        # If disabling sound, stop all audio
        if not self.sound_enabled:
            self.stop_menu_music()
            self.stop_game_music()

        return self.sound_enabled
