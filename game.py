# game.py - Word Catch Screen
"""
Tkinter canvas for the word catching game.
Draws the current GameSession, turns keys and clicks into lane changes,
and runs the menu, pause and game over overlays.
"""

import logging
import tkinter as tk

from PIL import Image, ImageTk

from config import WINDOW_WIDTH, WINDOW_HEIGHT, PLAYER_Y, MARKER_Y, asset_path, lane_x
from audio_manager import AudioManager
from engine import GameSession, Phase, SessionListener
from highscore import load_best_scores, save_best_score
from levels import LEVELS, LEVEL_ORDER, get_level

logger = logging.getLogger(__name__)

BG = "#0b1026"
ACCENT = "#00ffff"


class WordCatchGame(tk.Canvas, SessionListener):
    """Main game screen - a tk.Canvas that also listens to the session."""

    FRAME_MS = 16  # ~60 FPS redraw
    WORD_RADIUS = 36
    PLAYER_RADIUS = 26

    # Word disc colours: falling, caught target, caught distractor
    COLOR_FALLING = "#3b82f6"
    COLOR_GOOD = "#22c55e"
    COLOR_BAD = "#ef4444"

    def __init__(self, master: tk.Tk, reporter=None, **kwargs) -> None:
        """Initialize canvas, overlays and input bindings."""
        super().__init__(master, width=WINDOW_WIDTH, height=WINDOW_HEIGHT,
                         bg=BG, highlightthickness=0, **kwargs)
        self.pack(fill="both", expand=True)

        self.reporter = reporter
        self.session: GameSession | None = None
        self._menu_music_after = None  # Pending "back to menu music" after a round
        self.audio = AudioManager()
        self.best_scores = load_best_scores()

        # Canvas items for the playfield (created lazily, keyed by id)
        self.word_items: dict[int, tuple[int, int]] = {}  # word id -> (disc, label)
        self.marker_items: dict[int, int] = {}
        self.lane_items: list[int] = []
        self.catch_band_item: int | None = None
        self.player_item: int | None = None
        self.countdown_item: int | None = None

        # HUD (tkinter variables update the labels automatically)
        self.score_txt = tk.StringVar(value="SCORE: 0")
        self.time_txt = tk.StringVar(value="TIME: --")
        self.best_score_txt = tk.StringVar(value="BEST: 0")

        self._load_background()
        self._build_menu_overlay()
        self._build_pause_overlay()

        self.score_label = tk.Label(master, textvariable=self.score_txt,
                                    bg=BG, fg=ACCENT, font=("Arial", 14, "bold"))
        self.score_label.place(x=16, y=10)
        self.time_label = tk.Label(master, textvariable=self.time_txt,
                                   bg=BG, fg="#facc15", font=("Arial", 14, "bold"))
        self.time_label.place(relx=0.5, y=10, anchor="n")
        self.best_score_label = tk.Label(master, textvariable=self.best_score_txt,
                                         bg=BG, fg=ACCENT, font=("Arial", 14, "bold"))
        self.best_score_label.place(relx=1.0, x=-16, y=10, anchor="ne")

        # Input binding - keyboard
        for key in ("<KeyPress-Left>", "<KeyPress-Right>", "<KeyPress-a>", "<KeyPress-d>",
                    "<KeyPress-p>", "<KeyPress-P>", "<KeyPress-h>", "<KeyPress-H>",
                    "<KeyPress-Escape>"):
            master.bind(key, self._on_key_down)

        # Input binding - mouse
        self.bind("<ButtonPress-1>", self._on_mouse_down)

        self._on_level_changed()
        self.after(0, self._game_loop)
        self.audio.play_menu_music()

    # ------------------------------------------------------------------ #
    # BACKGROUND IMAGE
    # ------------------------------------------------------------------ #
    def _load_background(self) -> None:
        """Load and display background image if available."""
        try:
            img = Image.open(asset_path("background.jpg"))
        except OSError as exc:
            logger.debug("No background image: %s", exc)
            self.bg_image = None  # Plain background
            return
        img = img.resize((WINDOW_WIDTH, WINDOW_HEIGHT), Image.LANCZOS)
        self.bg_image = ImageTk.PhotoImage(img)
        self.create_image(0, 0, image=self.bg_image, anchor="nw")

    # ------------------------------------------------------------------ #
    # MENU (home / level select / game over)
    # ------------------------------------------------------------------ #
    def _build_menu_overlay(self) -> None:
        self.menu_frame = tk.Frame(self.master, bg="#000000", bd=0, padx=20, pady=16)

        self.menu_title_label = tk.Label(self.menu_frame, text="WORD CATCH",
                                         fg=ACCENT, bg="#000000", font=("Arial", 24, "bold"))
        self.menu_title_label.pack(pady=(0, 6))

        # Final score, only filled in after a round
        self.result_txt = tk.StringVar(value="")
        tk.Label(self.menu_frame, textvariable=self.result_txt, fg="#ffffff", bg="#000000",
                 font=("Arial", 16, "bold")).pack(pady=(0, 6))

        # Level selection (radio buttons)
        level_frame = tk.Frame(self.menu_frame, bg="#000000")
        level_frame.pack(pady=(0, 8))
        self.level_var = tk.StringVar(value=LEVEL_ORDER[0])
        for level_id in LEVEL_ORDER:
            tk.Radiobutton(level_frame, text=LEVELS[level_id].title, variable=self.level_var,
                           value=level_id, indicatoron=False, width=11, fg="#000000",
                           bg="#555555", selectcolor=ACCENT, activebackground="#33ffff",
                           activeforeground="#000000", font=("Arial", 10, "bold"),
                           command=self._on_level_changed).pack(anchor="w", pady=1)

        # Instructions for the selected level
        self.rule_txt = tk.StringVar()
        tk.Label(self.menu_frame, textvariable=self.rule_txt, fg="#ffffff", bg="#000000",
                 font=("Arial", 11), justify="left", wraplength=360).pack(pady=(0, 6))

        self.menu_best_label = tk.Label(self.menu_frame, textvariable=self.best_score_txt,
                                        fg=ACCENT, bg="#000000", font=("Arial", 14, "bold"))
        self.menu_best_label.pack(pady=(0, 8))

        self.menu_button = tk.Button(self.menu_frame, text="START", font=("Arial", 14, "bold"),
                                     fg="#000000", bg=ACCENT, activebackground="#33ffff",
                                     activeforeground="#000000", relief="flat",
                                     padx=20, pady=5, command=self.on_menu_button_pressed)
        self.menu_button.pack(pady=(0, 8))

        # Only shown on the game over menu
        self.home_button = tk.Button(self.menu_frame, text="HOME", font=("Arial", 12, "bold"),
                                     fg="#000000", bg="tomato", activeforeground="#000000",
                                     relief="flat", padx=20, pady=3, command=self.go_home)

        self.sound_button = tk.Button(self.menu_frame, text="Sound: ON",
                                      font=("Arial", 10, "bold"), fg="#000000", bg=ACCENT,
                                      activebackground="#33ffff", activeforeground="#000000",
                                      relief="flat", padx=10, pady=3,
                                      command=self._on_toggle_sound_clicked)
        self.sound_button.pack(pady=(0, 5))

        tk.Label(self.menu_frame,
                 text="LEFT / RIGHT to change lane\nPress 'P' to pause, 'H' for home",
                 fg="#888888", bg="#000000", font=("Arial", 10, "italic")).pack(pady=(5, 0))

    def _on_level_changed(self) -> None:
        """Refresh instructions and best score for the selected level."""
        level = get_level(self.level_var.get())
        self.rule_txt.set(
            f"{level.title}: {level.rule}\n"
            f"Catch: {', '.join(level.targets[:6])}\n"
            f"Avoid: {', '.join(level.distractors[:6])}\n"
            f"+{level.catch_delta} for a correct word, -{level.miss_delta} for a wrong one"
        )
        self.best_score_txt.set(f"BEST: {self.best_scores.get(level.level_id, 0)}")

    def show_menu(self, title: str, button_text: str, result: str = "",
                  show_home: bool = False) -> None:
        self.menu_title_label.configure(text=title)
        self.menu_button.configure(text=button_text)
        self.result_txt.set(result)
        if show_home:
            self.home_button.pack(pady=(0, 8), before=self.sound_button)
        else:
            self.home_button.pack_forget()
        self.menu_frame.place(relx=0.5, rely=0.5, anchor="center")

    def hide_menu(self) -> None:
        self.menu_frame.place_forget()

    def _on_toggle_sound_clicked(self) -> None:
        enabled = self.audio.toggle_sound()
        self.sound_button.configure(text=f"Sound: {'ON' if enabled else 'OFF'}")
        if enabled:
            if self.session is not None and self.session.is_running:
                self.audio.play_game_music()
            else:
                self.audio.play_menu_music()

    # ------------------------------------------------------------------ #
    # PAUSE MENU
    # ------------------------------------------------------------------ #
    def _build_pause_overlay(self) -> None:
        self.pause_frame = tk.Frame(self.master, bg="#000000", bd=0, padx=24, pady=16)
        tk.Label(self.pause_frame, text="PAUSED", fg=ACCENT, bg="#000000",
                 font=("Arial", 24, "bold")).pack(pady=(0, 10))
        for text, color, command in (("RESUME", ACCENT, self.resume),
                                     ("HOME", "tomato", self.go_home)):
            tk.Button(self.pause_frame, text=text, font=("Arial", 14, "bold"), fg="#000000",
                      bg=color, activeforeground="#000000", relief="flat", width=10,
                      pady=5, command=command).pack(pady=4)

    def pause(self) -> None:
        if self.session is None or not self.session.pause():
            return
        self.audio.pause_game_music()
        self.pause_frame.place(relx=0.5, rely=0.5, anchor="center")

    def resume(self) -> None:
        if self.session is None or not self.session.resume():
            return
        self.pause_frame.place_forget()

    # ------------------------------------------------------------------ #
    # NAVIGATION
    # ------------------------------------------------------------------ #
    def on_menu_button_pressed(self) -> None:
        """START / PLAY AGAIN: run the selected level."""
        self._cancel_menu_music()
        level_id = self.level_var.get()
        session = self.session
        if (session is not None and session.phase is Phase.OVER
                and session.level.level_id == level_id):
            session.play_again()
        else:
            self._close_session()
            self.session = GameSession(get_level(level_id), scheduler=self,
                                       reporter=self.reporter, listener=self)
            self.session.start()

        self._clear_playfield()
        self.hide_menu()
        self.audio.play_sfx(self.audio.snd_begin)
        self.audio.stop_menu_music()
        self.audio.play_game_music()

    def go_home(self) -> None:
        """Leave the round and return to the level select menu."""
        self._cancel_menu_music()
        self._close_session()
        self._clear_playfield()
        self.pause_frame.place_forget()
        self.time_txt.set("TIME: --")
        self.show_menu("WORD CATCH", "START")
        self.audio.stop_game_music()
        self.audio.play_menu_music()

    def _close_session(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    # ------------------------------------------------------------------ #
    # SESSION LISTENER
    # ------------------------------------------------------------------ #
    def on_word_caught(self, word, delta: int) -> None:
        self.audio.play_sfx(self.audio.snd_correct if word.is_target else self.audio.snd_wrong)

    def on_countdown(self, value: int | None) -> None:
        if value is None:
            if self.countdown_item is not None:
                self.itemconfigure(self.countdown_item, state="hidden")
            self.audio.unpause_game_music()
            return

        if self.countdown_item is None:
            self.countdown_item = self.create_text(WINDOW_WIDTH / 2, WINDOW_HEIGHT / 2,
                                                   text="", fill="#ffffff",
                                                   font=("Arial", 72, "bold"))
        self.itemconfigure(self.countdown_item, text=str(value), state="normal")
        self.tag_raise(self.countdown_item)
        self.audio.play_sfx(self.audio.snd_countdown)

    def on_round_over(self, score: int) -> None:
        level_id = self.session.level.level_id
        if save_best_score(level_id, score):
            self.best_scores[level_id] = score
            self.best_score_txt.set(f"BEST: {score}")

        self.level_var.set(level_id)
        self.show_menu("TIME'S UP!", "PLAY AGAIN", f"Your score: {score}", show_home=True)
        self.audio.stop_game_music()
        self.audio.play_sfx(self.audio.snd_times_up)
        self._cancel_menu_music()
        self._menu_music_after = self.after(2000, self._on_menu_music_due)

    def _on_menu_music_due(self) -> None:
        """Back to menu music, unless a new round already started."""
        self._menu_music_after = None
        if self.session is None or self.session.phase is Phase.OVER:
            self.audio.play_menu_music()

    def _cancel_menu_music(self) -> None:
        if self._menu_music_after is not None:
            self.after_cancel(self._menu_music_after)
            self._menu_music_after = None

    # ------------------------------------------------------------------ #
    # INPUT
    # ------------------------------------------------------------------ #
    def _on_key_down(self, event) -> None:
        session = self.session
        if session is None:
            return
        key = event.keysym.lower()
        if key in ("left", "a"):
            session.move_left()
        elif key in ("right", "d"):
            session.move_right()
        elif key in ("p", "escape"):
            if session.phase is Phase.PAUSED:
                self.resume()
            else:
                self.pause()
        elif key == "h" and session.phase in (Phase.PAUSED, Phase.OVER):
            self.go_home()

    def _on_mouse_down(self, event) -> None:
        """Click the left or right half of the screen to change lane."""
        if self.session is None:
            return
        if event.x < WINDOW_WIDTH / 2:
            self.session.move_left()
        else:
            self.session.move_right()

    # ------------------------------------------------------------------ #
    # RENDERING
    # ------------------------------------------------------------------ #
    def _clear_playfield(self) -> None:
        for disc, label in self.word_items.values():
            self.delete(disc, label)
        self.word_items.clear()
        for item in self.marker_items.values():
            self.delete(item)
        self.marker_items.clear()
        for item in self.lane_items:
            self.delete(item)
        self.lane_items.clear()
        for item in (self.catch_band_item, self.player_item, self.countdown_item):
            if item is not None:
                self.delete(item)
        self.catch_band_item = self.player_item = self.countdown_item = None

    def _draw_static(self, session: GameSession) -> None:
        """Lane guides and catch band, drawn once per session."""
        level = session.level
        self.catch_band_item = self.create_rectangle(0, level.catch_line, WINDOW_WIDTH,
                                                     level.bottom_bound, fill="#1e293b",
                                                     outline="")
        for lane in range(level.lane_count):
            x = lane_x(lane, level.lane_count)
            self.lane_items.append(self.create_line(x, 60, x, WINDOW_HEIGHT,
                                                    fill="#334155", dash=(4, 6)))
        self.player_item = self.create_oval(0, 0, 0, 0, fill="#f59e0b", outline="#ffffff",
                                            width=2)

    def _draw_words(self, session: GameSession) -> None:
        lane_count = session.level.lane_count
        words = session.state.active_words
        r = self.WORD_RADIUS

        for word_id in [i for i in self.word_items if i not in words]:
            self.delete(*self.word_items.pop(word_id))

        for word in words.values():
            if word.id not in self.word_items:
                disc = self.create_oval(0, 0, 0, 0, outline="")
                label = self.create_text(0, 0, text=word.text, fill="#ffffff",
                                         font=("Arial", 16, "bold"))
                self.word_items[word.id] = (disc, label)
            disc, label = self.word_items[word.id]
            if word.consumed:
                color = self.COLOR_GOOD if word.is_target else self.COLOR_BAD
            else:
                color = self.COLOR_FALLING
            x = lane_x(word.lane, lane_count)
            self.coords(disc, x - r, word.y - r, x + r, word.y + r)
            self.itemconfigure(disc, fill=color)
            self.coords(label, x, word.y)
            self.tag_raise(disc)
            self.tag_raise(label)

    def _draw_markers(self, session: GameSession) -> None:
        markers = {m.id: m for m in session.state.markers}
        for marker_id in [i for i in self.marker_items if i not in markers]:
            self.delete(self.marker_items.pop(marker_id))
        for marker in markers.values():
            if marker.id in self.marker_items:
                continue
            x = lane_x(marker.lane, session.level.lane_count)
            self.marker_items[marker.id] = self.create_text(
                x, MARKER_Y, text=marker.text, font=("Arial", 22, "bold"),
                fill="lime" if marker.positive else "red")

    def _draw_player(self, session: GameSession) -> None:
        x = lane_x(session.state.player_lane, session.level.lane_count)
        r = self.PLAYER_RADIUS
        self.coords(self.player_item, x - r, PLAYER_Y - r, x + r, PLAYER_Y + r)
        self.tag_raise(self.player_item)

    def _game_loop(self) -> None:
        """Redraw from the session state; the session owns all game logic."""
        session = self.session
        if session is not None and session.phase is not Phase.CLOSED:
            if self.player_item is None:
                self._draw_static(session)
            self._draw_words(session)
            self._draw_markers(session)
            self._draw_player(session)
            if self.countdown_item is not None:
                self.tag_raise(self.countdown_item)
            self.score_txt.set(f"SCORE: {session.state.score}")
            self.time_txt.set(f"TIME: {session.state.seconds_remaining}s")

        self.after(self.FRAME_MS, self._game_loop)
