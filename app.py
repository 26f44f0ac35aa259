"""Gradio wrapper to run Balloon Pop inside a browser tab or Hugging Face Space."""

from __future__ import annotations

import logging
import os
import threading
from typing import Optional, Tuple

# Ensure pygame can initialize without a physical display/audio device.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import gradio as gr
import numpy as np
import pygame

import game as core
from highscore import HighScoreStore
from play import LOG_LEVEL, PygamePresenter, action_table

HEADLESS_FPS = 30

logger = logging.getLogger(__name__)


class GameSession:
    """Continuously runs the balloon simulation and exposes helper controls."""

    def __init__(self) -> None:
        pygame.init()
        self.surface = pygame.Surface((core.WIDTH, core.HEIGHT))
        self.clock = pygame.time.Clock()
        self.presenter = PygamePresenter(self.surface)
        self.game = core.BalloonPopGame(presenter=self.presenter, store=HighScoreStore())
        self.actions = action_table(self.game)
        self.lock = threading.Lock()
        self.running = True
        self.last_frame: Optional[np.ndarray] = None
        self.last_status: str = "Booting..."
        self._loop_thread = threading.Thread(target=self._loop, daemon=True)
        self._loop_thread.start()

    def _loop(self) -> None:
        while self.running:
            dt = self.clock.tick(HEADLESS_FPS) / 1000.0
            with self.lock:
                self.game.tick(dt)
                self.last_frame, self.last_status = self._snapshot_locked()

    def _snapshot_locked(self) -> Tuple[np.ndarray, str]:
        frame = pygame.surfarray.array3d(self.surface)
        frame = np.transpose(frame, (1, 0, 2))
        return frame, self._status_text()

    def _status_text(self) -> str:
        state = self.game.state
        cfg = state.config
        combo = f" • {state.current_combo}x combo" if state.current_combo >= 2 else ""
        return (
            f"Level {state.level} ({cfg.name}) • Popped {state.level_popped}/{cfg.target}"
            f" • Score {state.score} • Lives {state.lives} • Best {state.high_score}"
            f"{combo} • {state.phase.name.replace('_', ' ').title()}"
        )

    def _redraw_locked(self) -> None:
        self.presenter.render(self.game.state)
        self.last_frame, self.last_status = self._snapshot_locked()

    def get_frame(self) -> Tuple[np.ndarray, str]:
        with self.lock:
            if self.last_frame is None:
                self._redraw_locked()
            return self.last_frame.copy(), self.last_status

    def toggle_pause(self) -> bool:
        with self.lock:
            self.game.toggle_pause()
            self._redraw_locked()
            return self.game.state.paused

    def click(self, coords: Tuple[int, int]) -> None:
        pos = (float(coords[0]), float(coords[1]))
        with self.lock:
            action = self.presenter.button_at(pos)
            if action in self.actions:
                self.actions[action]()
            elif self.game.modal is None:
                self.game.pop(pos)
            self._redraw_locked()

    def command(self, action: str) -> None:
        with self.lock:
            handler = self.actions.get(action)
            if handler is not None:
                handler()
            else:
                logger.warning("Unknown command %r", action)
            self._redraw_locked()


session: Optional[GameSession] = None


def get_session() -> GameSession:
    global session
    if session is None:
        session = GameSession()
    return session


def startup() -> Tuple[np.ndarray, str]:
    return get_session().get_frame()


def refresh_view() -> Tuple[np.ndarray, str]:
    return get_session().get_frame()


def handle_canvas_click(evt: gr.SelectData) -> Tuple[np.ndarray, str]:
    if not evt:
        return get_session().get_frame()
    coords = evt.index if isinstance(evt.index, (tuple, list)) else evt.value
    if not coords:
        return get_session().get_frame()
    get_session().click((coords[0], coords[1]))
    return get_session().get_frame()


def make_command_handler(action: str):
    def handler() -> Tuple[np.ndarray, str]:
        get_session().command(action)
        return get_session().get_frame()

    return handler


def handle_pause_toggle():
    paused = get_session().toggle_pause()
    frame, status = get_session().get_frame()
    label = "Resume" if paused else "Pause"
    return frame, status, gr.update(value=label)


def build_demo() -> gr.Blocks:
    with gr.Blocks(title="Balloon Pop (Gradio)") as demo:
        gr.Markdown(
            """
            ### Balloon Pop
            - Click a balloon in the live view to pop it before it floats away
            - Quick consecutive pops build a combo worth up to 5x
            - Golden balloons are rare and worth 5x
            - The view refreshes every 0.2s; pause any time to save resources
            """
        )

        with gr.Row():
            game_image = gr.Image(
                label="Live View",
                type="numpy",
                height=core.HEIGHT,
                width=core.WIDTH,
            )
            with gr.Column():
                status_md = gr.Markdown("Loading...")
                start_button = gr.Button("Start Game", variant="primary")
                pause_button = gr.Button("Pause", variant="secondary")
                restart_button = gr.Button("Restart")
                next_button = gr.Button("Next Level")
                again_button = gr.Button("Play Again")
                menu_button = gr.Button("Main Menu")

        outputs = [game_image, status_md]
        timer = gr.Timer(0.2)
        demo.load(fn=startup, inputs=None, outputs=outputs)
        timer.tick(fn=refresh_view, inputs=None, outputs=outputs)

        game_image.select(fn=handle_canvas_click, inputs=None, outputs=outputs)
        pause_button.click(
            fn=handle_pause_toggle,
            inputs=None,
            outputs=[game_image, status_md, pause_button],
        )
        start_button.click(fn=make_command_handler("start"), inputs=None, outputs=outputs)
        restart_button.click(fn=make_command_handler("restart"), inputs=None, outputs=outputs)
        next_button.click(fn=make_command_handler("next"), inputs=None, outputs=outputs)
        again_button.click(fn=make_command_handler("play_again"), inputs=None, outputs=outputs)
        menu_button.click(fn=make_command_handler("menu"), inputs=None, outputs=outputs)
    return demo


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    build_demo().queue().launch(
        server_name="0.0.0.0",
        server_port=int(os.environ.get("PORT", 7860)),
    )


if __name__ == "__main__":
    main()
