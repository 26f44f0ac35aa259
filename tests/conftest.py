import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random

import pytest

from entities import Balloon
from game import BalloonPopGame, Presenter
from highscore import HighScoreStore


class RecordingPresenter(Presenter):
	def __init__(self):
		self.renders = 0
		self.huds = []
		self.modals = []
		self.visible = None

	def render(self, state):
		self.renders += 1

	def update_hud(self, fields):
		self.huds.append(dict(fields))

	def show_modal(self, kind, details):
		self.modals.append((kind, dict(details)))
		self.visible = kind

	def hide_modal(self):
		self.visible = None


@pytest.fixture
def presenter():
	return RecordingPresenter()


@pytest.fixture
def store():
	return HighScoreStore(path=None)


@pytest.fixture
def game(presenter, store):
	return BalloonPopGame(presenter=presenter, store=store, rng=random.Random(1234))


@pytest.fixture
def running_game(game):
	game.start_game()
	# keep the spawner quiet so tests control every balloon
	game.state.spawn_timer = 1e9
	return game


@pytest.fixture
def make_balloon():
	def factory(x=200.0, y=300.0, radius=30.0, golden=False, speed=0.0, **kwargs):
		return Balloon(
			x=x,
			y=y,
			radius=radius,
			color=(255, 215, 0) if golden else (255, 107, 107),
			speed=speed,
			wobble_speed=kwargs.pop("wobble_speed", 2.0),
			wobble_amount=kwargs.pop("wobble_amount", 0.0),
			wobble_offset=kwargs.pop("wobble_offset", 0.0),
			golden=golden,
			**kwargs,
		)

	return factory
