"""Balloon Pop session controller: simulation step, hit-testing and the level state machine."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

import scoring
from entities import (
	Balloon,
	Particle,
	ScorePopup,
	compact,
	spawn_balloon,
	spawn_particles,
)
from highscore import HighScoreStore
from levels import LevelConfig, level_config

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 480, 720
MAX_LIVES = 3
MAX_FRAME_DT = 0.05
SPAWN_JITTER = (0.6, 1.2)
ESCAPE_MARGIN = 20.0
HIT_MARGIN = 8.0
PARTICLE_GRAVITY = 200.0
PARTICLE_BURST = 10
GOLDEN_PARTICLE_BURST = 20


class Phase(Enum):
	START = auto()
	RUNNING = auto()
	PAUSED = auto()
	LEVEL_COMPLETE = auto()
	GAME_OVER = auto()


class Modal(Enum):
	START = auto()
	PAUSE = auto()
	LEVEL_COMPLETE = auto()
	GAME_OVER = auto()


@dataclass
class SessionState:
	width: float = WIDTH
	height: float = HEIGHT
	score: int = 0
	level: int = 1
	lives: int = MAX_LIVES
	total_popped: int = 0
	level_popped: int = 0
	level_clicks: int = 0
	best_combo: int = 0
	current_combo: int = 0
	combo_timer: float = 0.0
	spawn_timer: float = 0.0
	high_score: int = 0
	phase: Phase = Phase.START
	balloons: List[Balloon] = field(default_factory=list)
	particles: List[Particle] = field(default_factory=list)
	popups: List[ScorePopup] = field(default_factory=list)
	last_summary: Optional[scoring.LevelSummary] = None

	@property
	def running(self) -> bool:
		return self.phase in (Phase.RUNNING, Phase.PAUSED)

	@property
	def paused(self) -> bool:
		return self.phase is Phase.PAUSED

	@property
	def game_over(self) -> bool:
		return self.phase is Phase.GAME_OVER

	@property
	def config(self) -> LevelConfig:
		return level_config(self.level)


class Presenter:
	"""Outbound port for whatever draws the game. The base class ignores everything."""

	def render(self, state: SessionState) -> None:
		pass

	def update_hud(self, fields: Dict[str, Any]) -> None:
		pass

	def show_modal(self, kind: Modal, details: Dict[str, Any]) -> None:
		pass

	def hide_modal(self) -> None:
		pass


@dataclass
class PopResult:
	balloon: Balloon
	points: int
	combo: int


class BalloonPopGame:
	def __init__(
		self,
		presenter: Optional[Presenter] = None,
		store: Optional[HighScoreStore] = None,
		rng: Optional[random.Random] = None,
		size: Tuple[float, float] = (WIDTH, HEIGHT),
	) -> None:
		self.presenter = presenter or Presenter()
		self.store = store or HighScoreStore()
		self.rng = rng or random.Random()
		self.state = SessionState(width=size[0], height=size[1])
		self.state.high_score = self.store.load()
		self.modal: Optional[Modal] = None
		self.refresh_hud()
		self.show_modal(Modal.START)

	# ------------------------------------------------------------------
	# Presentation helpers
	# ------------------------------------------------------------------
	def hud_fields(self) -> Dict[str, Any]:
		state = self.state
		cfg = state.config
		return {
			"score": state.score,
			"level": state.level,
			"level_name": cfg.name,
			"lives": state.lives,
			"target": f"{state.level_popped}/{cfg.target}",
			"combo": state.current_combo,
			"high_score": state.high_score,
		}

	def refresh_hud(self) -> None:
		self.presenter.update_hud(self.hud_fields())

	def show_modal(self, kind: Modal, details: Optional[Dict[str, Any]] = None) -> None:
		self.modal = kind
		self.presenter.show_modal(kind, details or {})

	def hide_modal(self) -> None:
		if self.modal is None:
			return
		self.modal = None
		self.presenter.hide_modal()

	# ------------------------------------------------------------------
	# State machine
	# ------------------------------------------------------------------
	def reset_game(self) -> None:
		state = self.state
		state.score = 0
		state.level = 1
		state.lives = MAX_LIVES
		state.total_popped = 0
		state.level_popped = 0
		state.level_clicks = 0
		state.best_combo = 0
		state.current_combo = 0
		state.combo_timer = 0.0
		state.spawn_timer = 0.0
		state.phase = Phase.START
		state.balloons.clear()
		state.particles.clear()
		state.last_summary = None
		self.refresh_hud()

	def start_level(self) -> None:
		state = self.state
		state.level_popped = 0
		state.level_clicks = 0
		state.current_combo = 0
		state.combo_timer = 0.0
		state.spawn_timer = 0.0
		state.balloons.clear()
		state.particles.clear()
		state.phase = Phase.RUNNING
		logger.info("Starting level %d (%s)", state.level, state.config.name)
		self.refresh_hud()

	def start_game(self) -> None:
		"""Start, restart-from-pause and play-again all begin a fresh run at level 1."""
		self.hide_modal()
		self.reset_game()
		self.start_level()

	def main_menu(self) -> None:
		self.hide_modal()
		self.reset_game()
		self.show_modal(Modal.START)

	def next_level(self) -> bool:
		if self.state.phase is not Phase.LEVEL_COMPLETE:
			return False
		self.hide_modal()
		self.state.level += 1
		self.start_level()
		return True

	def pause(self) -> bool:
		state = self.state
		if state.phase is not Phase.RUNNING:
			return False
		state.phase = Phase.PAUSED
		self.show_modal(
			Modal.PAUSE,
			{
				"score": state.score,
				"level": state.level,
				"lives": state.lives,
				"popped": state.total_popped,
			},
		)
		return True

	def resume(self) -> bool:
		if self.state.phase is not Phase.PAUSED:
			return False
		self.hide_modal()
		self.state.phase = Phase.RUNNING
		return True

	def toggle_pause(self) -> bool:
		if self.state.phase is Phase.RUNNING:
			return self.pause()
		if self.state.phase is Phase.PAUSED:
			return self.resume()
		return False

	def resize(self, width: float, height: float) -> None:
		self.state.width = width
		self.state.height = height

	# ------------------------------------------------------------------
	# Frame loop
	# ------------------------------------------------------------------
	def tick(self, dt: float) -> None:
		dt = max(0.0, min(dt, MAX_FRAME_DT))
		if self.state.phase is Phase.RUNNING:
			self.step(dt)
		self.update_popups(dt)
		self.presenter.render(self.state)

	def step(self, dt: float) -> None:
		state = self.state
		self.update_combo(dt)
		self.update_spawner(dt)
		self.update_balloons(dt)
		compact(state.balloons, lambda b: b.active)
		self.update_particles(dt)
		compact(state.particles, lambda p: p.life > 0)

	def update_combo(self, dt: float) -> None:
		state = self.state
		if state.combo_timer > 0:
			state.combo_timer -= dt
			if state.combo_timer <= 0:
				state.current_combo = 0

	def update_spawner(self, dt: float) -> None:
		state = self.state
		state.spawn_timer -= dt
		if state.spawn_timer <= 0:
			cfg = state.config
			state.balloons.append(spawn_balloon(cfg, state.width, state.height, self.rng))
			state.spawn_timer = cfg.spawn_interval * self.rng.uniform(*SPAWN_JITTER)

	def update_balloons(self, dt: float) -> None:
		state = self.state
		for balloon in state.balloons:
			if not balloon.active:
				continue
			balloon.time += dt
			balloon.y -= balloon.speed * dt
			balloon.x += (
				math.sin(balloon.time * balloon.wobble_speed + balloon.wobble_offset)
				* balloon.wobble_amount
				* dt
			)
			balloon.x = max(balloon.radius, min(state.width - balloon.radius, balloon.x))
			if balloon.y + balloon.radius < -ESCAPE_MARGIN and state.phase is Phase.RUNNING:
				self.escape_balloon(balloon)

	def escape_balloon(self, balloon: Balloon) -> None:
		state = self.state
		balloon.escaped = True
		state.lives = max(0, state.lives - 1)
		self.refresh_hud()
		if state.lives <= 0:
			self.trigger_game_over()

	def update_particles(self, dt: float) -> None:
		for particle in self.state.particles:
			particle.x += particle.vx * dt
			particle.y += particle.vy * dt
			particle.vy += PARTICLE_GRAVITY * dt
			particle.life -= particle.decay * dt

	def update_popups(self, dt: float) -> None:
		popups = self.state.popups
		if not popups:
			return
		for popup in popups:
			popup.age += dt
		compact(popups, lambda p: not p.expired)

	# ------------------------------------------------------------------
	# Input and scoring
	# ------------------------------------------------------------------
	def balloon_at(self, pos: Tuple[float, float]) -> Optional[Balloon]:
		for balloon in reversed(self.state.balloons):
			if balloon.active and balloon.contains(pos, HIT_MARGIN):
				return balloon
		return None

	def pop(self, pos: Tuple[float, float]) -> Optional[PopResult]:
		state = self.state
		if state.phase is not Phase.RUNNING:
			return None
		state.level_clicks += 1
		balloon = self.balloon_at(pos)
		if balloon is None:
			state.current_combo = 0
			return None

		balloon.popped = True
		state.current_combo += 1
		state.combo_timer = scoring.COMBO_WINDOW
		state.best_combo = max(state.best_combo, state.current_combo)
		points = scoring.pop_points(state.level, balloon.golden, state.current_combo)
		state.score += points
		state.level_popped += 1
		state.total_popped += 1

		burst = GOLDEN_PARTICLE_BURST if balloon.golden else PARTICLE_BURST
		state.particles.extend(spawn_particles(balloon.x, balloon.y, balloon.color, burst, self.rng))
		state.popups.append(ScorePopup(text=f"+{points}", pos=(pos[0], pos[1])))

		self.refresh_hud()
		self.check_level_complete()
		return PopResult(balloon=balloon, points=points, combo=state.current_combo)

	def check_level_complete(self) -> bool:
		state = self.state
		if state.level_popped < state.config.target:
			return False
		self.complete_level()
		return True

	def complete_level(self) -> scoring.LevelSummary:
		state = self.state
		acc = scoring.accuracy(state.level_popped, state.level_clicks)
		stars = scoring.star_rating(acc)
		bonus = scoring.level_bonus(stars, state.lives)
		state.score += bonus
		state.phase = Phase.LEVEL_COMPLETE
		summary = scoring.LevelSummary(
			level=state.level,
			popped=state.level_popped,
			clicks=state.level_clicks,
			accuracy=acc,
			stars=stars,
			bonus=bonus,
			score=state.score,
			next_name=level_config(state.level + 1).name,
		)
		state.last_summary = summary
		logger.info(
			"Level %d complete: accuracy %d%%, %d stars, bonus %d",
			state.level,
			acc,
			stars,
			bonus,
		)
		self.show_modal(
			Modal.LEVEL_COMPLETE,
			{
				"popped": summary.popped,
				"accuracy": f"{summary.accuracy}%",
				"score": summary.score,
				"bonus": f"+{summary.bonus}",
				"stars": summary.stars,
				"next_name": summary.next_name,
			},
		)
		self.refresh_hud()
		return summary

	def trigger_game_over(self) -> None:
		state = self.state
		if state.phase is Phase.GAME_OVER:
			return
		state.phase = Phase.GAME_OVER
		if state.score > state.high_score:
			state.high_score = state.score
			self.store.save(state.high_score)
			logger.info("New high score: %d", state.high_score)
		logger.info("Game over at level %d with %d points", state.level, state.score)
		self.show_modal(
			Modal.GAME_OVER,
			{
				"final_score": state.score,
				"level": state.level,
				"popped": state.total_popped,
				"best_combo": f"{state.best_combo}x",
				"high_score": state.high_score,
			},
		)
		self.refresh_hud()
