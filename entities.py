"""Balloon, particle and score-label records plus the factories that build them."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, List, Tuple, TypeVar

from levels import Color, LevelConfig

BALLOON_RADIUS_MIN = 22.0
BALLOON_RADIUS_MAX = 40.0
BALLOON_EDGE_MARGIN = 10.0
BALLOON_START_OFFSET_MIN = 10.0
BALLOON_START_OFFSET_MAX = 60.0
BALLOON_SPEED_MIN = 40.0
BALLOON_SPEED_MAX = 70.0
WOBBLE_FREQ_MIN = 1.5
WOBBLE_FREQ_MAX = 3.0
WOBBLE_AMOUNT_MIN = 8.0
WOBBLE_AMOUNT_MAX = 20.0
GOLDEN_CHANCE = 0.08
GOLDEN_COLOR = (255, 215, 0)

PARTICLE_VX_RANGE = (-120.0, 120.0)
PARTICLE_VY_RANGE = (-160.0, 40.0)
PARTICLE_RADIUS_RANGE = (2.0, 5.0)
PARTICLE_DECAY_RANGE = (1.5, 3.0)

POPUP_DURATION = 0.8  # seconds

T = TypeVar("T")


@dataclass
class Balloon:
	x: float
	y: float
	radius: float
	color: Color
	speed: float
	wobble_speed: float
	wobble_amount: float
	wobble_offset: float
	golden: bool = False
	time: float = 0.0
	popped: bool = False
	escaped: bool = False
	opacity: float = 1.0

	@property
	def active(self) -> bool:
		return not self.popped and not self.escaped

	def contains(self, pos: Tuple[float, float], margin: float = 0.0) -> bool:
		return math.hypot(pos[0] - self.x, pos[1] - self.y) <= self.radius + margin


@dataclass
class Particle:
	x: float
	y: float
	vx: float
	vy: float
	radius: float
	color: Color
	life: float = 1.0
	decay: float = 2.0


@dataclass
class ScorePopup:
	text: str
	pos: Tuple[float, float]
	age: float = 0.0

	@property
	def expired(self) -> bool:
		return self.age >= POPUP_DURATION


def spawn_balloon(
	config: LevelConfig,
	width: float,
	height: float,
	rng: random.Random,
) -> Balloon:
	radius = rng.uniform(BALLOON_RADIUS_MIN, BALLOON_RADIUS_MAX)
	golden = rng.random() < GOLDEN_CHANCE
	left = radius + BALLOON_EDGE_MARGIN
	right = width - radius - BALLOON_EDGE_MARGIN
	x = rng.uniform(left, right) if right >= left else width / 2
	y = height + radius + rng.uniform(BALLOON_START_OFFSET_MIN, BALLOON_START_OFFSET_MAX)
	color = GOLDEN_COLOR if golden else rng.choice(config.colors)
	return Balloon(
		x=x,
		y=y,
		radius=radius,
		color=color,
		speed=rng.uniform(BALLOON_SPEED_MIN, BALLOON_SPEED_MAX) * config.speed,
		wobble_speed=rng.uniform(WOBBLE_FREQ_MIN, WOBBLE_FREQ_MAX),
		wobble_amount=rng.uniform(WOBBLE_AMOUNT_MIN, WOBBLE_AMOUNT_MAX),
		wobble_offset=rng.uniform(0.0, math.tau),
		golden=golden,
	)


def spawn_particles(
	x: float,
	y: float,
	color: Color,
	count: int,
	rng: random.Random,
) -> List[Particle]:
	return [
		Particle(
			x=x,
			y=y,
			vx=rng.uniform(*PARTICLE_VX_RANGE),
			vy=rng.uniform(*PARTICLE_VY_RANGE),
			radius=rng.uniform(*PARTICLE_RADIUS_RANGE),
			color=color,
			decay=rng.uniform(*PARTICLE_DECAY_RANGE),
		)
		for _ in range(count)
	]


def compact(items: List[T], keep: Callable[[T], bool]) -> int:
	"""Drop items failing ``keep`` in place, preserving order. Returns the number removed."""
	write = 0
	for item in items:
		if keep(item):
			items[write] = item
			write += 1
	removed = len(items) - write
	del items[write:]
	return removed
