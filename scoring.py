"""Points, combo and end-of-level arithmetic."""

from __future__ import annotations

import math
from dataclasses import dataclass

BASE_POINTS = 10
LEVEL_POINT_SCALE = 0.2
GOLDEN_MULTIPLIER = 5
COMBO_WINDOW = 1.5  # seconds
COMBO_CAP = 5
STAR_THRESHOLDS = ((85, 3), (60, 2))
STAR_BONUS = 50
LIFE_BONUS = 25


@dataclass(frozen=True)
class LevelSummary:
	level: int
	popped: int
	clicks: int
	accuracy: int
	stars: int
	bonus: int
	score: int
	next_name: str


def round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def base_points(level: int) -> int:
	return round_half_up(BASE_POINTS * (1 + (level - 1) * LEVEL_POINT_SCALE))


def combo_multiplier(streak: int) -> int:
	return max(1, min(streak, COMBO_CAP))


def pop_points(level: int, golden: bool, streak: int) -> int:
	golden_mult = GOLDEN_MULTIPLIER if golden else 1
	return base_points(level) * golden_mult * combo_multiplier(streak)


def accuracy(popped: int, clicks: int) -> int:
	if clicks <= 0:
		return 0
	return round_half_up(popped / clicks * 100)


def star_rating(accuracy_pct: int) -> int:
	for threshold, stars in STAR_THRESHOLDS:
		if accuracy_pct >= threshold:
			return stars
	return 1


def level_bonus(stars: int, lives: int) -> int:
	return stars * STAR_BONUS + lives * LIFE_BONUS
