"""Level table for Balloon Pop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class LevelConfig:
	name: str
	target: int
	spawn_interval: float
	speed: float
	colors: Tuple[Color, ...]
	bg_gradient: Tuple[Color, Color]


LEVELS: Tuple[LevelConfig, ...] = (
	LevelConfig(
		name="Sunny Meadow",
		target=8,
		spawn_interval=1.2,
		speed=1.0,
		colors=((255, 107, 107), (255, 142, 83), (255, 217, 61), (107, 203, 119), (77, 150, 255)),
		bg_gradient=((135, 206, 235), (224, 247, 233)),
	),
	LevelConfig(
		name="Ocean Breeze",
		target=12,
		spawn_interval=1.0,
		speed=1.15,
		colors=((0, 180, 216), (0, 119, 182), (72, 202, 228), (144, 224, 239), (202, 240, 248)),
		bg_gradient=((0, 119, 182), (202, 240, 248)),
	),
	LevelConfig(
		name="Sunset Glow",
		target=15,
		spawn_interval=0.9,
		speed=1.3,
		colors=((255, 107, 107), (255, 142, 83), (255, 217, 61), (201, 24, 74), (255, 117, 143)),
		bg_gradient=((255, 117, 143), (255, 217, 61)),
	),
	LevelConfig(
		name="Enchanted Forest",
		target=18,
		spawn_interval=0.8,
		speed=1.4,
		colors=((45, 106, 79), (64, 145, 108), (82, 183, 136), (116, 198, 157), (149, 213, 178)),
		bg_gradient=((27, 67, 50), (149, 213, 178)),
	),
	LevelConfig(
		name="Neon Night",
		target=22,
		spawn_interval=0.7,
		speed=1.5,
		colors=((247, 37, 133), (114, 9, 183), (58, 12, 163), (67, 97, 238), (76, 201, 240)),
		bg_gradient=((13, 27, 42), (27, 38, 59)),
	),
	LevelConfig(
		name="Candy Land",
		target=25,
		spawn_interval=0.65,
		speed=1.6,
		colors=((255, 105, 180), (255, 20, 147), (255, 110, 199), (218, 112, 214), (238, 130, 238)),
		bg_gradient=((255, 228, 240), (255, 209, 232)),
	),
	LevelConfig(
		name="Volcanic Core",
		target=28,
		spawn_interval=0.6,
		speed=1.7,
		colors=((255, 69, 0), (255, 99, 71), (255, 127, 80), (220, 20, 60), (178, 34, 34)),
		bg_gradient=((26, 0, 0), (139, 0, 0)),
	),
	LevelConfig(
		name="Arctic Frost",
		target=30,
		spawn_interval=0.55,
		speed=1.8,
		colors=((224, 247, 250), (178, 235, 242), (128, 222, 234), (77, 208, 225), (38, 198, 218)),
		bg_gradient=((224, 247, 250), (255, 255, 255)),
	),
	LevelConfig(
		name="Space Odyssey",
		target=35,
		spawn_interval=0.5,
		speed=2.0,
		colors=((187, 134, 252), (3, 218, 198), (207, 102, 121), (255, 255, 255), (255, 222, 3)),
		bg_gradient=((0, 0, 0), (26, 26, 62)),
	),
	LevelConfig(
		name="The Grand Finale",
		target=40,
		spawn_interval=0.45,
		speed=2.2,
		colors=((255, 215, 0), (255, 107, 107), (78, 205, 196), (69, 183, 209), (249, 202, 36)),
		bg_gradient=((44, 62, 80), (52, 152, 219)),
	),
)

MAX_DEFINED_LEVEL = len(LEVELS)


def level_config(level: int) -> LevelConfig:
	"""Return the config for a 1-based level, reusing the last entry past the table."""
	idx = max(0, min(level - 1, MAX_DEFINED_LEVEL - 1))
	return LEVELS[idx]
