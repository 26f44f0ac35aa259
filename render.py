"""pygame drawing for Balloon Pop. Every function here only reads game state."""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

import pygame

from entities import POPUP_DURATION, Balloon, Particle, ScorePopup
from game import Phase, SessionState
from levels import Color

FONT_BANNER_SIZE = 26
FONT_POPUP_SIZE = 22
BALLOON_ASPECT = 0.85
SHADE_STEPS = 10
HIGHLIGHT_ALPHA = 102
STRING_COLOR = (0, 0, 0, 51)
GLOW_COLOR = (255, 215, 0)
GOLDEN_STOPS = ((0.0, (255, 248, 220)), (0.4, (255, 215, 0)), (1.0, (218, 165, 32)))
BANNER_COLOR = (255, 255, 255)
BANNER_ALPHA = 217
BANNER_Y = 70
POPUP_RISE = 30


def lighten(color: Color, amount: int) -> Color:
	r, g, b = color
	return min(255, r + amount), min(255, g + amount), min(255, b + amount)


def darken(color: Color, amount: int) -> Color:
	r, g, b = color
	return max(0, r - amount), max(0, g - amount), max(0, b - amount)


def lerp_color(a: Color, b: Color, t: float) -> Color:
	t = max(0.0, min(1.0, t))
	return (
		int(round(a[0] + (b[0] - a[0]) * t)),
		int(round(a[1] + (b[1] - a[1]) * t)),
		int(round(a[2] + (b[2] - a[2]) * t)),
	)


def gradient_color(stops: Sequence[Tuple[float, Color]], t: float) -> Color:
	if t <= stops[0][0]:
		return stops[0][1]
	for (start, c1), (end, c2) in zip(stops, stops[1:]):
		if t <= end:
			return lerp_color(c1, c2, (t - start) / max(end - start, 1e-6))
	return stops[-1][1]


def balloon_stops(balloon: Balloon) -> Tuple[Tuple[float, Color], ...]:
	if balloon.golden:
		return GOLDEN_STOPS
	color = balloon.color
	return ((0.0, lighten(color, 60)), (0.7, color), (1.0, darken(color, 30)))


def quad_bezier(
	p0: Tuple[float, float],
	p1: Tuple[float, float],
	p2: Tuple[float, float],
	samples: int = 12,
) -> List[Tuple[float, float]]:
	points: List[Tuple[float, float]] = []
	for i in range(samples + 1):
		t = i / samples
		u = 1 - t
		x = u * u * p0[0] + 2 * u * t * p1[0] + t * t * p2[0]
		y = u * u * p0[1] + 2 * u * t * p1[1] + t * t * p2[1]
		points.append((x, y))
	return points


def glow_alpha(balloon: Balloon) -> int:
	return int(255 * max(0.0, min(1.0, 0.3 + math.sin(balloon.time * 4) * 0.15)))


class Renderer:
	def __init__(self) -> None:
		if not pygame.font.get_init():
			pygame.font.init()
		self.font_banner = pygame.font.SysFont("consolas", FONT_BANNER_SIZE, bold=True)
		self.font_popup = pygame.font.SysFont("consolas", FONT_POPUP_SIZE, bold=True)
		self._background_cache: Dict[Tuple[int, int, Color, Color], pygame.Surface] = {}

	def draw(self, surface: pygame.Surface, state: SessionState) -> None:
		self.draw_background(surface, state)
		for balloon in state.balloons:
			if balloon.active:
				self.draw_balloon(surface, balloon)
		self.draw_particles(surface, state.particles)
		self.draw_popups(surface, state.popups)
		self.draw_combo_banner(surface, state)

	def draw_background(self, surface: pygame.Surface, state: SessionState) -> None:
		width, height = surface.get_size()
		top, bottom = state.config.bg_gradient
		key = (width, height, top, bottom)
		background = self._background_cache.get(key)
		if background is None:
			background = pygame.Surface((width, height))
			for y in range(height):
				color = lerp_color(top, bottom, y / max(height - 1, 1))
				pygame.draw.line(background, color, (0, y), (width, y))
			self._background_cache = {key: background}
		surface.blit(background, (0, 0))

	def draw_balloon(self, surface: pygame.Surface, balloon: Balloon) -> None:
		r = balloon.radius
		pad = 4
		width = int(math.ceil(r * 2.4)) + pad * 2
		height = int(math.ceil(r * 1.35 + r + 40)) + pad * 2
		cx = width / 2
		cy = r * 1.35 + pad
		layer = pygame.Surface((width, height), pygame.SRCALPHA)

		stops = balloon_stops(balloon)
		focus = (cx - r * 0.25, cy - r * 0.3)
		for step in range(SHADE_STEPS):
			t = 1.0 - step / SHADE_STEPS
			ex = focus[0] + (cx - focus[0]) * t
			ey = focus[1] + (cy - focus[1]) * t
			rx = r * BALLOON_ASPECT * t
			ry = r * t
			rect = pygame.Rect(0, 0, max(1, int(rx * 2)), max(1, int(ry * 2)))
			rect.center = (int(ex), int(ey))
			pygame.draw.ellipse(layer, gradient_color(stops, t), rect)

		highlight = pygame.Surface((max(2, int(r * 0.4)), max(2, int(r * 0.6))), pygame.SRCALPHA)
		pygame.draw.ellipse(highlight, (255, 255, 255, HIGHLIGHT_ALPHA), highlight.get_rect())
		highlight = pygame.transform.rotate(highlight, math.degrees(0.3))
		layer.blit(highlight, highlight.get_rect(center=(int(cx - r * 0.25), int(cy - r * 0.35))))

		knot_color = darken(balloon.color, 40)
		pygame.draw.polygon(
			layer,
			knot_color,
			[(cx - 3, cy + r - 2), (cx, cy + r + 5), (cx + 3, cy + r - 2)],
		)
		string = quad_bezier(
			(cx, cy + r + 5),
			(cx + math.sin(balloon.time * 2) * 5, cy + r + 20),
			(cx + math.sin(balloon.time * 1.5) * 3, cy + r + 35),
		)
		pygame.draw.lines(layer, STRING_COLOR, False, string, 1)

		if balloon.golden:
			ring = pygame.Rect(0, 0, int(r * 2.4), int(r * 2.7))
			ring.center = (int(cx), int(cy))
			pygame.draw.ellipse(layer, (*GLOW_COLOR, glow_alpha(balloon)), ring, width=2)

		if balloon.opacity < 1.0:
			layer.set_alpha(int(255 * max(0.0, balloon.opacity)))
		surface.blit(layer, (int(balloon.x - cx), int(balloon.y - cy)))

	def draw_particles(self, surface: pygame.Surface, particles: Sequence[Particle]) -> None:
		if not particles:
			return
		layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
		for p in particles:
			alpha = int(255 * max(0.0, min(1.0, p.life)))
			pygame.draw.circle(layer, (*p.color, alpha), (int(p.x), int(p.y)), max(1, int(p.radius)))
		surface.blit(layer, (0, 0))

	def draw_popups(self, surface: pygame.Surface, popups: Sequence[ScorePopup]) -> None:
		for popup in popups:
			ratio = min(1.0, popup.age / POPUP_DURATION)
			render = self.font_popup.render(popup.text, True, (255, 255, 255))
			render.set_alpha(max(0, 255 - int(ratio * 255)))
			rect = render.get_rect(center=(int(popup.pos[0]), int(popup.pos[1] - POPUP_RISE * ratio)))
			surface.blit(render, rect)

	def draw_combo_banner(self, surface: pygame.Surface, state: SessionState) -> None:
		if state.current_combo < 2 or state.phase is not Phase.RUNNING:
			return
		text = self.font_banner.render(f"{state.current_combo}x COMBO!", True, BANNER_COLOR)
		text.set_alpha(BANNER_ALPHA)
		surface.blit(text, text.get_rect(center=(surface.get_width() // 2, BANNER_Y)))
