"""Desktop pygame front-end for Balloon Pop.

Run: python play.py
Controls: click or tap balloons, Escape / P pauses, Enter presses the
highlighted button of the open panel.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Tuple

import pygame

import game as core
from game import BalloonPopGame, Modal, Presenter, SessionState
from highscore import HighScoreStore
from render import Renderer

FPS = 60
LOG_LEVEL = os.environ.get("BALLOON_POP_LOG_LEVEL", "INFO")
FONT_LARGE_SIZE = 30
FONT_SMALL_SIZE = 18
HUD_HEIGHT = 40
HUD_COLOR = (0, 0, 0, 110)
HUD_TEXT = (255, 255, 255)
PANEL_WIDTH = 320
PANEL_COLOR = (24, 34, 52)
PANEL_BORDER = (90, 110, 160)
OVERLAY_COLOR = (0, 0, 0, 120)
BUTTON_COLOR = (255, 107, 107)
BUTTON_SECONDARY = (77, 150, 255)
BUTTON_HEIGHT = 40
PAUSE_BUTTON_SIZE = 30

ButtonSpec = Tuple[str, str]

MODAL_TITLES = {
	Modal.START: "Balloon Pop",
	Modal.PAUSE: "Paused",
	Modal.LEVEL_COMPLETE: "Level Complete!",
	Modal.GAME_OVER: "Game Over",
}
MODAL_BUTTONS: Dict[Modal, List[ButtonSpec]] = {
	Modal.START: [("start", "Start Game")],
	Modal.PAUSE: [("resume", "Resume"), ("restart", "Restart")],
	Modal.LEVEL_COMPLETE: [("next", "Next Level")],
	Modal.GAME_OVER: [("play_again", "Play Again"), ("menu", "Main Menu")],
}


def pointer_position(event: pygame.event.Event, size: Tuple[int, int]) -> Optional[Tuple[float, float]]:
	"""Reduce a pointer or touch event to a surface-local point, or None if it is not one."""
	if event.type == pygame.MOUSEBUTTONDOWN:
		# SDL mirrors touches as mouse events; FINGERDOWN already covers those.
		if event.button != 1 or getattr(event, "touch", False):
			return None
		return float(event.pos[0]), float(event.pos[1])
	if event.type == pygame.FINGERDOWN:
		return event.x * size[0], event.y * size[1]
	return None


def modal_lines(kind: Modal, details: Dict[str, Any]) -> List[str]:
	if kind is Modal.START:
		return ["Pop the balloons before they escape!", "Chain pops quickly for combos."]
	if kind is Modal.PAUSE:
		return [
			f"Score: {details.get('score', 0)}",
			f"Level: {details.get('level', 1)}",
			f"Lives: {details.get('lives', 0)}",
			f"Popped: {details.get('popped', 0)}",
		]
	if kind is Modal.LEVEL_COMPLETE:
		stars = int(details.get("stars", 1))
		return [
			"*" * stars + "-" * (3 - stars),
			f"Popped: {details.get('popped', 0)}",
			f"Accuracy: {details.get('accuracy', '0%')}",
			f"Bonus: {details.get('bonus', '+0')}",
			f"Score: {details.get('score', 0)}",
			f"Next: {details.get('next_name', '')}",
		]
	return [
		f"Final score: {details.get('final_score', 0)}",
		f"Level reached: {details.get('level', 1)}",
		f"Balloons popped: {details.get('popped', 0)}",
		f"Best combo: {details.get('best_combo', '0x')}",
		f"High score: {details.get('high_score', 0)}",
	]


class PygamePresenter(Presenter):
	"""Draws the game, the HUD strip and the single open panel onto a surface."""

	def __init__(self, surface: pygame.Surface, renderer: Optional[Renderer] = None) -> None:
		if not pygame.font.get_init():
			pygame.font.init()
		self.surface = surface
		self.renderer = renderer or Renderer()
		self.font_large = pygame.font.SysFont("consolas", FONT_LARGE_SIZE)
		self.font_small = pygame.font.SysFont("consolas", FONT_SMALL_SIZE)
		self.hud: Dict[str, Any] = {}
		self.modal: Optional[Modal] = None
		self.modal_details: Dict[str, Any] = {}
		self.buttons: Dict[str, pygame.Rect] = {}

	def update_hud(self, fields: Dict[str, Any]) -> None:
		self.hud = dict(fields)

	def show_modal(self, kind: Modal, details: Dict[str, Any]) -> None:
		self.modal = kind
		self.modal_details = dict(details)

	def hide_modal(self) -> None:
		self.modal = None
		self.modal_details = {}

	def render(self, state: SessionState) -> None:
		self.renderer.draw(self.surface, state)
		self.buttons = {}
		self.draw_hud(state)
		if self.modal is not None:
			self.draw_modal(self.modal)

	def pause_button_rect(self) -> pygame.Rect:
		width = self.surface.get_width()
		top = (HUD_HEIGHT - PAUSE_BUTTON_SIZE) // 2
		return pygame.Rect(width - PAUSE_BUTTON_SIZE - 8, top, PAUSE_BUTTON_SIZE, PAUSE_BUTTON_SIZE)

	def draw_hud(self, state: SessionState) -> None:
		width = self.surface.get_width()
		strip = pygame.Surface((width, HUD_HEIGHT), pygame.SRCALPHA)
		strip.fill(HUD_COLOR)
		self.surface.blit(strip, (0, 0))
		parts = [
			f"Score {self.hud.get('score', 0)}",
			f"Lv {self.hud.get('level', 1)}",
			f"Lives {self.hud.get('lives', 0)}",
			f"{self.hud.get('target', '')}",
			f"Best {self.hud.get('high_score', 0)}",
		]
		text = self.font_small.render("  ".join(parts), True, HUD_TEXT)
		self.surface.blit(text, (10, (HUD_HEIGHT - text.get_height()) // 2))
		if state.phase is core.Phase.RUNNING and self.modal is None:
			rect = self.pause_button_rect()
			pygame.draw.rect(self.surface, PANEL_COLOR, rect, border_radius=6)
			bar_w = 4
			for offset in (-5, 5):
				bar = pygame.Rect(0, 0, bar_w, rect.height - 12)
				bar.center = (rect.centerx + offset, rect.centery)
				pygame.draw.rect(self.surface, HUD_TEXT, bar)
			self.buttons["pause"] = rect

	def draw_modal(self, kind: Modal) -> None:
		width, height = self.surface.get_size()
		overlay = pygame.Surface((width, height), pygame.SRCALPHA)
		overlay.fill(OVERLAY_COLOR)
		self.surface.blit(overlay, (0, 0))

		lines = modal_lines(kind, self.modal_details)
		specs = MODAL_BUTTONS[kind]
		line_h = self.font_small.get_height() + 6
		panel_h = 70 + len(lines) * line_h + len(specs) * (BUTTON_HEIGHT + 12) + 16
		panel_w = min(PANEL_WIDTH, width - 20)
		rect = pygame.Rect(0, 0, panel_w, panel_h)
		rect.center = (width // 2, height // 2)
		pygame.draw.rect(self.surface, PANEL_COLOR, rect, border_radius=12)
		pygame.draw.rect(self.surface, PANEL_BORDER, rect, width=2, border_radius=12)

		title = self.font_large.render(MODAL_TITLES[kind], True, (255, 255, 255))
		self.surface.blit(title, title.get_rect(center=(rect.centerx, rect.y + 32)))
		y = rect.y + 64
		for line in lines:
			label = self.font_small.render(line, True, (200, 220, 255))
			self.surface.blit(label, label.get_rect(center=(rect.centerx, y + line_h // 2)))
			y += line_h
		y += 8
		for index, (action, caption) in enumerate(specs):
			button = pygame.Rect(rect.x + 24, y, rect.width - 48, BUTTON_HEIGHT)
			color = BUTTON_COLOR if index == 0 else BUTTON_SECONDARY
			pygame.draw.rect(self.surface, color, button, border_radius=8)
			label = self.font_small.render(caption, True, (255, 255, 255))
			self.surface.blit(label, label.get_rect(center=button.center))
			self.buttons[action] = button
			y += BUTTON_HEIGHT + 12

	def button_at(self, pos: Tuple[float, float]) -> Optional[str]:
		for action, rect in self.buttons.items():
			if rect.collidepoint(int(pos[0]), int(pos[1])):
				return action
		return None

	def primary_action(self) -> Optional[str]:
		if self.modal is None:
			return None
		return MODAL_BUTTONS[self.modal][0][0]


def action_table(game: BalloonPopGame) -> Dict[str, Callable[[], Any]]:
	return {
		"start": game.start_game,
		"pause": game.pause,
		"resume": game.resume,
		"restart": game.start_game,
		"next": game.next_level,
		"play_again": game.start_game,
		"menu": game.main_menu,
	}


class BalloonPopWindow:
	def __init__(self, size: Tuple[int, int] = (core.WIDTH, core.HEIGHT)) -> None:
		pygame.init()
		pygame.display.set_caption("Balloon Pop")
		self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
		self.clock = pygame.time.Clock()
		self.presenter = PygamePresenter(self.screen)
		self.game = BalloonPopGame(presenter=self.presenter, store=HighScoreStore(), size=size)
		self.actions = action_table(self.game)

	def dispatch(self, action: Optional[str]) -> bool:
		handler = self.actions.get(action) if action else None
		if handler is None:
			return False
		handler()
		return True

	def handle_pointer(self, pos: Tuple[float, float]) -> None:
		if self.dispatch(self.presenter.button_at(pos)):
			return
		if self.game.modal is None:
			self.game.pop(pos)

	def handle_event(self, event: pygame.event.Event) -> bool:
		if event.type == pygame.QUIT:
			return False
		if event.type == pygame.KEYDOWN:
			if event.key in (pygame.K_ESCAPE, pygame.K_p):
				self.game.toggle_pause()
			elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
				self.dispatch(self.presenter.primary_action())
		elif event.type == pygame.VIDEORESIZE:
			self.screen = pygame.display.get_surface()
			self.presenter.surface = self.screen
			self.game.resize(*self.screen.get_size())
		else:
			pos = pointer_position(event, self.screen.get_size())
			if pos is not None:
				self.handle_pointer(pos)
		return True

	def run(self) -> None:
		running = True
		while running:
			dt = self.clock.tick(FPS) / 1000.0
			for event in pygame.event.get():
				if not self.handle_event(event):
					running = False
					break
			self.game.tick(dt)
			pygame.display.flip()
		pygame.quit()


def main() -> None:
	logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
	BalloonPopWindow().run()


if __name__ == "__main__":
	main()
