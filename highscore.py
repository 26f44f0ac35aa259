"""Durable storage for the single high score value."""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)

SAVE_PATH = os.environ.get("BALLOON_POP_SAVE", "highscore.json")
HIGH_SCORE_KEY = "balloonPop_highScore"


def load_store(path: str) -> Dict[str, str]:
	if not os.path.exists(path):
		return {}
	try:
		with open(path, "r") as f:
			data = json.load(f)
	except (OSError, ValueError) as exc:
		logger.warning("Ignoring unreadable save file %s: %s", path, exc)
		return {}
	if not isinstance(data, dict):
		logger.warning("Ignoring save file %s: expected an object", path)
		return {}
	return data


def save_store(path: str, data: Dict[str, str]) -> None:
	with open(path, "w") as f:
		json.dump(data, f, indent=2)


def parse_score(raw: object) -> int:
	if raw is None:
		return 0
	try:
		value = int(str(raw).strip())
	except ValueError:
		logger.warning("Ignoring malformed high score %r", raw)
		return 0
	return max(0, value)


class HighScoreStore:
	"""Keeps the best score in a small JSON key-value file.

	With ``path=None`` the value only lives in memory, which is what the test
	suite and throwaway sessions use.
	"""

	def __init__(self, path: Optional[str] = SAVE_PATH) -> None:
		self.path = path
		self._memory: Dict[str, str] = {}

	def _read(self) -> Dict[str, str]:
		if self.path is None:
			return dict(self._memory)
		return load_store(self.path)

	def load(self) -> int:
		return parse_score(self._read().get(HIGH_SCORE_KEY))

	def save(self, score: int) -> None:
		data = self._read()
		data[HIGH_SCORE_KEY] = str(int(score))
		if self.path is None:
			self._memory = data
			return
		try:
			save_store(self.path, data)
		except OSError as exc:
			logger.warning("Could not write high score to %s: %s", self.path, exc)
