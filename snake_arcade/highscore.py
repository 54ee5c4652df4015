"""Persistent high-score scalar."""

import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


class HighScoreStore:
    def __init__(self, path: str):
        self.path = path

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                value = int(json.load(f).get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0
        return max(0, value)

    def save(self, value: int) -> bool:
        """Write the score atomically. Returns False if the file could not be written."""
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return False
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(value)}, f)
            os.replace(tmp, self.path)
        except OSError as e:
            if os.path.exists(tmp):
                os.unlink(tmp)
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return False
        logger.info("New high score %d saved", value)
        return True
