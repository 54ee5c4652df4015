"""Core game state and logic."""

import logging
import random
from typing import Callable, Optional

from .constants import (
    DIRECTIONS, OPPOSITES, KEY_DIRECTIONS, PAUSE_KEYS,
    START_LIVES, START_POSITION, TICK_MS, FOOD_ATTEMPTS, BOX, GRID_CELLS,
)
from .grid import in_bounds, interior_cells, step
from .highscore import HighScoreStore
from .models import Screen, SessionState
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class GameController:
    """Owns one play session and advances it one tick at a time.

    The scheduler calls :meth:`step`. Input handlers only touch
    ``state.next_direction`` (through :meth:`request_direction`) and the
    paused flag; everything else is mutated from inside a tick.
    """

    def __init__(
        self,
        scheduler: TickScheduler,
        high_scores: Optional[HighScoreStore] = None,
        on_game_over: Optional[Callable[[int], None]] = None,
        on_redraw: Optional[Callable[[SessionState], None]] = None,
        rng: Optional[random.Random] = None,
        speed: int = TICK_MS,
    ):
        self.scheduler = scheduler
        self.high_scores = high_scores
        self.on_game_over = on_game_over
        self.on_redraw = on_redraw
        self.rng = rng or random.Random()
        self.state = SessionState(speed=speed)
        if high_scores is not None:
            self.state.high_score = high_scores.load()

    def start(self, initial_lives: Optional[int] = None):
        s = self.state
        self.scheduler.stop()
        s.score = 0
        s.final_score = None
        if initial_lives is not None:
            s.lives = initial_lives
        else:
            s.lives = START_LIVES + s.extra_lives
        s.extra_lives = 0
        s.paused = False
        self._respawn()
        s.screen = Screen.GAME
        self.scheduler.start(s.speed, self.step)
        logger.info("Game started with %d lives", s.lives)

    def step(self):
        self.tick()
        if self.on_redraw is not None:
            self.on_redraw(self.state)

    def tick(self):
        s = self.state
        if s.paused or s.screen != Screen.GAME:
            return
        d = s.next_direction or s.direction
        if d is None:
            return
        new_head = step(s.head(), DIRECTIONS[d])
        s.direction = d
        s.next_direction = None

        if not in_bounds(new_head):
            self.lose_life("wall")
            return
        if new_head in s.snake:
            self.lose_life("self")
            return

        s.snake.insert(0, new_head)
        if new_head == s.food:
            s.score += 1
            self.spawn_food()
        else:
            s.snake.pop()

    def request_direction(self, d: str) -> bool:
        s = self.state
        if s.paused or d not in DIRECTIONS:
            return False
        if s.direction is not None and OPPOSITES[d] == s.direction:
            return False
        s.next_direction = d
        return True

    def toggle_pause(self) -> bool:
        self.state.paused = not self.state.paused
        return self.state.paused

    def handle_key(self, key: str) -> bool:
        """Apply one keyboard signal. Returns True if it changed anything."""
        if self.state.screen != Screen.GAME:
            return False
        if key in PAUSE_KEYS:
            self.toggle_pause()
            return True
        d = KEY_DIRECTIONS.get(key)
        if d is None:
            return False
        return self.request_direction(d)

    def navigate(self, screen: Screen) -> bool:
        """Switch between non-gameplay screens. Refused mid-game."""
        if self.state.screen == Screen.GAME:
            return False
        self.state.screen = screen
        return True

    def bank_extra_lives(self, count: int):
        self.state.extra_lives = max(0, count)

    def lose_life(self, reason: str = "wall"):
        s = self.state
        self.scheduler.stop()
        if s.extra_lives > 0:
            s.extra_lives -= 1
        s.lives = max(0, s.lives - 1)
        logger.info("Life lost (%s), %d left", reason, s.lives)
        if s.lives <= 0:
            self.game_over()
            return
        self._respawn()
        self.scheduler.start(s.speed, self.step)

    def game_over(self):
        s = self.state
        self.scheduler.stop()
        s.final_score = s.score
        if s.score > s.high_score:
            s.high_score = s.score
            if self.high_scores is not None:
                self.high_scores.save(s.high_score)
        s.screen = Screen.GAME_OVER
        logger.info("Game over, final score %d (high %d)", s.score, s.high_score)
        if self.on_game_over is not None:
            self.on_game_over(s.score)

    def spawn_food(self):
        occupied = set(self.state.snake)
        attempts = 0
        while attempts < FOOD_ATTEMPTS:
            x = (self.rng.randrange(GRID_CELLS - 2) + 1) * BOX
            y = (self.rng.randrange(GRID_CELLS - 2) + 1) * BOX
            if (x, y) not in occupied:
                self.state.food = (x, y)
                return
            attempts += 1

        free = [c for c in interior_cells() if c not in occupied]
        self.state.food = self.rng.choice(free) if free else None

    def _respawn(self):
        s = self.state
        s.snake = [START_POSITION]
        s.direction = None
        s.next_direction = None
        self.spawn_food()
