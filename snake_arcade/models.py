"""Data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import START_LIVES, TICK_MS

Position = tuple[int, int]


class Screen(Enum):
    MENU = "menu"
    GAME = "game"
    GAME_OVER = "game_over"
    STORE = "store"


@dataclass
class SessionState:
    snake: list[Position] = field(default_factory=list)
    direction: Optional[str] = None
    next_direction: Optional[str] = None
    food: Optional[Position] = None
    score: int = 0
    lives: int = START_LIVES
    extra_lives: int = 0
    paused: bool = False
    speed: int = TICK_MS
    high_score: int = 0
    final_score: Optional[int] = None
    screen: Screen = Screen.MENU

    def head(self):
        return self.snake[0] if self.snake else None


@dataclass(frozen=True)
class Skin:
    id: str
    name: str
    price: int
    head: str
    body: str
    eye: Optional[str] = None
    gradient: bool = False


@dataclass
class PlayerProfile:
    balance: int = 0
    owned_skins: list[str] = field(default_factory=lambda: ["default"])
    equipped_skin: str = "default"
    extra_lives: int = 0


@dataclass
class CartLine:
    id: str
    item_id: str
    name: str
    price: int
    quantity: int = 1

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)
    total: int = 0

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def empty(self) -> bool:
        return not self.lines

    def find(self, line_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None
