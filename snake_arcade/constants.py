"""Game constants."""

BOX = 20
GRID_SIZE = 400
GRID_CELLS = GRID_SIZE // BOX
TICK_MS = 100
START_LIVES = 3
START_POSITION = (10 * BOX, 10 * BOX)
FOOD_ATTEMPTS = 500

DIRECTIONS = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}
OPPOSITES = {"UP": "DOWN", "DOWN": "UP", "LEFT": "RIGHT", "RIGHT": "LEFT"}

KEY_DIRECTIONS = {
    "ArrowUp": "UP", "w": "UP", "W": "UP",
    "ArrowDown": "DOWN", "s": "DOWN", "S": "DOWN",
    "ArrowLeft": "LEFT", "a": "LEFT", "A": "LEFT",
    "ArrowRight": "RIGHT", "d": "RIGHT", "D": "RIGHT",
}
PAUSE_KEYS = {" ", "p", "P"}

BACKGROUND = "#0a0a0c"
FOOD_COLOR = "#ff4757"
FOOD_HIGHLIGHT = (255, 255, 255, 128)
DEFAULT_EYE = "#1a1a20"

EXTRA_LIFE_ID = "extra_life"
EXTRA_LIFE_PRICE = 50
