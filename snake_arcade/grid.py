"""Grid geometry: bounds, border ring, interior cells."""

from .constants import BOX, GRID_CELLS, GRID_SIZE
from .models import Position


def in_bounds(pos: Position) -> bool:
    x, y = pos
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


def build_border_cells() -> set[Position]:
    cells = set()
    for i in range(GRID_CELLS):
        cells.add((i * BOX, 0))
        cells.add((i * BOX, (GRID_CELLS - 1) * BOX))
        cells.add((0, i * BOX))
        cells.add(((GRID_CELLS - 1) * BOX, i * BOX))
    return cells


def interior_cells() -> list[Position]:
    return [
        (cx * BOX, cy * BOX)
        for cx in range(1, GRID_CELLS - 1)
        for cy in range(1, GRID_CELLS - 1)
    ]


def step(pos: Position, offset: tuple[int, int]) -> Position:
    dx, dy = offset
    return pos[0] + dx * BOX, pos[1] + dy * BOX
