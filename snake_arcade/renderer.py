"""Rasterise a session state onto the fixed-size grid with Pillow.

The drawing matches the browser canvas version: a dark background, the food
as a rounded square with a highlight dot, the snake as rounded squares with
two eyes on the head looking along the current direction. Gradient skins
blend the body colour by segment index.
"""

import io
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw

from .constants import BACKGROUND, BOX, DEFAULT_EYE, DIRECTIONS, FOOD_COLOR, FOOD_HIGHLIGHT, GRID_SIZE
from .models import SessionState, Skin
from .skins import get_skin, gradient_color

Color = Union[str, Tuple[int, ...]]


def direction_offset(direction: Optional[str]) -> tuple[int, int]:
    return DIRECTIONS.get(direction, (0, 0))


def _round_rect(draw: ImageDraw.ImageDraw, x: int, y: int, size: int, radius: int, fill: Color):
    draw.rounded_rectangle([x, y, x + size - 1, y + size - 1], radius=radius, fill=fill)


def _dot(draw: ImageDraw.ImageDraw, cx: float, cy: float, r: float, fill: Color):
    draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=fill)


def draw_food(draw: ImageDraw.ImageDraw, food):
    if food is None:
        return
    fx, fy = food
    _round_rect(draw, fx + 2, fy + 2, BOX - 4, 8, FOOD_COLOR)
    _dot(draw, fx + BOX / 2, fy + 6, 3, FOOD_HIGHLIGHT)


def draw_snake(draw: ImageDraw.ImageDraw, state: SessionState, skin: Skin):
    n = len(state.snake)
    for i, (x, y) in enumerate(state.snake):
        is_head = i == 0
        fill: Color = skin.head if is_head else skin.body
        if skin.gradient:
            fill = gradient_color(i, n)
        _round_rect(draw, x + 1, y + 1, BOX - 2, 6, fill)
        if is_head:
            dx, dy = direction_offset(state.direction)
            ex = x + BOX / 2 + dx * 6
            ey = y + BOX / 2 + dy * 6
            eye = skin.eye or DEFAULT_EYE
            _dot(draw, ex - 3, ey - 3, 3, eye)
            _dot(draw, ex + 3, ey - 3, 3, eye)


def render_frame(state: SessionState, skin: Optional[Skin] = None) -> Image.Image:
    skin = skin or get_skin(None)
    img = Image.new("RGB", (GRID_SIZE, GRID_SIZE), BACKGROUND)
    draw = ImageDraw.Draw(img, "RGBA")
    draw_food(draw, state.food)
    draw_snake(draw, state, skin)
    return img


def render_png(state: SessionState, skin: Optional[Skin] = None) -> bytes:
    buf = io.BytesIO()
    render_frame(state, skin).save(buf, format="PNG")
    return buf.getvalue()
