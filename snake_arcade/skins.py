"""Cosmetic skin catalog."""

from .models import Skin

DEFAULT_SKIN_ID = "default"

SKINS: dict[str, Skin] = {
    "default": Skin("default", "Default", 0, head="#4ecca3", body="#3aa17e"),
    "skin_gold": Skin("skin_gold", "Gold", 100, head="#ffd700", body="#d4af37"),
    "skin_rainbow": Skin("skin_rainbow", "Rainbow", 100, head="#ff6b73", body="#c26aaa", gradient=True),
    "skin_ice": Skin("skin_ice", "Ice", 100, head="#a8e6ff", body="#5ec8f2", eye="#0b3d5c"),
    "skin_fire": Skin("skin_fire", "Fire", 100, head="#ff6a00", body="#ee0979"),
}


def get_skin(skin_id) -> Skin:
    return SKINS.get(skin_id, SKINS[DEFAULT_SKIN_ID])


def gradient_color(index: int, length: int) -> tuple[int, int, int]:
    """Body colour for segment ``index`` of a gradient skin.

    Fades from coral at the head toward teal at the tail.
    """
    t = index / max(length, 1)
    r = int(255 * (1 - t) + 255 * t * 0.76)
    g = int(107 * (1 - t) + 212 * t * 0.5)
    b = int(115 * (1 - t) + 170 * t)
    return r, g, b


def catalog() -> list[dict]:
    return [
        {"id": s.id, "name": s.name, "price": s.price, "head": s.head, "body": s.body}
        for s in SKINS.values()
    ]
