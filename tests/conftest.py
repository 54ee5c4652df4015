# tests/conftest.py
import os
import random
import tempfile

# Keep the app's high score file out of the working tree
os.environ.setdefault("SNAKE_HIGHSCORE_PATH", os.path.join(tempfile.mkdtemp(), "highscore.json"))
os.environ.setdefault("SNAKE_API_URL", "http://127.0.0.1:9")

import pytest

from snake_arcade.api_client import ApiError
from snake_arcade.game import GameController


class FakeScheduler:
    """Records start/stop instead of running an asyncio task."""

    def __init__(self):
        self.running = False
        self.interval = None
        self.callback = None
        self.starts = 0
        self.stops = 0

    def start(self, interval_ms, callback):
        self.running = True
        self.interval = interval_ms
        self.callback = callback
        self.starts += 1

    def stop(self):
        self.running = False
        self.stops += 1


class FakeClient:
    """Stands in for ArcadeApiClient. Set ``fail`` to a method name (or "all")."""

    def __init__(self, player=None, cart=None, checkout_result=None, earn_result=None):
        self.player = player or {
            "Balance": 200, "OwnedSkins": ["default"], "EquippedSkin": "default", "ExtraLives": 0,
        }
        self.cart = cart or {"items": [], "total": 0}
        self.checkout_result = checkout_result
        self.earn_result = earn_result or {"earned": 2, "balance": 202}
        self.fail = set()
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail or "all" in self.fail:
            raise ApiError(f"{name} unavailable", 503)

    def get_player(self):
        self._maybe_fail("get_player")
        return dict(self.player)

    def earn_coins(self, score):
        self._maybe_fail("earn_coins")
        return dict(self.earn_result)

    def equip(self, skin_id):
        self._maybe_fail("equip")
        return {"equipped": skin_id}

    def get_cart(self):
        self._maybe_fail("get_cart")
        return self.cart

    def add_to_cart(self, item_id):
        self._maybe_fail("add_to_cart")
        price = {"extra_life": 50}.get(item_id, 100)
        line = {"id": f"line-{len(self.cart['items']) + 1}", "itemId": item_id,
                "name": item_id, "price": price, "quantity": 1}
        self.cart = {"items": self.cart["items"] + [line], "total": self.cart["total"] + price}
        return self.cart

    def update_cart_item(self, line_id, quantity):
        self._maybe_fail("update_cart_item")
        items = [dict(it, quantity=quantity) if it["id"] == line_id else it for it in self.cart["items"]]
        self.cart = {"items": items, "total": sum(it["price"] * it["quantity"] for it in items)}
        return self.cart

    def remove_cart_item(self, line_id):
        self._maybe_fail("remove_cart_item")
        items = [it for it in self.cart["items"] if it["id"] != line_id]
        self.cart = {"items": items, "total": sum(it["price"] * it["quantity"] for it in items)}
        return self.cart

    def checkout(self, idempotency_key=None):
        self._maybe_fail("checkout")
        return self.checkout_result or {"Status": "Fail", "Message": "Cart is empty"}


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def game_over_scores():
    return []


@pytest.fixture
def controller(scheduler, game_over_scores):
    return GameController(scheduler, on_game_over=game_over_scores.append, rng=random.Random(1234))


@pytest.fixture
def fake_client():
    return FakeClient()
