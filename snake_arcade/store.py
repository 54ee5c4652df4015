"""Player profile and cart view-model kept in sync with the backend."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .api_client import ApiError, ArcadeApiClient
from .constants import EXTRA_LIFE_ID, EXTRA_LIFE_PRICE
from .models import Cart, CartLine, PlayerProfile
from .skins import SKINS

logger = logging.getLogger(__name__)

LIFE_ITEMS = {EXTRA_LIFE_ID: {"id": EXTRA_LIFE_ID, "name": "Extra Life", "price": EXTRA_LIFE_PRICE}}


@dataclass(frozen=True)
class Notice:
    kind: str
    message: str


def item_price(item_id: str) -> Optional[int]:
    if item_id in SKINS:
        return SKINS[item_id].price
    if item_id in LIFE_ITEMS:
        return LIFE_ITEMS[item_id]["price"]
    return None


def parse_cart(data: Dict[str, Any]) -> Cart:
    lines = [
        CartLine(
            id=str(it.get("id", "")),
            item_id=it.get("itemId", ""),
            name=it.get("name", ""),
            price=int(it.get("price") or 0),
            quantity=int(it.get("quantity") or 1),
        )
        for it in data.get("items") or []
    ]
    return Cart(lines=lines, total=int(data.get("total") or 0))


def parse_profile(data: Dict[str, Any]) -> PlayerProfile:
    return PlayerProfile(
        balance=int(data.get("Balance") or 0),
        owned_skins=list(data.get("OwnedSkins") or ["default"]),
        equipped_skin=data.get("EquippedSkin") or "default",
        extra_lives=max(0, int(data.get("ExtraLives") or 0)),
    )


class StoreSession:
    """
    Local copy of the player's profile and cart.

    Every API failure is caught here. Loads fall back to safe defaults,
    mutations leave local state unchanged and queue an error notice.
    Notices are drained by the app and shown as toasts.
    """

    def __init__(self, client: ArcadeApiClient):
        self.client = client
        self.profile = PlayerProfile()
        self.cart = Cart()
        self.notices: list[Notice] = []

    def _notify(self, kind: str, message: str):
        self.notices.append(Notice(kind, message))

    def drain_notices(self) -> list[Notice]:
        out, self.notices = self.notices, []
        return out

    @property
    def can_buy_life(self) -> bool:
        return self.profile.balance >= EXTRA_LIFE_PRICE

    def load_profile(self) -> PlayerProfile:
        try:
            self.profile = parse_profile(self.client.get_player())
        except ApiError as e:
            logger.warning("Profile load failed, using defaults: %s", e)
            self.profile = PlayerProfile()
        return self.profile

    def load_cart(self) -> Cart:
        try:
            self.cart = parse_cart(self.client.get_cart())
        except ApiError as e:
            logger.warning("Cart load failed, showing empty cart: %s", e)
            self.cart = Cart()
        return self.cart

    def apply_earned(self, result: Dict[str, Any]) -> int:
        self.profile.balance = int(result.get("balance", self.profile.balance))
        return int(result.get("earned") or 0)

    def add_to_cart(self, item_id: str) -> bool:
        price = item_price(item_id)
        if price is None:
            self._notify("error", "Unknown item")
            return False
        if self.profile.balance < price:
            self._notify("error", "Not enough coins")
            return False
        try:
            self.cart = parse_cart(self.client.add_to_cart(item_id))
        except ApiError as e:
            logger.warning("Add to cart failed for %s: %s", item_id, e)
            self._notify("error", e.message or "Could not add to cart")
            return False
        self._notify("success", "Added to cart")
        return True

    def change_quantity(self, line_id: str, delta: int) -> bool:
        line = self.cart.find(line_id)
        if line is None:
            return False
        quantity = max(1, line.quantity + delta)
        try:
            self.client.update_cart_item(line_id, quantity)
        except ApiError as e:
            logger.warning("Quantity update failed for %s: %s", line_id, e)
            self._notify("error", "Could not update quantity")
            return False
        self.load_cart()
        self._notify("success", "Cart updated")
        return True

    def remove(self, line_id: str) -> bool:
        try:
            self.client.remove_cart_item(line_id)
        except ApiError as e:
            logger.warning("Remove failed for %s: %s", line_id, e)
            self._notify("error", "Could not remove")
            return False
        self.load_cart()
        self._notify("success", "Removed from cart")
        return True

    def equip(self, skin_id: str) -> bool:
        if skin_id not in self.profile.owned_skins or skin_id == self.profile.equipped_skin:
            return False
        try:
            self.client.equip(skin_id)
        except ApiError as e:
            logger.warning("Equip failed for %s: %s", skin_id, e)
            self._notify("error", "Could not equip")
            return False
        self.profile.equipped_skin = skin_id
        self._notify("success", "Skin equipped!")
        return True

    def checkout(self) -> Optional[int]:
        """Buy everything in the cart.

        Returns the banked extra-life count on success, else None.
        """
        if self.cart.empty:
            self._notify("error", "Cart is empty")
            return None
        if self.profile.balance < self.cart.total:
            self._notify("error", "Not enough coins")
            return None
        try:
            res = self.client.checkout()
        except ApiError as e:
            logger.warning("Checkout failed: %s", e)
            self._notify("error", "Checkout failed")
            return None

        if res.get("Status") != "Success":
            self._notify("error", res.get("Message") or "Checkout failed")
            return None

        p = self.profile
        p.balance = int(res.get("Balance", p.balance))
        p.owned_skins = list(res.get("OwnedSkins") or p.owned_skins)
        p.equipped_skin = res.get("EquippedSkin") or p.equipped_skin
        if "ExtraLives" in res:
            try:
                p.extra_lives = max(0, int(res["ExtraLives"] or 0))
            except (TypeError, ValueError):
                p.extra_lives = 0
        extra_lives = p.extra_lives
        self.load_profile()
        self.profile.extra_lives = extra_lives
        self.load_cart()
        self._notify("success", res.get("Message") or "Purchase complete!")
        return extra_lives
