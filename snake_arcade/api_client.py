"""
Client for the arcade backend (balance, coins, skins, cart, orders).

Every call is a blocking ``requests`` round trip; callers on the event loop
run them through ``asyncio.to_thread``. Any failure (transport error,
non-2xx status, undecodable body) is raised as :class:`ApiError`.
"""

import logging
import uuid
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ArcadeApiClient:
    def __init__(self, base_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None,
                 headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=json, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            message = (body.get("error") or body.get("Message")) if isinstance(body, dict) else None
            raise ApiError(message or f"HTTP {response.status_code}", response.status_code)
        if not isinstance(body, dict):
            raise ApiError("Invalid response body", response.status_code)
        return body

    def get_player(self) -> Dict[str, Any]:
        return self._request("GET", "/api/player")

    def earn_coins(self, score: int) -> Dict[str, Any]:
        """Report a finished run. Returns ``{"earned": int, "balance": int}``."""
        return self._request("POST", "/api/earn", json={"score": score})

    def equip(self, skin_id: str) -> Dict[str, Any]:
        return self._request("POST", "/api/equip", json={"skinId": skin_id})

    def get_cart(self) -> Dict[str, Any]:
        return self._request("GET", "/api/user/cart")

    def add_to_cart(self, item_id: str) -> Dict[str, Any]:
        return self._request("POST", "/api/user/cart/items", json={"itemId": item_id})

    def update_cart_item(self, line_id: str, quantity: int) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/user/cart/items/{line_id}", json={"quantity": quantity})

    def remove_cart_item(self, line_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/user/cart/items/{line_id}")

    def checkout(self, idempotency_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Place an order for the whole cart.

        A fresh idempotency key is generated per attempt unless one is given,
        so a retried request with the same key is not charged twice.
        """
        key = idempotency_key or str(uuid.uuid4())
        return self._request("POST", "/api/user/orders", json={}, headers={"Idempotency-Key": key})
