"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket

from .constants import BOX, GRID_SIZE
from .models import SessionState
from .skins import catalog
from .store import LIFE_ITEMS, Notice, StoreSession

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception as e:
                logger.debug("Dropping connection after send failure: %s", e)
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def state_payload(state: SessionState, skin_id: str) -> dict:
    return {
        "type": "state",
        "screen": state.screen.value,
        "snake": [list(seg) for seg in state.snake],
        "food": list(state.food) if state.food is not None else None,
        "direction": state.direction,
        "score": state.score,
        "lives": state.lives,
        "extra_lives": state.extra_lives,
        "paused": state.paused,
        "high_score": state.high_score,
        "skin": skin_id,
        "grid": {"size": GRID_SIZE, "box": BOX},
    }


def build_state_msg(state: SessionState, skin_id: str) -> str:
    return json.dumps(state_payload(state, skin_id))


def build_game_over_msg(state: SessionState, can_buy_life: bool) -> str:
    return json.dumps({
        "type": "game_over",
        "score": state.final_score,
        "high_score": state.high_score,
        "can_buy_life": can_buy_life,
    })


def build_coins_msg(earned: int, balance: int) -> str:
    return json.dumps({"type": "coins_earned", "earned": earned, "balance": balance})


def build_store_msg(store: StoreSession) -> str:
    p = store.profile
    return json.dumps({
        "type": "store",
        "profile": {
            "balance": p.balance,
            "owned_skins": p.owned_skins,
            "equipped_skin": p.equipped_skin,
            "extra_lives": p.extra_lives,
        },
        "cart": {
            "items": [
                {
                    "id": line.id,
                    "item_id": line.item_id,
                    "name": line.name,
                    "price": line.price,
                    "quantity": line.quantity,
                    "line_total": line.line_total,
                }
                for line in store.cart.lines
            ],
            "total": store.cart.total,
            "count": store.cart.item_count,
            "can_checkout": not store.cart.empty and p.balance >= store.cart.total,
        },
        "catalog": {"skins": catalog(), "lives": list(LIFE_ITEMS.values())},
    })


def build_toast_msg(notice: Notice) -> str:
    return json.dumps({"type": "toast", "kind": notice.kind, "message": notice.message})
