"""FastAPI application: frame and state routes, WebSocket endpoint, game loop wiring."""

import asyncio
import json
import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Response, WebSocket, WebSocketDisconnect

from .api_client import ApiError, ArcadeApiClient
from .connection_manager import (
    ConnectionManager, build_coins_msg, build_game_over_msg, build_state_msg,
    build_store_msg, build_toast_msg, state_payload,
)
from .constants import DIRECTIONS
from .game import GameController
from .highscore import HighScoreStore
from .models import Screen
from .renderer import render_png
from .scheduler import TickScheduler
from .settings import Settings
from .skins import get_skin
from .store import StoreSession

logger = logging.getLogger(__name__)

settings = Settings.from_env()
manager = ConnectionManager()
store = StoreSession(ArcadeApiClient(settings.api_url, settings.api_timeout))
scheduler = TickScheduler()
game = GameController(scheduler, HighScoreStore(settings.high_score_path), speed=settings.tick_ms)
store_lock = asyncio.Lock()
background_tasks: set[asyncio.Task] = set()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await asyncio.to_thread(store.load_profile)
    await asyncio.to_thread(store.load_cart)
    yield
    scheduler.stop()
    for task in list(background_tasks):
        task.cancel()


app = FastAPI(lifespan=lifespan)


def current_state_msg() -> str:
    return build_state_msg(game.state, store.profile.equipped_skin)


async def broadcast_frame():
    await manager.broadcast(current_state_msg())


async def finish_game(score: int):
    await manager.broadcast(build_game_over_msg(game.state, store.can_buy_life))
    try:
        result = await asyncio.to_thread(store.client.earn_coins, score)
    except ApiError as e:
        logger.warning("Coin report for score %d failed: %s", score, e)
        return
    earned = store.apply_earned(result)
    await manager.broadcast(build_coins_msg(earned, store.profile.balance))


def on_game_over(score: int):
    task = asyncio.get_running_loop().create_task(finish_game(score))
    background_tasks.add(task)
    task.add_done_callback(background_tasks.discard)


scheduler.on_frame = broadcast_frame
game.on_game_over = on_game_over


@app.get("/api/state")
async def get_state():
    return state_payload(game.state, store.profile.equipped_skin)


@app.get("/frame.png")
async def get_frame():
    png = render_png(game.state, get_skin(store.profile.equipped_skin))
    return Response(content=png, media_type="image/png")


def bank_purchased_lives(extra_lives):
    if extra_lives is not None:
        game.bank_extra_lives(extra_lives)


async def run_store_action(ws: WebSocket, action, *args, then=None):
    async with store_lock:
        result = await asyncio.to_thread(action, *args)
        notices = store.drain_notices()
    if then is not None:
        then(result)
    for notice in notices:
        await manager.send_personal(ws, build_toast_msg(notice))
    await manager.send_personal(ws, build_store_msg(store))
    return result


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    await manager.send_personal(ws, json.dumps({"type": "welcome"}))
    await manager.send_personal(ws, current_state_msg())
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except ValueError:
                logger.warning("Ignoring malformed message: %r", raw[:80])
                continue
            if not isinstance(msg, dict):
                continue
            kind = msg.get("type")

            if kind == "start":
                lives = msg.get("lives")
                if isinstance(lives, bool) or not (isinstance(lives, int) and 1 <= lives <= 9):
                    lives = None
                game.start(lives)
                await manager.broadcast(current_state_msg())
            elif kind == "key":
                key = msg.get("key")
                if isinstance(key, str) and game.handle_key(key):
                    await manager.broadcast(current_state_msg())
            elif kind == "input":
                d = msg.get("direction")
                if d in DIRECTIONS and game.state.screen == Screen.GAME:
                    game.request_direction(d)
            elif kind == "pause":
                if game.state.screen == Screen.GAME:
                    game.toggle_pause()
                    await manager.broadcast(current_state_msg())
            elif kind == "open_store":
                if game.navigate(Screen.STORE):
                    async with store_lock:
                        await asyncio.to_thread(store.load_profile)
                    await run_store_action(ws, store.load_cart)
            elif kind == "close_store":
                if game.navigate(Screen.MENU):
                    await manager.send_personal(ws, current_state_msg())
            elif kind == "add_to_cart":
                item_id = msg.get("item_id")
                if isinstance(item_id, str):
                    await run_store_action(ws, store.add_to_cart, item_id)
            elif kind == "cart_quantity":
                line_id, delta = msg.get("line_id"), msg.get("delta")
                if isinstance(line_id, str) and delta in (-1, 1):
                    await run_store_action(ws, store.change_quantity, line_id, delta)
            elif kind == "remove_from_cart":
                line_id = msg.get("line_id")
                if isinstance(line_id, str):
                    await run_store_action(ws, store.remove, line_id)
            elif kind == "equip":
                skin_id = msg.get("skin_id")
                if isinstance(skin_id, str):
                    await run_store_action(ws, store.equip, skin_id)
            elif kind == "checkout":
                await run_store_action(ws, store.checkout, then=bank_purchased_lives)
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)
