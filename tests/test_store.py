from snake_arcade.models import PlayerProfile
from snake_arcade.store import StoreSession, item_price, parse_cart


def test_profile_load_and_failure_defaults(fake_client):
    fake_client.player["Balance"] = 320
    fake_client.player["OwnedSkins"] = ["default", "skin_ice"]
    fake_client.player["EquippedSkin"] = "skin_ice"
    store = StoreSession(fake_client)
    p = store.load_profile()
    assert (p.balance, p.equipped_skin) == (320, "skin_ice")

    fake_client.fail.add("get_player")
    assert store.load_profile() == PlayerProfile()
    assert store.profile.owned_skins == ["default"]


def test_cart_load_failure_yields_empty_cart(fake_client):
    fake_client.cart = {"items": [{"id": "a", "itemId": "skin_gold", "name": "Gold", "price": 100, "quantity": 2}],
                        "total": 200}
    store = StoreSession(fake_client)
    assert store.load_cart().item_count == 2

    fake_client.fail.add("get_cart")
    cart = store.load_cart()
    assert cart.empty and cart.total == 0


def test_add_to_cart_checks_balance_first(fake_client):
    store = StoreSession(fake_client)
    store.profile.balance = 40
    assert not store.add_to_cart("extra_life")
    assert "add_to_cart" not in fake_client.calls
    assert store.drain_notices()[0].message == "Not enough coins"


def test_add_to_cart_success_and_failure(fake_client):
    store = StoreSession(fake_client)
    store.profile.balance = 200
    assert store.add_to_cart("skin_gold")
    assert store.cart.total == 100
    assert store.drain_notices()[0].kind == "success"

    fake_client.fail.add("add_to_cart")
    assert not store.add_to_cart("extra_life")
    assert store.cart.total == 100
    notice = store.drain_notices()[0]
    assert notice.kind == "error"
    assert notice.message == "add_to_cart unavailable"


def test_unknown_item_rejected(fake_client):
    store = StoreSession(fake_client)
    store.profile.balance = 1000
    assert not store.add_to_cart("time_machine")
    assert item_price("time_machine") is None


def test_quantity_is_clamped_to_one(fake_client):
    store = StoreSession(fake_client)
    store.profile.balance = 200
    store.add_to_cart("extra_life")
    line_id = store.cart.lines[0].id
    assert store.change_quantity(line_id, -1)
    assert store.cart.lines[0].quantity == 1
    assert store.change_quantity(line_id, 1)
    assert store.cart.lines[0].quantity == 2
    assert store.cart.total == 100


def test_failed_mutation_leaves_cart_untouched(fake_client):
    store = StoreSession(fake_client)
    store.profile.balance = 200
    store.add_to_cart("extra_life")
    store.drain_notices()
    before = parse_cart(fake_client.cart)
    fake_client.fail.update({"update_cart_item", "remove_cart_item"})
    line_id = store.cart.lines[0].id
    assert not store.change_quantity(line_id, 1)
    assert not store.remove(line_id)
    assert store.cart == before
    assert [n.kind for n in store.drain_notices()] == ["error", "error"]


def test_checkout_prechecks(fake_client):
    store = StoreSession(fake_client)
    assert store.checkout() is None
    assert store.drain_notices()[0].message == "Cart is empty"

    store.profile.balance = 100
    store.add_to_cart("skin_gold")
    store.profile.balance = 50
    store.drain_notices()
    assert store.checkout() is None
    assert store.drain_notices()[0].message == "Not enough coins"
    assert "checkout" not in fake_client.calls


def test_checkout_success_updates_profile(fake_client):
    fake_client.checkout_result = {
        "Status": "Success", "Message": "Purchase complete!", "Balance": 50,
        "OwnedSkins": ["default", "skin_gold"], "EquippedSkin": "skin_gold", "ExtraLives": 1,
    }
    fake_client.player.update(Balance=50, OwnedSkins=["default", "skin_gold"], EquippedSkin="skin_gold")
    store = StoreSession(fake_client)
    store.profile.balance = 200
    store.add_to_cart("skin_gold")
    store.add_to_cart("extra_life")
    store.drain_notices()
    fake_client.cart = {"items": [], "total": 0}

    assert store.checkout() == 1
    assert store.profile.balance == 50
    assert store.profile.equipped_skin == "skin_gold"
    assert store.profile.extra_lives == 1
    assert store.cart.empty
    assert store.drain_notices()[-1].message == "Purchase complete!"


def test_checkout_server_failure_keeps_state(fake_client):
    fake_client.checkout_result = {"Status": "Fail", "Message": "Not enough coins", "Balance": 10}
    store = StoreSession(fake_client)
    store.profile.balance = 200
    store.add_to_cart("skin_gold")
    store.drain_notices()
    assert store.checkout() is None
    assert store.profile.balance == 200
    assert not store.cart.empty
    assert store.drain_notices()[0].message == "Not enough coins"

    fake_client.fail.add("checkout")
    assert store.checkout() is None
    assert store.drain_notices()[0].message == "Checkout failed"


def test_equip_requires_ownership(fake_client):
    store = StoreSession(fake_client)
    assert not store.equip("skin_fire")
    store.profile.owned_skins.append("skin_fire")
    assert store.equip("skin_fire")
    assert store.profile.equipped_skin == "skin_fire"


def test_earned_coins_update_balance(fake_client):
    store = StoreSession(fake_client)
    assert store.apply_earned({"earned": 6, "balance": 56}) == 6
    assert store.profile.balance == 56
    assert store.can_buy_life
