from cartwidget.core.types import CartItem, InventoryItem
from cartwidget.state.store import State


def test_setting_cart_notifies_subscriber():
    s = State()
    seen = []
    s.subscribe(lambda: seen.append(list(s.cart)))
    s.cart = [CartItem(1, "Apple", 2)]
    assert seen == [[CartItem(1, "Apple", 2)]]


def test_setting_inventory_does_not_notify():
    s = State()
    calls = []
    s.subscribe(lambda: calls.append(1))
    s.inventory = [InventoryItem(1, "Apple")]
    assert calls == []
    assert s.inventory == [InventoryItem(1, "Apple")]


def test_subscribe_replaces_previous_callback():
    s = State()
    first, second = [], []
    s.subscribe(lambda: first.append(1))
    s.subscribe(lambda: second.append(1))
    s.cart = []
    assert first == [] and second == [1]


def test_cart_assignment_without_subscriber_is_fine():
    s = State()
    s.cart = [CartItem(3, "Pear", 1)]
    assert s.find_cart(3).amount == 1
    assert s.find_cart(4) is None


def test_lookup_helpers():
    s = State()
    s.inventory = [InventoryItem(1, "Apple"), InventoryItem(2, "Pear")]
    assert s.find_inventory(2).content == "Pear"
    assert s.find_inventory(9) is None
