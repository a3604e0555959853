import pytest

from cartwidget.api.mock import MockCartApi
from cartwidget.app.controller import Controller
from cartwidget.app.main import build_controller
from cartwidget.core.errors import NetworkError
from cartwidget.core.types import CartItem, InventoryItem
from cartwidget.view.render import View


def _click(controller, container, item_id, button_class):
    row = getattr(controller.view, container).get_element_by_id(str(item_id))
    row.query_selector(f".{button_class}").click()


def _amount(controller, item_id):
    return controller.view.inventory_row(item_id).nth_child(3).text_content


def _setup(inventory=("Apple",), cart=()):
    api = MockCartApi(
        inventory=[InventoryItem(i, c) for i, c in enumerate(inventory, 1)],
        cart=list(cart),
    )
    return api, build_controller(api)


def test_bootstrap_renders_inventory_and_cart():
    api, c = _setup(("Apple", "Pear"), [CartItem(2, "Pear", 1)])
    assert api.ops() == ["get_inventory", "get_cart"]
    assert len(c.view.inventory_container.children) == 2
    assert [r.as_text() for r in c.view.cart_container.children] == ["Pear x 1 delete"]


def test_bootstrap_is_idempotent():
    api, c = _setup()
    c.bootstrap()
    _click(c, "inventory_container", 1, "btn-increase")
    assert _amount(c, 1) == "1"
    assert api.ops() == ["get_inventory", "get_cart"]


def test_decrement_stops_at_zero_and_increment_is_unbounded():
    api, c = _setup()
    _click(c, "inventory_container", 1, "btn-decrease")
    assert _amount(c, 1) == "0"
    for _ in range(25):
        _click(c, "inventory_container", 1, "btn-increase")
    assert _amount(c, 1) == "25"
    _click(c, "inventory_container", 1, "btn-decrease")
    assert _amount(c, 1) == "24"
    # purely local
    assert api.ops() == ["get_inventory", "get_cart"]
    assert c.state.cart == []


def test_add_new_item_appends_server_response():
    api, c = _setup()
    _click(c, "inventory_container", 1, "btn-increase")
    _click(c, "inventory_container", 1, "btn-increase")
    assert _amount(c, 1) == "2"
    _click(c, "inventory_container", 1, "btn-add-to-cart")
    assert api.calls[-1] == ("add_to_cart", CartItem(1, "Apple", 2))
    assert c.state.cart == [CartItem(1, "Apple", 2)]
    rows = c.view.cart_container.children
    assert [r.as_text() for r in rows] == ["Apple x 2 delete"]


def test_add_with_zero_quantity_and_no_cart_entry_is_noop():
    api, c = _setup()
    before = list(api.calls)
    _click(c, "inventory_container", 1, "btn-add-to-cart")
    assert api.calls == before
    assert c.state.cart == []


@pytest.mark.parametrize("pending, expected", [(0, 3), (2, 5)])
def test_add_existing_item_sums_amounts_then_refetches(pending, expected):
    api, c = _setup(cart=[CartItem(1, "Apple", 3)])
    for _ in range(pending):
        _click(c, "inventory_container", 1, "btn-increase")
    _click(c, "inventory_container", 1, "btn-add-to-cart")
    assert api.ops()[-2:] == ["update_cart", "get_cart"]
    assert api.calls[-2] == ("update_cart", 1, expected)
    assert c.state.cart == [CartItem(1, "Apple", expected)]
    assert c.view.cart_row(1).nth_child(3).text_content == str(expected)


def test_delete_refetches_cart():
    api, c = _setup(("Apple", "Pear"), [CartItem(5, "Pear", 3), CartItem(1, "Apple", 1)])
    _click(c, "cart_container", 5, "btn-delete-from-cart")
    assert api.ops()[-2:] == ["delete_from_cart", "get_cart"]
    assert api.calls[-2] == ("delete_from_cart", 5)
    assert [r.id for r in c.view.cart_container.children] == ["1"]


def test_checkout_empties_state():
    api, c = _setup(cart=[CartItem(1, "Apple", 3)])
    c.view.checkout_btn.click()
    assert c.state.cart == []
    assert c.view.cart_container.children == []


def test_checkout_empties_state_even_when_a_delete_fails():
    api, c = _setup(cart=[CartItem(1, "Apple", 3)])
    api.fail_on("delete_from_cart", NetworkError("down"))
    with pytest.raises(NetworkError):
        c.view.checkout_btn.click()
    assert c.state.cart == []
    assert c.view.cart_container.children == []


def test_cart_rows_track_state_length():
    api, c = _setup(("Apple", "Pear"))
    for item_id in (1, 2):
        _click(c, "inventory_container", item_id, "btn-increase")
        _click(c, "inventory_container", item_id, "btn-add-to-cart")
        assert len(c.view.cart_container.children) == len(c.state.cart)
    _click(c, "cart_container", 1, "btn-delete-from-cart")
    assert len(c.view.cart_container.children) == len(c.state.cart) == 1


def test_failed_initial_fetch_still_wires_clicks():
    api = MockCartApi(inventory=[InventoryItem(1, "Apple")])
    api.fail_on("get_cart", NetworkError("down"))
    c = Controller(api, View())
    with pytest.raises(NetworkError):
        c.bootstrap()
    assert len(c.view.inventory_container.children) == 1
    _click(c, "inventory_container", 1, "btn-increase")
    assert _amount(c, 1) == "1"
