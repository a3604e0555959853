"""Controller wiring state, view and the cart API together.

Pending quantities live only in the inventory rows' text; nothing about them
reaches the state container until "add to cart" is clicked. API failures
propagate out of the click that triggered them; only checkout still clears
the local cart when a delete fails.
"""

from __future__ import annotations

import structlog

from ..api.base import CartApi
from ..state.store import State
from ..view.dom import ClickEvent, Element
from ..view.render import View

log = structlog.get_logger(__name__)


class Controller:
    def __init__(self, api: CartApi, view: View, state: State | None = None):
        self.api = api
        self.view = view
        self.state = state or State()
        self._bootstrapped = False

    def init(self):
        # subscribe first so the initial cart fetch renders
        self.state.subscribe(lambda: self.view.render_cart(self.state.cart))

        inventory = self.api.get_inventory()
        self.state.inventory = inventory
        self.view.render_inventory(inventory)
        log.info("inventory.loaded", items=len(inventory))

        self.state.cart = self.api.get_cart()
        log.info("cart.loaded", items=len(self.state.cart))

    def handle_update_amount(self):
        def on_click(event: ClickEvent):
            target = event.target
            if target.class_name == "btn-decrease":
                amount_el = target.next_element_sibling
                amount = int(amount_el.text_content)
                if amount > 0:
                    amount_el.text_content = amount - 1
            if target.class_name == "btn-increase":
                amount_el = target.previous_element_sibling
                amount_el.text_content = int(amount_el.text_content) + 1

        self.view.inventory_container.add_event_listener("click", on_click)

    def handle_add_to_cart(self):
        def on_click(event: ClickEvent):
            if event.target.class_name == "btn-add-to-cart":
                self.add_to_cart(event.target.parent)

        self.view.inventory_container.add_event_listener("click", on_click)

    def add_to_cart(self, row: Element):
        item_id = int(row.id)
        amount = int(row.nth_child(3).text_content)
        in_inventory = self.state.find_inventory(item_id)
        in_cart = self.state.find_cart(item_id)

        if amount != 0 and in_cart is None:
            if in_inventory is None:
                log.warning("add_to_cart.unknown_item", item_id=item_id)
                return
            created = self.api.add_to_cart(in_inventory.with_amount(amount))
            log.info("cart.added", item_id=created.id, amount=created.amount)
            self.state.cart = [*self.state.cart, created]
        elif in_cart is not None:
            # existing row: PATCH with the summed amount, then refetch
            new_amount = in_cart.amount + amount
            self.api.update_cart(in_cart.id, new_amount)
            log.info("cart.updated", item_id=in_cart.id, amount=new_amount)
            self.state.cart = self.api.get_cart()
        else:
            log.debug("add_to_cart.noop", item_id=item_id)

    def handle_delete(self):
        def on_click(event: ClickEvent):
            if event.target.class_name == "btn-delete-from-cart":
                item_id = int(event.target.parent.id)
                self.api.delete_from_cart(item_id)
                log.info("cart.deleted", item_id=item_id)
                self.state.cart = self.api.get_cart()

        self.view.cart_container.add_event_listener("click", on_click)

    def handle_checkout(self):
        def on_click(event: ClickEvent):
            # local cart is emptied whatever the deletes did
            try:
                results = self.api.checkout()
                log.info("cart.checked_out", deleted=len(results))
            finally:
                self.state.cart = []

        self.view.checkout_btn.add_event_listener("click", on_click)

    def bootstrap(self):
        if self._bootstrapped:
            return
        self._bootstrapped = True
        try:
            self.init()
        finally:
            # clicks stay wired even when the initial fetches fail
            self.handle_update_amount()
            self.handle_delete()
            self.handle_add_to_cart()
            self.handle_checkout()
