"""In-memory state for the widget: the cached inventory and cart."""

from __future__ import annotations

from typing import Callable, List, Optional

from ..core.types import CartItem, InventoryItem


class State:
    """Holds inventory and cart; assigning ``cart`` notifies the subscriber.

    Assigning ``inventory`` deliberately does not notify: inventory is loaded
    once and rendered by the caller.
    """

    def __init__(self):
        self._inventory: List[InventoryItem] = []
        self._cart: List[CartItem] = []
        self._on_change: Optional[Callable[[], None]] = None

    @property
    def cart(self) -> List[CartItem]:
        return self._cart

    @cart.setter
    def cart(self, new_cart: List[CartItem]):
        self._cart = list(new_cart)
        if self._on_change is not None:
            self._on_change()

    @property
    def inventory(self) -> List[InventoryItem]:
        return self._inventory

    @inventory.setter
    def inventory(self, new_inventory: List[InventoryItem]):
        self._inventory = list(new_inventory)

    def subscribe(self, cb: Callable[[], None]):
        # single listener; a second subscribe replaces the first
        self._on_change = cb

    def find_inventory(self, item_id: int) -> Optional[InventoryItem]:
        return next((i for i in self._inventory if i.id == item_id), None)

    def find_cart(self, item_id: int) -> Optional[CartItem]:
        return next((c for c in self._cart if c.id == item_id), None)
