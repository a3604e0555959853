"""Mock cart backend for offline runs and tests.

Keeps inventory and cart in memory and answers like a json-server backend:
POST keeps the id it is given, DELETE answers ``{}``, unknown ids are 404.
Every call is recorded in ``calls`` so tests can assert on traffic.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .base import CartApi
from ..core.errors import HttpError, NotFoundError
from ..core.types import CartItem, InventoryItem

DEMO_INVENTORY = ["Apple", "Pear", "Banana", "Orange", "Mango"]


class MockCartApi(CartApi):
    def __init__(
        self,
        name: str = "mock",
        inventory: Optional[Iterable[InventoryItem]] = None,
        cart: Optional[Iterable[CartItem]] = None,
    ):
        super().__init__(name)
        self._inventory: List[InventoryItem] = list(inventory or [])
        self._cart: Dict[int, CartItem] = {c.id: c for c in (cart or [])}
        self._lock = threading.Lock()
        self._fail: Dict[Tuple[str, Optional[int]], Exception] = {}
        self.calls: List[Tuple[Any, ...]] = []

    @classmethod
    def with_demo_data(cls) -> "MockCartApi":
        return cls(
            inventory=[
                InventoryItem(id=i, content=c) for i, c in enumerate(DEMO_INVENTORY, 1)
            ]
        )

    def fail_on(self, op: str, exc: Exception, item_id: Optional[int] = None):
        """Make ``op`` (optionally only for ``item_id``) raise ``exc``."""
        self._fail[(op, item_id)] = exc

    def _record(self, op: str, *args: Any, key: Optional[int] = None):
        with self._lock:
            self.calls.append((op, *args))
        exc = self._fail.get((op, key)) or self._fail.get((op, None))
        if exc is not None:
            raise exc

    def ops(self) -> List[str]:
        return [c[0] for c in self.calls]

    def get_inventory(self) -> List[InventoryItem]:
        self._record("get_inventory")
        return list(self._inventory)

    def get_cart(self) -> List[CartItem]:
        self._record("get_cart")
        with self._lock:
            return list(self._cart.values())

    def add_to_cart(self, item: CartItem) -> CartItem:
        self._record("add_to_cart", item, key=item.id)
        with self._lock:
            if item.id in self._cart:
                raise HttpError(500, "Insert failed, duplicate id")
            self._cart[item.id] = item
        return item

    def update_cart(self, item_id: int, new_amount: int) -> CartItem:
        self._record("update_cart", item_id, new_amount, key=item_id)
        with self._lock:
            current = self._cart.get(item_id)
            if current is None:
                raise NotFoundError(404, "{}")
            updated = CartItem(id=current.id, content=current.content, amount=new_amount)
            self._cart[item_id] = updated
        return updated

    def delete_from_cart(self, item_id: int) -> Any:
        self._record("delete_from_cart", item_id, key=item_id)
        with self._lock:
            if self._cart.pop(item_id, None) is None:
                raise NotFoundError(404, "{}")
        return {}
