"""Cart backend client abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List

from ..core.types import CartItem, InventoryItem


class CartApi(ABC):
    name: str

    def __init__(self, name: str, max_workers: int = 8):
        self.name = name
        self.max_workers = max_workers

    @abstractmethod
    def get_inventory(self) -> List[InventoryItem]: ...

    @abstractmethod
    def get_cart(self) -> List[CartItem]: ...

    @abstractmethod
    def add_to_cart(self, item: CartItem) -> CartItem: ...

    @abstractmethod
    def update_cart(self, item_id: int, new_amount: int) -> CartItem: ...

    @abstractmethod
    def delete_from_cart(self, item_id: int) -> Any: ...

    def checkout(self) -> List[Any]:
        """Delete every cart row server-side, all deletes in flight at once.

        Results come back in cart order. The first failure is re-raised once
        every delete has been submitted; rows already deleted stay deleted.
        """
        cart = self.get_cart()
        if not cart:
            return []
        workers = max(1, min(self.max_workers, len(cart)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.delete_from_cart, item.id) for item in cart]
        return [f.result() for f in futures]
