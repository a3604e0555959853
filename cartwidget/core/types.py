"""Core type definitions for the cart widget.

Records mirror the JSON the backend serves on ``/inventory`` and ``/cart``.
Conversion does not validate payloads: a missing key raises ``KeyError``.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class InventoryItem:
    id: int
    content: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "InventoryItem":
        return cls(id=int(data["id"]), content=data["content"])

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

    def with_amount(self, amount: int) -> "CartItem":
        return CartItem(id=self.id, content=self.content, amount=amount)


@dataclass(frozen=True)
class CartItem:
    id: int
    content: str
    amount: int = 0

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(
            id=int(data["id"]), content=data["content"], amount=int(data["amount"])
        )

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)
