"""Rendering of inventory and cart lists.

``render_inventory`` / ``render_cart`` are pure: items in, markup out.
``View`` owns the document and swaps the markup into the two list
containers, replacing their whole content on every call.
"""

from __future__ import annotations

from typing import Iterable, Optional

from jinja2 import DictLoader, Environment, select_autoescape

from .dom import Element, parse_document
from ..core.types import CartItem, InventoryItem

INVENTORY_SELECTOR = ".inventory-container ul"
CART_SELECTOR = ".cart-container ul"
CHECKOUT_SELECTOR = ".checkout-btn"

# Quantity span must stay the third child of an inventory row.
TEMPLATES = {
    "inventory.html": """
{%- for item in items %}
<li id="{{ item.id }}">
  <span class="product-title">{{ item.content }}</span>
  <button class="btn-decrease">-</button>
  <span class="product-amount">0</span>
  <button class="btn-increase">+</button>
  <button class="btn-add-to-cart">add to cart</button>
</li>
{%- endfor %}
""",
    "cart.html": """
{%- for item in items %}
<li id="{{ item.id }}">
  <span class="product-title">{{ item.content }}</span>
  <span>x</span>
  <span class="product-amount">{{ item.amount }}</span>
  <button class="btn-delete-from-cart">delete</button>
</li>
{%- endfor %}
""",
    "page.html": """
<div class="container">
  <div class="inventory-container">
    <h3>Inventory</h3>
    <ul></ul>
  </div>
  <div class="cart-container">
    <h3>Shopping Cart</h3>
    <div class="cart-wrapper">
      <ul></ul>
    </div>
    <button class="checkout-btn">checkout</button>
  </div>
</div>
""",
}

env = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=select_autoescape(default_for_string=True, default=True),
)


def render_inventory(items: Iterable[InventoryItem]) -> str:
    return env.get_template("inventory.html").render(items=list(items))


def render_cart(items: Iterable[CartItem]) -> str:
    return env.get_template("cart.html").render(items=list(items))


class View:
    def __init__(self, document: Optional[Element] = None):
        self.document = document or parse_document(
            env.get_template("page.html").render()
        )
        self.inventory_container = self._require(INVENTORY_SELECTOR)
        self.cart_container = self._require(CART_SELECTOR)
        self.checkout_btn = self._require(CHECKOUT_SELECTOR)

    def _require(self, selector: str) -> Element:
        el = self.document.query_selector(selector)
        if el is None:
            raise LookupError(f"document has no element matching {selector!r}")
        return el

    def render_inventory(self, inventory: Iterable[InventoryItem]) -> None:
        self.inventory_container.inner_html = render_inventory(inventory)

    def render_cart(self, cart: Iterable[CartItem]) -> None:
        self.cart_container.inner_html = render_cart(cart)

    def page_html(self) -> str:
        return "".join(c.outer_html for c in self.document.children)

    def inventory_row(self, item_id: int) -> Optional[Element]:
        return self.inventory_container.get_element_by_id(str(item_id))

    def cart_row(self, item_id: int) -> Optional[Element]:
        return self.cart_container.get_element_by_id(str(item_id))
