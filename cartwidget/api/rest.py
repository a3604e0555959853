"""REST adapter for the cart backend.

Talks JSON to a json-server style backend exposing two resources:

* ``GET /inventory``
* ``GET /cart``, ``POST /cart``, ``PATCH /cart/{id}``, ``DELETE /cart/{id}``

Base URL and timeout come from ``CART_API_URL`` / ``CART_API_TIMEOUT``
(``.env`` is honoured) unless passed explicitly. Request logging is at debug
level; call ``cartwidget.io.log.configure_logging`` first, or structlog's
unconfigured default prints every event to stdout.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import requests
import structlog
from dotenv import load_dotenv

from .base import CartApi
from ..core.errors import HttpError, NetworkError, NotFoundError
from ..core.types import CartItem, InventoryItem

DEFAULT_BASE_URL = "http://localhost:3000"

log = structlog.get_logger(__name__)


class RestCartApi(CartApi):
    def __init__(
        self,
        name: str = "rest",
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(name)
        load_dotenv()
        self.base_url = (
            base_url or os.getenv("CART_API_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        if timeout is None:
            timeout = float(os.getenv("CART_API_TIMEOUT") or 5.0)
        self.timeout = timeout
        self.session = session
        self.log = log.bind(api=self.name, base_url=self.base_url)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Accept": "application/json"}

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self.base_url + path
        send = self.session.request if self.session is not None else requests.request
        self.log.debug("cart_api.request", method=method, url=url, body=body)
        try:
            resp = send(
                method, url, headers=self._headers(), json=body, timeout=self.timeout
            )
        except requests.RequestException as exc:
            # any transport-level failure, including a malformed base URL
            raise NetworkError(f"{method} {url} failed: {exc}") from exc
        if resp.status_code == 404:
            raise NotFoundError(resp.status_code, resp.text, url=url)
        if not (200 <= resp.status_code < 300):
            raise HttpError(resp.status_code, resp.text, url=url)
        self.log.debug(
            "cart_api.response", method=method, url=url, status=resp.status_code
        )
        # DELETE on some backends answers 204 / empty body
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise HttpError(resp.status_code, resp.text, url=url) from exc

    def get_inventory(self) -> List[InventoryItem]:
        data = self._request("GET", "/inventory")
        return [InventoryItem.from_json(x) for x in data]

    def get_cart(self) -> List[CartItem]:
        data = self._request("GET", "/cart")
        return [CartItem.from_json(x) for x in data]

    def add_to_cart(self, item: CartItem) -> CartItem:
        return CartItem.from_json(self._request("POST", "/cart", body=item.to_json()))

    def update_cart(self, item_id: int, new_amount: int) -> CartItem:
        data = self._request("PATCH", f"/cart/{item_id}", body={"amount": new_amount})
        return CartItem.from_json(data)

    def delete_from_cart(self, item_id: int) -> Any:
        return self._request("DELETE", f"/cart/{item_id}")
