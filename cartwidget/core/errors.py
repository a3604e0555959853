"""Error kinds raised by cart API clients."""

from __future__ import annotations

from typing import Optional


class CartApiError(Exception):
    """Base class for every failure talking to the cart backend."""


class NetworkError(CartApiError):
    """The request never produced an HTTP response (refused, timed out...)."""


class HttpError(CartApiError):
    def __init__(self, status: int, body: str = "", url: Optional[str] = None):
        self.status = status
        self.body = body
        self.url = url
        msg = f"{status} for {url}" if url else str(status)
        if body:
            msg += f": {body}"
        super().__init__(msg)


class NotFoundError(HttpError):
    """404 from the backend, e.g. deleting a cart row that is already gone."""
