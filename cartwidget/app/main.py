"""App bootstrap against the REST backend or the in-memory mock."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

from ..api.base import CartApi
from ..api.mock import MockCartApi
from ..api.rest import RestCartApi
from ..view.render import View
from .controller import Controller


def build_api(base_url: Optional[str] = None, dry_run: Optional[bool] = None) -> CartApi:
    load_dotenv()
    if dry_run is None:
        dry_run = os.getenv("CART_DRY_RUN") == "1"
    if dry_run:
        return MockCartApi.with_demo_data()
    return RestCartApi(base_url=base_url)


def build_controller(api: CartApi, bootstrap: bool = True) -> Controller:
    controller = Controller(api, View())
    if bootstrap:
        controller.bootstrap()
    return controller
