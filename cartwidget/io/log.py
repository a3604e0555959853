"""structlog configuration shared by the front end and the API clients.

The library modules only call ``structlog.get_logger``; anything embedding
them should call ``configure_logging`` once at startup. Unconfigured,
structlog prints every event, debug included, to stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import structlog


def configure_logging(debug: Optional[bool] = None, json: bool = False) -> None:
    """Configure structlog once for the process.

    ``debug`` defaults to ``CART_DEBUG=1`` from the environment.
    """
    if debug is None:
        debug = os.getenv("CART_DEBUG") == "1"
    level = logging.DEBUG if debug else logging.INFO
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
