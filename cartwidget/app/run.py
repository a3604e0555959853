"""Interactive command-line front end.

Each command clicks the matching control in the widget's document, so the
controller sees exactly what a browser user would trigger.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

import structlog

from .controller import Controller
from .main import build_api, build_controller
from ..core.errors import CartApiError
from ..io.log import configure_logging

log = structlog.get_logger(__name__)

HELP = """commands:
  inc ID      increase pending quantity of inventory item ID
  dec ID      decrease pending quantity of inventory item ID
  add ID      add pending quantity of inventory item ID to the cart
  del ID      delete cart row ID
  checkout    empty the cart
  show        print inventory and cart
  html        print the widget markup
  quit        exit"""

# command -> (container attribute, button class)
ROW_ACTIONS = {
    "inc": ("inventory_container", "btn-increase"),
    "dec": ("inventory_container", "btn-decrease"),
    "add": ("inventory_container", "btn-add-to-cart"),
    "del": ("cart_container", "btn-delete-from-cart"),
}


def show(controller: Controller) -> str:
    view = controller.view
    lines = ["Inventory:"]
    lines += [f"  [{row.id}] {row.as_text()}" for row in view.inventory_container.children]
    lines.append("Cart:")
    rows = view.cart_container.children
    lines += [f"  [{row.id}] {row.as_text()}" for row in rows] or ["  (empty)"]
    return "\n".join(lines)


def dispatch_command(controller: Controller, line: str) -> Optional[str]:
    """Run one command line; returns text to print, or None to quit."""
    parts = line.split()
    if not parts:
        return ""
    cmd, args = parts[0].lower(), parts[1:]
    if cmd in ("quit", "exit"):
        return None
    if cmd == "help":
        return HELP
    if cmd == "show":
        return show(controller)
    if cmd == "html":
        return controller.view.page_html()
    try:
        if cmd == "checkout":
            controller.view.checkout_btn.click()
            return show(controller)
        if cmd in ROW_ACTIONS:
            if len(args) != 1:
                return f"usage: {cmd} ID"
            container_attr, button_class = ROW_ACTIONS[cmd]
            row = getattr(controller.view, container_attr).get_element_by_id(args[0])
            if row is None:
                return f"no row with id {args[0]}"
            button = row.query_selector(f".{button_class}")
            if button is None:
                return f"row {args[0]} has no {button_class} control"
            button.click()
            return show(controller)
    except CartApiError as exc:
        log.error("command.failed", command=line, error=str(exc))
        return f"error: {exc}"
    return f"unknown command {cmd!r}; try 'help'"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cartwidget", description="Shopping cart widget")
    p.add_argument("--base-url", help="cart backend URL (default $CART_API_URL)")
    p.add_argument("--dry-run", action="store_true", default=None, help="use the in-memory backend")
    p.add_argument("--debug", action="store_true", default=None, help="debug logging")
    return p


def main(argv=None):  # pragma: no cover - manual run
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)
    api = build_api(base_url=args.base_url, dry_run=args.dry_run)
    try:
        controller = build_controller(api)
    except CartApiError as exc:
        log.error("bootstrap.failed", error=str(exc))
        print(f"could not load the shop: {exc}", file=sys.stderr)
        return 1
    print(show(controller))
    for line in sys.stdin:
        out = dispatch_command(controller, line)
        if out is None:
            break
        if out:
            print(out)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
