from __future__ import annotations

import logging

from rich.logging import RichHandler

from .console import err_console

HANDLER_NAME = "woo"
WIRE_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    """Route log records to stderr through rich; safe to call more than once."""
    root = logging.getLogger()
    for old in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(old)

    handler = RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
    handler.set_name(HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # connection chatter only with --verbose
    for name in WIRE_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("woocommerce_api").setLevel(logging.DEBUG if verbose else logging.WARNING)
