from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from woocommerce_cli import logging_
from woocommerce_cli.console import err_console


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    touched = {name: logging.getLogger(name).level for name in (*logging_.WIRE_LOGGERS, "woocommerce_api")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, old in touched.items():
        logging.getLogger(name).setLevel(old)


def _ours() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == logging_.HANDLER_NAME]


def test_verbose_enables_debug_everywhere() -> None:
    logging_.setup_logging(True)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("woocommerce_api").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG
    (handler,) = _ours()
    assert isinstance(handler, RichHandler)
    assert handler.console is err_console


def test_quiet_by_default_and_handler_installed_once() -> None:
    logging_.setup_logging(True)
    logging_.setup_logging(False)

    assert len(_ours()) == 1
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    assert not logging.getLogger("woocommerce_api").isEnabledFor(logging.DEBUG)
