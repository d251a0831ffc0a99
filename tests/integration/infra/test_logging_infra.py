from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration
and log file rotation.
"""

import logging
import re
import time
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from dirinventory.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from dirinventory.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from dirinventory.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up root logger handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial = len(_our_handlers())
    configure_logging(cfg)

    assert len(_our_handlers()) == initial == 1


def test_force_reconfigures_level() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_unknown_level_defaults_to_info() -> None:
    configure_logging(LoggingConfig(level="CHATTY"))

    assert logging.getLogger().level == logging.INFO


def test_queue_listener_architecture() -> None:
    """The root logger uses a single QueueHandler feeding a listener."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    handlers = _our_handlers()

    assert len(handlers) == 1
    assert isinstance(handlers[0], QueueHandler)
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True


def test_file_logging_and_rotation(tmp_path: Path) -> None:
    """Records reach the file handler and rotate past max_bytes."""
    log_file = tmp_path / "logs" / "run.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("dirinventory.test_rotate")
    for _ in range(10):
        logger.debug("A fairly long message that should trigger rotation. " * 3)

    # Give the QueueListener time to drain
    time.sleep(0.5)
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "logs" / "run.log.1").exists()


def test_shutdown_detaches_handlers() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    shutdown_logging()

    assert _our_handlers() == []
    assert getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR) is None


def test_file_entries_carry_timestamp_level_and_logger(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("dirinventory.scan").info("Scan finished")
    shutdown_logging()

    line = log_file.read_text(encoding="utf-8").splitlines()[-1]
    assert re.match(
        r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3} \| INFO \| dirinventory\.scan \| Scan finished$",
        line,
    )


def test_package_exports_only_public_api() -> None:
    import dirinventory.infra.logging as logging_pkg

    assert sorted(logging_pkg.__all__) == [
        "LoggingConfig", "configure_logging", "get_logger", "shutdown_logging",
    ]
    assert not hasattr(logging_pkg, "_CONFIGURED_FLAG_ATTR")
    assert not hasattr(logging_pkg, "_HANDLER_TAG_ATTR")
