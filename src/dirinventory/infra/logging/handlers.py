from __future__ import annotations

"""
Logging Handlers.

Builds the rotating file sink behind `--log-file` and tags every handler
dirinventory installs, so reconfiguration only removes its own handlers and
leaves pytest's capture handlers or a host application's alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_dirinventory_handler"


# ==============================================================================
# HANDLER OWNERSHIP
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# FILE SINK
# ==============================================================================

def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the run log named by `--log-file`.

    An unwritable log location must not stop an inventory run: the problem
    is reported on stderr and the run continues with console logging only.

    Returns:
        Optional[RotatingFileHandler]: The tagged handler, or None if the
        file cannot be opened.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
