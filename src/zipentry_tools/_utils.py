from __future__ import annotations

import logging
import sys
from typing import NoReturn

LOGGING_FORMAT = (
    "[%(asctime)s][%(levelname)s]-%(name)s:%(funcName)s:%(lineno)d,%(message)s"
)


def configure_logging(log_level):
    logging.basicConfig(level=logging.CRITICAL, format=LOGGING_FORMAT, force=True)
    _tool_logger = logging.getLogger("zipentry_tools")
    _tool_logger.setLevel(log_level)
    _libs_logger = logging.getLogger("zipentry_libs")
    _libs_logger.setLevel(log_level)


def exit_with_err_msg(err_msg: str, exit_code: int = 1) -> NoReturn:
    print(f"ERR: {err_msg}")
    sys.exit(exit_code)


def parse_int(_in: str) -> int:
    """Parse decimal, or hex/octal/binary with prefix."""
    return int(_in, 0)
