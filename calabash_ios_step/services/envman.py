"""
Result reporting through envman
"""

import logging
import sys
from typing import NoReturn

from ..constants import RESULT_ENV_KEY, RESULT_FAILED, RESULT_SUCCEEDED
from ..utils.command import Command, CommandError

logger = logging.getLogger(__name__)


def export_environment_with_envman(key: str, value: str):
    """Expose `key=value` to later build steps"""
    Command("envman", "add", "--key", key).set_stdin(value).run()


def _export_result(value: str):
    try:
        export_environment_with_envman(RESULT_ENV_KEY, value)
    except CommandError as e:
        logger.warning(f"Failed to export environment: {RESULT_ENV_KEY}, error: {e}")


def register_fail(message: str) -> NoReturn:
    """Log the failure, mark the result as failed and exit 1"""
    logger.error(message)
    _export_result(RESULT_FAILED)
    sys.exit(1)


def register_success():
    _export_result(RESULT_SUCCEEDED)
