"""
Step entry point
"""

import logging
import sys

from pydantic import ValidationError

# Configure application logging
logging.basicConfig(
    level=logging.INFO, format="%(levelname)s:\t %(name)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .config import StepError, load_config
from .services.envman import register_fail, register_success
from .step import CalabashIOSStep


def main():
    try:
        config = load_config()
    except ValidationError as e:
        register_fail(f"Issue with input: {e}")

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("")
    config.log_summary()

    try:
        config.validate_inputs()
    except StepError as e:
        register_fail(f"Issue with input: {e}")

    try:
        CalabashIOSStep(config).run()
    except StepError as e:
        register_fail(str(e))
    except ValidationError as e:
        register_fail(f"Unexpected simulator data: {e}")

    register_success()
    logger.info("")
    logger.info("The result is: succeeded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
