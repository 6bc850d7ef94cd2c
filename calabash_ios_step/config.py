"""
Step inputs using pydantic-settings
"""

import logging
import shlex
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class StepError(Exception):
    """Base class for every failure that stops the step"""


class ConfigError(StepError):
    """Raised when the step inputs are missing or invalid"""


class StepConfig(BaseSettings):
    """Step inputs, read from un-prefixed environment variables"""

    work_dir: str = ""
    gem_file_path: str = ""
    app_path: str = ""
    additional_options: str = ""

    simulator_device: str = ""
    simulator_os_version: str = ""

    calabash_cucumber_version: str = ""

    debug: bool = Field(False, validation_alias="calabash_ios_debug")

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"

    def log_summary(self):
        """Print every input under a Configs heading"""
        logger.info("Configs:")
        logger.info(f"- WorkDir: {self.work_dir}")
        logger.info(f"- GemFilePath: {self.gem_file_path}")
        logger.info(f"- AppPath: {self.app_path}")
        logger.info(f"- Options: {self.additional_options}")

        logger.info(f"- SimulatorDevice: {self.simulator_device}")
        logger.info(f"- SimulatorOsVersion: {self.simulator_os_version}")

        logger.info(f"- CalabashCucumberVersion: {self.calabash_cucumber_version}")

    def validate_inputs(self):
        """Raise ConfigError describing the first invalid input"""
        if not self.work_dir:
            raise ConfigError("no WorkDir parameter specified")
        if not Path(self.work_dir).is_dir():
            raise ConfigError(f"WorkDir directory not exists at: {self.work_dir}")

        if self.app_path and not Path(self.app_path).is_dir():
            raise ConfigError(f"AppPath directory not exists at: {self.app_path}")

        if not self.simulator_device:
            raise ConfigError("no SimulatorDevice parameter specified")

        if not self.simulator_os_version:
            raise ConfigError("no SimulatorOsVersion parameter specified")

    def split_options(self) -> List[str]:
        """Split additional_options into an argv list using shell quoting"""
        try:
            return shlex.split(self.additional_options)
        except ValueError as e:
            raise ConfigError(
                f"Failed to split additional options ({self.additional_options}), error: {e}"
            ) from e


def load_config() -> StepConfig:
    """Read the step inputs from the current environment"""
    return StepConfig()
