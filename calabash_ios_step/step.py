"""
Calabash iOS step: resolve a simulator, install calabash-cucumber, run cucumber
"""

import logging
from pathlib import Path
from typing import List, Optional

from .config import StepConfig, StepError
from .constants import (
    APP_ENV,
    BUNDLE_GEMFILE_ENV,
    CALABASH_CUCUMBER_GEM,
    DEFAULT_OS_NAME,
    DEVICE_TARGET_ENV,
    LATEST_OS_VERSION,
)
from .models.simulator import SimulatorInfo
from .services import app_compat, gemfile_lock, ruby, simulator
from .utils.command import Command, CommandError

logger = logging.getLogger(__name__)


class CalabashIOSStep:
    """Runs the phases of the step in order, raising StepError on the first failure"""

    steps = [
        {"id": "simulator", "name": "Collecting simulator info..."},
        {"id": "app", "name": "Ensuring app compatibility..."},
        {"id": "version", "name": "Determining calabash-cucumber version..."},
        {"id": "install", "name": "Installing calabash-cucumber..."},
        {"id": "cucumber", "name": "Running cucumber test..."},
    ]

    def __init__(self, config: StepConfig):
        self.config = config
        self.options: List[str] = config.split_options()

        self.simulator: Optional[SimulatorInfo] = None
        self.app_path: str = config.app_path
        self.work_dir: Path = Path(config.work_dir).expanduser().resolve()
        self.gemfile_path: str = ""
        self.use_bundler: bool = False
        self.lockfile_version: str = ""

    def run(self):
        for step in self.steps:
            logger.info("")
            logger.info(step["name"])
            getattr(self, f"_run_{step['id']}")()

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _run_simulator(self):
        self.simulator = self.collect_simulator()
        logger.info(
            f"Simulator ({self.simulator.name}), id: ({self.simulator.udid}), "
            f"status: {self.simulator.status}"
        )

    def _run_app(self):
        self.app_path = app_compat.ensure_compatible_app(
            self.app_path,
            self.config.simulator_device,
            simulator.is_64bit_architecture,
        )

    def _run_version(self):
        self.resolve_gem_version()

    def _run_install(self):
        self.install_calabash_cucumber()

    def _run_cucumber(self):
        cmd = self.cucumber_command()
        logger.info(f"$ {cmd.printable_args()}")
        logger.info("")
        try:
            cmd.run()
        except CommandError as e:
            raise CommandError(f"cucumber failed, error: {e}", e.returncode) from e

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def collect_simulator(self) -> SimulatorInfo:
        device = self.config.simulator_device
        os_version = self.config.simulator_os_version

        try:
            if os_version == LATEST_OS_VERSION:
                info, version = simulator.get_latest_simulator_info_and_version(
                    DEFAULT_OS_NAME, device
                )
                logger.info(f"Latest os version: {version}")
                return info
            return simulator.get_simulator_info(os_version, device)
        except StepError as e:
            raise StepError(f"Failed to get simulator info, error: {e}") from e

    def resolve_gem_version(self):
        """Decide between an explicit version, bundler, or the latest gem"""
        if self.config.gem_file_path:
            self.gemfile_path = str(Path(self.config.gem_file_path).expanduser().resolve())

        if self.gemfile_path:
            gemfile = Path(self.gemfile_path)
            if gemfile.exists():
                logger.info(f"Gemfile exists at: {gemfile}")

                lock_path = gemfile_lock.gemfile_lock_path(gemfile)
                if lock_path.exists():
                    logger.info(f"Gemfile.lock exists at: {lock_path}")
                    try:
                        self.lockfile_version = (
                            gemfile_lock.calabash_cucumber_version_from_gemfile_lock(lock_path)
                        )
                    except OSError as e:
                        raise StepError(
                            f"Failed to get calabash-cucumber version from Gemfile.lock, error: {e}"
                        ) from e
                    logger.info(
                        f"calabash-cucumber version in Gemfile.lock: {self.lockfile_version}"
                    )
                    self.use_bundler = True
                else:
                    logger.warning(
                        f"Gemfile.lock not found with calabash-cucumber gem at: {lock_path}"
                    )
            else:
                logger.warning(f"Gemfile not found with calabash-cucumber gem at: {gemfile}")

        if self.config.calabash_cucumber_version:
            logger.info(
                f"using calabash-cucumber version: {self.config.calabash_cucumber_version}"
            )
        elif self.use_bundler:
            logger.info("using calabash-cucumber with bundler")
        else:
            logger.info("using calabash-cucumber latest version")

    def install_calabash_cucumber(self):
        version = self.config.calabash_cucumber_version

        if version:
            if ruby.is_gem_installed(CALABASH_CUCUMBER_GEM, version):
                logger.info(f"calabash-cucumber {version} installed")
                return
            ruby.run_commands(ruby.gem_install_commands(CALABASH_CUCUMBER_GEM, version))
        elif self.use_bundler:
            cmd = ruby.bundle_install_command(self.gemfile_path)
            logger.info(f"$ {cmd.printable_args()}")
            try:
                cmd.run()
            except CommandError as e:
                raise CommandError(f"bundle install failed, error: {e}", e.returncode) from e
        else:
            ruby.run_commands(ruby.gem_install_commands(CALABASH_CUCUMBER_GEM))

    def cucumber_command(self) -> Command:
        if self.simulator is None:
            raise StepError("simulator must be resolved before running cucumber")

        envs = {DEVICE_TARGET_ENV: self.simulator.udid}
        if self.app_path:
            envs[APP_ENV] = self.app_path

        args = ["cucumber"]
        if self.config.calabash_cucumber_version:
            args.append(f"_{self.config.calabash_cucumber_version}_")
        elif self.use_bundler:
            args = ["bundle", "exec"] + args
            envs[BUNDLE_GEMFILE_ENV] = self.gemfile_path

        args += self.options

        return Command(*args, envs=envs, cwd=self.work_dir)
