"""
Blocking subprocess wrapper used for every external tool the step calls
(xcrun, gem, bundle, cucumber, envman).
"""

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..config import StepError

logger = logging.getLogger(__name__)


class CommandError(StepError):
    """Raised when an external command cannot start or exits non-zero"""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class Command:
    """An argv list plus the extra environment and working directory to run it with"""

    def __init__(
        self,
        *args: str,
        envs: Optional[Dict[str, str]] = None,
        cwd: Optional[Union[str, Path]] = None,
    ):
        if not args:
            raise ValueError("command requires at least the executable name")
        self.args: List[str] = list(args)
        self.envs: Dict[str, str] = dict(envs or {})
        self.cwd = str(cwd) if cwd else None
        self.stdin: Optional[str] = None

    def append_envs(self, **envs: str) -> "Command":
        self.envs.update(envs)
        return self

    def set_stdin(self, value: str) -> "Command":
        self.stdin = value
        return self

    def printable_args(self) -> str:
        """Shell-quoted argv, as it would be typed in a terminal"""
        return " ".join(shlex.quote(arg) for arg in self.args)

    def _build_env(self) -> Optional[Dict[str, str]]:
        if not self.envs:
            return None
        env = os.environ.copy()
        env.update(self.envs)
        return env

    def _execute(self, capture: bool) -> subprocess.CompletedProcess:
        logger.debug(f"Running: {self.printable_args()}")
        try:
            return subprocess.run(
                self.args,
                cwd=self.cwd,
                env=self._build_env(),
                input=self.stdin,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.PIPE if capture else None,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandError(f"executable not found: {self.args[0]}") from e
        except OSError as e:
            raise CommandError(f"failed to start '{self.printable_args()}': {e}") from e

    def run(self):
        """Run to completion, streaming output to the terminal"""
        result = self._execute(capture=False)
        if result.returncode != 0:
            raise CommandError(
                f"'{self.printable_args()}' exited with status {result.returncode}",
                returncode=result.returncode,
            )

    def run_and_return_output(self) -> str:
        """Run to completion and return the trimmed stdout"""
        result = self._execute(capture=True)
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise CommandError(
                f"'{self.printable_args()}' exited with status {result.returncode}: {stderr[:500]}",
                returncode=result.returncode,
            )
        return (result.stdout or "").strip()
