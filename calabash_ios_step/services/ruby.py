"""
Ruby tooling: gem and bundler command construction
"""

import logging
import re
import shutil
from typing import List

from ..constants import BUNDLE_GEMFILE_ENV
from ..utils.command import Command, CommandError

logger = logging.getLogger(__name__)

SYSTEM_RUBY = "system"
BREW_RUBY = "brew"
RBENV_RUBY = "rbenv"
RVM_RUBY = "rvm"
UNKNOWN_RUBY = "unknown"

SYSTEM_RUBY_PATH = "/usr/bin/ruby"
BREW_RUBY_PATHS = ("/usr/local/bin/ruby", "/opt/homebrew/bin/ruby")

# (tool, subcommand) pairs that write into the system gem directory
_SUDO_COMMANDS = {
    ("gem", "install"),
    ("gem", "uninstall"),
    ("bundle", "install"),
    ("bundle", "update"),
}


def ruby_install_type() -> str:
    """Detect which ruby manager provides the `ruby` on PATH"""
    ruby = shutil.which("ruby")
    if not ruby:
        return UNKNOWN_RUBY
    if ruby == SYSTEM_RUBY_PATH:
        return SYSTEM_RUBY
    if ruby in BREW_RUBY_PATHS:
        return BREW_RUBY
    if shutil.which("rvm"):
        return RVM_RUBY
    if shutil.which("rbenv"):
        return RBENV_RUBY
    return UNKNOWN_RUBY


def sudo_needed(install_type: str, args: List[str]) -> bool:
    if install_type != SYSTEM_RUBY or len(args) < 2:
        return False
    return (args[0], args[1]) in _SUDO_COMMANDS


def ruby_command(*args: str) -> Command:
    """Build a ruby tool command, elevated when it writes into the system ruby"""
    if sudo_needed(ruby_install_type(), list(args)):
        return Command("sudo", *args)
    return Command(*args)


def is_gem_installed(gem: str, version: str = "") -> bool:
    """Whether `gem list` reports the gem, optionally at an exact version"""
    output = Command("gem", "list").run_and_return_output()
    return gem_version_installed_in_list_output(output, gem, version)


def gem_version_installed_in_list_output(output: str, gem: str, version: str = "") -> bool:
    """Check `gem list` output lines such as ``calabash-cucumber (0.19.2, 0.18.1)``"""
    pattern = re.compile(r"^" + re.escape(gem) + r" \((.+)\)$")
    for line in output.splitlines():
        match = pattern.match(line.strip())
        if not match:
            continue
        if not version:
            return True
        installed = [
            v.replace("default: ", "").split()[0]
            for v in match.group(1).split(",")
            if v.strip()
        ]
        return version in installed
    return False


def gem_install_commands(gem: str, version: str = "") -> List[Command]:
    """Commands that install a gem, latest when no version is given"""
    args = ["gem", "install", gem, "--no-document"]
    if version:
        args += ["-v", version]

    commands = [ruby_command(*args)]
    if ruby_install_type() == RBENV_RUBY:
        commands.append(Command("rbenv", "rehash"))
    return commands


def bundle_install_command(gemfile_path: str) -> Command:
    cmd = ruby_command("bundle", "install", "--jobs", "20", "--retry", "5")
    cmd.append_envs(**{BUNDLE_GEMFILE_ENV: gemfile_path})
    return cmd


def run_commands(commands: List[Command]):
    """Run commands in order, stopping at the first failure"""
    for cmd in commands:
        logger.info(f"$ {cmd.printable_args()}")
        try:
            cmd.run()
        except CommandError as e:
            raise CommandError(f"command failed, error: {e}", e.returncode) from e
