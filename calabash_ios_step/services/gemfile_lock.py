"""
Gemfile.lock parsing
"""

import re
from pathlib import Path
from typing import Union

_CALABASH_CUCUMBER_PATTERN = re.compile(r"calabash-cucumber \((.+)\)")


def calabash_cucumber_version_from_gemfile_lock_content(content: str) -> str:
    """Return the calabash-cucumber version pinned in the first lockfile block.

    Only the lines from ``specs:`` up to the first blank line are considered,
    so entries in later sections (DEPENDENCIES, PLATFORMS) never match.
    Returns an empty string when the gem is not listed.
    """
    relevant_lines = []
    specs_start = False
    for line in content.split("\n"):
        if "specs:" in line:
            specs_start = True

        if line.strip(" ") == "":
            break

        if specs_start:
            relevant_lines.append(line)

    for line in relevant_lines:
        match = _CALABASH_CUCUMBER_PATTERN.search(line)
        if match:
            return match.group(1)

    return ""


def calabash_cucumber_version_from_gemfile_lock(gemfile_lock_path: Union[str, Path]) -> str:
    content = Path(gemfile_lock_path).read_text(encoding="utf-8")
    return calabash_cucumber_version_from_gemfile_lock_content(content)


def gemfile_lock_path(gemfile_path: Union[str, Path]) -> Path:
    """The lockfile bundler writes next to a Gemfile"""
    return Path(gemfile_path).parent / "Gemfile.lock"
