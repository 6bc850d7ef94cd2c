"""
Dotted version string helpers.
"""

import re
from typing import Iterable, List, Optional


def _normalize(version: str) -> List[int]:
    parts = [x for x in re.sub(r"[^\d.]", "", version).split(".") if x]
    return [int(x) for x in parts] or [0]


def compare_versions(v1: str, v2: str) -> int:
    """Compare two version strings. Returns -1 if v1 < v2, 0 if equal, 1 if v1 > v2"""
    v1_parts = _normalize(v1)
    v2_parts = _normalize(v2)

    # Pad shorter version with zeros
    max_len = max(len(v1_parts), len(v2_parts))
    v1_parts.extend([0] * (max_len - len(v1_parts)))
    v2_parts.extend([0] * (max_len - len(v2_parts)))

    for i in range(max_len):
        if v1_parts[i] < v2_parts[i]:
            return -1
        elif v1_parts[i] > v2_parts[i]:
            return 1

    return 0


def latest_version(versions: Iterable[str]) -> Optional[str]:
    """Return the highest version, keeping the first one seen on ties"""
    latest = None
    for version in versions:
        if latest is None or compare_versions(version, latest) > 0:
            latest = version
    return latest
