"""
Unit tests for dotted version comparison.
"""

import pytest

from calabash_ios_step.utils.versions import compare_versions, latest_version


@pytest.mark.parametrize(
    "v1,v2,expected",
    [
        ("10.3", "10.3", 0),
        ("10.3", "9.3", 1),
        ("9.3", "10.3", -1),
        ("17.10", "17.9", 1),
        ("10", "10.0", 0),
        ("10.3.1", "10.3", 1),
        ("v1.2", "1.2", 0),
    ],
)
def test_compare_versions(v1, v2, expected):
    assert compare_versions(v1, v2) == expected


class TestLatestVersion:
    def test_picks_highest_numerically(self):
        assert latest_version(["9.3", "10.3", "10.2"]) == "10.3"

    def test_double_digit_minor(self):
        assert latest_version(["17.2", "17.10", "16.4"]) == "17.10"

    def test_empty_returns_none(self):
        assert latest_version([]) is None

    def test_accepts_any_iterable(self):
        assert latest_version({"11.0": 1, "8.1": 2}) == "11.0"
