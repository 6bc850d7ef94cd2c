"""
Shared pytest fixtures for calabash iOS step tests
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

STEP_ENV_VARS = [
    "work_dir",
    "gem_file_path",
    "app_path",
    "additional_options",
    "simulator_device",
    "simulator_os_version",
    "calabash_cucumber_version",
    "debug",
    "calabash_ios_debug",
]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def simctl_json(fixtures_dir: Path) -> dict:
    """Current simctl JSON (runtime identifiers as keys)"""
    return json.loads((fixtures_dir / "simctl_list.json").read_text())


@pytest.fixture
def simctl_legacy_json(fixtures_dir: Path) -> dict:
    """Xcode 8-10 simctl JSON ("iOS 10.3" runtime names as keys)"""
    return json.loads((fixtures_dir / "simctl_list_legacy.json").read_text())


@pytest.fixture
def gemfile_lock_content(fixtures_dir: Path) -> str:
    return (fixtures_dir / "Gemfile.lock").read_text()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Drop step inputs inherited from the host and run from an empty dir"""
    for name in STEP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.upper(), raising=False)
    # a stray .env in the repo root must not leak into settings
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def fat_app(tmp_path: Path) -> Path:
    """An .app bundle carrying both i386 and x86_64 payloads"""
    app = tmp_path / "build" / "Sample.app"
    (app / ".monotouch-32").mkdir(parents=True)
    (app / ".monotouch-64").mkdir(parents=True)
    (app / "Info.plist").write_text("<plist/>")
    (app / ".monotouch-32" / "Sample.dll").write_text("i386")
    (app / ".monotouch-64" / "Sample.dll").write_text("x86_64")
    (app / ".monotouch-64" / "Sample.exe").write_text("x86_64-exe")
    return app
