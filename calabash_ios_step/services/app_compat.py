"""
Xamarin fat .app handling.

Xamarin.iOS builds for ``i386 + x86_64`` place each architecture's payload in
``.monotouch-32`` / ``.monotouch-64`` inside the bundle. The simulator needs
the matching payload in the bundle root, so a copy of the app is rewritten.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Union

from ..config import StepError

logger = logging.getLogger(__name__)

MONOTOUCH_32_DIR = ".monotouch-32"
MONOTOUCH_64_DIR = ".monotouch-64"


def is_fat_app(app_path: Union[str, Path]) -> bool:
    app = Path(app_path)
    return (app / MONOTOUCH_32_DIR).is_dir() and (app / MONOTOUCH_64_DIR).is_dir()


def _move_dir_contents(src: Path, dst: Path):
    for item in sorted(src.iterdir()):
        target = dst / item.name
        if item.is_dir() and not item.is_symlink():
            if target.is_symlink() or target.is_file():
                target.unlink()
            # merge into an existing directory, payload files win
            shutil.copytree(item, target, symlinks=True, dirs_exist_ok=True)
            shutil.rmtree(item)
            continue
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        shutil.move(str(item), str(target))


def create_compatible_app(app_path: Union[str, Path], is_64bit: bool) -> Path:
    """Copy the app into a temp dir and lift the matching payload into its root"""
    app = Path(app_path)
    tmp_dir = Path(tempfile.mkdtemp(prefix="_calabash_ios_"))
    new_app_path = tmp_dir / app.name

    logger.warning(f"Creating compatible .app file at: {new_app_path}")
    try:
        shutil.copytree(app, new_app_path, symlinks=True)
    except (OSError, shutil.Error) as e:
        raise StepError(f"Failed to copy .app to ({new_app_path}), error: {e}") from e

    payload_dir = MONOTOUCH_64_DIR if is_64bit else MONOTOUCH_32_DIR
    logger.warning(f"Copy files from {payload_dir} dir...")
    try:
        _move_dir_contents(new_app_path / payload_dir, new_app_path)
    except OSError as e:
        raise StepError(f"Failed to copy {payload_dir} files, error: {e}") from e

    return new_app_path


def ensure_compatible_app(app_path: str, simulator_device: str, is_64bit_check) -> str:
    """Return an app path the simulator can launch.

    ``is_64bit_check`` maps the simulator device name to whether it runs
    x86_64 binaries.
    """
    if not app_path or not is_fat_app(app_path):
        return app_path

    logger.warning("The .app file generated for 'i386 + x86_64' architecture")

    is_64bit = is_64bit_check(simulator_device)
    logger.warning(f"Simulator is 64-bit architecture: {is_64bit}")

    return str(create_compatible_app(app_path, is_64bit))
