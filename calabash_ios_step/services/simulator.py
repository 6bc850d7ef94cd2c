"""
Simulator registry lookups backed by `xcrun simctl`
"""

import json
import logging
import re
from typing import Dict, List, Optional, Tuple

from ..config import StepError
from ..constants import DEFAULT_OS_NAME
from ..models.simulator import SimctlDevice, SimulatorInfo
from ..utils.command import Command
from ..utils.versions import latest_version

logger = logging.getLogger(__name__)

# com.apple.CoreSimulator.SimRuntime.iOS-10-3 -> ("iOS", "10.3")
_RUNTIME_ID_PATTERN = re.compile(r"SimRuntime\.([A-Za-z]+)-(\d+(?:-\d+)*)$")
# "iOS 10.3" -> ("iOS", "10.3")
_RUNTIME_NAME_PATTERN = re.compile(r"^([A-Za-z]+) (\d+(?:\.\d+)*)$")

# Simulator models that only run i386 binaries
_32BIT_DEVICES = {
    "iPhone 4s",
    "iPhone 5",
    "iPhone 5c",
    "iPad 2",
    "iPad Retina",
    "iPad mini",
}


class SimulatorNotFoundError(StepError):
    """Raised when no available simulator matches the requested pair"""


def parse_runtime(runtime: str) -> Optional[Tuple[str, str]]:
    """Return (os_name, version) for a simctl runtime key, or None if unrecognized"""
    match = _RUNTIME_ID_PATTERN.search(runtime)
    if match:
        return match.group(1), match.group(2).replace("-", ".")
    match = _RUNTIME_NAME_PATTERN.match(runtime.strip())
    if match:
        return match.group(1), match.group(2)
    return None


def normalize_os_version(os_version: str, os_name: str = DEFAULT_OS_NAME) -> str:
    """Qualify a bare version ("10.3") with the OS name ("iOS 10.3")"""
    os_version = os_version.strip()
    if re.match(r"^\d", os_version):
        return f"{os_name} {os_version}"
    return os_version


def parse_simctl_devices(data: Dict) -> List[SimulatorInfo]:
    """Flatten simctl's {runtime: [device, ...]} JSON into available descriptors"""
    simulators = []
    for runtime, devices in data.get("devices", {}).items():
        parsed = parse_runtime(runtime)
        if not parsed:
            logger.debug(f"Skipping unrecognized runtime: {runtime}")
            continue
        os_name, version = parsed

        for raw in devices:
            device = SimctlDevice.model_validate(raw)
            if not device.available:
                continue
            simulators.append(
                SimulatorInfo(
                    name=device.name,
                    udid=device.udid,
                    status=device.state,
                    os_version=f"{os_name} {version}",
                )
            )
    return simulators


def list_simulators() -> List[SimulatorInfo]:
    """Return every available simulator known to simctl"""
    cmd = Command("xcrun", "simctl", "list", "devices", "--json")
    logger.debug(f"$ {cmd.printable_args()}")
    output = cmd.run_and_return_output()
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise StepError(f"Failed to parse simctl output: {e}") from e
    return parse_simctl_devices(data)


def get_simulator_info(
    os_version: str,
    device: str,
    simulators: Optional[List[SimulatorInfo]] = None,
) -> SimulatorInfo:
    """Find the simulator named `device` on the `os_version` runtime"""
    if simulators is None:
        simulators = list_simulators()

    wanted = normalize_os_version(os_version)
    for info in simulators:
        if info.os_version == wanted and info.name == device:
            return info

    raise SimulatorNotFoundError(
        f"no simulator found with device: {device} and os version: {wanted}"
    )


def get_latest_simulator_info_and_version(
    os_name: str,
    device: str,
    simulators: Optional[List[SimulatorInfo]] = None,
) -> Tuple[SimulatorInfo, str]:
    """Find `device` on the highest `os_name` runtime that offers it"""
    if simulators is None:
        simulators = list_simulators()

    prefix = f"{os_name} "
    candidates = {}
    for info in simulators:
        if info.name != device or not info.os_version.startswith(prefix):
            continue
        version = info.os_version[len(prefix):]
        # first match per runtime wins, same as the exact lookup
        candidates.setdefault(version, info)

    latest = latest_version(candidates)
    if latest is None:
        raise SimulatorNotFoundError(
            f"no {os_name} simulator found with device: {device}"
        )

    info = candidates[latest]
    return info, info.os_version


def is_64bit_architecture(device: str) -> bool:
    """Whether the simulator model runs x86_64 binaries"""
    return device.strip() not in _32BIT_DEVICES
