"""
Simulator descriptor models
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SimctlDevice(BaseModel):
    """One device entry of `xcrun simctl list devices --json`"""

    model_config = ConfigDict(extra="ignore")

    name: str
    udid: str
    state: str = "Unknown"
    isAvailable: Optional[bool] = None
    # Xcode 8-10 report availability as a string, e.g. "(available)"
    availability: Optional[str] = None

    @property
    def available(self) -> bool:
        if self.isAvailable is not None:
            return self.isAvailable
        if self.availability is not None:
            return "unavailable" not in self.availability
        return True


class SimulatorInfo(BaseModel):
    """A resolved simulator the tests will target"""

    name: str
    udid: str
    status: str
    os_version: str  # e.g. "iOS 10.3"

    @property
    def id(self) -> str:
        return self.udid
