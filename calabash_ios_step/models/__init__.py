"""
Pydantic models for the calabash iOS step
"""

from .simulator import SimctlDevice, SimulatorInfo

__all__ = ["SimctlDevice", "SimulatorInfo"]
