"""
External integrations used by the step
"""

from .envman import register_fail, register_success
from .simulator import SimulatorNotFoundError

__all__ = ["register_fail", "register_success", "SimulatorNotFoundError"]
