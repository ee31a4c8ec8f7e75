"""Installation lifecycle and component wiring."""

from .gamify import GamifyServices
from .models import InitResult, UninstallResult

__all__ = ["GamifyServices", "InitResult", "UninstallResult"]
