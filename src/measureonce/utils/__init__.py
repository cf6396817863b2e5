"""Utility modules for measureonce."""

from measureonce.utils.display import StatusDisplay, LiveLogger

__all__ = [
    "StatusDisplay",
    "LiveLogger",
]
