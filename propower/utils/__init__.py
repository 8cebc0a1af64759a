"""
ProPower Utilities Package.
Internal utilities - not part of public API.
"""

from . import formatters, validators

__all__ = [
    "formatters",
    "validators",
]
