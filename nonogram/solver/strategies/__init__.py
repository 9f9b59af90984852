"""
Strategies Package - Concrete line analyzer implementations.

Import this module to register all built-in strategies.
"""

from .overlap import OverlapStrategy
from .positional import PositionalStrategy

__all__ = [
    "OverlapStrategy",
    "PositionalStrategy",
]
