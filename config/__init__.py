"""
Configuration package initialization.
"""

from .settings import ScanSettings

__all__ = ["ScanSettings"]
