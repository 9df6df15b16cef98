"""CQC public API integration."""

from .client import CQCClient

__all__ = ["CQCClient"]
