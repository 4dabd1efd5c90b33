"""HTTP client package for the SDK daemon."""

from .client import DaemonClient

__all__ = ["DaemonClient"]
