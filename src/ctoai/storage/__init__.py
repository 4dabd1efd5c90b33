"""Local JSON file persistence for op state and config."""

from .kvfile import KVFile

__all__ = ["KVFile"]
