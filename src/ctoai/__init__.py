"""ctoai - Python SDK for ops running on the CTO.ai platform."""

__version__ = "0.1.0"
__all__ = ["Sdk", "Ux", "load_config"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "Sdk":
        from .sdk import Sdk

        return Sdk
    if name == "Ux":
        from .ux import Ux

        return Ux
    if name == "load_config":
        from .config import load_config

        return load_config
    raise AttributeError(f"module 'ctoai' has no attribute {name!r}")
