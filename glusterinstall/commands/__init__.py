"""High-level CLI command implementations."""
from .install import Install  # noqa: F401
from .cleanup import Cleanup  # noqa: F401
__all__ = ["Install", "Cleanup"]
