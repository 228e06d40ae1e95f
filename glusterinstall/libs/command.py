"""Base class for command classes."""
from dataclasses import dataclass
from glusterinstall.libs.config import InstallConfig


@dataclass
class Command:
    """Base class for command classes."""
    cfg: InstallConfig
