"""
CLI command wrappers with error parsing and structured results
"""
from .base import CommandResult, ErrorType, CommandWrapper
from .gluster import Gluster, PeerStatus
from .files import FileOps
from .mount import Mkfs, Mount
from .users import Group, User
from .yum import Yum
from .systemctl import SystemCtl
from .system import System
__all__ = [
    "CommandResult",
    "ErrorType",
    "CommandWrapper",
    "Gluster",
    "PeerStatus",
    "FileOps",
    "Mkfs",
    "Mount",
    "Group",
    "User",
    "Yum",
    "SystemCtl",
    "System",
]
