"""
Brick file system and mount command wrappers with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper


class Mkfs(CommandWrapper):
    """Wrapper for mkfs with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._inode_size: Optional[int] = 512

    def inode_size(self, size: Optional[int]) -> "Mkfs":
        """Set inode size, large enough for gluster's extended attributes (returns self for chaining)."""
        self._inode_size = size
        return self

    def format(self, device: str) -> str:
        """Generate command to create a file system on device"""
        parts = ["mkfs", "-t", "xfs"]
        if self._inode_size:
            parts.extend(["-i", f"size={self._inode_size}"])
        parts.append("-f")
        parts.append(shlex.quote(device))
        return " ".join(parts) + " 2>&1"


class Mount(CommandWrapper):
    """Wrapper for mount/umount and fstab entries with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._fs_type: Optional[str] = None
        self._options: Optional[str] = None

    def fs_type(self, value: str) -> "Mount":
        """Set file system type (returns self for chaining)."""
        self._fs_type = value
        return self

    def options(self, value: Optional[str]) -> "Mount":
        """Set mount options (returns self for chaining)."""
        self._options = value
        return self

    def mount(self, target: str, source: Optional[str] = None) -> str:
        """Generate mount command; without source the fstab entry for target is used"""
        parts = ["mount"]
        if source is not None:
            if self._fs_type:
                parts.extend(["-t", self._fs_type])
            if self._options:
                parts.extend(["-o", self._options])
            parts.append(shlex.quote(source))
        parts.append(shlex.quote(target))
        return " ".join(parts) + " 2>&1"

    def umount(self, target: str) -> str:
        """Generate umount command that is a no-op when target is not mounted"""
        quoted = shlex.quote(target)
        return f"if mountpoint -q {quoted}; then umount {quoted} 2>&1; fi"

    def fstab_entry(self, source: str, target: str) -> str:
        """Return the fstab line for source on target"""
        options = self._options or "defaults"
        fs_type = self._fs_type or "auto"
        return f"{source} {target} {fs_type} {options} 0 0"

