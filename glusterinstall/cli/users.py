"""
User and group management command wrappers with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper


class Group(CommandWrapper):
    """Wrapper for group-related commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._name: Optional[str] = None

    def name(self, value: str) -> "Group":
        """Set group name (returns self for chaining)."""
        self._name = value
        return self

    def _require_name(self) -> str:
        if not self._name:
            raise ValueError("Group name must be set")
        return shlex.quote(self._name)

    def add(self) -> str:
        """Generate command to add the group unless it exists."""
        name = self._require_name()
        return f"getent group {name} >/dev/null || groupadd {name} 2>&1"


class User(CommandWrapper):
    """Wrapper for user-related commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._username: Optional[str] = None
        self._group: Optional[str] = None
        self._system: bool = False

    def username(self, name: str) -> "User":
        """Set username (returns self for chaining)."""
        self._username = name
        return self

    def group(self, name: str) -> "User":
        """Set primary group (returns self for chaining)."""
        self._group = name
        return self

    def system(self, value: bool = True) -> "User":
        """Create a system account (returns self for chaining)."""
        self._system = value
        return self

    def _require_username(self) -> str:
        if not self._username:
            raise ValueError("Username must be set")
        return shlex.quote(self._username)

    def add(self) -> str:
        """Generate command to add the user unless it exists."""
        name = self._require_username()
        parts = ["useradd"]
        if self._system:
            parts.append("--system")
        if self._group:
            parts.extend(["-g", shlex.quote(self._group)])
        parts.append(name)
        return f"id -u {name} >/dev/null 2>&1 || {' '.join(parts)} 2>&1"
