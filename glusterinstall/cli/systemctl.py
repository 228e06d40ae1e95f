"""
Service control command wrapper with fluent API
"""
import logging
import shlex
from typing import Optional
from .base import CommandWrapper
logger = logging.getLogger(__name__)


class SystemCtl(CommandWrapper):
    """Wrapper for systemctl commands, with a SysV fallback, using fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._service: Optional[str] = None
        self._sysv: bool = False

    def service(self, name: str) -> "SystemCtl":
        """Set service name (returns self for chaining)."""
        self._service = name
        return self

    def sysv(self, value: bool = True) -> "SystemCtl":
        """Use service/chkconfig instead of systemctl (returns self for chaining)."""
        self._sysv = value
        return self

    def _name(self) -> str:
        if not self._service:
            raise ValueError("Service name must be set")
        return shlex.quote(self._service)

    def start(self) -> str:
        """Generate command to start a service"""
        if self._sysv:
            return f"service {self._name()} start 2>&1"
        return f"systemctl start {self._name()} 2>&1"

    def enable(self) -> str:
        """Generate command to enable a service at boot"""
        if self._sysv:
            return f"chkconfig {self._name()} on 2>&1"
        return f"systemctl enable {self._name()} 2>&1"

    def disable(self) -> str:
        """Generate command to disable a service at boot"""
        if self._sysv:
            return f"chkconfig {self._name()} off 2>&1"
        return f"systemctl disable {self._name()} 2>&1"

    def enable_and_start(self) -> str:
        """Generate command to enable and start a service"""
        return f"{self.enable()} && {self.start()}"

