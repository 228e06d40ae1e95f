"""
Host-level command wrappers: hostname, firewall, clock sync, reboot
"""
import shlex
from typing import Optional
from .base import CommandWrapper

# ntpstat exit status: 0 synchronised, 1 not synchronised, 2 indeterminate
NTP_SYNCED = 0
NTP_NOT_SYNCED = 1


class System(CommandWrapper):
    """Wrapper for host administration commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""

    def _redirect(self) -> str:
        return " 2>&1"

    def set_hostname(self, name: str) -> str:
        """Generate command that sets the running and persistent host name"""
        quoted = shlex.quote(name)
        return f"echo {quoted} > /etc/hostname && hostname {quoted}{self._redirect()}"

    @staticmethod
    def os_release() -> str:
        """Generate command printing the distribution release"""
        return "cat /etc/redhat-release 2>/dev/null || cat /etc/os-release 2>&1 | head -n 1"

    @staticmethod
    def ntp_status() -> str:
        """Generate command reporting clock synchronisation through its exit status"""
        return "ntpstat >/dev/null 2>&1"

    def flush_firewall(self) -> str:
        """Generate command to flush all iptables rules"""
        return f"iptables -F{self._redirect()}"

    def start_daemon(self, path: str, args: Optional[str] = None) -> str:
        """Generate command to start a daemon directly unless it already runs"""
        name = shlex.quote(path.rsplit("/", 1)[-1])
        command = shlex.quote(path) if args is None else f"{shlex.quote(path)} {args}"
        return f"pgrep -x {name} >/dev/null || {command}{self._redirect()}"

    @staticmethod
    def reboot(force: bool = True) -> str:
        """Generate reboot command"""
        return "reboot -f" if force else "reboot"

