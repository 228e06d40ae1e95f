"""
Remote execution interface used by the orchestration, and its SSH implementation
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional
from glusterinstall.libs.config import SSHConfig
from .ssh import SSHService
logger = logging.getLogger(__name__)

# exit code reported when no exit status came back (transport failure, timeout)
EXIT_UNREACHABLE = 255


@dataclass
class RemoteResult:
    """Outcome of one remote command"""
    host: str
    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def __bool__(self):
        return self.ok


class RemoteExecutor:
    """Runs shell commands on a named host"""

    def run(self, host: str, command: str, timeout: Optional[int] = None) -> RemoteResult:
        """Run command on host and wait for it to finish."""
        raise NotImplementedError

    def probe(self, host: str) -> bool:
        """True when host accepts a non-interactive session."""
        raise NotImplementedError

    def send(self, host: str, command: str) -> bool:
        """Start command on host without waiting for it."""
        raise NotImplementedError

    def close(self):
        """Release any open connections."""


class SSHExecutor(RemoteExecutor):
    """RemoteExecutor over paramiko, one persistent connection per address"""

    def __init__(self, ssh_config: SSHConfig):
        self.ssh_config = ssh_config
        self._services: Dict[str, SSHService] = {}

    def _service(self, host: str) -> SSHService:
        service = self._services.get(host)
        if service is None:
            service = SSHService(host, self.ssh_config)
            self._services[host] = service
        return service

    def run(self, host: str, command: str, timeout: Optional[int] = None) -> RemoteResult:
        output, exit_code = self._service(host).execute(command, timeout=timeout)
        if exit_code is None:
            return RemoteResult(host=host, exit_code=EXIT_UNREACHABLE, output=output or "")
        return RemoteResult(host=host, exit_code=exit_code, output=output or "")

    def probe(self, host: str) -> bool:
        service = self._service(host)
        # a cached transport may predate a reboot
        service.disconnect()
        if not service.connect():
            return False
        _, exit_code = service.execute("true", timeout=self.ssh_config.connect_timeout)
        return exit_code == 0

    def send(self, host: str, command: str) -> bool:
        return self._service(host).send(command)

    def close(self):
        for service in self._services.values():
            service.disconnect()
        self._services.clear()
