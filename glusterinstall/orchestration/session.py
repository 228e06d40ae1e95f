"""
Orchestration session - the state one install run carries from phase to phase
"""
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Set
from glusterinstall.libs import common
from glusterinstall.libs.config import InstallConfig
from glusterinstall.libs.hosts import HostEntry, HostRegistry
from glusterinstall.libs.logger import get_logger
from glusterinstall.libs.poller import ConvergencePoller
from glusterinstall.services.remote import RemoteExecutor
from .dispatcher import Dispatcher
from .reboot import RebootCoordinator
logger = get_logger(__name__)


@dataclass
class InstallSession:  # pylint: disable=too-many-instance-attributes
    """Owned by the top-level command; passed to every phase"""
    cfg: InstallConfig
    registry: HostRegistry
    executor: RemoteExecutor
    dispatcher: Dispatcher
    poller: ConvergencePoller
    reboots: RebootCoordinator
    local_ips: Set[str] = field(default_factory=set)
    deferred_self_reboot: bool = False

    @classmethod
    def create(
        cls,
        cfg: InstallConfig,
        registry: HostRegistry,
        executor: RemoteExecutor,
        sleep: Callable[[float], None] = time.sleep,
        local_ips: Optional[Set[str]] = None,
    ) -> "InstallSession":
        """Build a session with the pollers and coordinators cfg asks for."""
        if local_ips is None:
            local_ips = common.local_addresses(cfg.install_from_ip)
        return cls(
            cfg=cfg,
            registry=registry,
            executor=executor,
            dispatcher=Dispatcher(executor),
            poller=ConvergencePoller(interval=cfg.poll.interval, max_ticks=cfg.poll.max_ticks, sleep=sleep),
            reboots=RebootCoordinator(executor, interval=cfg.poll.reboot_interval, sleep=sleep),
            local_ips=set(local_ips),
        )

    @property
    def coordinator(self) -> HostEntry:
        return self.registry.coordinator

    def is_control_node(self, host: HostEntry) -> bool:
        """True when host is the machine running the installer."""
        return host.ip in self.local_ips

    def request_reboot(self, host: HostEntry):
        """Queue a reboot; the control node's own reboot waits until the very end."""
        if self.is_control_node(host):
            logger.info("   reboot of %s (this node) deferred until the install completes", host.hostname)
            self.deferred_self_reboot = True
        else:
            self.reboots.add(host)
