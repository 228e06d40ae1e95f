"""
Reboot coordination - reboot the nodes that need it and wait until every one
of them answers again
"""
import time
from typing import Callable, Dict, Optional, Set
from glusterinstall.cli import System
from glusterinstall.errors import EXIT_REBOOT_REQUIRED, InstallError
from glusterinstall.libs import common
from glusterinstall.libs.hosts import HostEntry
from glusterinstall.libs.logger import REPORT, get_logger
from glusterinstall.services.remote import RemoteExecutor
logger = get_logger(__name__)


class RebootCoordinator:
    """Tracks the pending reboot set for one run"""

    def __init__(
        self,
        executor: RemoteExecutor,
        interval: float = 10.0,
        sleep: Callable[[float], None] = time.sleep,
        max_rounds: Optional[int] = None,
    ):
        """
        Args:
            executor: Remote executor used to send reboots and probe
            interval: Seconds between reachability rounds
            sleep: Sleep function, replaced by tests
            max_rounds: Give up after this many rounds; None waits forever
        """
        self.executor = executor
        self.interval = interval
        self.max_rounds = max_rounds
        self._sleep = sleep
        self._pending: Dict[str, HostEntry] = {}

    def add(self, host: HostEntry):
        """Mark host as needing a reboot."""
        self._pending[host.hostname] = host

    @property
    def pending(self) -> Set[str]:
        """Hostnames still waiting for a reboot to complete."""
        return set(self._pending)

    def reboot_all(self) -> int:
        """
        Reboot every pending node without waiting, then probe them all each round
        until the pending set is empty
        Returns:
            Number of probe rounds run
        Raises:
            InstallError: max_rounds was given and some nodes never came back
        """
        if not self._pending:
            return 0
        hosts = list(self._pending.values())
        logger.log(REPORT, "-- Rebooting %d node(s): %s", len(hosts), " ".join(h.hostname for h in hosts))
        for host in hosts:
            if not self.executor.send(host.ip, System.reboot(force=True)):
                logger.warning("   could not send reboot to %s", host)
        rounds = 0
        while self._pending:
            # the first probe comes after one interval so nodes are already down
            self._sleep(self.interval)
            rounds += 1
            for name, host in list(self._pending.items()):
                if self.executor.probe(host.ip):
                    logger.info("   %s is back up (round %d)", name, rounds)
                    del self._pending[name]
            if self._pending:
                logger.info("   waiting for %s to come back...", ", ".join(sorted(self._pending)))
                if self.max_rounds is not None and rounds >= self.max_rounds:
                    raise InstallError(f"nodes did not come back after reboot: {', '.join(sorted(self._pending))}")
        logger.log(REPORT, "   ...all rebooted nodes are reachable")
        return rounds


def reboot_self(
    assume_yes: bool = False,
    ask: Callable[[str], str] = input,
    reboot: Callable[[], None] = common.reboot_local_node,
):
    """
    Reboot the control node after asking first
    Raises:
        InstallError: with exit code 99 when the operator declines
    """
    logger.log(REPORT, "*** Your system needs to be rebooted to complete the installation of the FUSE patch.")
    if common.confirm("    Reboot now? [y|N] ", assume_yes=assume_yes, ask=ask):
        reboot()
        return
    raise InstallError(
        "No reboot! You must reboot your system prior to running Hadoop jobs.",
        exit_code=EXIT_REBOOT_REQUIRED,
    )
