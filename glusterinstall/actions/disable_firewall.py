"""
Open the node to gluster traffic by flushing and disabling iptables
"""
import logging
from .base import Action
from glusterinstall.cli import System, SystemCtl
logger = logging.getLogger(__name__)


class DisableFirewallAction(Action):
    """Flush iptables rules and keep the firewall off across reboots"""
    description = "firewall disable"
    feature = "disable_firewall"

    def execute(self) -> bool:
        logger.info("-- %s: disabling the firewall", self.host.hostname)
        if not self.run_checked(System().flush_firewall(), "iptables -F"):
            return False
        # a node without the iptables service has nothing to disable
        self.run(SystemCtl().service("iptables").sysv().disable())
        return True
