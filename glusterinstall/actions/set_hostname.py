"""
Set the node's host name to the name used in the hosts file
"""
import logging
from .base import Action
from glusterinstall.cli import System
logger = logging.getLogger(__name__)


class SetHostnameAction(Action):
    """Persist and apply the node's hostname"""
    description = "set hostname"

    def execute(self) -> bool:
        logger.debug("   setting hostname of %s", self.host)
        return self.run_checked(System().set_hostname(self.host.hostname), "setting hostname")
