"""
Map every node's IP to its hostname in /etc/hosts
"""
import logging
from .base import Action
from glusterinstall.cli import FileOps
logger = logging.getLogger(__name__)

ETC_HOSTS = "/etc/hosts"


class FixupEtcHostsAction(Action):
    """Append missing "<ip> <hostname>" lines to /etc/hosts"""
    description = "etc hosts fixup"

    def execute(self) -> bool:
        logger.info("-- %s: setting up IP -> hostname mapping", self.host.hostname)
        for entry in self.registry:
            # a node already named anywhere in the file is left alone
            command = FileOps().append_if_missing(ETC_HOSTS, f"{entry.ip} {entry.hostname}", match=entry.hostname)
            if not self.run_checked(command, f"adding {entry.hostname} to {ETC_HOSTS}"):
                return False
        return True
