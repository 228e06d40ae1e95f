"""
Let the Hadoop service users read gluster extended attributes without a password
"""
import logging
from .base import Action
from glusterinstall.cli import FileOps
logger = logging.getLogger(__name__)

SUDOERS_DIR = "/etc/sudoers.d"
SUDOERS_PATH = f"{SUDOERS_DIR}/20_gluster"
SUDOERS_MODE = "440"
SUDOERS_ACCESS = "ALL= NOPASSWD: /usr/bin/getfattr"


class ConfigureSudoersAction(Action):
    """Create /etc/sudoers.d/20_gluster for the configured users"""
    description = "sudoers setup"
    feature = "configure_sudoers"

    def execute(self) -> bool:
        logger.info("-- %s: prepping %s for user access exceptions", self.host.hostname, SUDOERS_PATH)
        if not self.run_checked(FileOps().mkdir(SUDOERS_DIR), f"creating {SUDOERS_DIR}"):
            return False
        for user in self.cfg.permissions.sudo_users:
            line = f"{user} {SUDOERS_ACCESS}"
            if not self.run_checked(FileOps().append_if_missing(SUDOERS_PATH, line), f"adding {user} to sudoers"):
                return False
        # sudo ignores files that are group or world writable
        return self.run_checked(FileOps().chmod(SUDOERS_PATH, SUDOERS_MODE), f"chmod {SUDOERS_PATH}")
