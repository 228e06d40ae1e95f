"""
Install the patched FUSE kernel packages; the node must reboot afterwards
"""
import logging
from .base import Action
from glusterinstall.cli import FileOps, Yum
logger = logging.getLogger(__name__)

FUSE_REPO_ID = "glusterfs-fuse-patch"
# rpm -q cannot tell a patched kernel from a stock one, so a marker file records the install
FUSE_MARKER = "/var/lib/glusterfs-cluster-install/FUSE_INSTALLED"
FUSE_PACKAGES = ["kernel", "fuse", "fuse-libs"]


class InstallFusePatchAction(Action):
    """Install the FUSE patch once per node and request a reboot"""
    description = "fuse patch installation"
    feature = "install_fuse_patch"

    def execute(self) -> bool:
        logger.info("-- %s: verifying FUSE patch installation", self.host.hostname)
        if FileOps.parse_exists(self.run(FileOps().exists(FUSE_MARKER)).output):
            logger.debug("   ... verified")
            return True
        logger.info("-- %s: installing FUSE patch which may take more than a few seconds...", self.host.hostname)
        if not self.run_checked(Yum.add_repo(FUSE_REPO_ID, self.cfg.fuse_repo_url), "adding FUSE repo"):
            return False
        if not self.run_checked(Yum().enable_repo(FUSE_REPO_ID).install(FUSE_PACKAGES), "installing FUSE patch",
                                timeout=1800):
            return False
        marker_dir = FUSE_MARKER.rsplit("/", 1)[0]
        if not self.run_checked(f"{FileOps().mkdir(marker_dir)} && touch {FUSE_MARKER}", "recording FUSE patch"):
            return False
        logger.info("   A reboot of %s is required and will be done automatically", self.host.hostname)
        self.reboot_required = True
        return True
