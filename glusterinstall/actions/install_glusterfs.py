"""
Install GlusterFS packages and start glusterd
"""
import logging
from .base import Action
from glusterinstall.cli import Gluster, System, SystemCtl, Yum
logger = logging.getLogger(__name__)

GLUSTERD_PATH = "/usr/sbin/glusterd"


class InstallGlusterfsAction(Action):
    """Install GlusterFS server and client packages"""
    description = "glusterfs installation"

    def execute(self) -> bool:
        """Install the packages if needed, then make sure glusterd runs"""
        packages = self.cfg.gluster_packages
        missing = [p for p in packages if not Yum.parse_is_installed(self.run(Yum.is_installed_check(p)).output)]
        if missing:
            logger.info("-- %s: installing %s", self.host.hostname, " ".join(missing))
            if not self.run_checked(Yum().install(missing), "installing GlusterFS", timeout=1800):
                return False
        else:
            logger.debug("   GlusterFS already installed on %s", self.host.hostname)
        if self.cfg.features.glusterd_systemctl:
            command = SystemCtl().service("glusterd").enable_and_start()
        else:
            # some releases ship a unit file that fails to start glusterd
            command = System().start_daemon(GLUSTERD_PATH)
        if not self.run_checked(command, "starting glusterd", timeout=60):
            return False
        version = self.run("gluster --version 2>&1 | head -n 1")
        if version.ok and version.output:
            logger.info("   %s: %s", self.host.hostname, version.output.splitlines()[0])
        return Gluster.parse_is_installed(self.run(Gluster().is_installed_check()).output)
