"""
Make sure ntpd is installed and running, then report whether the node's clock
is synchronised; never fails the run
"""
import logging
from .base import Action
from glusterinstall.cli import System, SystemCtl, Yum
from glusterinstall.cli.system import NTP_NOT_SYNCED, NTP_SYNCED
logger = logging.getLogger(__name__)

NTP_PACKAGE = "ntp"
NTPD_PATH = "/usr/sbin/ntpd"


class VerifyNtpAction(Action):
    """Install and start ntpd, then check ntpstat and warn about unsynchronised clocks"""
    description = "ntp verification"
    feature = "verify_ntp"

    def execute(self) -> bool:
        logger.info("-- %s: verifying NTP is running", self.host.hostname)
        if not Yum.parse_is_installed(self.run(Yum.is_installed_check(NTP_PACKAGE)).output):
            logger.info("   Installing NTP on %s", self.host.hostname)
            if not self.run_checked(Yum().install([NTP_PACKAGE]), "installing NTP", timeout=600):
                logger.warning("   WARNING: NTP could not be installed on %s", self.host.hostname)
                return True
        # -qg sets the clock once even when it is far off
        if not self.run_checked(System().start_daemon(NTPD_PATH, "-qg"), "starting ntpd"):
            logger.warning("   WARNING: ntpd could not be started on %s", self.host.hostname)
        boot = SystemCtl().service("ntpd").sysv(not self.cfg.features.glusterd_systemctl)
        if not self.run_checked(boot.enable(), "enabling ntpd at boot"):
            logger.warning("   WARNING: ntpd will not start on reboot of %s", self.host.hostname)
        status = self.run(System.ntp_status())
        if status.exit_code == NTP_SYNCED:
            logger.debug("   NTP is synchronized on %s", self.host.hostname)
        elif status.exit_code == NTP_NOT_SYNCED:
            logger.info("   NTP is NOT synchronized on %s", self.host.hostname)
        else:
            logger.warning("   WARNING: NTP state on %s is indeterminate", self.host.hostname)
        return True
