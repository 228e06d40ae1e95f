"""Install command orchestration."""
from __future__ import annotations
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Set, Type
from glusterinstall import __version__
from glusterinstall.actions import Action
from glusterinstall.cli import System
from glusterinstall.errors import EXIT_VALIDATION, InstallError
from glusterinstall.libs import common
from glusterinstall.libs.command import Command
from glusterinstall.libs.logger import REPORT, SUMMARY, VERBOSE_QUIET, get_logger
from glusterinstall.orchestration import (
    InstallSession,
    apply_volume_options,
    cleanup_cluster,
    create_trusted_pool,
    create_volume,
    mount_volume,
    prepare_bricks,
    prepare_nodes,
    reboot_self,
    start_volume,
    verify_deploy_setup,
)
from glusterinstall.orchestration.prep import enabled_actions
from glusterinstall.services.remote import RemoteExecutor
logger = get_logger(__name__)

SEPARATOR = "_______________________________________"


@dataclass
class Install(Command):
    """Holds the collaborators of one install run."""
    executor: Optional[RemoteExecutor] = field(default=None)
    sleep: Callable[[float], None] = field(default=time.sleep)
    ask: Callable[[str], str] = field(default=input)
    is_root: Callable[[], bool] = field(default=common.is_root)
    reboot: Callable[[], None] = field(default=common.reboot_local_node)
    local_ips: Optional[Set[str]] = field(default=None)

    def run(self, args):
        """Execute the install workflow, exiting with the code of the failing step."""
        try:
            self._run_install()
        except InstallError as err:
            logger.error("ERROR: %s", err)
            sys.exit(err.exit_code)
        finally:
            self.executor.close()

    def _run_install(self):
        cfg = self.cfg
        logger.log(REPORT, "%s. Begin: gluster-install -- version %s ***", datetime.now().ctime(), __version__)
        registry = verify_deploy_setup(cfg, self.executor, is_root=self.is_root)
        session = InstallSession.create(cfg, registry, self.executor, sleep=self.sleep, local_ips=self.local_ips)
        actions = self._resolve_actions(session)
        if not self._report_deploy_values(session):
            logger.log(REPORT, "Install cancelled, nothing was changed")
            return
        prepare_nodes(session, actions)

        logger.log(SUMMARY, "----------------------------------------")
        logger.log(SUMMARY, "--    Begin cluster configuration     --")
        logger.log(SUMMARY, "----------------------------------------")
        if cfg.new_deploy:
            logger.log(SUMMARY, "-- Cleaning up (un-mounting, deleting volume, etc.)")
            cleanup_cluster(session)
        logger.log(SUMMARY, "-- Setting up brick and volume mounts, creating and starting volume")
        prepare_bricks(session)
        create_trusted_pool(session)
        create_volume(session)
        start_volume(session)
        mount_volume(session)
        logger.log(SUMMARY, "-- Performance config --")
        apply_volume_options(session)

        session.reboots.reboot_all()
        logger.log(REPORT, "%s. End: gluster-install", datetime.now().ctime())
        if session.deferred_self_reboot:
            reboot_self(assume_yes=cfg.assume_yes, ask=self.ask, reboot=self.reboot)

    @staticmethod
    def _resolve_actions(session: InstallSession) -> List[Type[Action]]:
        try:
            return enabled_actions(session)
        except ValueError as err:
            raise InstallError(str(err), exit_code=EXIT_VALIDATION) from err

    def _report_deploy_values(self, session: InstallSession) -> bool:
        """Show what is about to be deployed and ask to go on."""
        cfg = session.cfg
        registry = session.registry
        # first node is taken as representative of the cluster
        os_release = self.executor.run(registry.coordinator.ip, System.os_release())
        logger.log(REPORT, "")
        logger.log(REPORT, "OS:                   %s", os_release.output.strip() if os_release.ok else "unknown")
        logger.log(REPORT, "")
        logger.log(REPORT, "__________ Deployment Values __________")
        logger.log(REPORT, "  Install-from IP:    %s", ", ".join(sorted(session.local_ips)))
        logger.log(REPORT, "  \"hosts\" file:       %s", cfg.hosts_path)
        logger.log(REPORT, "  Number of nodes:    %d", len(registry))
        logger.log(REPORT, "  Volume name:        %s", cfg.vol_name)
        logger.log(REPORT, "  Volume mount:       %s", cfg.vol_mnt)
        logger.log(REPORT, "  # of replicas:      %d", cfg.replica)
        logger.log(REPORT, "  XFS device file:    %s", cfg.brick_dev)
        logger.log(REPORT, "  XFS brick dir:      %s", cfg.brick_dir)
        logger.log(REPORT, "  XFS brick mount:    %s", cfg.brick_mnt)
        logger.log(REPORT, "  M/R scratch dir:    %s", cfg.scratch_dir)
        logger.log(REPORT, "  New install:        %s", cfg.new_deploy)
        logger.log(REPORT, "  Verbose:            %s", cfg.verbose)
        logger.log(REPORT, "  Log file:           %s", cfg.log_file)
        logger.log(REPORT, SEPARATOR)
        if cfg.verbose >= VERBOSE_QUIET:
            return True
        return common.confirm("Continue? [y|N] ", assume_yes=cfg.assume_yes, ask=self.ask)
