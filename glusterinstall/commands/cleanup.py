"""Cleanup command orchestration."""
from __future__ import annotations
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional
from glusterinstall.errors import InstallError
from glusterinstall.libs import common
from glusterinstall.libs.command import Command
from glusterinstall.libs.logger import SUMMARY, get_logger
from glusterinstall.orchestration import InstallSession, cleanup_cluster, verify_deploy_setup
from glusterinstall.services.remote import RemoteExecutor
logger = get_logger(__name__)


@dataclass
class Cleanup(Command):
    """Tears down the volume, pool and mounts of a previous install."""
    executor: Optional[RemoteExecutor] = field(default=None)
    ask: Callable[[str], str] = field(default=input)
    is_root: Callable[[], bool] = field(default=common.is_root)

    def run(self, args):
        """Execute the cleanup workflow."""
        try:
            registry = verify_deploy_setup(self.cfg, self.executor, is_root=self.is_root)
            prompt = f"Remove volume {self.cfg.vol_name} and wipe {self.cfg.brick_dir} on {len(registry)} node(s)? [y|N] "
            if not common.confirm(prompt, assume_yes=self.cfg.assume_yes, ask=self.ask):
                logger.log(SUMMARY, "Cleanup cancelled")
                return
            session = InstallSession.create(self.cfg, registry, self.executor)
            logger.log(SUMMARY, "-- Cleaning up (un-mounting, deleting volume, etc.)")
            cleanup_cluster(session)
            logger.log(SUMMARY, "-- Cleanup complete")
        except InstallError as err:
            logger.error("ERROR: %s", err)
            sys.exit(err.exit_code)
        finally:
            self.executor.close()
