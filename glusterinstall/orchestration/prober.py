"""
Deployment pre-flight checks: local privileges, hosts file and SSH reachability
"""
from typing import Callable, List, Optional, Sequence
from glusterinstall.errors import ValidationError
from glusterinstall.libs import common
from glusterinstall.libs.config import InstallConfig
from glusterinstall.libs.hosts import HostEntry, HostRegistry, check_replica_count, parse_host_lines
from glusterinstall.libs.logger import get_logger
from glusterinstall.services.remote import RemoteExecutor
logger = get_logger(__name__)


def probe_hosts(executor: RemoteExecutor, entries: Sequence[HostEntry]) -> List[str]:
    """
    Check that every host accepts a password-less, prompt-free session
    Args:
        executor: Remote executor
        entries: Hosts to check
    Returns:
        One error message per unreachable host
    """
    errors = []
    for entry in entries:
        logger.debug("   probing %s", entry)
        if not executor.probe(entry.ip):
            errors.append(f"cannot ssh to {entry.hostname} ({entry.ip}) as root without a password")
    return errors


def verify_deploy_setup(
    cfg: InstallConfig,
    executor: RemoteExecutor,
    is_root: Optional[Callable[[], bool]] = None,
) -> HostRegistry:
    """
    Collect every setup problem before touching any node
    Args:
        cfg: Installer configuration
        executor: Remote executor used for the connectivity probe
        is_root: Privilege check, replaced by tests
    Returns:
        HostRegistry for the run
    Raises:
        ValidationError: listing all problems found
    """
    logger.info("-- Verifying the deploy environment, including the \"hosts\" file format:")
    errors: List[str] = []
    if not (is_root or common.is_root)():
        errors.append("must be run as root")
    entries: List[HostEntry] = []
    hosts_path = cfg.hosts_path
    if not hosts_path.is_file():
        errors.append(f'"{hosts_path}" file is missing')
    else:
        entries, line_errors = parse_host_lines(hosts_path.read_text(encoding="utf-8"), str(hosts_path))
        errors.extend(line_errors)
        if not line_errors:
            errors.extend(check_replica_count(len(entries), cfg.replica, str(hosts_path)))
        errors.extend(probe_hosts(executor, entries))
    if errors:
        raise ValidationError(errors)
    logger.info("   ...verified")
    return HostRegistry(hosts=tuple(entries), replica=cfg.replica)
