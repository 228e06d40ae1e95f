"""
Per-node preparation - run the configured prep actions on every node in order
"""
from typing import List, Optional, Type
from glusterinstall.actions import Action, resolve_actions
from glusterinstall.errors import PrepError
from glusterinstall.libs.hosts import HostEntry
from glusterinstall.libs.logger import SUMMARY, get_logger
from .session import InstallSession
logger = get_logger(__name__)


def enabled_actions(session: InstallSession) -> List[Type[Action]]:
    """Configured prep actions whose feature flag is on, in configured order."""
    features = session.cfg.features
    return [cls for cls in resolve_actions(session.cfg.prep_actions) if features.enabled(cls.feature)]


def prepare_node(session: InstallSession, host: HostEntry, actions: List[Type[Action]]):
    """
    Run every prep action on one node
    Raises:
        PrepError: an action reported failure
    """
    reboot_required = False
    for action_cls in actions:
        action = action_cls(executor=session.executor, host=host, registry=session.registry, cfg=session.cfg)
        if not action.execute():
            raise PrepError(f"{host.hostname}: {action_cls.description} failed")
        reboot_required = reboot_required or action.reboot_required
    if reboot_required:
        session.request_reboot(host)


def prepare_nodes(session: InstallSession, actions: Optional[List[Type[Action]]] = None):
    """Prepare every node, one node fully before the next."""
    if actions is None:
        actions = enabled_actions(session)
    logger.debug("Prep actions: %s", ", ".join(cls.description for cls in actions) or "none")
    for host in session.registry:
        logger.log(SUMMARY, "--------------------------------------------")
        logger.log(SUMMARY, "-- Installing on %s", host)
        logger.log(SUMMARY, "--------------------------------------------")
        prepare_node(session, host, actions)
        logger.log(SUMMARY, "-- Done installing on %s", host)
