"""
Per-node preparation actions
"""
from .base import Action
from .fixup_etc_hosts import FixupEtcHostsAction
from .set_hostname import SetHostnameAction
from .configure_sudoers import ConfigureSudoersAction
from .verify_ntp import VerifyNtpAction
from .install_glusterfs import InstallGlusterfsAction
from .disable_firewall import DisableFirewallAction
from .install_fuse_patch import InstallFusePatchAction
from .registry import get_action_class, resolve_actions

__all__ = [
    "Action",
    "FixupEtcHostsAction",
    "SetHostnameAction",
    "ConfigureSudoersAction",
    "VerifyNtpAction",
    "InstallGlusterfsAction",
    "DisableFirewallAction",
    "InstallFusePatchAction",
    "get_action_class",
    "resolve_actions",
]
