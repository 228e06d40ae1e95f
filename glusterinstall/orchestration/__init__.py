"""Orchestrators for the install and cleanup workflows."""
from .dispatcher import Dispatcher, DispatchResult, RemoteStep  # noqa: F401
from .gluster import (  # noqa: F401
    apply_volume_options,
    cleanup_cluster,
    create_trusted_pool,
    create_volume,
    mount_volume,
    prepare_bricks,
    start_volume,
)
from .prep import prepare_nodes  # noqa: F401
from .prober import probe_hosts, verify_deploy_setup  # noqa: F401
from .reboot import RebootCoordinator, reboot_self  # noqa: F401
from .session import InstallSession  # noqa: F401
__all__ = [
    "Dispatcher",
    "DispatchResult",
    "RemoteStep",
    "apply_volume_options",
    "cleanup_cluster",
    "create_trusted_pool",
    "create_volume",
    "mount_volume",
    "prepare_bricks",
    "start_volume",
    "prepare_nodes",
    "probe_hosts",
    "verify_deploy_setup",
    "RebootCoordinator",
    "reboot_self",
    "InstallSession",
]
