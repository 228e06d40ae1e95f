"""GlusterFS cluster setup phases: bricks, trusted pool, volume, mounts."""
from typing import List
from glusterinstall.cli import FileOps, Gluster, Group, Mkfs, Mount, User
from glusterinstall.errors import (
    EXIT_CHMOD,
    EXIT_CHOWN,
    EXIT_FSTAB,
    EXIT_GROUPADD,
    EXIT_MKDIR_BRICK,
    EXIT_MKDIR_SCRATCH,
    EXIT_MKDIR_SYSTEM,
    EXIT_MKDIR_VOL_MNT,
    EXIT_MKFS,
    EXIT_MOUNT_BRICK,
    EXIT_MOUNT_VOL,
    EXIT_POOL_NOT_FORMED,
    EXIT_USERADD,
    EXIT_VOLUME_NOT_CREATED,
    EXIT_VOLUME_NOT_STARTED,
    ConvergenceTimeout,
)
from glusterinstall.libs.hosts import HostEntry
from glusterinstall.libs.logger import get_logger
from .dispatcher import RemoteStep
from .session import InstallSession
logger = get_logger(__name__)

FSTAB = "/etc/fstab"
MKFS_TIMEOUT = 1800


def _gluster() -> Gluster:
    return Gluster().script_mode()


def _on_coordinator(session: InstallSession, command: str):
    return session.executor.run(session.coordinator.ip, command)


def _wait(session: InstallSession, predicate, description: str, exit_code: int, hint: str = ""):
    """Poll predicate; a timeout ends the run with exit_code."""
    result = session.poller.poll(predicate, description)
    if not result.converged:
        message = f"{description}: not observed after {result.ticks} check(s)"
        if hint:
            message += f"\n{hint}"
        raise ConvergenceTimeout(message, exit_code=exit_code)
    logger.debug("   %s...", description)


def pool_formed(session: InstallSession) -> bool:
    """Coordinator sees every other node as a connected peer."""
    result = _on_coordinator(session, Gluster().peer_status())
    if not result.ok:
        return False
    return Gluster.parse_peer_status(result.output).formed(len(session.registry) - 1)


def volume_created(session: InstallSession) -> bool:
    return _on_coordinator(session, Gluster().volume_info(session.cfg.vol_name)).ok


def volume_started(session: InstallSession) -> bool:
    """Every brick of the volume reports Online: Y."""
    result = _on_coordinator(session, Gluster().volume_status_detail(session.cfg.vol_name))
    return result.ok and Gluster.all_bricks_online(result.output)


def cleanup_cluster(session: InstallSession):
    """
    Undo the mounts, volume and pool of a previous run. Every step is best
    effort; failures are logged and the cleanup goes on.
    """
    cfg = session.cfg
    registry = session.registry
    dispatcher = session.dispatcher
    logger.info("  -- un-mounting %s on all nodes...", cfg.vol_mnt)
    for host in registry:
        dispatcher.run(host.ip, [RemoteStep(f"umount {cfg.vol_mnt}", Mount().umount(cfg.vol_mnt))], fatal=False)

    coordinator = registry.coordinator
    logger.info("  -- from node %s:", coordinator.hostname)
    exists = _on_coordinator(session, Gluster().volume_exists_check(cfg.vol_name))
    if Gluster.parse_volume_exists(exists.output):
        logger.info("       stopping and deleting %s volume...", cfg.vol_name)
        dispatcher.run(
            coordinator.ip,
            [
                RemoteStep(f"stop volume {cfg.vol_name}", _gluster().volume_stop(cfg.vol_name)),
                RemoteStep(f"delete volume {cfg.vol_name}", _gluster().volume_delete(cfg.vol_name)),
            ],
            fatal=False,
        )
    peers = Gluster.parse_peer_status(_on_coordinator(session, Gluster().peer_status()).output)
    if peers.count > 0:
        logger.info("       detaching all other nodes from trusted pool...")
        steps = [RemoteStep(f"detach {host.hostname}", _gluster().peer_detach(host.hostname)) for host in registry.peers]
        dispatcher.run(coordinator.ip, steps, fatal=False)

    logger.info("  -- on all nodes: rm %s, umount and rm %s and %s...", cfg.vol_mnt, cfg.brick_dir, cfg.scratch_dir)
    for host in registry:
        steps = [
            RemoteStep(f"rm {cfg.vol_mnt}", FileOps().recursive().remove(cfg.vol_mnt)),
            RemoteStep(f"umount {cfg.brick_dir}", Mount().umount(cfg.brick_dir)),
            RemoteStep(f"rm {cfg.brick_dir}", FileOps().recursive().remove(cfg.brick_dir)),
            RemoteStep(f"rm {cfg.scratch_dir}", FileOps().recursive().remove(cfg.scratch_dir)),
        ]
        dispatcher.run(host.ip, steps, fatal=False)


def brick_steps(session: InstallSession, host: HostEntry) -> List[RemoteStep]:
    """Format, record and mount the brick of one node."""
    cfg = session.cfg
    brick_mount = Mount().fs_type("xfs").options(cfg.mount.brick_options)
    vol_mount = Mount().fs_type("glusterfs").options(cfg.mount.volume_options)
    brick_line = brick_mount.fstab_entry(cfg.brick_dev, cfg.brick_dir)
    vol_line = vol_mount.fstab_entry(f"{host.ip}:/{cfg.vol_name}", cfg.vol_mnt)
    return [
        RemoteStep(
            f"mkfs.xfs {cfg.brick_dev}",
            Mkfs().inode_size(cfg.mount.inode_size).format(cfg.brick_dev),
            EXIT_MKFS,
            timeout=MKFS_TIMEOUT,
        ),
        # volume name is the brick subdir by convention
        RemoteStep(f"mkdir {cfg.brick_mnt}", FileOps().mkdir(cfg.brick_mnt), EXIT_MKDIR_BRICK),
        RemoteStep(f"mkdir {cfg.vol_mnt}", FileOps().mkdir(cfg.vol_mnt), EXIT_MKDIR_VOL_MNT),
        RemoteStep(
            f"append {cfg.brick_dir} to fstab",
            FileOps().append_if_missing(FSTAB, brick_line, match=cfg.brick_dir),
            EXIT_FSTAB,
        ),
        RemoteStep(
            f"append {cfg.vol_mnt} to fstab",
            FileOps().append_if_missing(FSTAB, vol_line, match=cfg.vol_mnt),
            EXIT_FSTAB,
        ),
        RemoteStep(f"mount {cfg.brick_dir}", Mount().mount(cfg.brick_dir), EXIT_MOUNT_BRICK),
        # scratch dir lives on the brick file system, so after the mount
        RemoteStep(f"mkdir {cfg.scratch_dir}", FileOps().mkdir(cfg.scratch_dir), EXIT_MKDIR_SCRATCH),
    ]


def prepare_bricks(session: InstallSession):
    """Run the brick steps on every node; the first failure ends the run."""
    cfg = session.cfg
    logger.info("  -- on all nodes:")
    logger.info("       mkfs.xfs %s...", cfg.brick_dev)
    logger.info("       mkdir %s, %s and %s...", cfg.brick_dir, cfg.vol_mnt, cfg.scratch_dir)
    logger.info("       append mount entries to %s...", FSTAB)
    logger.info("       mount %s...", cfg.brick_dir)
    for host in session.registry:
        session.dispatcher.run(host.ip, brick_steps(session, host))


def create_trusted_pool(session: InstallSession):
    """Probe every other node from the coordinator and wait for the pool."""
    coordinator = session.coordinator
    logger.info("  -- from node %s:", coordinator.hostname)
    logger.info("       creating trusted pool...")
    # a node cannot probe itself
    steps = [
        RemoteStep(f"peer probe {host.hostname}", Gluster().peer_probe(host.hostname), EXIT_POOL_NOT_FORMED)
        for host in session.registry.peers
    ]
    session.dispatcher.run(coordinator.ip, steps)
    _wait(session, lambda: pool_formed(session), "trusted pool created", EXIT_POOL_NOT_FORMED)


def create_volume(session: InstallSession):
    """Create the replicated volume unless it already exists."""
    cfg = session.cfg
    logger.info("       creating %s volume...", cfg.vol_name)
    if volume_created(session):
        logger.info("   volume \"%s\" already exists, not re-creating it", cfg.vol_name)
        return
    bricks = session.registry.bricks(cfg.brick_mnt)
    step = RemoteStep(
        f"create volume {cfg.vol_name}",
        Gluster().volume_create(cfg.vol_name, cfg.replica, bricks),
        EXIT_VOLUME_NOT_CREATED,
    )
    session.dispatcher.run(session.coordinator.ip, [step])
    _wait(session, lambda: volume_created(session), f"volume \"{cfg.vol_name}\" created", EXIT_VOLUME_NOT_CREATED)


def start_volume(session: InstallSession):
    """Start the volume and wait until every brick is online."""
    cfg = session.cfg
    logger.info("       starting %s volume...", cfg.vol_name)
    if volume_started(session):
        logger.info("   volume \"%s\" already started", cfg.vol_name)
        return
    step = RemoteStep(f"start volume {cfg.vol_name}", _gluster().volume_start(cfg.vol_name), EXIT_VOLUME_NOT_STARTED)
    session.dispatcher.run(session.coordinator.ip, [step])
    _wait(
        session,
        lambda: volume_started(session),
        f"volume \"{cfg.vol_name}\" started",
        EXIT_VOLUME_NOT_STARTED,
        hint=f"Try gluster volume status {cfg.vol_name}",
    )


def mount_steps(session: InstallSession) -> List[RemoteStep]:
    """Mount the volume on a node and hand it to the Hadoop service user."""
    cfg = session.cfg
    perms = cfg.permissions
    # owner and mode must be set after the mount or the mount hides them
    return [
        RemoteStep(f"mount {cfg.vol_mnt}", Mount().mount(cfg.vol_mnt), EXIT_MOUNT_VOL),
        RemoteStep(f"mkdir {cfg.system_dir}", FileOps().mkdir(cfg.system_dir), EXIT_MKDIR_SYSTEM),
        RemoteStep(f"groupadd {perms.group}", Group().name(perms.group).add(), EXIT_GROUPADD),
        RemoteStep(
            f"useradd {perms.owner}",
            User().username(perms.owner).group(perms.group).system().add(),
            EXIT_USERADD,
        ),
        RemoteStep(
            f"chown {perms.owner}:{perms.group}",
            " && ".join(
                FileOps().recursive().chown(path, perms.owner, perms.group) for path in (cfg.vol_mnt, cfg.scratch_dir)
            ),
            EXIT_CHOWN,
        ),
        RemoteStep(
            f"chmod {perms.mode}",
            " && ".join(FileOps().recursive().chmod(path, perms.mode) for path in (cfg.vol_mnt, cfg.scratch_dir)),
            EXIT_CHMOD,
        ),
    ]


def mount_volume(session: InstallSession):
    """Mount the volume and set ownership and permissions on every node."""
    cfg = session.cfg
    logger.info("  -- on all nodes:")
    logger.info("       mount %s...", cfg.vol_mnt)
    logger.info("       create %s dir...", cfg.system_dir)
    logger.info("       create %s user and %s group if needed...", cfg.permissions.owner, cfg.permissions.group)
    logger.info("       change owner and permissions...")
    steps = mount_steps(session)
    for host in session.registry:
        session.dispatcher.run(host.ip, steps)


def apply_volume_options(session: InstallSession):
    """Set the non-default volume options; failures are logged only."""
    cfg = session.cfg
    if not cfg.features.perf_config:
        logger.debug("Volume option tuning disabled")
        return
    steps = [
        RemoteStep(f"volume set {option} {value}", Gluster().volume_set(cfg.vol_name, option, str(value)))
        for option, value in cfg.volume_options.items()
    ]
    session.dispatcher.run(session.coordinator.ip, steps, fatal=False)
