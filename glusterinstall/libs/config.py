"""
Configuration data model - class-based representation of glusterinstall.yaml
merged with command line flags
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from .logger import DEFAULT_LOG_FILE, VERBOSE_SUMMARY

DEFAULT_PREP_ACTIONS = [
    "etc hosts fixup",
    "set hostname",
    "sudoers setup",
    "ntp verification",
    "glusterfs installation",
    "firewall disable",
    "fuse patch installation",
]

DEFAULT_VOLUME_OPTIONS = {
    "quick-read": "off",
    "cluster.eager-lock": "on",
    "performance.stat-prefetch": "off",
}


@dataclass
class SSHConfig:
    """SSH configuration"""
    connect_timeout: int = 10
    default_exec_timeout: int = 600
    read_buffer_size: int = 4096
    poll_interval: float = 0.05
    default_username: str = "root"
    port: int = 22
    key_filename: Optional[str] = None
    look_for_keys: bool = True
    allow_agent: bool = True
    verbose: bool = False


@dataclass
class PollConfig:
    """Convergence and reboot polling"""
    interval: float = 1.0
    max_ticks: int = 10
    reboot_interval: float = 10.0


@dataclass
class MountConfig:
    """Brick file system and fstab mount options"""
    brick_options: str = "noatime,inode64"
    volume_options: str = "entry-timeout=0,attribute-timeout=0,use-readdirp=no,_netdev"
    inode_size: int = 512


@dataclass
class PermissionsConfig:
    """Owner, group and mode applied to the volume mount and scratch dir"""
    owner: str = "mapred"
    group: str = "hadoop"
    mode: str = "1777"
    sudo_users: List[str] = field(default_factory=lambda: ["mapred", "yarn"])


@dataclass
class FeaturesConfig:
    """Optional behaviour toggled per deployment"""
    configure_sudoers: bool = True
    verify_ntp: bool = True
    disable_firewall: bool = True
    install_fuse_patch: bool = False
    glusterd_systemctl: bool = True
    perf_config: bool = True

    def enabled(self, name: Optional[str]) -> bool:
        """True when the named flag is on; actions without a flag always run."""
        if name is None:
            return True
        if not hasattr(self, name):
            raise ValueError(f"Unknown feature flag '{name}'")
        return bool(getattr(self, name))


@dataclass
class InstallConfig:  # pylint: disable=too-many-instance-attributes
    """Main installer configuration class"""
    brick_dev: Optional[str] = None
    brick_dir: str = "/mnt/brick1"
    vol_name: str = "HadoopVol"
    vol_mnt: str = "/mnt/glusterfs"
    replica: int = 2
    hosts_file: str = "hosts"
    log_file: str = DEFAULT_LOG_FILE
    verbose: int = VERBOSE_SUMMARY
    assume_yes: bool = False
    new_deploy: bool = True
    install_from_ip: Optional[str] = None
    gluster_packages: List[str] = field(default_factory=lambda: ["glusterfs", "glusterfs-server", "glusterfs-fuse"])
    fuse_repo_url: str = "http://fedora-fuse.s3.amazonaws.com/"
    prep_actions: List[str] = field(default_factory=lambda: list(DEFAULT_PREP_ACTIONS))
    volume_options: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_VOLUME_OPTIONS))
    ssh: SSHConfig = field(default_factory=SSHConfig)
    poll: PollConfig = field(default_factory=PollConfig)
    mount: MountConfig = field(default_factory=MountConfig)
    permissions: PermissionsConfig = field(default_factory=PermissionsConfig)
    features: FeaturesConfig = field(default_factory=FeaturesConfig)
    # Computed fields
    brick_mnt: Optional[str] = None
    scratch_dir: Optional[str] = None
    system_dir: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "InstallConfig":
        """Create InstallConfig from dictionary (loaded from YAML)"""
        data = dict(data or {})
        nested = {
            "ssh": SSHConfig,
            "poll": PollConfig,
            "mount": MountConfig,
            "permissions": PermissionsConfig,
            "features": FeaturesConfig,
        }
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name in nested:
                kwargs[name] = _build_section(nested[name], name, value or {})
            elif name in _TOP_LEVEL_FIELDS:
                kwargs[name] = value
            else:
                raise ValueError(f"Unknown configuration key '{key}'")
        return cls(**kwargs)

    def apply_overrides(self, overrides: Dict[str, Any]) -> "InstallConfig":
        """Apply command line values; None means the flag was not given."""
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in _TOP_LEVEL_FIELDS:
                raise ValueError(f"Unknown configuration key '{key}'")
            setattr(self, key, value)
        return self

    def compute_derived_fields(self):
        """Compute paths derived from the brick dir, volume name and mount."""
        # the volume name is the brick subdir by convention
        self.brick_mnt = f"{self.brick_dir.rstrip('/')}/{self.vol_name}"
        self.scratch_dir = f"{self.brick_dir.rstrip('/')}/mapredlocal"
        self.system_dir = f"{self.vol_mnt.rstrip('/')}/mapred/system"
        self.ssh.verbose = self.verbose <= 0
        if self.replica < 1:
            raise ValueError(f"Replica count must be at least 1, got {self.replica}")

    @property
    def hosts_path(self) -> Path:
        return Path(self.hosts_file)


def _build_section(section_cls, name: str, values: Dict[str, Any]):
    """Build one nested config dataclass, rejecting unknown keys."""
    known = set(section_cls.__dataclass_fields__)
    kwargs = {}
    for key, value in values.items():
        attr = key.replace("-", "_")
        if attr not in known:
            raise ValueError(f"Unknown key '{key}' in '{name}' section")
        kwargs[attr] = value
    return section_cls(**kwargs)


_TOP_LEVEL_FIELDS = {
    name
    for name in InstallConfig.__dataclass_fields__
    if name not in ("ssh", "poll", "mount", "permissions", "features", "brick_mnt", "scratch_dir", "system_dir")
}
