"""
Hosts file parsing - ordered "<ip> <hostname>" pairs grouped into replica sets

Node order matters: with replica 2 the first two lines form the first replica
pair, the next two lines the second pair, and so on.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union
from glusterinstall.errors import ValidationError
from .logger import get_logger
logger = get_logger(__name__)

VALID_IP_RE = re.compile(
    r"^(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.){3}"
    r"([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])$"
)
VALID_HOSTNAME_RE = re.compile(
    r"^(([a-z0-9]|[a-z0-9][a-z0-9\-]*[a-z0-9])\.)*([a-z0-9]|[a-z0-9][a-z0-9\-]*[a-z0-9])$"
)


@dataclass(frozen=True)
class HostEntry:
    """One storage node from the hosts file."""
    ip: str
    hostname: str
    lineno: int = 0

    def __str__(self):
        return f"{self.hostname} ({self.ip})"


@dataclass(frozen=True)
class ReplicaSet:
    """A group of nodes whose bricks mirror each other."""
    index: int
    hosts: Tuple[HostEntry, ...]


@dataclass(frozen=True)
class HostRegistry:
    """Validated, ordered host list for one run."""
    hosts: Tuple[HostEntry, ...]
    replica: int

    def __len__(self):
        return len(self.hosts)

    def __iter__(self):
        return iter(self.hosts)

    @property
    def coordinator(self) -> HostEntry:
        """Node that issues pool and volume commands for the whole cluster."""
        return self.hosts[0]

    @property
    def peers(self) -> Tuple[HostEntry, ...]:
        """Every node except the coordinator."""
        return self.hosts[1:]

    @property
    def hostnames(self) -> List[str]:
        return [host.hostname for host in self.hosts]

    @property
    def ips(self) -> List[str]:
        return [host.ip for host in self.hosts]

    @property
    def replica_sets(self) -> List[ReplicaSet]:
        return [
            ReplicaSet(index=i // self.replica, hosts=self.hosts[i:i + self.replica])
            for i in range(0, len(self.hosts), self.replica)
        ]

    def bricks(self, brick_mnt: str) -> List[str]:
        """Brick list for volume create, in replica order."""
        return [f"{host.hostname}:{brick_mnt}" for host in self.hosts]

    def find(self, name: str) -> HostEntry:
        """Look up a node by hostname or IP."""
        for host in self.hosts:
            if name in (host.hostname, host.ip):
                return host
        raise KeyError(name)


def parse_host_lines(text: str, source: str = "hosts") -> Tuple[List[HostEntry], List[str]]:
    """
    Parse hosts file content without stopping at the first bad line
    Args:
        text: Raw file content
        source: Name used in error messages
    Returns:
        Tuple of (valid entries in file order, error messages)
    """
    entries: List[HostEntry] = []
    errors: List[str] = []
    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        tokens = line.split()
        if len(tokens) != 2:
            errors.append(f'{source} line {lineno}: expected "<ip> <hostname>", got "{line}"')
            continue
        ip, host = tokens
        line_ok = True
        if not VALID_IP_RE.match(ip):
            errors.append(f'{source} line {lineno}: unexpected IP address syntax for "{ip}"')
            line_ok = False
        if host != host.lower():
            logger.debug("   ...down-casing %s", host)
            host = host.lower()
        if not VALID_HOSTNAME_RE.match(host):
            errors.append(f'{source} line {lineno}: unexpected hostname syntax for "{host}"')
            line_ok = False
        if line_ok:
            entries.append(HostEntry(ip=ip, hostname=host, lineno=lineno))
    return entries, errors


def check_replica_count(count: int, replica: int, source: str = "hosts") -> List[str]:
    """Return errors when the node count does not fit the replica count."""
    if replica < 1:
        return [f"replica count must be at least 1, got {replica}"]
    if count < replica:
        return [f"the {source} file must contain at least {replica} nodes (replica count)"]
    if count % replica != 0:
        return [f"the number of nodes in the {source} file ({count}) must be a multiple of the replica count ({replica})"]
    return []


def parse_hosts(text: str, replica: int, source: str = "hosts") -> HostRegistry:
    """
    Parse and validate hosts file content
    Args:
        text: Raw file content
        replica: Replication factor of the volume
        source: Name used in error messages
    Returns:
        HostRegistry with the entries in file order
    Raises:
        ValidationError: listing every problem found
    """
    entries, errors = parse_host_lines(text, source)
    if not errors:
        errors.extend(check_replica_count(len(entries), replica, source))
    if errors:
        raise ValidationError(errors)
    return HostRegistry(hosts=tuple(entries), replica=replica)


def load_hosts(path: Union[str, Path], replica: int) -> HostRegistry:
    """Read and validate a hosts file."""
    path = Path(path)
    if not path.is_file():
        raise ValidationError([f'"{path}" file is missing'])
    return parse_hosts(path.read_text(encoding="utf-8"), replica, source=str(path))
