"""
GlusterFS command wrapper with fluent API
"""
import logging
import re
import shlex
from dataclasses import dataclass
from typing import List, Optional
from .base import CommandWrapper
logger = logging.getLogger(__name__)

_PEER_COUNT_RE = re.compile(r"^\s*Number of Peers:\s*(\d+)", re.MULTILINE)
_CONNECTED_PEER_RE = re.compile(r"Peer in Cluster \(Connected\)")
_ONLINE_RE = re.compile(r"^\s*Online\s*:\s*(\S+)", re.MULTILINE)


@dataclass(frozen=True)
class PeerStatus:
    """Parsed `gluster peer status` output"""
    count: int
    connected: int

    def formed(self, expected: int) -> bool:
        """True when exactly expected peers are listed and all are connected."""
        return self.count == expected and self.connected == expected


class Gluster(CommandWrapper):
    """Wrapper for GlusterFS commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._gluster_cmd: str = "gluster"
        self._script_mode: bool = False
        self._force: bool = False

    def script_mode(self, value: bool = True) -> "Gluster":
        """Answer gluster's interactive prompts with yes (returns self for chaining)."""
        self._script_mode = value
        return self

    def force(self, value: bool = True) -> "Gluster":
        """Set force flag (returns self for chaining)."""
        self._force = value
        return self

    def _base(self) -> str:
        if self._script_mode:
            return f"{self._gluster_cmd} --mode=script"
        return self._gluster_cmd

    def _force_suffix(self) -> str:
        return " force" if self._force else ""

    def peer_probe(self, hostname: str) -> str:
        """Generate command to probe a peer node"""
        return f"{self._base()} peer probe {shlex.quote(hostname)} 2>&1"

    def peer_status(self) -> str:
        """Generate command to get peer status"""
        return f"{self._base()} peer status 2>&1"

    def peer_detach(self, hostname: str) -> str:
        """Generate command to remove a node from the trusted pool"""
        return f"{self._base()} peer detach {shlex.quote(hostname)}{self._force_suffix()} 2>&1"

    def volume_create(self, volume_name: str, replica_count: int, bricks: List[str]) -> str:
        """Generate command to create a replicated GlusterFS volume"""
        parts = [self._base(), "volume", "create", shlex.quote(volume_name)]
        if replica_count > 1:
            parts.extend(["replica", str(replica_count)])
        parts.extend(shlex.quote(brick) for brick in bricks)
        if self._force:
            parts.append("force")
        parts.append("2>&1")
        return " ".join(parts)

    def volume_start(self, volume_name: str) -> str:
        """Generate command to start a GlusterFS volume"""
        return f"{self._base()} volume start {shlex.quote(volume_name)}{self._force_suffix()} 2>&1"

    def volume_stop(self, volume_name: str) -> str:
        """Generate command to stop a GlusterFS volume"""
        return f"{self._base()} volume stop {shlex.quote(volume_name)}{self._force_suffix()} 2>&1"

    def volume_delete(self, volume_name: str) -> str:
        """Generate command to delete a GlusterFS volume"""
        return f"{self._base()} volume delete {shlex.quote(volume_name)} 2>&1"

    def volume_info(self, volume_name: str) -> str:
        """Generate command to get volume information"""
        return f"{self._base()} volume info {shlex.quote(volume_name)} 2>&1"

    def volume_status_detail(self, volume_name: str) -> str:
        """Generate command to get per-brick volume status"""
        return f"{self._base()} volume status {shlex.quote(volume_name)} detail 2>&1"

    def volume_set(self, volume_name: str, option: str, value: str) -> str:
        """Generate command to set one volume option"""
        return f"{self._base()} volume set {shlex.quote(volume_name)} {option} {shlex.quote(value)} 2>&1"

    def volume_exists_check(self, volume_name: str) -> str:
        """Generate command to check if volume exists"""
        return f"{self._base()} volume info {shlex.quote(volume_name)} >/dev/null 2>&1 && echo yes || echo no"

    def is_installed_check(self) -> str:
        """Generate command to check if GlusterFS is installed"""
        return f"command -v {self._gluster_cmd} >/dev/null 2>&1 && echo installed || echo not_installed"

    @staticmethod
    def parse_is_installed(output: Optional[str]) -> bool:
        """Parse output to check if GlusterFS is installed"""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "installed"

    @staticmethod
    def parse_volume_exists(output: Optional[str]) -> bool:
        """Parse output to check if volume exists"""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "yes"

    @staticmethod
    def parse_peer_status(output: Optional[str]) -> PeerStatus:
        """
        Parse `gluster peer status` output
        Args:
            output: Command output
        Returns:
            PeerStatus with the reported peer count and the number of connected peers
        """
        if not output:
            return PeerStatus(count=0, connected=0)
        match = _PEER_COUNT_RE.search(output)
        count = int(match.group(1)) if match else 0
        return PeerStatus(count=count, connected=len(_CONNECTED_PEER_RE.findall(output)))

    @staticmethod
    def parse_brick_online(output: Optional[str]) -> List[bool]:
        """Return one flag per brick from `volume status VOL detail`, True when Online is Y."""
        if not output:
            return []
        return [value.upper() == "Y" for value in _ONLINE_RE.findall(output)]

    @classmethod
    def all_bricks_online(cls, output: Optional[str]) -> bool:
        """True when at least one brick is listed and every listed brick is online."""
        flags = cls.parse_brick_online(output)
        return bool(flags) and all(flags)

