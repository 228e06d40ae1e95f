"""
Shared fixtures: an in-memory remote executor and a small deployment
"""
from typing import Dict, List, Optional, Tuple
import pytest
from glusterinstall.libs.config import InstallConfig
from glusterinstall.libs.hosts import HostEntry, HostRegistry
from glusterinstall.orchestration.session import InstallSession
from glusterinstall.services.remote import RemoteExecutor, RemoteResult

PEER_STATUS_3_NODES = """Number of Peers: 2

Hostname: node2
Uuid: 5e987bda-16dd-43c2-835b-08b7d55e94e5
State: Peer in Cluster (Connected)

Hostname: node3
Uuid: 1e0ca3aa-9ef7-4f66-8f15-cbc348f29ff7
State: Peer in Cluster (Connected)
"""

VOLUME_STATUS_ONLINE = """Status of volume: HadoopVol
------------------------------------------------------------------------------
Brick                : Brick node1:/mnt/brick1/HadoopVol
Port                 : 49152
Online               : Y
Pid                  : 2131
------------------------------------------------------------------------------
Brick                : Brick node2:/mnt/brick1/HadoopVol
Port                 : 49152
Online               : Y
Pid                  : 2140
"""


class FakeExecutor(RemoteExecutor):
    """RemoteExecutor that records commands and replies from a script"""

    def __init__(self):
        self.calls: List[Tuple[str, str]] = []
        self.sent: List[Tuple[str, str]] = []
        self.probes: List[str] = []
        self.closed = False
        # (host or None, substring) -> list of results, the last one repeats
        self._responses: Dict[Tuple[Optional[str], str], List[Tuple[int, str]]] = {}
        self._probe_answers: Dict[str, List[bool]] = {}

    def respond(self, substring: str, exit_code: int = 0, output: str = "", host: Optional[str] = None):
        """Queue a reply for commands containing substring, optionally on one host only."""
        self._responses.setdefault((host, substring), []).append((exit_code, output))
        return self

    def probe_answers(self, host: str, answers: List[bool]):
        """Script probe results for host; the last answer repeats."""
        self._probe_answers[host] = list(answers)
        return self

    def _lookup(self, host: str, command: str) -> Tuple[int, str]:
        # host specific replies win over ones for any host
        for wanted_host in (host, None):
            for (resp_host, substring), queue in self._responses.items():
                if resp_host == wanted_host and substring in command:
                    return queue.pop(0) if len(queue) > 1 else queue[0]
        return 0, ""

    def run(self, host, command, timeout=None):
        self.calls.append((host, command))
        exit_code, output = self._lookup(host, command)
        return RemoteResult(host=host, exit_code=exit_code, output=output)

    def probe(self, host):
        self.probes.append(host)
        answers = self._probe_answers.get(host, [True])
        return answers.pop(0) if len(answers) > 1 else answers[0]

    def send(self, host, command):
        self.sent.append((host, command))
        return True

    def close(self):
        self.closed = True

    def commands_on(self, host: str) -> List[str]:
        return [command for call_host, command in self.calls if call_host == host]


@pytest.fixture
def executor():
    """Fixture for an empty FakeExecutor"""
    return FakeExecutor()


@pytest.fixture
def cfg():
    """Fixture for a config with derived paths computed"""
    config = InstallConfig(brick_dev="/dev/sdb")
    config.compute_derived_fields()
    return config


@pytest.fixture
def registry():
    """Fixture for a three node, replica 1 registry"""
    hosts = (
        HostEntry("10.0.0.1", "node1", 1),
        HostEntry("10.0.0.2", "node2", 2),
        HostEntry("10.0.0.3", "node3", 3),
    )
    return HostRegistry(hosts=hosts, replica=1)


@pytest.fixture
def sleeps():
    """Fixture collecting the intervals passed to the fake sleep"""
    return []


@pytest.fixture
def session(cfg, registry, executor, sleeps):
    """Fixture for a session whose control node is not part of the cluster"""
    return InstallSession.create(cfg, registry, executor, sleep=sleeps.append, local_ips={"10.0.0.100"})
