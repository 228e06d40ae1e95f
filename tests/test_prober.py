"""
Unit tests for the deploy pre-flight checks
"""
import pytest
from glusterinstall.errors import ValidationError
from glusterinstall.libs.config import InstallConfig
from glusterinstall.libs.hosts import HostEntry
from glusterinstall.orchestration.prober import probe_hosts, verify_deploy_setup


@pytest.fixture
def hosts_cfg(tmp_path):
    """Fixture for a config pointing at a hosts file in tmp_path"""
    def make(text, replica=2):
        path = tmp_path / "hosts"
        if text is not None:
            path.write_text(text, encoding="utf-8")
        config = InstallConfig(brick_dev="/dev/sdb", hosts_file=str(path), replica=replica)
        config.compute_derived_fields()
        return config
    return make


def test_probe_hosts_reports_each_unreachable_host(executor):
    """One error per host that refuses a prompt-free session"""
    executor.probe_answers("10.0.0.2", [False])
    entries = [HostEntry("10.0.0.1", "node1"), HostEntry("10.0.0.2", "node2")]
    errors = probe_hosts(executor, entries)
    assert len(errors) == 1
    assert "node2" in errors[0]
    assert executor.probes == ["10.0.0.1", "10.0.0.2"]


def test_verify_returns_registry(executor, hosts_cfg):
    """A valid setup yields the registry"""
    cfg = hosts_cfg("10.0.0.1 node1\n10.0.0.2 node2\n")
    registry = verify_deploy_setup(cfg, executor, is_root=lambda: True)
    assert registry.hostnames == ["node1", "node2"]
    assert registry.replica == 2


def test_all_errors_batched(executor, hosts_cfg):
    """Root, syntax and connectivity errors are reported together"""
    executor.probe_answers("10.0.0.1", [False])
    cfg = hosts_cfg("10.0.0.1 node1\n10.0.0.300 node2\n", replica=1)
    with pytest.raises(ValidationError) as excinfo:
        verify_deploy_setup(cfg, executor, is_root=lambda: False)
    errors = excinfo.value.errors
    assert errors[0] == "must be run as root"
    assert any("10.0.0.300" in err for err in errors)
    assert any("cannot ssh to node1" in err for err in errors)
    assert len(errors) == 3
    # the malformed host is never contacted
    assert executor.probes == ["10.0.0.1"]


def test_missing_hosts_file(executor, hosts_cfg):
    """A missing hosts file is one error and nothing is probed"""
    cfg = hosts_cfg(None)
    with pytest.raises(ValidationError) as excinfo:
        verify_deploy_setup(cfg, executor, is_root=lambda: True)
    assert len(excinfo.value.errors) == 1
    assert "missing" in excinfo.value.errors[0]
    assert executor.probes == []


def test_replica_count_error(executor, hosts_cfg):
    """Three hosts cannot form replica pairs"""
    cfg = hosts_cfg("10.0.0.1 a\n10.0.0.2 b\n10.0.0.3 c\n", replica=2)
    with pytest.raises(ValidationError) as excinfo:
        verify_deploy_setup(cfg, executor, is_root=lambda: True)
    assert "multiple" in excinfo.value.errors[0]


def test_nothing_runs_remotely_before_validation(executor, hosts_cfg):
    """Validation only probes; no command is run"""
    cfg = hosts_cfg("10.0.0.1 node1\n10.0.0.2 node2\n")
    verify_deploy_setup(cfg, executor, is_root=lambda: True)
    assert executor.calls == []
