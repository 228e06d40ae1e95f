"""
End-to-end tests for the install and cleanup commands against a fake cluster
"""
from unittest.mock import MagicMock
import pytest
from glusterinstall.commands import Cleanup, Install
from glusterinstall.errors import EXIT_MKFS, EXIT_REBOOT_REQUIRED, EXIT_VALIDATION
from tests.conftest import PEER_STATUS_3_NODES, VOLUME_STATUS_ONLINE

HOSTS = "10.0.0.1 node1\n10.0.0.2 node2\n10.0.0.3 node3\n"


@pytest.fixture
def install_cfg(cfg, tmp_path):
    """Fixture for a replica 1 config over a three node hosts file"""
    hosts = tmp_path / "hosts"
    hosts.write_text(HOSTS, encoding="utf-8")
    cfg.hosts_file = str(hosts)
    cfg.replica = 1
    return cfg


@pytest.fixture
def healthy_cluster(executor):
    """Fixture scripting a cluster that accepts every step"""
    executor.respond("command -v gluster", output="installed")
    executor.respond("peer status", output=PEER_STATUS_3_NODES)
    executor.respond("volume info HadoopVol 2>&1", exit_code=1, output="Volume HadoopVol does not exist")
    executor.respond("volume info HadoopVol 2>&1", output="Volume Name: HadoopVol")
    executor.respond("detail", exit_code=1, output="Volume HadoopVol is not started")
    executor.respond("detail", output=VOLUME_STATUS_ONLINE)
    return executor


def make_install(cfg, executor, answer="y", **kwargs):
    kwargs.setdefault("local_ips", {"10.0.0.100"})
    return Install(
        cfg=cfg,
        executor=executor,
        sleep=lambda _: None,
        ask=lambda _: answer,
        is_root=lambda: True,
        **kwargs,
    )


def test_install_full_run(install_cfg, healthy_cluster):
    """Every phase runs and the executor is closed"""
    make_install(install_cfg, healthy_cluster).run(None)
    coordinator = healthy_cluster.commands_on("10.0.0.1")
    assert (
        "gluster volume create HadoopVol node1:/mnt/brick1/HadoopVol "
        "node2:/mnt/brick1/HadoopVol node3:/mnt/brick1/HadoopVol 2>&1"
    ) in coordinator
    assert "gluster --mode=script volume start HadoopVol 2>&1" in coordinator
    node3 = healthy_cluster.commands_on("10.0.0.3")
    assert node3.index("mkfs -t xfs -i size=512 -f /dev/sdb 2>&1") < node3.index("mount /mnt/glusterfs 2>&1")
    assert healthy_cluster.sent == []
    assert healthy_cluster.closed


def test_install_declined_changes_nothing(install_cfg, executor):
    """Answering no at the deployment summary stops before any change"""
    make_install(install_cfg, executor, answer="n").run(None)
    # only the OS lookup ran
    assert len(executor.calls) == 1
    assert executor.closed


def test_install_validation_failure_exits_1(install_cfg, executor):
    """Not running as root is reported before any remote command"""
    install = make_install(install_cfg, executor)
    install.is_root = lambda: False
    with pytest.raises(SystemExit) as excinfo:
        install.run(None)
    assert excinfo.value.code == EXIT_VALIDATION
    assert executor.calls == []
    assert executor.closed


def test_install_unknown_prep_action_exits_1(install_cfg, executor):
    """A misspelled prep action is a validation error"""
    install_cfg.prep_actions = ["set hostname", "install ambari"]
    with pytest.raises(SystemExit) as excinfo:
        make_install(install_cfg, executor).run(None)
    assert excinfo.value.code == EXIT_VALIDATION


def test_install_step_failure_exit_code(install_cfg, healthy_cluster):
    """The failing step's code becomes the process exit code"""
    healthy_cluster.respond("mkfs", exit_code=1, output="mkfs.xfs: cannot open /dev/sdb: Device or resource busy")
    with pytest.raises(SystemExit) as excinfo:
        make_install(install_cfg, healthy_cluster).run(None)
    assert excinfo.value.code == EXIT_MKFS


def test_install_reboots_nodes_and_control_node_last(install_cfg, healthy_cluster):
    """Remote nodes reboot in the run; the control node after confirmation"""
    install_cfg.features.install_fuse_patch = True
    reboot = MagicMock()
    make_install(install_cfg, healthy_cluster, reboot=reboot, local_ips={"10.0.0.1"}).run(None)
    assert healthy_cluster.sent == [("10.0.0.2", "reboot -f"), ("10.0.0.3", "reboot -f")]
    reboot.assert_called_once_with()


def test_install_declined_self_reboot_exits_99(install_cfg, healthy_cluster):
    """Declining the control node reboot exits 99"""
    install_cfg.features.install_fuse_patch = True
    answers = iter(["y", "n"])
    install = make_install(install_cfg, healthy_cluster, local_ips={"10.0.0.1"}, reboot=MagicMock())
    install.ask = lambda _: next(answers)
    with pytest.raises(SystemExit) as excinfo:
        install.run(None)
    assert excinfo.value.code == EXIT_REBOOT_REQUIRED


def test_cleanup_command(install_cfg, executor):
    """Cleanup wipes every node after confirmation"""
    Cleanup(cfg=install_cfg, executor=executor, ask=lambda _: "y", is_root=lambda: True).run(None)
    for ip in ("10.0.0.1", "10.0.0.2", "10.0.0.3"):
        assert "rm -rf /mnt/brick1 2>&1" in executor.commands_on(ip)
    assert executor.closed


def test_cleanup_declined(install_cfg, executor):
    """Answering no leaves the cluster alone"""
    Cleanup(cfg=install_cfg, executor=executor, ask=lambda _: "", is_root=lambda: True).run(None)
    assert executor.calls == []
