"""
Unit tests for the command wrappers: generated strings and output parsers
"""
import pytest
from glusterinstall.cli import (
    CommandWrapper,
    ErrorType,
    FileOps,
    Gluster,
    Group,
    Mkfs,
    Mount,
    System,
    SystemCtl,
    User,
    Yum,
)
from tests.conftest import PEER_STATUS_3_NODES, VOLUME_STATUS_ONLINE


def test_wrapper_base_cannot_be_instantiated():
    """CommandWrapper is only a namespace for parsers"""
    with pytest.raises(RuntimeError):
        CommandWrapper()


def test_parse_result_success_on_empty_output():
    """A silent command with exit 0 succeeded"""
    result = CommandWrapper.parse_result("", 0)
    assert result.success
    assert result.error_type is ErrorType.NONE


def test_parse_result_detects_not_found():
    """Missing device is reported as NOT_FOUND"""
    result = CommandWrapper.parse_result("mkfs.xfs: /dev/sdz: No such file or directory", 1)
    assert result.failed
    assert result.error_type is ErrorType.NOT_FOUND
    assert "/dev/sdz" in result.error_message


def test_parse_result_already_exists_is_success():
    """Re-running a guarded step does not count as a failure"""
    result = CommandWrapper.parse_result("peer probe: success. Host node2 port 24007 already in peer list", 1)
    assert result.success
    assert result.error_type is ErrorType.ALREADY_EXISTS


def test_parse_result_no_output_no_code_is_timeout():
    """Transport failures surface as TIMEOUT"""
    assert CommandWrapper.parse_result(None, None).error_type is ErrorType.TIMEOUT


def test_volume_create_replica():
    """Volume create lists replica count and bricks in order"""
    cmd = Gluster().volume_create("HadoopVol", 2, ["n1:/mnt/brick1/HadoopVol", "n2:/mnt/brick1/HadoopVol"])
    assert cmd == "gluster volume create HadoopVol replica 2 n1:/mnt/brick1/HadoopVol n2:/mnt/brick1/HadoopVol 2>&1"


def test_volume_create_without_replication():
    """Replica 1 omits the replica clause"""
    assert Gluster().volume_create("v", 1, ["n1:/b"]) == "gluster volume create v n1:/b 2>&1"


def test_volume_start_script_mode():
    """Script mode answers gluster's prompts"""
    assert Gluster().script_mode().volume_start("HadoopVol") == "gluster --mode=script volume start HadoopVol 2>&1"


def test_peer_detach_force():
    """Force flag is appended"""
    assert Gluster().force().peer_detach("node2") == "gluster peer detach node2 force 2>&1"


def test_volume_set():
    """Volume option command"""
    assert Gluster().volume_set("v", "quick-read", "off") == "gluster volume set v quick-read off 2>&1"


def test_parse_peer_status_formed():
    """Two connected peers form a three node pool"""
    status = Gluster.parse_peer_status(PEER_STATUS_3_NODES)
    assert status.count == 2
    assert status.connected == 2
    assert status.formed(2)
    assert not status.formed(3)


def test_parse_peer_status_not_connected():
    """A peer still in handshake does not count"""
    output = PEER_STATUS_3_NODES.replace(
        "State: Peer in Cluster (Connected)\n", "State: Accepted peer request (Connected)\n", 1
    )
    status = Gluster.parse_peer_status(output)
    assert status.count == 2
    assert status.connected == 1
    assert not status.formed(2)


def test_parse_peer_status_empty():
    """No output means no peers"""
    status = Gluster.parse_peer_status("")
    assert (status.count, status.connected) == (0, 0)


def test_all_bricks_online():
    """Every Online line must read Y"""
    assert Gluster.all_bricks_online(VOLUME_STATUS_ONLINE)
    offline = VOLUME_STATUS_ONLINE.replace("Online               : Y\nPid                  : 2140",
                                           "Online               : N\nPid                  : N/A")
    assert Gluster.parse_brick_online(offline) == [True, False]
    assert not Gluster.all_bricks_online(offline)


def test_all_bricks_online_requires_a_brick():
    """Output without any Online line is not a started volume"""
    assert not Gluster.all_bricks_online("Volume HadoopVol is not started")
    assert not Gluster.all_bricks_online(None)


def test_parse_volume_exists():
    """Existence check prints yes or no"""
    assert Gluster.parse_volume_exists("yes\n")
    assert not Gluster.parse_volume_exists("no")


def test_mkfs_xfs_large_inodes():
    """Bricks are formatted with 512 byte inodes, forced"""
    assert Mkfs().format("/dev/sdb") == "mkfs -t xfs -i size=512 -f /dev/sdb 2>&1"


def test_mount_from_fstab_and_explicit():
    """Without a source the fstab entry is used"""
    assert Mount().mount("/mnt/brick1") == "mount /mnt/brick1 2>&1"
    cmd = Mount().fs_type("glusterfs").options("_netdev").mount("/mnt/glusterfs", "node1:/HadoopVol")
    assert cmd == "mount -t glusterfs -o _netdev node1:/HadoopVol /mnt/glusterfs 2>&1"


def test_umount_only_when_mounted():
    """umount is guarded by mountpoint"""
    assert Mount().umount("/mnt/glusterfs") == "if mountpoint -q /mnt/glusterfs; then umount /mnt/glusterfs 2>&1; fi"


def test_fstab_entry():
    """fstab line carries type and options"""
    line = Mount().fs_type("xfs").options("noatime,inode64").fstab_entry("/dev/sdb", "/mnt/brick1")
    assert line == "/dev/sdb /mnt/brick1 xfs noatime,inode64 0 0"


def test_append_if_missing_matches_whole_field():
    """The match is a whitespace separated word and is shell quoted"""
    cmd = FileOps().append_if_missing("/etc/hosts", "10.0.0.1 node1", match="node1")
    assert cmd == (
        "grep -qsE -- '(^|[[:space:]])node1([[:space:]]|$)' /etc/hosts || echo '10.0.0.1 node1' >> /etc/hosts 2>&1"
    )


def test_append_if_missing_escapes_regex_characters():
    """Dots in host names are literal"""
    cmd = FileOps().append_if_missing("/etc/hosts", "10.0.0.1 gluster1.example.com", match="gluster1.example.com")
    assert "gluster1\\.example\\.com([[:space:]]|$)" in cmd


def test_append_if_missing_whole_line():
    """Without a match the whole line must be present as is"""
    cmd = FileOps().append_if_missing("/etc/sudoers.d/20_gluster", "yarn ALL= NOPASSWD: /usr/bin/getfattr")
    assert cmd.startswith("grep -qsxF -- 'yarn ALL= NOPASSWD: /usr/bin/getfattr' /etc/sudoers.d/20_gluster || ")


def test_recursive_chown_and_chmod():
    """Recursive flag applies to chown and chmod"""
    assert FileOps().recursive().chown("/mnt/glusterfs", "mapred", "hadoop") == "chown -R mapred:hadoop /mnt/glusterfs 2>&1"
    assert FileOps().recursive().chmod("/mnt/glusterfs", "1777") == "chmod -R 1777 /mnt/glusterfs 2>&1"


def test_remove_recursive_force():
    """rm -rf"""
    assert FileOps().recursive().remove("/mnt/brick1") == "rm -rf /mnt/brick1 2>&1"


def test_user_and_group_add_if_missing():
    """useradd and groupadd are skipped when the account exists"""
    assert Group().name("hadoop").add() == "getent group hadoop >/dev/null || groupadd hadoop 2>&1"
    assert User().username("mapred").group("hadoop").system().add() == (
        "id -u mapred >/dev/null 2>&1 || useradd --system -g hadoop mapred 2>&1"
    )


def test_user_requires_name():
    """A username must be set"""
    with pytest.raises(ValueError):
        User().add()


def test_yum_install_and_check():
    """yum install is non-interactive; rpm -q checks installation"""
    assert Yum().install(["glusterfs", "glusterfs-fuse"]) == "yum -y install glusterfs glusterfs-fuse 2>&1"
    assert Yum().enable_repo("fuse").install(["fuse"]) == "yum -y --enablerepo=fuse install fuse 2>&1"
    assert Yum.parse_is_installed("installed")
    assert not Yum.parse_is_installed("not_installed")


def test_yum_add_repo_disabled_by_default():
    """Repo files are written disabled"""
    cmd = Yum.add_repo("fuse-patch", "http://example.com/repo/")
    assert "/etc/yum.repos.d/fuse-patch.repo" in cmd
    assert "enabled=0" in cmd
    assert "baseurl=http://example.com/repo/" in cmd


def test_systemctl_and_sysv():
    """systemd and SysV flavours"""
    assert SystemCtl().service("glusterd").enable_and_start() == (
        "systemctl enable glusterd 2>&1 && systemctl start glusterd 2>&1"
    )
    assert SystemCtl().service("iptables").sysv().disable() == "chkconfig iptables off 2>&1"
    with pytest.raises(ValueError):
        SystemCtl().start()


def test_system_commands():
    """Host level helpers"""
    assert System().set_hostname("node1") == "echo node1 > /etc/hostname && hostname node1 2>&1"
    assert System.reboot() == "reboot -f"
    assert System().start_daemon("/usr/sbin/glusterd") == "pgrep -x glusterd >/dev/null || /usr/sbin/glusterd 2>&1"
    assert System().start_daemon("/usr/sbin/ntpd", "-qg") == "pgrep -x ntpd >/dev/null || /usr/sbin/ntpd -qg 2>&1"
