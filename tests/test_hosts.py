"""
Unit tests for hosts file parsing and replica grouping
"""
import pytest
from glusterinstall.errors import EXIT_VALIDATION, ValidationError
from glusterinstall.libs.hosts import (
    HostEntry,
    check_replica_count,
    load_hosts,
    parse_host_lines,
    parse_hosts,
)

FOUR_NODES = """
# storage nodes, replica pairs in order
192.168.1.11 node1
192.168.1.12 node2   # second of pair 0
192.168.1.13 node3

192.168.1.14 node4
"""


def test_parse_preserves_order_and_groups_replica_sets():
    """First R entries form set 0, the next R set 1"""
    registry = parse_hosts(FOUR_NODES, replica=2)
    assert registry.hostnames == ["node1", "node2", "node3", "node4"]
    assert registry.ips == ["192.168.1.11", "192.168.1.12", "192.168.1.13", "192.168.1.14"]
    sets = registry.replica_sets
    assert len(sets) == 2
    assert [h.hostname for h in sets[0].hosts] == ["node1", "node2"]
    assert [h.hostname for h in sets[1].hosts] == ["node3", "node4"]
    assert sets[1].index == 1


def test_coordinator_and_peers():
    """The first host coordinates; the rest are peers"""
    registry = parse_hosts(FOUR_NODES, replica=2)
    assert registry.coordinator.hostname == "node1"
    assert [h.hostname for h in registry.peers] == ["node2", "node3", "node4"]


def test_bricks_in_registry_order():
    """Brick list uses hostnames in file order"""
    registry = parse_hosts(FOUR_NODES, replica=2)
    assert registry.bricks("/mnt/brick1/HadoopVol") == [
        "node1:/mnt/brick1/HadoopVol",
        "node2:/mnt/brick1/HadoopVol",
        "node3:/mnt/brick1/HadoopVol",
        "node4:/mnt/brick1/HadoopVol",
    ]


def test_hostname_is_lower_cased():
    """Hostnames are stored lower case"""
    entries, errors = parse_host_lines("10.1.1.1 Node-A.Example.COM\n")
    assert errors == []
    assert entries == [HostEntry("10.1.1.1", "node-a.example.com", 1)]


def test_line_numbers_kept():
    """Entries remember the line they came from"""
    entries, _ = parse_host_lines(FOUR_NODES)
    assert [e.lineno for e in entries] == [3, 4, 5, 7]


@pytest.mark.parametrize("ip", ["999.1.1.1", "1.2.3", "01.2.3.4", "1.2.3.256", "a.b.c.d"])
def test_bad_ip_rejected(ip):
    """Dotted quads outside 0-255 or malformed are rejected"""
    _, errors = parse_host_lines(f"{ip} host1\n")
    assert len(errors) == 1
    assert ip in errors[0]


@pytest.mark.parametrize("hostname", ["host_1!", "-host", "host-", "ho st.example"])
def test_bad_hostname_rejected(hostname):
    """Hostnames must follow the DNS label grammar"""
    _, errors = parse_host_lines(f"10.0.0.1 {hostname}\n")
    assert len(errors) == 1


def test_all_bad_lines_reported():
    """Every malformed line is reported, not just the first"""
    text = "999.1.1.1 host1\n10.0.0.2 host_2!\n10.0.0.3 host3\n10.0.0.4\n"
    with pytest.raises(ValidationError) as excinfo:
        parse_hosts(text, replica=1)
    errors = excinfo.value.errors
    assert len(errors) == 3
    assert "line 1" in errors[0]
    assert "line 2" in errors[1]
    assert "line 4" in errors[2]
    assert excinfo.value.exit_code == EXIT_VALIDATION


def test_count_not_multiple_of_replica():
    """Five hosts cannot form replica pairs"""
    text = "\n".join(f"10.0.0.{i} node{i}" for i in range(1, 6))
    with pytest.raises(ValidationError) as excinfo:
        parse_hosts(text, replica=2)
    assert "multiple" in excinfo.value.errors[0]


def test_fewer_hosts_than_replica():
    """Host count must be at least the replica count"""
    assert check_replica_count(2, 3) == ["the hosts file must contain at least 3 nodes (replica count)"]


def test_replica_count_ok():
    """N hosts with N % R == 0 passes"""
    assert check_replica_count(6, 3) == []


def test_validation_error_message_lists_errors():
    """The error text numbers every problem"""
    err = ValidationError(["a", "b"])
    assert str(err) == "2 errors:\n * a\n * b"


def test_load_hosts_missing_file(tmp_path):
    """A missing hosts file is a validation error"""
    with pytest.raises(ValidationError) as excinfo:
        load_hosts(tmp_path / "hosts", replica=2)
    assert "missing" in excinfo.value.errors[0]


def test_load_hosts_reads_file(tmp_path):
    """Hosts are read from disk"""
    path = tmp_path / "hosts"
    path.write_text(FOUR_NODES, encoding="utf-8")
    registry = load_hosts(path, replica=2)
    assert len(registry) == 4
    assert registry.find("192.168.1.13").hostname == "node3"
