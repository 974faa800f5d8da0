"""Tests for io.stat / io.pressure parsing and cgroup path lookup."""

from pathlib import Path

import pytest

from docker_io_reporter.core.errors import (
    CgroupReadError,
    MalformedLineError,
    StatFileReadError,
    UnsupportedCgroupVersionError,
)
from docker_io_reporter.monitoring.cgroups import (
    cgroup_path_for_pid,
    parse_io_pressure,
    parse_io_stat,
    read_stat_file,
)


class TestParseIoStat:
    """Tests for io.stat parsing."""

    def test_parse_multiple_devices(self) -> None:
        """Test each line becomes one record with values kept verbatim."""
        text = (
            "8:0 rbytes=1024 wbytes=2048 rios=10 wios=20 dbytes=0 dios=0\n"
            "254:0 rbytes=18446744073709551615 wbytes=0\n"
        )
        records = parse_io_stat(text)

        assert [r.device for r in records] == ["8:0", "254:0"]
        assert records[0].fields == {
            "rbytes": "1024",
            "wbytes": "2048",
            "rios": "10",
            "wios": "20",
            "dbytes": "0",
            "dios": "0",
        }
        assert records[1].fields["rbytes"] == "18446744073709551615"

    def test_key_order_preserved(self) -> None:
        """Test keys keep the order they appear in."""
        records = parse_io_stat("8:0 wios=1 rbytes=2 rios=3\n")
        assert list(records[0].fields) == ["wios", "rbytes", "rios"]

    def test_no_trailing_newline(self) -> None:
        """Test a missing final newline is accepted."""
        records = parse_io_stat("8:0 rbytes=1")
        assert len(records) == 1

    def test_empty_file(self) -> None:
        """Test an empty file yields no records."""
        assert parse_io_stat("") == []

    def test_device_without_entries(self) -> None:
        """Test a device line with no key=value pairs is kept."""
        records = parse_io_stat("8:0\n")
        assert records[0].device == "8:0"
        assert records[0].fields == {}

    def test_extra_whitespace(self) -> None:
        """Test tokens split on any run of ASCII whitespace."""
        records = parse_io_stat("8:0  rbytes=1\twbytes=2 \n")
        assert records[0].fields == {"rbytes": "1", "wbytes": "2"}

    def test_entry_without_separator_fails(self) -> None:
        """Test a token without '=' rejects the whole file."""
        text = "8:0 rbytes=1 wbytes=2\n8:16 rbytes=3 garbage\n"
        with pytest.raises(MalformedLineError) as exc_info:
            parse_io_stat(text)
        assert exc_info.value.line_number == 2
        assert "garbage" in str(exc_info.value)

    def test_empty_line_fails(self) -> None:
        """Test an empty line counts as a missing device ID."""
        with pytest.raises(MalformedLineError, match="Missing device ID"):
            parse_io_stat("8:0 rbytes=1\n\n8:16 rbytes=2\n")

    def test_whitespace_only_line_fails(self) -> None:
        """Test a whitespace-only line counts as a missing device ID."""
        with pytest.raises(MalformedLineError):
            parse_io_stat("   \n")

    def test_value_containing_separator(self) -> None:
        """Test only the first '=' splits key from value."""
        records = parse_io_stat("8:0 key=a=b\n")
        assert records[0].fields == {"key": "a=b"}


class TestParseIoPressure:
    """Tests for io.pressure parsing."""

    def test_parse_some_and_full(self) -> None:
        """Test both pressure lines are parsed in order."""
        text = (
            "some avg10=0.12 avg60=0.05 avg300=0.01 total=12345\n"
            "full avg10=0.00 avg60=0.00 avg300=0.00 total=678\n"
        )
        records = parse_io_pressure(text)

        assert [r.pressure_type for r in records] == ["some", "full"]
        assert records[0].fields == {
            "avg10": "0.12",
            "avg60": "0.05",
            "avg300": "0.01",
            "total": "12345",
        }
        assert records[1].fields["total"] == "678"

    def test_malformed_entry_fails(self) -> None:
        """Test a token without '=' rejects the file."""
        with pytest.raises(MalformedLineError):
            parse_io_pressure("some avg10\n")

    def test_empty_line_fails(self) -> None:
        """Test an empty line counts as a missing pressure type."""
        with pytest.raises(MalformedLineError, match="Missing pressure type"):
            parse_io_pressure("\n")


class TestCgroupPathForPid:
    """Tests for resolving a process's cgroup directory."""

    def test_unified_hierarchy(self, tmp_path: Path) -> None:
        """Test the path after the 0::/ marker is joined to the cgroup root."""
        proc = tmp_path / "proc"
        (proc / "42").mkdir(parents=True)
        (proc / "42" / "cgroup").write_text("0::/system.slice/docker-abc.scope\n")

        path = cgroup_path_for_pid(42, proc_root=proc, cgroup_root=Path("/sys/fs/cgroup"))

        assert path == Path("/sys/fs/cgroup/system.slice/docker-abc.scope")

    def test_root_cgroup(self, tmp_path: Path) -> None:
        """Test a process in the root cgroup maps to the cgroup root."""
        proc = tmp_path / "proc"
        (proc / "1").mkdir(parents=True)
        (proc / "1" / "cgroup").write_text("0::/\n")

        path = cgroup_path_for_pid(1, proc_root=proc, cgroup_root=tmp_path / "cg")

        assert path == tmp_path / "cg"

    def test_cgroup_v1_rejected(self, tmp_path: Path) -> None:
        """Test a v1/hybrid cgroup file is rejected."""
        proc = tmp_path / "proc"
        (proc / "7").mkdir(parents=True)
        (proc / "7" / "cgroup").write_text(
            "12:blkio:/docker/abc\n11:memory:/docker/abc\n0::/docker/abc\n"
        )

        with pytest.raises(UnsupportedCgroupVersionError, match="cgroup v2"):
            cgroup_path_for_pid(7, proc_root=proc)

    def test_missing_process(self, tmp_path: Path) -> None:
        """Test a vanished process is a read error."""
        with pytest.raises(CgroupReadError):
            cgroup_path_for_pid(99999, proc_root=tmp_path)


class TestReadStatFile:
    """Tests for reading accounting files."""

    def test_read(self, tmp_path: Path) -> None:
        (tmp_path / "io.stat").write_text("8:0 rbytes=1\n")
        assert read_stat_file(tmp_path, "io.stat") == "8:0 rbytes=1\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises StatFileReadError."""
        with pytest.raises(StatFileReadError, match="io.pressure"):
            read_stat_file(tmp_path, "io.pressure")
