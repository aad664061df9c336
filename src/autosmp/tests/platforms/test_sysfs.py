from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest

from autosmp.core.errors import PlatformError
from autosmp.core.types import ClusterKind
from autosmp.platforms.sysfs import SysfsPlatform, parse_cpu_list


def _make_cpu(
    root: Path,
    core: int,
    *,
    package: int,
    online: Optional[str] = "1",
    cur: Optional[int] = None,
    max_freq: Optional[int] = None,
    cluster_id: Optional[int] = None,
) -> None:
    cpu = root / f"cpu{core}"
    (cpu / "topology").mkdir(parents=True)
    (cpu / "topology" / "physical_package_id").write_text(f"{package}\n")
    if cluster_id is not None:
        (cpu / "topology" / "cluster_id").write_text(f"{cluster_id}\n")
    if online is not None:
        (cpu / "online").write_text(f"{online}\n")
    if cur is not None or max_freq is not None:
        (cpu / "cpufreq").mkdir()
        if cur is not None:
            (cpu / "cpufreq" / "scaling_cur_freq").write_text(f"{cur}\n")
        if max_freq is not None:
            (cpu / "cpufreq" / "scaling_max_freq").write_text(f"{max_freq}\n")


@pytest.fixture
def sysfs_root(tmp_path: Path) -> Path:
    root = tmp_path / "cpu"
    root.mkdir()
    (root / "possible").write_text("0-3\n")
    _make_cpu(root, 0, package=0, online=None, cur=600_000, max_freq=1_400_000)
    _make_cpu(root, 1, package=0, cur=800_000, max_freq=1_400_000)
    _make_cpu(root, 2, package=1, cur=1_000_000, max_freq=2_000_000)
    _make_cpu(root, 3, package=1, online="0")
    return root


@pytest.mark.parametrize(
    "raw,expected",
    [("0-3", {0, 1, 2, 3}), ("0,2-3\n", {0, 2, 3}), ("5", {5}), ("0-1,4-5,", {0, 1, 4, 5})],
)
def test_parse_cpu_list(raw: str, expected: set) -> None:
    assert parse_cpu_list(raw) == expected


def test_clusters_follow_package_ids(sysfs_root: Path) -> None:
    platform = SysfsPlatform(sysfs_root)
    assert platform.possible_cores() == {0, 1, 2, 3}
    assert platform.cores_in(ClusterKind.EFFICIENCY) == [0, 1]
    assert platform.cores_in(ClusterKind.PERFORMANCE) == [2, 3]
    assert platform.anchor_core() == 0


def test_cluster_id_takes_precedence(tmp_path: Path) -> None:
    root = tmp_path / "cpu"
    root.mkdir()
    (root / "possible").write_text("0-1")
    _make_cpu(root, 0, package=0, cluster_id=0)
    _make_cpu(root, 1, package=0, cluster_id=1)
    platform = SysfsPlatform(root)
    assert platform.cluster_of(1) is ClusterKind.PERFORMANCE


def test_online_state_reads_control_files(sysfs_root: Path) -> None:
    platform = SysfsPlatform(sysfs_root)
    assert platform.is_online(0)  # no control file
    assert platform.is_online(1)
    assert not platform.is_online(3)
    assert platform.online_cores() == {0, 1, 2}


def test_transitions_write_control_files(sysfs_root: Path) -> None:
    platform = SysfsPlatform(sysfs_root)
    assert platform.online(3) is True
    assert (sysfs_root / "cpu3" / "online").read_text() == "1"
    assert platform.offline(1) is True
    assert (sysfs_root / "cpu1" / "online").read_text() == "0"


def test_anchor_offline_is_refused(sysfs_root: Path) -> None:
    platform = SysfsPlatform(sysfs_root)
    assert platform.offline(0) is False
    assert not (sysfs_root / "cpu0" / "online").exists()


def test_write_failure_reports_false(sysfs_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    platform = SysfsPlatform(sysfs_root)

    def deny(self, *args, **kwargs):
        raise PermissionError("read-only")

    monkeypatch.setattr(Path, "write_text", deny)
    assert platform.offline(1) is False


def test_frequencies(sysfs_root: Path) -> None:
    platform = SysfsPlatform(sysfs_root)
    assert platform.current_frequency(1) == 800_000
    assert platform.max_frequency(2) == 2_000_000
    assert platform.current_frequency(3) is None
    assert platform.max_frequency(3) is None


def test_max_frequency_falls_back_to_cpuinfo(sysfs_root: Path) -> None:
    cpufreq = sysfs_root / "cpu3" / "cpufreq"
    cpufreq.mkdir()
    (cpufreq / "cpuinfo_max_freq").write_text("1900000")
    platform = SysfsPlatform(sysfs_root)
    assert platform.max_frequency(3) == 1_900_000


def test_garbage_reading_is_no_signal(sysfs_root: Path) -> None:
    (sysfs_root / "cpu1" / "cpufreq" / "scaling_cur_freq").write_text("n/a")
    platform = SysfsPlatform(sysfs_root)
    assert platform.current_frequency(1) is None


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(PlatformError):
        SysfsPlatform(tmp_path / "nope")


def test_missing_possible_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PlatformError):
        SysfsPlatform(tmp_path)


def test_describe_combines_all_services(sysfs_root: Path) -> None:
    cores: Dict[int, object] = {core.core_id: core for core in SysfsPlatform(sysfs_root).describe()}
    assert cores[0].anchor  # type: ignore[attr-defined]
    assert cores[2].frequency == 1_000_000  # type: ignore[attr-defined]
    assert cores[3].online is False  # type: ignore[attr-defined]
