import pytest

from stormfetch.collectors import system_info
from stormfetch.collectors.fetch_env import FetchEnvBuilder, build_fetch_env
from stormfetch.config import Config
from stormfetch.models.models import DistroInfo, MemoryInfo, Partition


@pytest.fixture
def fake_host(monkeypatch):
    probes = {
        "get_distro_info": lambda name="": DistroInfo(id="arch", long_name=name or "Arch Linux", short_name=name or "Arch"),
        "get_installed_packages": lambda: "812 (pacman)",
        "get_cpu_model": lambda: "Storm CPU",
        "get_motherboard_model": lambda: "Storm Board",
        "get_cpu_threads": lambda: 16,
        "get_memory_info": lambda: MemoryInfo(total=16000, free=2000, available=12000),
        "get_mounted_partitions": lambda hidden_partitions=(), hidden_filesystems=(): [
            Partition(device="/dev/sda1", mount_point="/", label="root", fs_type="ext4",
                      total_size=2048, used_size=1024, free_size=1024),
            Partition(device="/dev/sda2", mount_point="/home", fs_type="btrfs"),
        ],
        "get_de_wm": lambda: "Sway 1.9",
        "get_shell": lambda: "Bash 5.2",
        "get_display_protocol": lambda: "Wayland",
        "get_libc": lambda: "GLIBC 2.39",
        "get_init_system": lambda: "Systemd",
        "get_local_ipv4": lambda: "192.168.1.2",
        "get_monitor_resolutions": lambda: ["1920x1080", "2560x1440"],
        "get_gpu_models": lambda hidden_gpus=(): ["Storm GPU"],
    }
    for name, probe in probes.items():
        monkeypatch.setattr(system_info, name, probe)


def test_build_fetch_env(fake_host):
    env = build_fetch_env(Config())

    assert env["DISTRO_LONG_NAME"] == "Arch Linux"
    assert env["DISTRO_SHORT_NAME"] == "Arch"
    assert env["PACKAGES"] == "812 (pacman)"
    assert env["CPU_MODEL"] == "Storm CPU"
    assert env["CPU_THREADS"] == "16"
    assert env["MOTHERBOARD"] == "Storm Board"
    assert env["MEM_TOTAL"] == "16000"
    assert env["MEM_USED"] == "4000"
    assert env["MEM_FREE"] == "12000"
    assert env["MOUNTED_PARTITIONS"] == "2"
    assert env["PARTITION1_DEVICE"] == "/dev/sda1"
    assert env["PARTITION1_MOUNTPOINT"] == "/"
    assert env["PARTITION1_LABEL"] == "root"
    assert env["PARTITION1_TOTAL_SIZE"] == "2.0 KiB"
    assert env["PARTITION1_USED_SIZE"] == "1.0 KiB"
    assert "PARTITION2_LABEL" not in env
    assert "PARTITION1_TYPE" not in env
    assert env["DE_WM"] == "Sway 1.9"
    assert env["USER_SHELL"] == "Bash 5.2"
    assert env["DISPLAY_PROTOCOL"] == "Wayland"
    assert env["LIBC"] == "GLIBC 2.39"
    assert env["INIT_SYSTEM"] == "Systemd"
    assert env["LOCAL_IPV4"] == "192.168.1.2"
    assert env["CONNECTED_MONITORS"] == "2"
    assert env["MONITOR2"] == "2560x1440"
    assert env["CONNECTED_GPUS"] == "1"
    assert env["GPU1"] == "Storm GPU"


def test_distro_name_override(fake_host):
    env = build_fetch_env(Config(distro_name="Stormux"))
    assert env["DISTRO_LONG_NAME"] == env["DISTRO_SHORT_NAME"] == "Stormux"


def test_show_fs_type(fake_host):
    env = build_fetch_env(Config(show_fs_type=True))
    assert env["PARTITION1_TYPE"] == "ext4"
    assert env["PARTITION2_TYPE"] == "btrfs"


def test_failing_probe_degrades(fake_host, monkeypatch):
    def broken():
        raise RuntimeError("no cpuinfo")

    monkeypatch.setattr(system_info, "get_cpu_model", broken)
    monkeypatch.setattr(system_info, "get_memory_info", lambda: None)

    builder = FetchEnvBuilder(Config())
    env = builder.build()

    assert env["CPU_MODEL"] == ""
    assert "MEM_TOTAL" not in env
    timing = next(t for t in builder.timings if t.key == "CPU_MODEL")
    assert timing.error == "no cpuinfo"


def test_timings_are_reported(fake_host):
    reported = []

    build_fetch_env(Config(), on_timing=reported.append)

    keys = [timing.key for timing in reported]
    assert "CPU_MODEL" in keys
    assert "PARTITION_*" in keys
    assert all(timing.milliseconds >= 0 for timing in reported)
