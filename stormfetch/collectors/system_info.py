# stormfetch/collectors/system_info.py

import glob
import logging
import os
import platform
import pwd
import shlex
import shutil
import socket
import subprocess
from typing import Dict, List, Optional, Sequence

import psutil

from stormfetch.models.models import DistroInfo, MemoryInfo, Partition
from stormfetch.utils.text import read_key_value_file

logger = logging.getLogger(__name__)

OS_RELEASE = "/etc/os-release"
PARTLABEL_DIR = "/dev/disk/by-partlabel"
DRM_DIR = "/sys/class/drm"
DMI_DIR = "/sys/devices/virtual/dmi/id"

# (process name, display name, version command)
DESKTOP_SESSIONS = [
    ("plasmashell", "KDE Plasma", "plasmashell --version | awk '{print $2}'"),
    ("gnome-session", "Gnome", "gnome-shell --version | awk '{print $3}'"),
    ("xfce4-session", "XFCE", "xfce4-session --version | grep xfce4-session | awk '{print $2}'"),
    ("cinnamon", "Cinnamon", "cinnamon --version | awk '{print $3}'"),
    ("mate-panel", "MATE", "mate-about --version | awk '{print $4}'"),
    ("lxsession", "LXDE", None),
    ("sway", "Sway", "sway --version | awk '{print $3}'"),
    ("Hyprland", "Hyprland", "hyprctl version | head -n1 | awk '{print $2}'"),
    ("bspwm", "Bspwm", "bspwm -v"),
    ("icewm-session", "IceWM", "icewm --version | awk '{print $2}'"),
]

SHELL_VERSIONS = {
    "bash": ("Bash", "echo $BASH_VERSION"),
    "zsh": ("Zsh", "$SHELL --version | awk '{print $2}'"),
    "fish": ("Fish", "$SHELL --version | awk '{print $3}'"),
    "dash": ("Dash", None),
}

# Package manager -> command printing one package per line
PACKAGE_MANAGERS = [
    ("dpkg", "dpkg-query -f '.\\n' -W"),
    ("pacman", "pacman -Qq"),
    ("rpm", "rpm -qa"),
    ("xbps-query", "xbps-query -l"),
    ("apk", "apk info"),
    ("emerge", "ls -d /var/db/pkg/*/*"),
    ("flatpak", "flatpak list"),
    ("snap", "snap list | tail -n +2"),
]


def run_shell(command: str) -> str:
    """Runs a bash snippet and returns its trimmed stdout, '' on failure."""
    try:
        result = subprocess.run(
            ["/bin/bash", "-c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            universal_newlines=True,
            env=os.environ.copy(),
        )
    except OSError as e:
        logger.debug(f"Could not run '{command}': {e}")
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def get_distro_info(distro_name: str = "", os_release: str = OS_RELEASE) -> DistroInfo:
    info = DistroInfo()
    if distro_name.strip():
        info.long_name = distro_name.strip()
        info.short_name = distro_name.strip()
    try:
        release = read_key_value_file(os_release)
    except OSError as e:
        logger.debug(f"Could not read {os_release}: {e}")
        return info
    info.id = release.get("ID", info.id)
    if info.long_name == "Unknown":
        info.long_name = release.get("PRETTY_NAME", info.long_name)
    if info.short_name == "Unknown":
        info.short_name = release.get("NAME", info.short_name)
    return info


def get_cpu_model() -> str:
    try:
        with open("/proc/cpuinfo", "r") as f:
            for line in f:
                key, _, value = line.partition(":")
                if key.strip() in ("model name", "Model", "Hardware"):
                    return value.strip()
    except OSError as e:
        logger.debug(f"Could not read /proc/cpuinfo: {e}")
    return platform.processor()


def get_cpu_threads() -> int:
    return psutil.cpu_count(logical=True) or 0


def get_memory_info() -> Optional[MemoryInfo]:
    try:
        memory = psutil.virtual_memory()
    except (OSError, RuntimeError) as e:
        logger.debug(f"Could not query memory: {e}")
        return None
    mib = 1024 * 1024
    return MemoryInfo(total=memory.total // mib, free=memory.free // mib, available=memory.available // mib)


def _partition_labels(label_dir: str = PARTLABEL_DIR) -> Dict[str, str]:
    labels = {}
    try:
        entries = os.listdir(label_dir)
    except OSError:
        return labels
    for entry in entries:
        labels[os.path.realpath(os.path.join(label_dir, entry))] = entry
    return labels


def get_mounted_partitions(hidden_partitions: Sequence[str] = (), hidden_filesystems: Sequence[str] = ()) -> List[Partition]:
    """Mounted /dev/* partitions with their usage, in mount order."""
    labels = _partition_labels()
    partitions = []
    for mount in psutil.disk_partitions(all=False):
        if not mount.device.startswith("/dev/"):
            continue
        if mount.device in hidden_partitions or mount.mountpoint in hidden_partitions:
            continue
        if mount.fstype in hidden_filesystems:
            continue
        try:
            usage = psutil.disk_usage(mount.mountpoint)
        except OSError as e:
            logger.debug(f"Could not stat {mount.mountpoint}: {e}")
            continue
        partitions.append(Partition(
            device=mount.device,
            mount_point=mount.mountpoint,
            label=labels.get(mount.device, ""),
            fs_type=mount.fstype,
            total_size=usage.total,
            used_size=usage.used,
            free_size=usage.free,
        ))
    return partitions


def get_gpu_models(hidden_gpus: Sequence[int] = ()) -> List[str]:
    """GPU names from lspci; hidden_gpus holds 1-based indices to skip."""
    if shutil.which("lspci") is None:
        return []
    gpus = []
    for line in run_shell("lspci -mm").split("\n"):
        try:
            fields = shlex.split(line)
        except ValueError:
            continue
        if len(fields) < 4:
            continue
        device_class = fields[1]
        if not any(kind in device_class for kind in ("VGA", "3D", "Display")):
            continue
        gpus.append(f"{fields[2]} {fields[3]}".strip())
    return [gpu for i, gpu in enumerate(gpus, 1) if i not in hidden_gpus]


def get_de_wm() -> str:
    try:
        running = {process.info["name"] for process in psutil.process_iter(["name"])}
    except psutil.Error as e:
        logger.debug(f"Could not list processes: {e}")
        return ""
    for process, name, version_command in DESKTOP_SESSIONS:
        if process in running:
            if version_command is None:
                return name
            return f"{name} {run_shell(version_command)}".strip()
    return ""


def get_shell() -> str:
    try:
        shell = pwd.getpwuid(os.getuid()).pw_shell
    except KeyError:
        return "Unknown"
    name = os.path.basename(shell)
    if name not in SHELL_VERSIONS:
        return "Unknown"
    display, version_command = SHELL_VERSIONS[name]
    if version_command is None:
        return display
    return f"{display} {run_shell(version_command)}".strip()


def get_display_protocol() -> str:
    return {"x11": "X11", "wayland": "Wayland"}.get(os.getenv("XDG_SESSION_TYPE", ""), "")


def get_monitor_resolutions(drm_dir: str = DRM_DIR) -> List[str]:
    """Preferred mode of every connected DRM connector, e.g. '1920x1080'."""
    monitors = []
    for connector in sorted(glob.glob(os.path.join(drm_dir, "card*-*"))):
        try:
            with open(os.path.join(connector, "status"), "r") as f:
                if f.read().strip() != "connected":
                    continue
            with open(os.path.join(connector, "modes"), "r") as f:
                mode = f.readline().strip()
        except OSError:
            continue
        if mode:
            monitors.append(mode)
    return monitors


def get_installed_packages() -> str:
    counts = []
    for manager, command in PACKAGE_MANAGERS:
        if shutil.which(manager) is None:
            continue
        output = run_shell(command)
        if output:
            counts.append(f"{len(output.splitlines())} ({manager})")
    return ", ".join(counts)


def get_motherboard_model(dmi_dir: str = DMI_DIR) -> str:
    parts = []
    for name in ("board_vendor", "board_name"):
        try:
            with open(os.path.join(dmi_dir, name), "r") as f:
                parts.append(f.read().strip())
        except OSError:
            continue
    return " ".join(part for part in parts if part)


def get_libc() -> str:
    name, version = platform.libc_ver()
    if name == "glibc":
        return f"GLIBC {version}".strip()
    if glob.glob("/lib/ld-musl-*.so.1"):
        return "musl"
    return name


def get_init_system() -> str:
    try:
        with open("/proc/1/comm", "r") as f:
            comm = f.read().strip()
    except OSError:
        return ""
    return {"systemd": "Systemd", "init": "SysVinit", "runit": "Runit", "openrc-init": "OpenRC", "s6-svscan": "s6"}.get(comm, comm)


def get_local_ipv4() -> str:
    try:
        interfaces = psutil.net_if_addrs()
    except OSError:
        return ""
    for name, addresses in interfaces.items():
        if name == "lo":
            continue
        for address in addresses:
            if address.family == socket.AF_INET and not address.address.startswith("127."):
                return address.address
    return ""
