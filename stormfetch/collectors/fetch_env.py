# stormfetch/collectors/fetch_env.py

import logging
import time
from typing import Callable, Dict, List, Optional, TypeVar

from stormfetch.collectors import system_info
from stormfetch.config import Config
from stormfetch.models.models import ProbeTiming
from stormfetch.utils.text import format_bytes

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchEnvBuilder:
    """Collects host facts into the variables a fetch script reads."""

    def __init__(self, config: Config, on_timing: Optional[Callable[[ProbeTiming], None]] = None):
        self.config = config
        self.on_timing = on_timing
        self.env: Dict[str, str] = {}
        self.timings: List[ProbeTiming] = []

    def _timed(self, key: str, probe: Callable[[], T], default: T) -> T:
        start = time.monotonic()
        error = None
        try:
            value = probe()
        except Exception as e:
            logger.debug(f"Probe for {key} failed: {e}", exc_info=True)
            error = str(e)
            value = default
        timing = ProbeTiming(key=key, milliseconds=int((time.monotonic() - start) * 1000), error=error)
        self.timings.append(timing)
        if self.on_timing is not None:
            self.on_timing(timing)
        return value

    def set_variable(self, key: str, probe: Callable[[], object]) -> None:
        self.env[key] = str(self._timed(key, probe, ""))

    def build(self) -> Dict[str, str]:
        config = self.config
        distro = self._timed("DISTRO_*", lambda: system_info.get_distro_info(config.distro_name), None)

        self.set_variable("PACKAGES", system_info.get_installed_packages)
        if distro is not None:
            self.env["DISTRO_LONG_NAME"] = distro.long_name
            self.env["DISTRO_SHORT_NAME"] = distro.short_name
        self.set_variable("CPU_MODEL", system_info.get_cpu_model)
        self.set_variable("MOTHERBOARD", system_info.get_motherboard_model)
        self.set_variable("CPU_THREADS", system_info.get_cpu_threads)

        memory = self._timed("MEM_*", system_info.get_memory_info, None)
        if memory is not None:
            self.env["MEM_TOTAL"] = str(memory.total)
            self.env["MEM_USED"] = str(memory.used)
            self.env["MEM_FREE"] = str(memory.available)

        partitions = self._timed(
            "PARTITION_*",
            lambda: system_info.get_mounted_partitions(config.hidden_partitions, config.hidden_filesystems),
            [],
        )
        if partitions:
            self.env["MOUNTED_PARTITIONS"] = str(len(partitions))
            for i, part in enumerate(partitions, 1):
                prefix = f"PARTITION{i}_"
                self.env[prefix + "DEVICE"] = part.device
                self.env[prefix + "MOUNTPOINT"] = part.mount_point
                if part.label:
                    self.env[prefix + "LABEL"] = part.label
                if part.fs_type and config.show_fs_type:
                    self.env[prefix + "TYPE"] = part.fs_type
                self.env[prefix + "TOTAL_SIZE"] = format_bytes(part.total_size)
                self.env[prefix + "USED_SIZE"] = format_bytes(part.used_size)
                self.env[prefix + "FREE_SIZE"] = format_bytes(part.free_size)

        self.set_variable("DE_WM", system_info.get_de_wm)
        self.set_variable("USER_SHELL", system_info.get_shell)
        self.set_variable("DISPLAY_PROTOCOL", system_info.get_display_protocol)
        self.set_variable("LIBC", system_info.get_libc)
        self.set_variable("INIT_SYSTEM", system_info.get_init_system)
        self.set_variable("LOCAL_IPV4", system_info.get_local_ipv4)

        monitors = self._timed("MONITOR_*", system_info.get_monitor_resolutions, [])
        if monitors:
            self.env["CONNECTED_MONITORS"] = str(len(monitors))
            for i, monitor in enumerate(monitors, 1):
                self.env[f"MONITOR{i}"] = monitor

        gpus = self._timed("GPU_*", lambda: system_info.get_gpu_models(config.hidden_gpus), [])
        if gpus:
            self.env["CONNECTED_GPUS"] = str(len(gpus))
            for i, gpu in enumerate(gpus, 1):
                if gpu:
                    self.env[f"GPU{i}"] = gpu
        return self.env


def build_fetch_env(config: Config, on_timing: Optional[Callable[[ProbeTiming], None]] = None) -> Dict[str, str]:
    return FetchEnvBuilder(config, on_timing).build()
