# stormfetch/config.py

import logging
import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from stormfetch.errors import ConfigError
from stormfetch.models.models import RenderContext

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yaml"
DEFAULT_SYSTEM_CONFIG_DIR = "/etc"


def user_config_dir() -> Optional[str]:
    """Per-user configuration root ($XDG_CONFIG_HOME or ~/.config)."""
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return xdg
    home = os.path.expanduser("~")
    if home == "~":
        return None
    return os.path.join(home, ".config")


def system_config_dir() -> str:
    return os.getenv("STORMFETCH_SYSTEM_CONFIG_DIR") or DEFAULT_SYSTEM_CONFIG_DIR


class Config(BaseModel):
    distro_ascii: str = "auto"
    distro_name: str = ""
    fetch_script: str = "auto"
    ansii_colors: List[int] = Field(default_factory=list)
    force_config_ansii: bool = False
    show_fs_type: bool = False
    hidden_partitions: List[str] = Field(default_factory=list)
    hidden_filesystems: List[str] = Field(default_factory=list)
    hidden_gpus: List[int] = Field(default_factory=list)
    dependency_warning: bool = True

    def render_context(self, template: Optional[str] = None) -> RenderContext:
        return RenderContext(
            colors=tuple(self.ansii_colors),
            force_config_palette=self.force_config_ansii,
            template=template or self.distro_ascii,
        )


def find_config_file(user_dir: Optional[str], system_dir: str) -> str:
    """Returns the first existing config.yaml, user-level before system-level."""
    candidates = []
    if user_dir:
        candidates.append(os.path.join(user_dir, "stormfetch", CONFIG_FILE))
    candidates.append(os.path.join(system_dir, "stormfetch", CONFIG_FILE))
    for path in candidates:
        if os.path.isfile(path):
            return path
    raise ConfigError(f"Config file not found: tried {', '.join(candidates)}")


def load_config(path: Optional[str] = None) -> Config:
    if path is None:
        path = find_config_file(user_config_dir(), system_config_dir())
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    if not config.fetch_script:
        raise ConfigError("Fetch script path is empty")
    logger.debug(f"Configuration loaded: {config.model_dump()}")
    return config
