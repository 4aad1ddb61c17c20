# stormfetch/tools/fetch_script.py

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from stormfetch.config import Config
from stormfetch.errors import ConfigError, FetchScriptError
from stormfetch.models.models import CommandResult

logger = logging.getLogger(__name__)

FETCH_SCRIPT = "fetch_script.sh"
SHELL = "/bin/bash"
# Executables the collectors shell out to
DEPENDENCIES = ["lspci"]


def resolve_fetch_script(config: Config, user_config_dir: Optional[str], system_config_dir: str) -> str:
    """Locates the fetch script: the configured path, or the first default that exists."""
    if not config.fetch_script:
        raise ConfigError("Fetch script path is empty")

    if config.fetch_script != "auto":
        path = os.path.expanduser(config.fetch_script)
        if not os.path.exists(path):
            raise FetchScriptError(f"Fetch script file not found: {path}")
        if os.path.isdir(path):
            raise FetchScriptError(f"Fetch script path points to a directory: {path}")
        return path

    candidates = []
    if user_config_dir:
        candidates.append(os.path.join(user_config_dir, "stormfetch", FETCH_SCRIPT))
    candidates.append(os.path.join(system_config_dir, "stormfetch", FETCH_SCRIPT))
    for path in candidates:
        if os.path.isfile(path):
            return path
    raise FetchScriptError(f"Fetch script file not found: tried {', '.join(candidates)}")


def missing_dependencies(dependencies: List[str] = DEPENDENCIES) -> List[str]:
    return [dependency for dependency in dependencies if shutil.which(dependency) is None]


def run_fetch_script(script_path: str, env: Dict[str, str]) -> CommandResult:
    """Runs the fetch script with bash in its own directory.

    `env` is layered over the current environment. Raises FetchScriptError if
    the script cannot be started or exits with a nonzero status.
    """
    full_env = os.environ.copy()
    full_env.update(env)
    logger.debug(f"Running fetch script {script_path} with {len(env)} extra variables")
    try:
        process = subprocess.Popen(
            [SHELL, script_path],
            cwd=os.path.dirname(os.path.abspath(script_path)),
            env=full_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            universal_newlines=True,
        )
        stdout, stderr = process.communicate()
    except OSError as e:
        raise FetchScriptError(f"Could not run fetch script: {e}") from e

    result = CommandResult(stdout=stdout, stderr=stderr, exit_code=process.returncode)
    if result.exit_code != 0:
        detail = result.stderr.strip() or f"exit status {result.exit_code}"
        raise FetchScriptError(f"Could not run fetch script: {detail}")
    return result
