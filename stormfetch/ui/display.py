# stormfetch/ui/display.py

import sys
from typing import List, Optional

from rich.console import Console

from stormfetch.models.models import ProbeTiming

# Diagnostics go to stderr so the banner on stdout stays clean
console = Console(stderr=True, highlight=False)


def print_banner(block: str) -> None:
    # Already contains raw escape codes, rich must not touch it
    sys.stdout.write(block + "\n")
    sys.stdout.flush()


def print_error_message(error, target: Optional[Console] = None):
    (target or console).print(f"Error: {error}", style="bold red", markup=False, soft_wrap=True)


def print_time_taken(timing: ProbeTiming, target: Optional[Console] = None):
    message = f"Setting '{timing.key}' took {timing.milliseconds} milliseconds"
    if timing.error:
        message += f" (failed: {timing.error})"
    (target or console).print(message, style="dim", markup=False, soft_wrap=True)


def print_dependency_warning(missing: List[str], target: Optional[Console] = None):
    out = target or console
    out.print("[WARNING] Stormfetch functionality may be limited due to the following dependencies not being installed:", style="bold yellow", markup=False, soft_wrap=True)
    for dependency in missing:
        out.print(dependency, markup=False, soft_wrap=True)
    out.print("You can disable this warning through your stormfetch config", style="yellow", soft_wrap=True)
