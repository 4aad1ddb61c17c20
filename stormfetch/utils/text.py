# stormfetch/utils/text.py

import math
import re
from typing import Dict

# CSI / OSC sequences as emitted by terminals and ascii art packs
ANSI_PATTERN = re.compile(
    "[\u001b\u009b][\\[\\]()#;?]*"
    "(?:(?:(?:[a-zA-Z\\d]*(?:;[a-zA-Z\\d]*)*)?\u0007)"
    "|(?:(?:\\d{1,4}(?:;\\d{0,4})*)?[\\dA-PRZcf-ntqry=><~]))"
)

BYTE_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def strip_ansi(text: str) -> str:
    """Removes every ANSI escape sequence from text."""
    return ANSI_PATTERN.sub("", text)


def format_bytes(size: float) -> str:
    value = float(size)
    for unit in BYTE_UNITS:
        if math.fabs(value) < 1024.0:
            return f"{value:3.1f} {unit}"
        value /= 1024.0
    return f"{value:.1f}YiB"


def read_key_value_file(path: str) -> Dict[str, str]:
    """Parses KEY=value files such as /etc/os-release.

    Surrounding double quotes are removed from values. Lines without an
    `=` are ignored. Raises OSError when the file cannot be read.
    """
    result: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f.read().split("\n"):
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            result[key] = value
    return result
