# stormfetch/renderer/layout.py

import logging
from typing import List, Sequence

from rich.cells import cell_len

from stormfetch.models.models import ExpandedArt
from stormfetch.renderer.palette import RESET, foreground_escape, slot_color
from stormfetch.utils.text import strip_ansi

logger = logging.getLogger(__name__)

PADDING = 5


def visible_width(text: str) -> int:
    """Terminal columns taken by text once escape sequences are removed."""
    return cell_len(strip_ansi(text))


def max_visible_width(lines: Sequence[str]) -> int:
    return max((visible_width(line) for line in lines), default=0)


def last_color(slots: Sequence[str], colors: Sequence[int]) -> str:
    """Foreground escape of the last colored slot in `slots`, or ''."""
    for slot in reversed(slots):
        code = slot_color(slot, colors)
        if code is not None:
            return foreground_escape(code)
    return ""


def compose(art: ExpandedArt, output_lines: Sequence[str]) -> str:
    """Lays the art out beside the fetch script's output, one fact per row.

    Every row is padded to the widest art line plus PADDING columns. A color
    left active on one art row carries over into the start of the next.
    """
    max_width = max_visible_width(art.plain_lines)
    column = max_width + PADDING
    row_count = max(len(art.lines), len(output_lines))
    logger.debug(f"Composing {row_count} rows ({len(art.lines)} art, {len(output_lines)} output), column width {column}")

    rows: List[str] = []
    carried = ""
    for i in range(row_count):
        prefix = ""
        if i < len(art.lines):
            if i > 0:
                carried = last_color(art.slots[i - 1], art.colors) or carried
                prefix = carried
            line = art.lines[i]
            line += " " * max(column - visible_width(art.plain_lines[i]), 0)
        else:
            line = " " * column
        if i < len(output_lines):
            line += RESET + output_lines[i]
        rows.append(prefix + line)

    return "\n".join(rows).rstrip("\n\t ") + RESET
