# stormfetch/renderer/expander.py

import re
from typing import Dict, List, Sequence

from stormfetch.models.models import ExpandedArt
from stormfetch.renderer.palette import resolve_palette
from stormfetch.utils.text import strip_ansi

# ${NAME}, $C1 or a bare C1 that does not sit inside a longer word or number
PLACEHOLDER_PATTERN = re.compile(r"\$\{(\w+)\}|\$(C[0-6])|(?<![A-Za-z0-9_])(C[0-6])(?![0-9])")


def _placeholder_name(match: "re.Match") -> str:
    return match.group(1) or match.group(2) or match.group(3)


def expand_placeholders(body: str, palette: Dict[str, str]) -> str:
    """Replaces every placeholder with its escape sequence; unknown names become ''."""
    return PLACEHOLDER_PATTERN.sub(lambda m: palette.get(_placeholder_name(m), ""), body)


def expand_art(body: str, colors: Sequence[int]) -> ExpandedArt:
    """Expands a template body line by line, recording the slots each line emits."""
    palette = resolve_palette(colors)
    art = ExpandedArt(colors=tuple(colors))
    for line in body.split("\n"):
        emitted: List[str] = []

        def substitute(match):
            name = _placeholder_name(match)
            if name in palette:
                emitted.append(name)
            return palette.get(name, "")

        expanded = PLACEHOLDER_PATTERN.sub(substitute, line)
        art.lines.append(expanded)
        art.plain_lines.append(strip_ansi(expanded))
        art.slots.append(emitted)
    return art
