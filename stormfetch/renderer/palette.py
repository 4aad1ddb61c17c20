# stormfetch/renderer/palette.py

from typing import Dict, Optional, Sequence

RESET = "\033[0m"
SLOT_COUNT = 6
SLOT_NAMES = [f"C{i}" for i in range(SLOT_COUNT + 1)]


def color_escape(code: int) -> str:
    """Bold + 256-color foreground."""
    return f"\033[1m\033[38;5;{code}m"


def foreground_escape(code: int) -> str:
    return f"\033[38;5;{code}m"


def slot_color(slot: str, colors: Sequence[int]) -> Optional[int]:
    """Returns the palette code behind a slot, or None when it resolves to reset."""
    if slot not in SLOT_NAMES or slot == "C0":
        return None
    index = int(slot[1:]) - 1
    if index >= len(colors):
        return None
    return colors[index]


def resolve_palette(colors: Sequence[int]) -> Dict[str, str]:
    """Maps C0..C6 to escape sequences.

    C0 is always reset. Ci uses colors[i-1] when the list is long enough and
    falls back to reset otherwise.
    """
    palette = {"C0": RESET}
    for slot in SLOT_NAMES[1:]:
        code = slot_color(slot, colors)
        palette[slot] = RESET if code is None else color_escape(code)
    return palette
