# stormfetch/renderer/template.py

import logging
import os
from typing import List, Optional, Tuple

from stormfetch.errors import TemplateDirectiveError
from stormfetch.models.models import RenderContext

logger = logging.getLogger(__name__)

DIRECTIVE_PREFIX = "#/"

DEFAULT_TEMPLATE = r"""    .--.
   |o_o |
   |:_/ |
  //   \ \
 (|     | )
/'\_   _/'\
\___)=(___/ """


def template_candidates(name: str, user_config_dir: Optional[str], system_config_dir: str) -> List[str]:
    """Template paths to try, user-level before system-level."""
    candidates = []
    if user_config_dir:
        candidates.append(os.path.join(user_config_dir, "stormfetch", "ascii", name))
    candidates.append(os.path.join(system_config_dir, "stormfetch", "ascii", name))
    return candidates


def load_template(name: str, user_config_dir: Optional[str], system_config_dir: str) -> str:
    """Returns the raw ascii template for `name`, or the built-in Tux.

    Missing or unreadable files fall through to the next candidate; this
    never raises.
    """
    if not name:
        return DEFAULT_TEMPLATE
    for path in template_candidates(name, user_config_dir, system_config_dir):
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Ascii template {path} unavailable: {e}")
            continue
        logger.debug(f"Loaded ascii template from {path}")
        return raw.rstrip("\n\t ")
    logger.debug(f"No ascii template found for '{name}', using default")
    return DEFAULT_TEMPLATE


def parse_directive(raw: str) -> Tuple[str, Optional[List[int]]]:
    """Splits a template into its body and optional `#/c1;c2;...` color list."""
    # A stray \r would return the cursor to column 0 and blank the art
    raw = raw.replace("\r\n", "\n")
    if not raw.startswith(DIRECTIVE_PREFIX):
        return raw, None

    first_line, _, body = raw.partition("\n")
    colors = []
    for segment in first_line[len(DIRECTIVE_PREFIX):].split(";"):
        value = segment.strip()
        if not value.isdecimal():
            raise TemplateDirectiveError(segment, first_line)
        colors.append(int(value))
    return body, colors


def reconcile_palette(context: RenderContext, directive: Optional[List[int]]) -> RenderContext:
    """Applies a template's directive on top of the configured palette.

    The directive is ignored when the configuration forces its own colors.
    """
    if directive is None or context.force_config_palette:
        return context
    # The directive replaces the configured palette outright, length included
    return context.model_copy(update={"colors": tuple(directive)})
