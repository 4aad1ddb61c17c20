# stormfetch/renderer/__init__.py
"""Banner rendering: template directive, palette, placeholders and layout."""

import logging
from typing import Sequence, Tuple

from stormfetch.models.models import ExpandedArt, RenderContext
from stormfetch.renderer.expander import expand_art, expand_placeholders
from stormfetch.renderer.layout import PADDING, compose, visible_width
from stormfetch.renderer.palette import RESET, resolve_palette
from stormfetch.renderer.template import DEFAULT_TEMPLATE, load_template, parse_directive, reconcile_palette

logger = logging.getLogger(__name__)


def prepare_art(context: RenderContext, raw_template: str) -> Tuple[RenderContext, ExpandedArt]:
    """Strips the template's directive, settles the palette and expands the art."""
    body, directive = parse_directive(raw_template)
    if directive is not None:
        logger.debug(f"Template directive colors: {directive} (forced config palette: {context.force_config_palette})")
    context = reconcile_palette(context, directive)
    return context, expand_art(body, context.colors)


def render_banner(context: RenderContext, raw_template: str, output_block: Sequence[str]) -> str:
    _, art = prepare_art(context, raw_template)
    return compose(art, output_block)


__all__ = [
    "DEFAULT_TEMPLATE",
    "PADDING",
    "RESET",
    "compose",
    "expand_art",
    "expand_placeholders",
    "load_template",
    "parse_directive",
    "prepare_art",
    "reconcile_palette",
    "render_banner",
    "resolve_palette",
    "visible_width",
]
