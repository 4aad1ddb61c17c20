# stormfetch/main.py
import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from stormfetch.collectors.fetch_env import build_fetch_env
from stormfetch.collectors.system_info import get_distro_info
from stormfetch.config import Config, load_config, system_config_dir, user_config_dir
from stormfetch.errors import StormfetchError
from stormfetch.renderer import compose, load_template, prepare_art, resolve_palette
from stormfetch.tools.fetch_script import missing_dependencies, resolve_fetch_script, run_fetch_script
from stormfetch.ui.display import print_banner, print_dependency_warning, print_error_message, print_time_taken

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="stormfetch", description="Show system information beside your distro's ascii art")
    parser.add_argument("--ascii", help="Set distro ascii")
    parser.add_argument("--distro-name", help="Set distro name")
    parser.add_argument("--time-taken", action="store_true", help="Show time taken for fetched information")
    parser.add_argument("--config", help="Use this config file instead of the default locations")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    # stdout carries the banner, so logs only ever go to stderr
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def resolve_template_name(config: Config) -> str:
    if config.distro_ascii == "auto":
        return get_distro_info(config.distro_name).id
    return config.distro_ascii


def run(args: argparse.Namespace) -> str:
    """Runs one fetch and returns the composed banner."""
    config = load_config(args.config)
    updates = {}
    if args.ascii:
        updates["distro_ascii"] = args.ascii
    if args.distro_name:
        updates["distro_name"] = args.distro_name
    if updates:
        config = config.model_copy(update=updates)

    if config.dependency_warning:
        missing = missing_dependencies()
        if missing:
            print_dependency_warning(missing)

    user_dir, system_dir = user_config_dir(), system_config_dir()
    script_path = resolve_fetch_script(config, user_dir, system_dir)

    context = config.render_context(resolve_template_name(config))
    raw_template = load_template(context.template, user_dir, system_dir)
    context, art = prepare_art(context, raw_template)
    palette = resolve_palette(context.colors)

    env = build_fetch_env(config, on_timing=print_time_taken if args.time_taken else None)
    env.update(palette)
    result = run_fetch_script(script_path, env)
    return compose(art, result.output_block)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv(dotenv_path=os.path.abspath(".env"))
    configure_logging(args.debug or os.getenv("STORMFETCH_DEBUG", "") not in ("", "0"))

    try:
        banner = run(args)
    except StormfetchError as e:
        logger.debug("Fatal error", exc_info=True)
        print_error_message(e)
        return 1
    print_banner(banner)
    return 0


if __name__ == "__main__":
    sys.exit(main())
