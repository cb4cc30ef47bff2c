#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console

from .app import EchoesApp
from .config import load_config, load_themes, setup_logging
from .controller import StoryController
from .location import normalize_fragment
from .render import ConsoleTarget, paint
from .sources.manager import get_source

logger = logging.getLogger("echoes")


def build_parser(theme_names: List[str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Temporal Echoes story reader")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--url", type=str, help="Load stories.json from this URL")
    parser.add_argument("--file", type=str, help="Load stories from a local JSON file")
    parser.add_argument(
        "--story", type=str, default="", help="Open this story id on start (#id also works)"
    )
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Render once to stdout instead of starting the TUI",
    )
    parser.add_argument(
        "--theme",
        type=str,
        help=f"Set theme for this run. Available: {', '.join(theme_names)}",
    )
    return parser


def print_page(controller: StoryController, console: Optional[Console] = None) -> None:
    paint(controller.current_page(), ConsoleTarget(console))


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> int:
    config = load_config()
    available_themes = load_themes(config)
    args = build_parser(list(available_themes.keys())).parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    source = get_source(config, url=args.url, path=args.file)
    fragment = normalize_fragment(args.story)

    if args.print_only:
        controller = StoryController(fragment=fragment)
        controller.load(source)
        print_page(controller)
        return 0 if controller.store.is_loaded else 1

    theme_name = args.theme or config.get("theme")
    logger.info("Using theme: %s", theme_name)

    try:
        app = EchoesApp(source, theme=theme_name, config=config, fragment=fragment)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
