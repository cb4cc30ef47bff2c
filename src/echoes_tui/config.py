from __future__ import annotations

import copy
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

from textual.theme import BUILTIN_THEMES, Theme

# --- Configuration ---
DEFAULT_STORIES_URL = "http://127.0.0.1:8000/stories.json"
DEFAULT_THEME = "dracula"
HTTP_TIMEOUT = 15
FEATURED_COUNT = 3
WORDS_PER_MINUTE = 200

CONFIG_PATH = os.path.expanduser("~/.config/echoes/config.json")

REQUEST_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "temporal-echoes/0.1 (+terminal reader)",
}
RETRY_TOTAL = 3
RETRY_BACKOFF = 0.3
RETRY_STATUSES = (429, 500, 502, 503, 504)

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]u[/] upload  [b {color}]g[/] go to  "
        "[b {color}][ ][/] back/forward"
    ),
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "stories_url": DEFAULT_STORIES_URL,
    "theme": DEFAULT_THEME,
    "http_timeout": HTTP_TIMEOUT,
    "themes": {},
    "ui": dict(UI_DEFAULTS),
}

# --- Logging ---
logger = logging.getLogger("echoes")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/echoes_debug_{ts}_{pid}.log"

    # stdout belongs to the TUI, so debug output goes to a file
    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists() -> None:
    """Write the default config file if the user's config file is not found."""
    if not os.path.exists(CONFIG_PATH):
        logger.info("Config file not found at %s, creating default.", CONFIG_PATH)
        save_config(DEFAULT_CONFIG)


def load_config() -> Dict[str, Any]:
    """Load the main configuration file, filling in defaults for missing keys."""
    ensure_config_file_exists()
    config = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(CONFIG_PATH, "r") as f:
            user_config = json.load(f)
        logger.info("Loaded config from %s", CONFIG_PATH)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", CONFIG_PATH, e)
        return config

    if not isinstance(user_config, dict):
        logger.error("Ignoring config at %s: top level is not an object", CONFIG_PATH)
        return config

    ui = {**config["ui"], **user_config.get("ui", {})}
    config.update(user_config)
    config["ui"] = ui
    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
        with open(CONFIG_PATH, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", CONFIG_PATH)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", CONFIG_PATH, e)


def load_themes(config: Optional[Dict[str, Any]] = None) -> dict[str, Theme]:
    """Built-in Textual themes merged with user definitions from the config."""
    if config is None:
        config = load_config()
    user_theme_defs = config.get("themes") or {}

    themes = dict(BUILTIN_THEMES)
    for name, definition in user_theme_defs.items():
        try:
            themes[name] = Theme(name=name, **definition)
        except (TypeError, ValueError) as e:
            # Ignore invalid theme definitions
            logger.warning("Ignoring invalid theme definition for '%s': %s", name, e)

    return themes
