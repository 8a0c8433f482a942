"""Launcher configuration loaded from ~/.config/blink/blink.config."""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from blink.models import CustomItem

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "blink"
CONFIG_PATH = CONFIG_DIR / "blink.config"

BUNDLE_SUFFIX = ".app"
DEFAULT_ROOTS = ("~/Applications", "/Applications", "/System/Applications")
DEFAULT_TERMINAL_APP = "Terminal"
RESULT_LIMIT = 50

# The file manager lives outside every application root
PRIVILEGED_ITEMS = (CustomItem(name="Finder", path="/System/Library/CoreServices/Finder.app"),)

DEFAULT_CONFIG_TEXT = """\
# Blink Configuration File
# Located at: ~/.config/blink/blink.config

# Directories scanned for application bundles (non-recursive)
# roots = ["~/Applications", "/Applications", "/System/Applications"]

# Terminal used to open command-line items
# terminal_app = "Terminal"

# Custom applications to add manually
# Useful for apps in non-standard locations or scripts you want to launch
# Format:
# [[custom_apps]]
# name = "My App"
# path = "/path/to/app.app"
"""


def expand_path(path: str) -> str:
    """Expand a leading ``~`` to the user's home directory."""
    return os.path.expanduser(path)


@dataclass
class LauncherConfig:
    """Settings handed to the scanner, session and launcher at construction."""

    roots: list[str] = field(default_factory=lambda: [expand_path(r) for r in DEFAULT_ROOTS])
    bundle_suffix: str = BUNDLE_SUFFIX
    privileged_items: list[CustomItem] = field(default_factory=lambda: list(PRIVILEGED_ITEMS))
    custom_items: list[CustomItem] = field(default_factory=list)
    terminal_app: str = DEFAULT_TERMINAL_APP
    result_limit: int = RESULT_LIMIT
    config_path: Path | None = None


def parse_custom_items(raw: Any) -> list[CustomItem]:
    """Parse ``[[custom_apps]]`` tables, dropping incomplete entries."""
    if not isinstance(raw, list):
        return []

    items: list[CustomItem] = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.debug("Dropping non-table custom app entry: %r", entry)
            continue
        name = entry.get("name")
        path = entry.get("path")
        if not isinstance(name, str) or not name.strip():
            logger.debug("Dropping custom app without a name: %r", entry)
            continue
        if not isinstance(path, str) or not path.strip():
            logger.debug("Dropping custom app without a path: %r", entry)
            continue
        items.append(CustomItem(name=name.strip(), path=path.strip()))
    return items


def parse_roots(raw: list[Any]) -> list[str]:
    """Expand configured roots, dropping entries that are not absolute paths."""
    roots: list[str] = []
    for entry in raw:
        if not isinstance(entry, str) or not entry.strip():
            continue
        path = expand_path(entry.strip())
        if not os.path.isabs(path):
            logger.debug("Dropping relative root: %r", entry)
            continue
        roots.append(path)
    return roots


def config_from_dict(data: dict[str, Any], config_path: Path | None = None) -> LauncherConfig:
    """Build a LauncherConfig from decoded TOML, ignoring unknown keys."""
    config = LauncherConfig(config_path=config_path)

    roots = data.get("roots")
    if isinstance(roots, list):
        config.roots = parse_roots(roots)

    terminal_app = data.get("terminal_app")
    if isinstance(terminal_app, str) and terminal_app.strip():
        config.terminal_app = terminal_app.strip()

    config.custom_items = parse_custom_items(data.get("custom_apps"))
    return config


def write_default_config(path: Path = CONFIG_PATH) -> bool:
    """Write the commented default config if none exists.

    Returns True if a file was created.
    """
    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to create config file %s: %s", path, e)
        return False
    logger.info("Created default config at: %s", path)
    return True


def load_config(path: Path = CONFIG_PATH) -> LauncherConfig:
    """Load the config file, falling back to defaults.

    A missing file yields defaults silently; an unreadable or invalid file
    yields defaults with a warning.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found at %s, using defaults", path)
        return LauncherConfig(config_path=path)
    except OSError as e:
        logger.warning("Failed to read config %s, using defaults: %s", path, e)
        return LauncherConfig(config_path=path)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Invalid TOML in %s, using defaults: %s", path, e)
        return LauncherConfig(config_path=path)

    return config_from_dict(data, config_path=path)
