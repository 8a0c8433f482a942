"""Launching resolved items."""

import logging
import subprocess

from blink.config import LauncherConfig
from blink.models import Item

logger = logging.getLogger(__name__)

OPEN_COMMAND = "/usr/bin/open"


def launch_command(item: Item, config: LauncherConfig) -> list[str]:
    """Build the command that opens ``item``.

    GUI bundles get a new instance via ``open -n -a``; command-line
    targets are handed to the configured terminal.
    """
    if item.is_command_line:
        return [OPEN_COMMAND, "-a", config.terminal_app, item.target_path]
    return [OPEN_COMMAND, "-n", "-a", item.target_path]


def launch(item: Item, config: LauncherConfig) -> bool:
    """Spawn ``item`` without waiting for it.

    Returns False if the process could not be started.
    """
    cmd = launch_command(item, config)
    try:
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.error("Failed to launch %s: %s", item.display_name, e)
        return False
    logger.info("Launched %s", item.display_name)
    return True
