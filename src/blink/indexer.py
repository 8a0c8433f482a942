"""Application discovery: scans roots for bundles and builds the catalog."""

import logging
import os
from collections.abc import Callable, Iterable

from blink.catalog import Catalog
from blink.config import BUNDLE_SUFFIX, LauncherConfig, expand_path
from blink.models import CustomItem, Item

logger = logging.getLogger(__name__)

IconLoader = Callable[[str], object | None]


def _load_icon(icon_loader: IconLoader | None, path: str) -> object | None:
    if icon_loader is None:
        return None
    return icon_loader(path)


def scan_directory(
    path: str,
    bundle_suffix: str = BUNDLE_SUFFIX,
    icon_loader: IconLoader | None = None,
) -> list[Item]:
    """List bundles directly inside ``path``.

    Only immediate children are considered; bundles nested inside other
    bundles are never reported. A missing or unreadable directory yields
    an empty list.
    """
    try:
        entries = os.listdir(path)
    except OSError as e:
        logger.debug("Skipping unreadable root %s: %s", path, e)
        return []

    items: list[Item] = []
    for entry in entries:
        if not entry.endswith(bundle_suffix) or entry == bundle_suffix:
            continue
        full_path = os.path.join(path, entry)
        items.append(
            Item(
                display_name=entry[: -len(bundle_suffix)],
                target_path=full_path,
                icon_handle=_load_icon(icon_loader, full_path),
                is_command_line=False,
            )
        )
    return items


def scan_privileged(
    privileged: Iterable[CustomItem],
    icon_loader: IconLoader | None = None,
) -> list[Item]:
    """Return the fixed-location items that exist on this machine."""
    items: list[Item] = []
    for entry in privileged:
        if not os.path.exists(entry.path):
            continue
        items.append(
            Item(
                display_name=entry.name,
                target_path=entry.path,
                icon_handle=_load_icon(icon_loader, entry.path),
                is_command_line=False,
            )
        )
    return items


def scan(
    roots: Iterable[str],
    bundle_suffix: str = BUNDLE_SUFFIX,
    privileged: Iterable[CustomItem] = (),
    icon_loader: IconLoader | None = None,
) -> list[Item]:
    """Scan each root in order, prepending any privileged items found.

    Roots must already be expanded, absolute paths.
    """
    items = scan_privileged(privileged, icon_loader)
    for root in roots:
        items.extend(scan_directory(root, bundle_suffix, icon_loader))
    return items


def custom_items(
    config: LauncherConfig,
    icon_loader: IconLoader | None = None,
) -> list[Item]:
    """Turn configured declarations into items.

    Paths ending in the bundle suffix are GUI items; anything else is
    treated as a command-line target.
    """
    items: list[Item] = []
    for entry in config.custom_items:
        path = expand_path(entry.path)
        items.append(
            Item(
                display_name=entry.name,
                target_path=path,
                icon_handle=_load_icon(icon_loader, path),
                is_command_line=not path.endswith(config.bundle_suffix),
            )
        )
    return items


def discover(config: LauncherConfig, icon_loader: IconLoader | None = None) -> list[Item]:
    """Collect every raw item: privileged, scanned roots, then custom entries."""
    items = scan(
        config.roots,
        bundle_suffix=config.bundle_suffix,
        privileged=config.privileged_items,
        icon_loader=icon_loader,
    )
    items.extend(custom_items(config, icon_loader))
    return items


def build_catalog(config: LauncherConfig, icon_loader: IconLoader | None = None) -> Catalog:
    """Run a full rescan and return a fresh catalog."""
    items = discover(config, icon_loader)
    catalog = Catalog(items)
    logger.info("Scanned %d applications", len(catalog))
    return catalog
