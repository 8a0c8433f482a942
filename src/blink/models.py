"""Data models for blink."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Item:
    """A launchable target (application bundle, script or command)."""

    display_name: str
    target_path: str  # unique within a catalog
    icon_handle: object | None = field(default=None, compare=False, repr=False)
    is_command_line: bool = False


@dataclass(frozen=True)
class CustomItem:
    """A user-declared item from the config file."""

    name: str
    path: str


@dataclass(frozen=True)
class ScoredMatch:
    """An item paired with its ranking score for one query."""

    item: Item
    score: int
