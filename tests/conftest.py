"""Pytest fixtures for blink tests."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def app_roots(temp_dir):
    """Create two application roots with a few bundles and some noise."""
    user_root = temp_dir / "user"
    system_root = temp_dir / "system"
    user_root.mkdir()
    system_root.mkdir()

    (user_root / "Calculator.app").mkdir()
    (user_root / "Calendar.app").mkdir()
    (user_root / "notes.txt").write_text("not an app")

    # A bundle with a nested helper bundle that must not be reported
    safari = system_root / "Safari.app"
    (safari / "Contents" / "Helper.app").mkdir(parents=True)
    (system_root / "Utilities").mkdir()

    return [str(user_root), str(system_root)]


@pytest.fixture
def sample_items():
    """Create sample Item objects in catalog order."""
    from blink.models import Item

    return [
        Item(display_name="Calculator", target_path="/A/Calculator.app"),
        Item(display_name="Calendar", target_path="/A/Calendar.app"),
        Item(display_name="Finder", target_path="/System/Library/CoreServices/Finder.app"),
    ]


@pytest.fixture
def sample_catalog(sample_items):
    from blink.catalog import Catalog

    return Catalog(sample_items)


@pytest.fixture
def config_file(temp_dir, app_roots):
    """Write a config file pointing at the temporary roots."""
    path = temp_dir / "blink.config"
    roots = ", ".join(f'"{r}"' for r in app_roots)
    path.write_text(
        f"""
roots = [{roots}]
terminal_app = "iTerm"

[[custom_apps]]
name = "Deploy Script"
path = "/usr/local/bin/deploy"

[[custom_apps]]
name = "Broken"
""",
        encoding="utf-8",
    )
    return path
