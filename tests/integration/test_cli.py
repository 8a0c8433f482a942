"""Integration tests for the CLI."""

import json
import subprocess
import sys


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "blink.cli", *args],
        capture_output=True,
        text=True,
    )


def test_cli_help():
    """Test that --help works."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "search" in result.stdout
    assert "launch" in result.stdout
    assert "status" in result.stdout


def test_cli_version():
    """Test that --version works."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert "blink" in result.stdout


def test_search_json_output(config_file):
    """Test that search with --json outputs valid JSON in rank order."""
    result = run_cli("--config", str(config_file), "search", "cal", "--json")
    assert result.returncode == 0

    data = json.loads(result.stdout)
    assert data["query"] == "cal"
    assert [r["name"] for r in data["results"]] == ["Calculator", "Calendar"]
    assert all(r["score"] == 900 for r in data["results"])


def test_search_custom_command_item(config_file):
    result = run_cli("--config", str(config_file), "search", "deploy", "--json")
    assert result.returncode == 0

    data = json.loads(result.stdout)
    assert data["results"][0]["name"] == "Deploy Script"
    assert data["results"][0]["command_line"] is True
    assert "Broken" not in result.stdout


def test_search_no_results(config_file):
    result = run_cli("--config", str(config_file), "search", "qqqq")
    assert result.returncode == 1
    assert "No applications match" in result.stdout


def test_list(config_file):
    result = run_cli("--config", str(config_file), "list")
    assert result.returncode == 0
    assert "Calculator" in result.stdout
    assert "Safari" in result.stdout
    assert "Helper" not in result.stdout
    assert result.stdout.index("Calculator") < result.stdout.index("Calendar")


def test_launch_dry_run_selects_down(config_file):
    result = run_cli("--config", str(config_file), "launch", "cal", "--index", "1", "--dry-run")
    assert result.returncode == 0
    assert "-n -a" in result.stdout
    assert "Calendar.app" in result.stdout


def test_launch_dry_run_command_line_item(config_file):
    result = run_cli("--config", str(config_file), "launch", "deploy", "--dry-run")
    assert result.returncode == 0
    assert "-a iTerm /usr/local/bin/deploy" in result.stdout


def test_launch_nothing_selected(config_file):
    result = run_cli("--config", str(config_file), "launch", "qqqq", "--dry-run")
    assert result.returncode == 1
    assert "Nothing to launch" in result.stdout


def test_cli_status(config_file):
    """Test that status command works."""
    result = run_cli("--config", str(config_file), "status")
    assert result.returncode == 0
    assert "Config path:" in result.stdout
    assert "Custom items: 1" in result.stdout
    assert "Catalog size:" in result.stdout


def test_init_config(temp_dir):
    path = temp_dir / "new" / "blink.config"
    result = run_cli("--config", str(path), "init-config")
    assert result.returncode == 0
    assert path.exists()

    again = run_cli("--config", str(path), "init-config")
    assert again.returncode == 0
    assert "already exists" in again.stdout


def test_search_rejects_out_of_range_limit(config_file):
    for bad in ("0", "-1", "51"):
        result = run_cli("--config", str(config_file), "search", "cal", "--limit", bad)
        assert result.returncode == 2


def test_search_limit(config_file):
    result = run_cli("--config", str(config_file), "search", "cal", "--json", "--limit", "1")
    assert result.returncode == 0
    assert [r["name"] for r in json.loads(result.stdout)["results"]] == ["Calculator"]
