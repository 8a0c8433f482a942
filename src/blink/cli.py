"""CLI for blink."""

import logging
import shlex
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from blink import __version__
from blink.config import CONFIG_PATH, LauncherConfig, load_config

app = typer.Typer(
    name="blink",
    help="Find and launch applications with fuzzy search.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"blink {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def get_config(ctx: typer.Context) -> LauncherConfig:
    return ctx.obj["config"]


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    config_path: Annotated[
        Path, typer.Option("--config", "-c", help="Path to the config file")
    ] = CONFIG_PATH,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging")] = False,
) -> None:
    """Find and launch applications."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query (empty lists the catalog head)")] = "",
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", min=1, max=50, help="Number of results")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    show_scores: Annotated[bool, typer.Option("--scores", help="Show ranking scores")] = False,
) -> None:
    """Rank the catalog against a query."""
    from blink.indexer import build_catalog
    from blink.searcher import rank_scored

    config = get_config(ctx)
    catalog = build_catalog(config)
    matches = rank_scored(query, catalog, limit if limit is not None else config.result_limit)

    if json_output:
        console.print_json(
            data={
                "query": query,
                "results": [
                    {
                        "name": m.item.display_name,
                        "path": m.item.target_path,
                        "command_line": m.item.is_command_line,
                        "score": m.score,
                    }
                    for m in matches
                ],
            }
        )
        return

    if not matches:
        console.print(f"[yellow]No applications match '{query}'[/yellow]")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    if show_scores:
        table.add_column("Score", justify="right")
    table.add_column("Path", style="dim")
    for i, m in enumerate(matches):
        row = [str(i), m.item.display_name]
        if show_scores:
            row.append(str(m.score))
        row.append(m.item.target_path)
        table.add_row(*row)
    console.print(table)


@app.command("list")
def list_items(ctx: typer.Context) -> None:
    """Print the whole catalog in catalog order."""
    from blink.indexer import build_catalog

    catalog = build_catalog(get_config(ctx))
    if not len(catalog):
        console.print("[yellow]No applications found.[/yellow]")
        return
    for item in catalog:
        kind = " [dim](command)[/dim]" if item.is_command_line else ""
        console.print(f"[cyan]{item.display_name}[/cyan]{kind}  {item.target_path}", soft_wrap=True)


@app.command()
def launch(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query")],
    index: Annotated[
        int, typer.Option("--index", "-i", min=0, help="Move the selection down N results")
    ] = 0,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-d", help="Print the command instead of running it")
    ] = False,
) -> None:
    """Launch the selected match for a query."""
    from blink.catalog import CatalogStore
    from blink.indexer import build_catalog
    from blink.launcher import launch as launch_item
    from blink.launcher import launch_command
    from blink.session import QuerySession

    config = get_config(ctx)
    store = CatalogStore(lambda: build_catalog(config))
    store.refresh()

    session = QuerySession(store, limit=config.result_limit)
    session.set_query(query)
    for _ in range(index):
        session.move_selection("down")

    item = session.current_selection()
    if item is None:
        console.print(f"[yellow]Nothing to launch for '{query}'[/yellow]")
        raise typer.Exit(1)

    if dry_run:
        console.print(shlex.join(launch_command(item, config)), highlight=False, soft_wrap=True)
        return

    if not launch_item(item, config):
        console.print(f"[red]Failed to launch {item.display_name}[/red]")
        raise typer.Exit(1)
    console.print(f"Launched [cyan]{item.display_name}[/cyan]")


@app.command()
def status(ctx: typer.Context) -> None:
    """Show configuration and catalog statistics."""
    from blink.catalog import Catalog
    from blink.indexer import custom_items, discover, scan_directory, scan_privileged

    config = get_config(ctx)
    console.print(f"Config path: {config.config_path}")
    console.print(f"Terminal app: {config.terminal_app}")

    console.print("\n[bold]Roots:[/bold]")
    for root in config.roots:
        count = len(scan_directory(root, config.bundle_suffix))
        console.print(f"  [cyan]{root}[/cyan]: {count} applications")

    privileged = scan_privileged(config.privileged_items)
    custom = custom_items(config)
    console.print(f"\nPrivileged items: {len(privileged)}")
    console.print(f"Custom items: {len(custom)}")

    catalog = Catalog(discover(config))
    console.print(f"Catalog size: {len(catalog)}")


@app.command("init-config")
def init_config(ctx: typer.Context) -> None:
    """Write the default config file if none exists."""
    from blink.config import write_default_config

    config = get_config(ctx)
    path = config.config_path or CONFIG_PATH
    if path.exists():
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        return
    if not write_default_config(path):
        console.print(f"[red]Could not write config to {path}[/red]")
        raise typer.Exit(1)
    console.print(f"Created config at {path}")


if __name__ == "__main__":
    app()
