"""CLI entry point for compareview."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from compareview.api import create_api
from compareview.api.base import ReviewerApi
from compareview.compare import (
    CompareController,
    CompareView,
    MemoryRouter,
    RouteParams,
    SessionState,
    parse_compare_url,
)
from compareview.config import CompareviewConfig, load_config
from compareview.config.loader import DEFAULT_CONFIG_TEMPLATE, PROJECT_CONFIG
from compareview.logs import configure_logging
from compareview.versions import (
    VersionsStore,
    fetch_version,
    fetch_version_file,
    fetch_versions_list,
    get_version_file,
    get_versions_map,
)
from compareview.versions.models import DiffInfo, Version, VersionsListItem

app = typer.Typer(
    name="compareview",
    help="Browse two versions of an add-on and the diff between them.",
)

config_app = typer.Typer(help="Manage compareview configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: CompareviewConfig | None = None


def _get_config() -> CompareviewConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to compareview.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def _build_file_tree(version: Version) -> Tree:
    """Render a version's entries as a Rich tree, highlighting the selected path."""
    root = Tree(
        f"[bold]{version.addon.slug}[/bold] {version.version} "
        f"[dim](#{version.id}, {len(version.entries)} entries)[/dim]"
    )
    nodes: dict[str, Tree] = {}
    for entry in sorted(version.entries, key=lambda e: e.path):
        parent_path = entry.path.rsplit("/", 1)[0] if "/" in entry.path else ""
        parent = nodes.get(parent_path, root)
        if entry.type == "directory":
            label = f"[blue]{entry.filename}/[/blue]"
        elif entry.path == version.selected_path:
            label = f"[bold green]{entry.filename}[/bold green] [dim]<- selected[/dim]"
        else:
            label = entry.filename
        nodes[entry.path] = parent.add(label)
    return root


def _format_diff(diff: DiffInfo) -> str:
    """Unified-diff text for one file."""
    lines = [f"--- {diff.old_path}", f"+++ {diff.new_path}"]
    for hunk in diff.hunks:
        lines.append(hunk.content)
        for change in hunk.changes:
            prefix = "+" if change.is_insert else "-" if change.is_delete else " "
            lines.append(f"{prefix}{change.content}")
    return "\n".join(lines)


def _display_compare_view(view: CompareView) -> None:
    if view.loading_version or view.version is None:
        rprint("[yellow]Loading version...[/yellow]")
        return

    rprint(_build_file_tree(view.version))
    rprint()
    if view.diff_pane == "error":
        rprint("[red]ERROR:[/red] the diff could not be loaded.")
    elif view.diff_pane == "diff" and view.compare_info is not None:
        if not view.compare_info.diffs:
            rprint("[dim]No changes.[/dim]")
        for diff in view.compare_info.diffs:
            rprint(
                Panel(
                    Syntax(_format_diff(diff), "diff", theme="monokai"),
                    title=f"{diff.new_path} ({diff.type}, {view.compare_info.mime_type})",
                    border_style="blue",
                )
            )
    else:
        rprint("[yellow]Loading diff...[/yellow]")


def _display_versions(items: tuple[VersionsListItem, ...], title: str) -> None:
    table = Table(title=f"{title} ({len(items)})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Version", style="green")
    for item in items:
        table.add_row(str(item.id), item.version)
    rprint(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _run_compare(
    api: ReviewerApi, params: RouteParams, path: str | None
) -> tuple[CompareController, MemoryRouter]:
    store = VersionsStore()
    router = MemoryRouter()
    controller = CompareController(store, api, router, params)
    await controller.mount()

    if controller.session_state is SessionState.REDIRECTING and router.location:
        await controller.update(parse_compare_url(router.location))

    if path and controller.session_state is SessionState.READY:
        await controller.on_select_file(path)
    return controller, router


def _create_api(cfg: CompareviewConfig) -> ReviewerApi:
    try:
        return create_api(cfg)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def compare(
    addon_id: int = typer.Argument(..., help="Add-on id"),
    base_version_id: int = typer.Argument(..., help="Base (older) version id"),
    head_version_id: int = typer.Argument(..., help="Head (newer) version id"),
    path: Annotated[
        str | None, typer.Option("--path", "-p", help="File to diff")
    ] = None,
    lang: Annotated[
        str | None, typer.Option("--lang", help="Language used in compare URLs")
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the view as JSON")
    ] = False,
) -> None:
    """Show the file tree of the head version and the diff of one file."""
    cfg = _get_config()
    api = _create_api(cfg)
    params = RouteParams(
        lang=lang or cfg.ui.lang,
        addon_id=str(addon_id),
        base_version_id=str(base_version_id),
        head_version_id=str(head_version_id),
    )

    controller, router = asyncio.run(_run_compare(api, params, path))

    for url in router.history:
        rprint(f"[yellow]Redirected to[/yellow] {url}")

    view = controller.view()
    if as_json:
        print(view.model_dump_json(by_alias=True, indent=2))
    else:
        _display_compare_view(view)

    if controller.session_state is SessionState.FAILED:
        raise typer.Exit(1)


@app.command()
def version(
    addon_id: int = typer.Argument(..., help="Add-on id"),
    version_id: int = typer.Argument(..., help="Version id"),
    path: Annotated[
        str | None, typer.Option("--path", "-p", help="File to show")
    ] = None,
) -> None:
    """Show one file of a version."""
    cfg = _get_config()
    api = _create_api(cfg)
    store = VersionsStore()

    async def _load() -> bool:
        if not await fetch_version(store, api, addon_id, version_id):
            return False
        if path:
            return await fetch_version_file(store, api, addon_id, version_id, path)
        return True

    if not asyncio.run(_load()):
        rprint(f"[red]Error:[/red] could not load version {version_id}")
        raise typer.Exit(1)

    info = store.get_state().version_info[version_id]
    file = get_version_file(store.get_state(), version_id, info.selected_path)
    if file is None:
        rprint(f"[red]Error:[/red] no content for {info.selected_path}")
        raise typer.Exit(1)

    rprint(
        Panel(
            f"[dim]Path:[/dim]    {file.path}\n"
            f"[dim]Type:[/dim]    {file.type} ({file.mime_type})\n"
            f"[dim]Size:[/dim]    {file.size} bytes\n"
            f"[dim]SHA256:[/dim]  {file.sha256}",
            title=f"{info.addon.slug} {file.version}",
            border_style="blue",
        )
    )
    if file.type == "text":
        lexer = Syntax.guess_lexer(file.filename, code=file.content)
        rprint(Syntax(file.content, lexer, theme="monokai", line_numbers=True))


@app.command()
def versions(
    addon_id: int = typer.Argument(..., help="Add-on id"),
) -> None:
    """List the versions of an add-on by channel."""
    cfg = _get_config()
    api = _create_api(cfg)
    store = VersionsStore()

    if not asyncio.run(fetch_versions_list(store, api, addon_id)):
        rprint(f"[red]Error:[/red] could not load versions of add-on {addon_id}")
        raise typer.Exit(1)

    versions_map = get_versions_map(store.get_state(), addon_id)
    if versions_map is None:
        rprint(f"[red]Error:[/red] no versions recorded for add-on {addon_id}")
        raise typer.Exit(1)
    _display_versions(versions_map.listed, "Listed")
    _display_versions(versions_map.unlisted, "Unlisted")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default compareview.yaml in current directory."""
    target = PROJECT_CONFIG
    if target.exists() and not force:
        rprint("[yellow]compareview.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
