"""
Main CLI entry point for pbxsync.
"""

# Standard library imports
import importlib.metadata
from pathlib import Path

# Third-party imports
import typer
from loguru import logger
from rich.tree import Tree

# Local imports
from pbxsync.collector import collect_source_files, is_excluded
from pbxsync.config import ConfigError, SyncConfig, load_config
from pbxsync.project.base import Group, ProjectError
from pbxsync.project.xcode import load_project
from pbxsync.sync import ProjectSynchronizer, SyncReport
from pbxsync.utils.logging import configure_logging
from pbxsync.utils.rich_console import get_console, print_error, print_table, print_tree


console = get_console()


app = typer.Typer(
    help="pbxsync - keep an Xcode project's file references in step with the source tree.\n\nRun without a command to sync using the built-in layout.",
    add_completion=False,
)

ConfigOption = typer.Option(None, "--config", "-c", help="JSON config file (defaults to the built-in layout)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Log debug output")

USER_ERRORS = (ProjectError, ConfigError, FileNotFoundError, NotADirectoryError)


def _load_config_or_exit(config_path: Path | None) -> SyncConfig:
    try:
        return load_config(config_path)
    except ConfigError as error:
        print_error(str(error), title="Config Error")
        raise typer.Exit(1)


def print_report(report: SyncReport) -> None:
    """Print a sync summary table."""
    print_table(
        ["Result", "Files"],
        [
            ["Added", len(report.added)],
            ["Already tracked", len(report.tracked)],
            ["Excluded", len(report.excluded)],
        ],
        title="Dry Run" if report.dry_run else "Sync Summary",
    )
    if report.saved:
        console.print(f"Saved {report.project_path}", style="green")
    else:
        console.print("Dry run: project not saved", style="yellow")


def run_sync(config_path: Path | None, dry_run: bool, verbose: bool) -> SyncReport:
    configure_logging(verbose)
    config = _load_config_or_exit(config_path)
    synchronizer = ProjectSynchronizer(config, loader=load_project)
    try:
        report = synchronizer.sync(dry_run=dry_run)
    except USER_ERRORS as error:
        logger.error(f"Sync failed: {error}")
        typer.echo(f"Error: {error}")
        raise typer.Exit(1)
    print_report(report)
    return report


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """
    pbxsync - keep an Xcode project's file references in step with the source tree.
    """
    if ctx.invoked_subcommand is None:
        run_sync(config_path=None, dry_run=False, verbose=False)


@app.command()
def sync(
    config_path: Path | None = ConfigOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Report what would be added without saving"),
    verbose: bool = VerboseOption,
):
    """Add every untracked source file to the project and save it."""
    run_sync(config_path=config_path, dry_run=dry_run, verbose=verbose)


@app.command("list-files")
def list_files(config_path: Path | None = ConfigOption):
    """List the source files a sync would consider."""
    config = _load_config_or_exit(config_path)
    try:
        files = collect_source_files(config.source_roots, config.extensions)
    except (FileNotFoundError, NotADirectoryError) as error:
        typer.echo(f"Error: {error}")
        raise typer.Exit(1)

    rows = [
        [str(path), "excluded" if is_excluded(path, config.exclude_patterns) else "candidate"]
        for path in files
    ]
    print_table(["File", "Status"], rows, title="Source Files", styles={"Status": "cyan"})


def _build_tree(group: Group, node: Tree) -> None:
    for child in group.children():
        _build_tree(child, node.add(f"[bold]{child.name}/[/bold]"))
    for file_ref in group.files():
        node.add(file_ref.path)


@app.command()
def tree(config_path: Path | None = ConfigOption):
    """Show the project's group hierarchy."""
    config = _load_config_or_exit(config_path)
    try:
        project = load_project(config.project_path)
    except ProjectError as error:
        typer.echo(f"Error: {error}")
        raise typer.Exit(1)

    root = Tree(f"[bold]{project.path.parent.name}[/bold]")
    _build_tree(project.main_group, root)
    print_tree(root)


@app.command()
def version():
    """Show the pbxsync version."""
    typer.echo(f"pbxsync version: {importlib.metadata.version('pbxsync')}")


if __name__ == "__main__":
    app()
