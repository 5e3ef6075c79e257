"""CLI entry point for treeprune."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from treeprune.config import TreepruneConfig, load_config
from treeprune.config.loader import DEFAULT_CONFIG_TEMPLATE
from treeprune.errors import ConfigError, IndexBuildError
from treeprune.junk import JunkClassifier
from treeprune.reconcile import ActionKind, ReconcileReport, ReconciliationWalker, build_index

app = typer.Typer(
    name="treeprune",
    help="Delete files from a source tree that already exist, byte for byte, in a compare tree.",
)

config_app = typer.Typer(help="Manage treeprune configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: TreepruneConfig | None = None
_config_path: str | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _get_config() -> TreepruneConfig:
    """Load and cache the config on first use; `config init` never calls this."""
    global _config
    if _config is None:
        try:
            _config = load_config(_config_path)
        except ConfigError as e:
            rprint(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        _configure_logging(_config.log_level)
    return _config


def _configure_logging(level: str) -> None:
    """Route library logging through a plain one-line-per-record Rich handler."""
    handler = RichHandler(show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("treeprune")
    root.handlers = [handler]
    root.setLevel(_LOG_LEVELS[level])
    # every keep/delete decision is reported whatever the configured level
    logging.getLogger("treeprune.reconcile.walker").setLevel(min(logging.INFO, _LOG_LEVELS[level]))


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to treeprune.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config, _config_path
    _config = None
    _config_path = config


_KIND_LABELS = {
    ActionKind.DELETE_JUNK: ("Junk files", "red"),
    ActionKind.DELETE_DUPLICATE: ("Duplicate files", "red"),
    ActionKind.DELETE_EMPTY_DIR: ("Empty dirs", "red"),
    ActionKind.KEEP_ORIGINAL: ("Original filenames", "green"),
    ActionKind.KEEP_DIFFERENT: ("Different content", "yellow"),
    ActionKind.ERROR: ("Errors", "magenta"),
}


def _display_report(report: ReconcileReport) -> None:
    """Summarize a reconciliation run as a Rich table."""
    mode = "dry run" if report.dry_run else "run"
    table = Table(title=f"Reconciled {escape(str(report.root))} ({mode})")
    table.add_column("Action", style="cyan")
    table.add_column("Count", justify="right")
    for kind, count in report.counts().items():
        label, color = _KIND_LABELS[kind]
        table.add_row(label, f"[{color}]{count}[/{color}]" if count else "0")
    rprint(table)

    verb = "would be deleted" if report.dry_run else "deleted"
    rprint(f"\n[bold]{len(report.deleted)}[/bold] entries {verb}, {len(report.kept)} kept.")
    if report.errors:
        rprint(f"[magenta]{len(report.errors)} error(s) while walking.[/magenta]")
    if report.dry_run:
        rprint("[yellow](dry run: nothing was deleted, pass --run to delete)[/yellow]")


@app.command()
def prune(
    source_dir: Annotated[
        Path, typer.Option("--source-dir", help="Tree to delete redundant files from")
    ],
    compare_dir: Annotated[
        Path, typer.Option("--compare-dir", help="Reference tree (never modified)")
    ],
    run: Annotated[
        bool, typer.Option("--run", help="Actually delete files (default is a dry run)")
    ] = False,
) -> None:
    """Delete source files duplicated in the compare tree, then prune empty dirs."""
    cfg = _get_config()
    dry_run = not run

    if not dry_run:
        if not typer.confirm(
            f"Do you really want to delete files in {source_dir}?", default=False
        ):
            rprint("Aborted.")
            return

    classifier = JunkClassifier.from_config(cfg.junk)
    try:
        index = build_index(compare_dir, classifier)
    except IndexBuildError as e:
        rprint(f"[red]IO Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    rprint(
        f"[dim]Indexed {index.path_count} files under {len(index)} names in {escape(str(index.root))}[/dim]"
    )

    walker = ReconciliationWalker(
        index,
        is_junk=classifier,
        dry_run=dry_run,
        chunk_size=cfg.compare.chunk_size,
    )
    report = walker.run(source_dir)
    _display_report(report)


@app.command("is-junk")
def is_junk_cmd(
    names: Annotated[list[str], typer.Argument(help="Base filenames to classify")],
) -> None:
    """Show whether each filename is treated as junk."""
    classifier = JunkClassifier.from_config(_get_config().junk)
    for name in names:
        verdict = "[red]junk[/red]" if classifier(name) else "[green]keep[/green]"
        rprint(f"{escape(repr(name))}: {verdict}")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default treeprune.yaml in current directory."""
    target = Path("treeprune.yaml")
    if target.exists() and not force:
        rprint("[yellow]treeprune.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
