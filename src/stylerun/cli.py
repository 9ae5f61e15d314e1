"""stylerun CLI - evaluate, inspect and run PostCSS runner actions."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from stylerun import __version__
from stylerun.artifacts.canonical_json import actions_document, write_json
from stylerun.config import ConfigError, analyze, init_workspace, load_workspace
from stylerun.host.local import execute_actions
from stylerun.logging import configure_logging
from stylerun.rules.errors import RuleError

DEFAULT_ACTIONS_RELATIVE_PATH = Path("out/stylerun/ACTIONS.json")

cli = typer.Typer(
    name="stylerun",
    help="stylerun - declarative PostCSS runner invocations",
    no_args_is_help=True,
)
console = Console()


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show stylerun version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Evaluate stylerun.yaml targets into PostCSS runner actions."""


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    return typer.Exit(1)


@cli.command(name="init")
def init(
    repo_root: Path = typer.Option(
        Path("."),
        "--repo-root",
        help="Workspace root path",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite existing stylerun.yaml",
    ),
) -> None:
    """Create a starter stylerun.yaml."""
    try:
        created = init_workspace(repo_root, force=force)
    except FileExistsError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        console.print("[yellow]Use --force to overwrite.[/yellow]")
        raise typer.Exit(1) from exc

    console.print("[green]✓ Workspace initialized[/green]")
    console.print(f"[cyan]Path:[/cyan] {created}")


@cli.command(name="plan")
def plan(
    repo_root: Path = typer.Option(
        Path("."),
        "--repo-root",
        help="Workspace root path",
    ),
    targets: list[str] = typer.Option(
        [],
        "--target",
        "-t",
        help="Target to evaluate (repeatable, defaults to all targets)",
    ),
    out: Path = typer.Option(
        DEFAULT_ACTIONS_RELATIVE_PATH,
        "--out",
        help="Output path for ACTIONS.json",
    ),
) -> None:
    """Evaluate targets and write the declared actions as canonical JSON."""
    try:
        workspace = load_workspace(repo_root)
        planned = analyze(workspace, targets or None)
    except (ConfigError, RuleError) as exc:
        raise _fail(exc) from exc

    for name, action in planned:
        outputs = ", ".join(str(path) for path in action.outputs)
        console.print(f"[cyan]{name}[/cyan] {action.mnemonic} {action.inputs[0]} -> {outputs}")

    resolved_out = out if out.is_absolute() else (workspace.root / out)
    write_json(resolved_out, actions_document(planned))
    console.print(f"[green]✓ {len(planned)} action(s) planned[/green]")
    console.print(f"[cyan]JSON:[/cyan] {resolved_out}")


@cli.command(name="args")
def args(
    target: str = typer.Argument(..., metavar="TARGET"),
    repo_root: Path = typer.Option(
        Path("."),
        "--repo-root",
        help="Workspace root path",
    ),
) -> None:
    """Print the runner arguments of a target, one token per line."""
    try:
        workspace = load_workspace(repo_root)
        planned = analyze(workspace, [target])
    except (ConfigError, RuleError) as exc:
        raise _fail(exc) from exc

    for index, (_, action) in enumerate(planned):
        if index:
            typer.echo("")
        typer.echo(f"# {action.progress_message}")
        typer.echo(str(action.executable))
        for token in action.arguments:
            typer.echo(token)


@cli.command(name="build")
def build(
    targets: list[str] | None = typer.Argument(None, metavar="[TARGET]..."),
    repo_root: Path = typer.Option(
        Path("."),
        "--repo-root",
        help="Workspace root path",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every command line."),
) -> None:
    """Evaluate targets and run their actions locally, in order."""
    configure_logging(verbose=verbose)
    try:
        workspace = load_workspace(repo_root)
        planned = analyze(workspace, targets or None)
        results = execute_actions([action for _, action in planned], root=workspace.root)
    except (ConfigError, RuleError, RuntimeError) as exc:
        raise _fail(exc) from exc

    for name, action in planned:
        for output in action.outputs:
            console.print(f"[green]✓[/green] {name}: {output}")
    console.print(f"[green]✓ {len(results)} action(s) completed[/green]")


if __name__ == "__main__":
    cli()
