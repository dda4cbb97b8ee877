"""grammarbuild CLI - build every tree-sitter grammar to WebAssembly."""

from __future__ import annotations

from pathlib import Path

import typer

from grammarbuild import __version__
from grammarbuild.build.discover import discover_targets
from grammarbuild.build.orchestrator import exit_status, plan_tasks, run_build
from grammarbuild.config import ConfigError, load_settings

cli = typer.Typer(
    name="grammarbuild",
    help="Build tree-sitter grammar packages to WebAssembly in parallel.",
    add_completion=False,
)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.command()
def build(
    name_filter: str | None = typer.Argument(
        None,
        metavar="[FILTER]",
        help="Only build grammars whose package name contains this text (case-sensitive).",
    ),
    jobs: int | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Parallel builds (defaults to GRAMMARBUILD_JOBS, config, then CPU count).",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Workspace containing package.json (defaults to current working directory).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (defaults to grammarbuild.yaml in the workspace).",
    ),
    list_only: bool = typer.Option(
        False,
        "--list",
        help="Print the build tasks that would run and exit.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show grammarbuild version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Reset out/, build all grammars, then move the .wasm files into out/."""
    _ = version
    workspace = (root or Path.cwd()).resolve()
    try:
        settings = load_settings(workspace, config)
        if list_only:
            for task in plan_tasks(discover_targets(settings, name_filter)):
                typer.echo(f"{task.label}\t{task.cwd}")
            raise typer.Exit(0)
        report = run_build(settings, name_filter=name_filter, jobs=jobs)
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(2) from exc

    raise typer.Exit(exit_status(report.failed))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
