"""Click CLI with compile, status, deps, clean, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from less_assets import __version__
from less_assets.analysis.dependency_graph import DependencyResolver
from less_assets.config import load_config
from less_assets.errors import LessAssetsError
from less_assets.models import CompileConfig, StalenessVerdict
from less_assets.paths import project_relative_path
from less_assets.pipeline import CompileOrchestrator

_VERDICT_COLORS = {
    StalenessVerdict.FRESH: "green",
    StalenessVerdict.STALE: "yellow",
    StalenessVerdict.CHECK_FAILED: "red",
}


def _build_config(ctx: click.Context, **overrides) -> CompileConfig:
    try:
        return load_config(ctx.obj.get("config_path"), **overrides)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e))


def _fallback_base_dir(config: CompileConfig) -> None:
    # Absolute imports need an existing root; the source tree is the nearest one
    if not config.base_dir.is_dir() and config.source_root.is_dir():
        config.base_dir = config.source_root


def _rel(path: Path, root: Path) -> str:
    return project_relative_path(path, root)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="JSON configuration file (default: ./less-assets.json)")
@click.option("--verbose", "-v", is_flag=True, help="Log every compile and resolution step")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool):
    """less-assets: compile stale LESS stylesheets to CSS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.argument("source_root", type=click.Path(exists=True, file_okay=False, path_type=Path), required=False)
@click.option("--css-root", type=click.Path(file_okay=False, path_type=Path), help="Output CSS directory")
@click.option("--base-dir", type=click.Path(exists=True, file_okay=False, path_type=Path),
              help="Root for absolute @import paths")
@click.option("--force", "-f", is_flag=True, help="Recompile everything, ignoring dates")
@click.option("--compress/--no-compress", default=None, help="Strip whitespace from output")
@click.option("--strict/--no-strict", default=None, help="Abort on the first compiler error")
@click.option("--dependencies/--no-dependencies", default=None,
              help="Compare mtimes of imported files too")
@click.pass_context
def compile(
    ctx: click.Context,
    source_root: Path | None,
    css_root: Path | None,
    base_dir: Path | None,
    force: bool,
    compress: bool | None,
    strict: bool | None,
    dependencies: bool | None,
):
    """Compile every stale LESS file under SOURCE_ROOT."""
    config = _build_config(
        ctx,
        source_root=source_root,
        artifact_root=css_root,
        base_dir=base_dir,
        use_compression=compress,
        strict=strict,
        check_dependencies=dependencies,
    )
    _fallback_base_dir(config)
    orchestrator = CompileOrchestrator(config)

    click.echo(f"Compiling {config.source_root} -> {config.artifact_root}\n")
    try:
        result = orchestrator.run_pass(force=force)
    except LessAssetsError as e:
        raise click.ClickException(str(e))

    for record in result.log.records:
        status = click.style("ok", fg="green") if record.succeeded else click.style("FAILED", fg="red")
        click.echo(
            f"  {status:>15}  {_rel(record.source_path, config.source_root)}  "
            f"{click.style(f'{record.elapsed:.3f}s', dim=True)}"
        )
    for path in result.check_failed:
        click.echo(f"  {click.style('check failed', fg='red'):>15}  {_rel(path, config.source_root)}")

    for error in result.log.errors.values():
        click.echo(click.style(error.message, fg="red"), err=True)

    summary = result.log.summary()
    click.echo(
        f"\nDone! {summary['compiled']} compiled, {summary['failed']} failed, "
        f"{len(result.skipped)} up to date, {len(result.check_failed)} unchecked."
    )
    if not result.ok:
        ctx.exit(1)


@cli.command()
@click.argument("source_root", type=click.Path(exists=True, file_okay=False, path_type=Path), required=False)
@click.option("--css-root", type=click.Path(file_okay=False, path_type=Path), help="Output CSS directory")
@click.pass_context
def status(ctx: click.Context, source_root: Path | None, css_root: Path | None):
    """Show which LESS files need recompiling, without compiling."""
    config = _build_config(ctx, source_root=source_root, artifact_root=css_root)
    _fallback_base_dir(config)
    orchestrator = CompileOrchestrator(config)
    entries = orchestrator.find_entries()

    if not entries:
        click.echo("No LESS files found.")
        return

    counts: dict[str, int] = {}
    for entry in entries:
        verdict = orchestrator.verdict(entry)
        counts[verdict.value] = counts.get(verdict.value, 0) + 1
        label = click.style(verdict.value, fg=_VERDICT_COLORS[verdict])
        click.echo(f"  {label:>22}  {_rel(entry, config.source_root)}")

    click.echo("\nSummary:")
    for name, count in sorted(counts.items()):
        click.echo(f"  {name}: {count}")


@cli.command()
@click.argument("entry", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--reverse", "-r", is_flag=True, help="List entry files that depend on ENTRY instead")
@click.option("--tree", "-t", is_flag=True, help="Show direct imports only")
@click.pass_context
def deps(ctx: click.Context, entry: Path, reverse: bool, tree: bool):
    """Print the transitive @import dependencies of ENTRY."""
    config = _build_config(ctx)
    try:
        resolver = DependencyResolver(config.base_dir.resolve(), strip_comments=config.strip_comments)
    except LessAssetsError as e:
        raise click.ClickException(str(e))

    entry = entry.resolve()
    if reverse:
        entries = CompileOrchestrator(config, resolver=resolver).find_entries()
        paths = resolver.dependents_of(entry, [e.resolve() for e in entries])
    elif tree:
        paths = resolver.direct_imports(entry)
    else:
        check = resolver.check(entry)
        if not check.ok:
            raise click.ClickException(f"Dependency check failed: {check.error}")
        paths = sorted(check.dependencies)

    if not paths:
        click.echo("No dependencies found." if not reverse else "No dependents found.")
        return
    for path in paths:
        click.echo(_rel(path, config.base_dir.resolve()))


@cli.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clean(ctx: click.Context, yes: bool):
    """Delete compiled CSS files carrying the autocompile header."""
    config = _build_config(ctx)
    orchestrator = CompileOrchestrator(config)
    artifacts = orchestrator.find_artifacts()
    if not artifacts:
        click.echo("Nothing to clean.")
        return
    if not yes:
        click.confirm(f"Delete {len(artifacts)} compiled file(s) in {config.artifact_root}?", abort=True)
    for path in orchestrator.clean():
        click.echo(f"  removed {_rel(path, config.artifact_root)}")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
@click.pass_context
def serve(ctx: click.Context, port: int, host: str):
    """Start the compile-results web panel."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the web panel. "
            "Install with: pip install 'less-assets[web]'"
        )

    from less_assets.web import create_app

    config = _build_config(ctx)
    click.echo(f"Starting less-assets panel at http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
