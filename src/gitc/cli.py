"""Command-line interface for gitc."""

import asyncio
import logging
import sys
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from gitc import __version__
from gitc.cleanup import CleanupOptions, CleanupOrchestrator, CleanupResult
from gitc.config import ConfigurationError, GitcConfig
from gitc.vcs import (
    DefaultBranchDetector,
    GitcError,
    GitCommandRunner,
    RemoteSynchronizer,
    RepositoryInspector,
)

app = typer.Typer(
    name="gitc",
    help="Switch to the default branch, sync it, and delete stale local branches",
    add_completion=False,
)
console = Console()

# Help text constants
VERBOSE_OUTPUT_HELP = "Show detailed logs"
ENV_FILE_HELP = "Path to custom environment file (default: .env.gitc or .env)"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    # GitPython logs every Popen call at DEBUG
    if not verbose:
        logging.getLogger("git").setLevel(logging.WARNING)


def _load_config(env_file: str | None) -> GitcConfig:
    """Load configuration or exit with an error.

    Args:
        env_file: Optional custom env file

    Returns:
        Loaded configuration
    """
    try:
        return GitcConfig(env_file=env_file)
    except (ConfigurationError, ValidationError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)


def _fail(error: Exception, verbose: bool) -> NoReturn:
    """Report an unexpected error and exit.

    Args:
        error: The error to report
        verbose: If True, also print the traceback
    """
    console.print(f"[red]Error: {error}[/red]")
    if verbose and not isinstance(error, GitcError):
        console.print_exception()
    sys.exit(1)


def _display_cleanup_results(result: CleanupResult) -> None:
    """Display cleanup results.

    Args:
        result: Cleanup result to display
    """
    console.print(f"Default branch: [bold]{result.default_branch}[/bold]")

    if result.deleted_branches:
        console.print("\n[bold]Deleted branches:[/bold]")
        for branch in result.deleted_branches:
            console.print(f"  [green]✓[/green] {branch}")

    if result.skipped_branches:
        console.print("\n[bold]Skipped branches:[/bold]")
        for branch in result.skipped_branches:
            console.print(f"  [dim]-[/dim] {branch}")

    if result.errors:
        console.print("\n[bold]Errors:[/bold]")
        for failure in result.errors:
            console.print(f"  [red]✗[/red] {failure.detail}")

    if result.was_dry_run:
        console.print("\n[green]✨ Dry-run completed. Run without --dry-run to perform actual cleanup.[/green]")
    else:
        console.print(f"\n[green]✨ Cleanup completed! Deleted {result.deleted_count} branches.[/green]")

    if result.has_errors:
        sys.exit(1)


async def _run_cleanup(config: GitcConfig, options: CleanupOptions) -> CleanupResult:
    """Run the cleanup workflow.

    Args:
        config: Configuration object
        options: Options for this run

    Returns:
        Cleanup result
    """
    orchestrator = CleanupOrchestrator(config)
    return await orchestrator.execute(options)


@app.command()
def cleanup(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Perform a dry run without making actual changes",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompts",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Delete branches even if they are not fully merged",
    ),
    default_branch: str | None = typer.Option(
        None,
        "--default-branch",
        "-b",
        help="Default branch to use instead of detecting it",
    ),
    exclude: str | None = typer.Option(
        None,
        "--exclude",
        help="Branch name that must never be deleted",
    ),
    no_pull: bool = typer.Option(
        False,
        "--no-pull",
        help="Skip pulling the default branch",
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
) -> None:
    """Switch to the default branch, fetch, pull, and delete other local branches."""
    setup_logging(verbose)
    config = _load_config(env_file)

    try:
        options = CleanupOptions(
            dry_run=dry_run,
            verbose=verbose,
            skip_confirmation=yes,
            force=force,
            default_branch=default_branch,
            exclude_pattern=exclude if exclude is not None else config.exclude_pattern,
            skip_pull=no_pull or config.skip_pull,
        )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    if options.dry_run:
        console.print("🔍 Dry-run mode: No actual changes will be made\n")
    elif not options.skip_confirmation:
        mode = "force-delete" if options.force else "delete"
        if not typer.confirm(f"Switch to the default branch and {mode} all other local branches?", default=False):
            console.print("[yellow]Cleanup cancelled[/yellow]")
            raise typer.Exit(0)

    try:
        result = asyncio.run(_run_cleanup(config, options))
    except Exception as e:
        _fail(e, verbose)

    _display_cleanup_results(result)


@app.command()
def check_remote(
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait for the remote (default: from configuration)",
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Check that the configured remote can be reached."""
    if timeout is not None and timeout <= 0:
        raise typer.BadParameter("must be greater than 0", param_hint="'--timeout'")

    setup_logging(verbose)
    config = _load_config(env_file)

    runner = GitCommandRunner(default_timeout=config.command_timeout)
    synchronizer = RemoteSynchronizer(runner, remote_name=config.remote_name)
    check_timeout = timeout if timeout is not None else config.remote_check_timeout
    try:
        asyncio.run(synchronizer.check_remote_access(check_timeout))
    except Exception as e:
        _fail(e, verbose)

    console.print(f"[green]✓ Remote '{config.remote_name}' is reachable[/green]")


@app.command()
def branches(
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Show the detected default branch and the local branches."""
    setup_logging(verbose)
    config = _load_config(env_file)

    runner = GitCommandRunner(default_timeout=config.command_timeout)
    inspector = RepositoryInspector(runner)
    detector = DefaultBranchDetector(
        runner,
        inspector,
        remote_name=config.remote_name,
        candidates=config.default_branch_candidates,
    )

    async def _collect() -> tuple[str, str, list[str]]:
        inspector.is_repository(inspector.current_directory())
        return await detector.detect(), await inspector.current_branch(), await inspector.list_local_branches()

    try:
        default, current, local_branches = asyncio.run(_collect())
    except Exception as e:
        _fail(e, verbose)

    console.print(f"Default branch: [bold]{default}[/bold]\n")
    for branch in local_branches:
        marker = "*" if branch == current else " "
        note = " [dim](default)[/dim]" if branch == default else ""
        console.print(f"  {marker} {branch}{note}")


@app.command()
def config(
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
) -> None:
    """Show current configuration."""
    cfg = _load_config(env_file)
    env_path = GitcConfig.find_env_file() if env_file is None else env_file

    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(f"  Env file: {env_path or 'none'}")
    console.print(f"  Remote: {cfg.remote_name}")
    console.print(f"  Default branch candidates: {', '.join(cfg.default_branch_candidates)}")
    console.print(f"  Command timeout: {cfg.command_timeout or 'none'}")
    console.print(f"  Remote check timeout: {cfg.remote_check_timeout:g}s")
    console.print(f"  Exclude pattern: {cfg.exclude_pattern or 'none'}")
    console.print(f"  Skip pull: {cfg.skip_pull}")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"gitc version {__version__}")


if __name__ == "__main__":
    app()
