"""
Main CLI entry point for putrecord using Click.

Usage:
    putrecord [--quiet] [--force-fields]
    putrecord upload [--force-fields] [--json]
    putrecord init [--force]

Configuration is read from environment variables:
    PDS_URL, IDENTIFIER, APP_PASSWORD, COLLECTION, FILE_PATH,
    RKEY (optional), FORCE_FIELDS (optional)
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import click

from putrecord import __version__
from putrecord.client import XrpcClient
from putrecord.config import load_config
from putrecord.exceptions import PutRecordError
from putrecord.templates import ENV_EXAMPLE_PATH, WORKFLOW_DIR, init_project
from putrecord.tools import read_file
from putrecord.workflow import RecordUploader, UploadResult


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class CliOptions:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.quiet = False
        self.verbose = False
        self.debug = False
        self.force_fields = False

    def echo(self, message: str = "", **style: object) -> None:
        """Print unless quiet mode is on."""
        if self.quiet:
            return
        click.echo(click.style(message, **style) if style else message)


pass_config = click.make_pass_decorator(CliOptions, ensure=True)

quiet_option = click.option("-q", "--quiet", is_flag=True, help="Suppress all non-error output")


@click.group(invoke_without_command=True)
@quiet_option
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option(
    "--force-fields",
    is_flag=True,
    help="Re-extract title and reset visibility on update (WhiteWind)",
)
@click.version_option(version=__version__, prog_name="putrecord")
@click.pass_context
def cli(ctx: click.Context, quiet: bool, verbose: bool, debug: bool, force_fields: bool) -> None:
    """Upload files as AT Protocol records to a PDS.

    Without a command, uploads FILE_PATH using the environment configuration.
    """
    ctx.ensure_object(CliOptions)
    ctx.obj.quiet = quiet
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.force_fields = force_fields
    setup_logging(verbose=verbose, debug=debug)

    if ctx.invoked_subcommand is None:
        ctx.invoke(upload, force_fields=force_fields)


@cli.command()
@click.option(
    "--force-fields",
    is_flag=True,
    help="Re-extract title and reset visibility on update (WhiteWind)",
)
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@quiet_option
@pass_config
def upload(options: CliOptions, force_fields: bool, as_json: bool, quiet: bool) -> None:
    """Create or update a record from a file.

    Without RKEY a new record is created and its generated RKEY printed.
    With RKEY the existing record is overwritten; WhiteWind title and
    visibility are preserved unless --force-fields or FORCE_FIELDS is set.

    Example:
        COLLECTION=com.whtwnd.blog.entry FILE_PATH=post.md putrecord upload
    """
    options.quiet = options.quiet or quiet

    try:
        options.echo("Loading configuration...")
        settings = load_config()
        if force_fields or options.force_fields:
            settings.force_fields = True

        options.echo(f"Reading file: {settings.file_path}")
        content = read_file(settings.file_path)
        options.echo(f"✓ File read ({len(content)} characters)")

        with XrpcClient(settings.pds_url) as client:
            options.echo(f"Authenticating as: {settings.identifier}")
            client.login(settings.identifier, settings.password)
            options.echo("✓ Authentication successful")

            options.echo("Building record from file content...")
            if settings.rkey:
                options.echo(f"Updating existing record: {settings.collection}/{settings.rkey}...")
            else:
                options.echo(f"Creating new record in {settings.collection}...")
            result = RecordUploader(client).upload(settings, content)
    except PutRecordError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _print_upload_summary(options, result)


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite existing files")
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@quiet_option
@pass_config
def init(options: CliOptions, force: bool, directory: str, quiet: bool) -> None:
    """Set up a GitHub Actions workflow and .env.example.

    Example:
        putrecord init
    """
    options.quiet = options.quiet or quiet
    options.echo("Initializing putrecord project...")

    try:
        result = init_project(directory, force=force)
    except OSError as e:
        raise click.ClickException(f"Error initializing project: {e}")

    if result.created_workflow_dir:
        options.echo(f"Created directory: {WORKFLOW_DIR.as_posix()}")
    else:
        options.echo(f"Directory exists: {WORKFLOW_DIR.as_posix()}")

    for action in result.actions:
        path = action.path.as_posix()
        if action.status == "skipped":
            options.echo(f"Skipped: {path} (already exists)", fg="yellow")
        elif action.status == "overwritten":
            options.echo(f"Created: {path} (overwritten)")
        else:
            options.echo(f"Created: {path}")

    if result.any_skipped:
        options.echo("Use --force to overwrite existing files")

    options.echo()
    options.echo("✓ Initialization complete!", fg="green")
    options.echo()
    options.echo("Next steps:")
    options.echo(f"  1. Copy {ENV_EXAMPLE_PATH} to .env and fill in your values")
    options.echo("  2. Set GitHub repository secrets (Settings > Secrets and variables > Actions):")
    options.echo("     PDS_URL, IDENTIFIER, APP_PASSWORD, COLLECTION, FILE_PATH, RKEY (optional)")
    options.echo("  3. Commit the workflow file and push")


def _print_upload_summary(options: CliOptions, result: UploadResult) -> None:
    """Print the outcome of an upload."""
    options.echo()
    for i, line in enumerate(result.summary().splitlines()):
        if i == 0:
            options.echo(f"✓ {line}", fg="green")
        else:
            options.echo(line)

    if not result.is_update:
        options.echo()
        options.echo(f"⚠ Save this RKEY for future updates: {result.rkey}", fg="yellow")
        options.echo(f"  Add to your .env file: RKEY={result.rkey}")


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        rv = cli(args, standalone_mode=False)
        return rv if isinstance(rv, int) else 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
