"""Command-line interface for sherpa-s3.

Commands:
- ls: List buckets, or the objects in one bucket
- cp: Copy between two S3 locators, or between S3 and a local file
- rm: Delete an object, or (after confirmation) a whole bucket
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sherpa_s3 import __version__
from sherpa_s3._commands import list_buckets, list_objects, remove_bucket, remove_object, transfer
from sherpa_s3._context import Context
from sherpa_s3._errors import ConfigCreated, ConfigError, SherpaError
from sherpa_s3._strategy import TransferPlan, TransferStrategy, plan_transfer

log = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_CONFIG_PATH = "sherpa_s3.config_path"
_NOISY_LOGGERS = ("botocore", "aiobotocore", "s3fs", "fsspec", "urllib3")


def configure_logging(level: str) -> None:
    """Configure process-wide logging once, on stderr."""
    numeric = getattr(logging, level.upper())
    logging.basicConfig(level=numeric, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(numeric)
    if numeric > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _context(ctx: click.Context) -> Context:
    """Return the invocation's :class:`Context`, loading configuration on first use."""
    root = ctx.find_root()
    if isinstance(root.obj, Context):
        return root.obj
    try:
        context = Context.load(root.meta.get(_CONFIG_PATH))
    except ConfigCreated as e:
        click.echo(str(e))
        click.echo(
            "For S3-compatible services, add and uncomment the `endpoint_url` key in your config file. "
            "For example:"
        )
        click.echo('# endpoint_url = "s3.us-east-001.compatible-service.com"')
        sys.exit(1)
    except ConfigError as e:
        click.echo(f"Fatal: {e}", err=True)
        sys.exit(1)
    root.obj = context
    root.call_on_close(context.close)
    return context


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="SHERPA_S3_CONFIG",
    default=None,
    help="Configuration file (default: <config dir>/sherpa-s3/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="SHERPA_S3_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Logging level.",
)
@click.version_option(version=__version__, prog_name="sherpa-s3")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str) -> None:
    """sherpa-s3 - copy, list and delete objects in S3-compatible storage."""
    configure_logging(log_level)
    ctx.meta[_CONFIG_PATH] = config_path


@cli.command()
@click.argument("bucket", required=False)
@click.pass_context
def ls(ctx: click.Context, bucket: str | None) -> None:
    """List all buckets, or the objects in BUCKET."""
    log.info("'ls' command called")
    context = _context(ctx)
    try:
        if bucket is None:
            click.echo("Listing S3 buckets...")
            names = list_buckets(context)
            if not names:
                click.echo("No S3 buckets found.")
                return
            click.echo("S3 Buckets:")
        else:
            click.echo(f"Listing objects in bucket: {bucket}")
            names = list_objects(context, bucket)
            if not names:
                click.echo(f"No objects found in bucket '{bucket}'.")
                return
            click.echo(f"Objects in '{bucket}':")
    except SherpaError as e:
        click.echo(f"Error executing ls command: {e}", err=True)
        sys.exit(1)
    for name in names:
        click.echo(f"  - {name}")


def _describe(plan: TransferPlan) -> tuple[str, str]:
    """Start and success messages for a plan."""
    src, dst = plan.source, plan.destination
    if plan.strategy is TransferStrategy.REMOTE_TO_REMOTE:
        return (
            f"Copying from '{src}' to '{dst}'",
            f"Successfully copied object from '{src}' to '{dst}'",
        )
    if plan.strategy is TransferStrategy.UPLOAD:
        return (
            f"Uploading from local '{src}' to S3 '{dst}'...",
            f"Successfully uploaded local file '{src}' to S3 '{dst}'",
        )
    return (
        f"Downloading from S3 '{src}' to local '{dst}'...",
        f"Successfully downloaded S3 '{src}' to local '{dst}'",
    )


@cli.command()
@click.argument("source")
@click.argument("destination")
@click.pass_context
def cp(ctx: click.Context, source: str, destination: str) -> None:
    """Copy SOURCE to DESTINATION.

    Either side is an s3://bucket/key locator or a local path; at least
    one side must be an s3:// locator.
    """
    log.info("'cp' command called")
    try:
        # Descriptor errors are reported before configuration is loaded.
        plan = plan_transfer(source, destination)
        context = _context(ctx)
        starting, done = _describe(plan)
        click.echo(starting)
        transfer(context, plan)
    except SherpaError as e:
        click.echo(f"Error executing cp command: {e}", err=True)
        sys.exit(1)
    click.echo(done)


@cli.command()
@click.argument("bucket")
@click.argument("object_key", required=False)
@click.pass_context
def rm(ctx: click.Context, bucket: str, object_key: str | None) -> None:
    """Delete OBJECT_KEY from BUCKET, or BUCKET itself when no key is given.

    Deleting a bucket asks for confirmation first.
    """
    log.info("'rm' command called")
    context = _context(ctx)
    try:
        if object_key is not None:
            click.echo(f"Deleting object '{object_key}' from bucket '{bucket}'...")
            remove_object(context, bucket, object_key)
            click.echo("Object deleted successfully.")
            return

        try:
            answer = click.prompt(
                f"Are you sure you want to delete the bucket '{bucket}' and all its contents? (y/N)",
                default="",
                show_default=False,
            )
        except click.Abort:
            answer = ""
        if answer.strip().lower() != "y":
            click.echo("Bucket deletion cancelled.")
            return

        click.echo(f"Deleting bucket '{bucket}'...")
        remove_bucket(context, bucket)
        click.echo("Bucket deleted successfully.")
    except SherpaError as e:
        click.echo(f"Error executing rm command: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Console script entry point."""
    cli()
