"""Command-line interface for sftpbatch.

This module provides the main CLI entry point and assembles all commands.

Commands:
- upload: Upload LOCAL:REMOTE pairs, optionally batched with a timeout
- download: Download LOCAL:REMOTE pairs, optionally batched with a timeout
- check: Check that remote files exist
- rename: Rename remote files (SOURCE:TARGET pairs)
- delete: Delete remote files
- config: Show or change saved defaults
"""

from __future__ import annotations

import logging
import sys

import click

from sftpbatch.client.cli.config import (
    get_config_dir,
    get_config_file,
    load_config,
    save_config,
)
from sftpbatch.client.cli.settings import config
from sftpbatch.client.cli.transfer import check, delete, download, rename, upload

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure the sftpbatch logger to write to stdout.

    Args:
        verbose: Log everything down to DEBUG instead of warnings only.
    """
    root_logger = logging.getLogger("sftpbatch")
    # Replace handlers so repeated invocations don't duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stdout_handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root_logger.propagate = False


@click.group()
@click.version_option()
@click.option("--host", default=None, help="SFTP server hostname (default: from config).")
@click.option("--port", type=int, default=None, help="SFTP server port (default: 22).")
@click.option("--user", "username", default=None, help="Login name (default: from config).")
@click.option(
    "--key-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Private key file for authentication.",
)
@click.option(
    "--password",
    envvar="SFTPBATCH_PASSWORD",
    default=None,
    help="Password (or set SFTPBATCH_PASSWORD).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    host: str | None,
    port: int | None,
    username: str | None,
    key_file: str | None,
    password: str | None,
    verbose: bool,
) -> None:
    """sftpbatch - Batched SFTP file operations with a global timeout."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update(
        host=host,
        port=port,
        username=username,
        key_file=key_file,
        password=password,
    )


# Transfer commands
cli.add_command(upload)
cli.add_command(download)

# Remote file commands
cli.add_command(check)
cli.add_command(rename)
cli.add_command(delete)

# Settings
cli.add_command(config)


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


__all__ = [
    # Main entry points
    "cli",
    "main",
    "setup_logging",
    # Config utilities
    "get_config_dir",
    "get_config_file",
    "load_config",
    "save_config",
]
