"""File operation commands for the sftpbatch CLI.

Commands:
- upload: Upload files to the server
- download: Download files from the server
- check: Check that remote files exist
- rename: Rename remote files
- delete: Delete remote files
"""

from __future__ import annotations

import getpass
import sys
from typing import TYPE_CHECKING, Any

import click
import paramiko

from sftpbatch.client.cli.config import load_config
from sftpbatch.client.client import Client
from sftpbatch.client.types import BatchTimeoutError, TransferError
from sftpbatch.core.config import DEFAULT_SFTP_PORT, ConnectionParameters, TransferConfig
from sftpbatch.core.types import FilePair

if TYPE_CHECKING:
    from collections.abc import Callable

EXIT_FAILED = 1
EXIT_TIMEOUT = 3


class FilePairType(click.ParamType):
    """Click parameter type parsing SOURCE:TARGET into a FilePair.

    Splits on the last colon so that Windows drive letters in the source
    path are kept intact.
    """

    name = "SOURCE:TARGET"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> FilePair:
        if isinstance(value, FilePair):
            return value
        source, sep, target = str(value).rpartition(":")
        if not sep or not source or not target:
            self.fail(f"expected SOURCE:TARGET, got {value!r}", param, ctx)
        return FilePair(source, target)


FILE_PAIR = FilePairType()


def build_client(ctx: click.Context, workers: int | None = None) -> Client:
    """Create a Client from command-line options and saved config.

    Command-line options win over the config file.

    Args:
        ctx: Click context holding the group options.
        workers: Worker threads for batched calls, if given.

    Returns:
        Configured client.
    """
    options = ctx.obj or {}
    saved = load_config()

    host = options.get("host") or saved.get("host")
    if not host:
        raise click.UsageError("No host given. Use --host or 'sftpbatch config set host HOST'.")

    port = options.get("port")
    if port is None:
        port = saved.get("port")
    if port is None:
        port = DEFAULT_SFTP_PORT

    try:
        params = ConnectionParameters(
            host=host,
            username=options.get("username") or saved.get("username") or getpass.getuser(),
            port=port,
            password=options.get("password"),
            private_key_path=options.get("key_file") or saved.get("private_key_path"),
        )
        transfer_config = TransferConfig(
            batch_size=saved.get("batch_size", TransferConfig.batch_size),
            timeout=saved.get("timeout", TransferConfig.timeout),
            max_workers=workers or saved.get("max_workers", TransferConfig.max_workers),
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    return Client(params, config=transfer_config)


def run_operation(action: Callable[[], bool], description: str) -> None:
    """Run a client call and translate its result into output and exit code.

    Args:
        action: The client call to make.
        description: What the call does, for messages (e.g. "Upload of 3 files").
    """
    try:
        success = action()
    except BatchTimeoutError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_TIMEOUT)
    except (TransferError, paramiko.SSHException, OSError) as e:
        click.echo(f"Error: {description} failed: {e}", err=True)
        sys.exit(EXIT_FAILED)

    if not success:
        click.echo(f"{description} failed for one or more files.", err=True)
        sys.exit(EXIT_FAILED)
    click.echo(f"{description} succeeded.")


def _batched_options(func: Callable[..., None]) -> Callable[..., None]:
    """Add --batch-size, --timeout and --workers to a transfer command."""
    func = click.option(
        "--workers",
        type=click.IntRange(min=1),
        default=None,
        help="Worker threads for a batched transfer (default: 1).",
    )(func)
    func = click.option(
        "--timeout",
        type=float,
        default=None,
        help="Deadline in seconds for the whole batched transfer.",
    )(func)
    func = click.option(
        "--batch-size",
        type=int,
        default=None,
        help="Files per batch. Enables concurrent batched transfer.",
    )(func)
    return func


def _transfer(
    ctx: click.Context,
    method: str,
    pairs: tuple[FilePair, ...],
    batch_size: int | None,
    timeout: float | None,
    workers: int | None,
) -> None:
    client = build_client(ctx, workers)
    if batch_size is None and timeout is not None:
        batch_size = client.config.batch_size
    transfer = getattr(client, method)
    run_operation(
        lambda: transfer(list(pairs), batch_size=batch_size, timeout=timeout),
        f"{method.split('_')[0].capitalize()} of {len(pairs)} files",
    )


@click.command()
@click.argument("pairs", nargs=-1, required=True, type=FILE_PAIR)
@_batched_options
@click.pass_context
def upload(
    ctx: click.Context,
    pairs: tuple[FilePair, ...],
    batch_size: int | None,
    timeout: float | None,
    workers: int | None,
) -> None:
    """Upload files given as LOCAL:REMOTE pairs."""
    _transfer(ctx, "upload_files", pairs, batch_size, timeout, workers)


@click.command()
@click.argument("pairs", nargs=-1, required=True, type=FILE_PAIR)
@_batched_options
@click.pass_context
def download(
    ctx: click.Context,
    pairs: tuple[FilePair, ...],
    batch_size: int | None,
    timeout: float | None,
    workers: int | None,
) -> None:
    """Download files given as LOCAL:REMOTE pairs."""
    _transfer(ctx, "download_files", pairs, batch_size, timeout, workers)


@click.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def check(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Check that every remote PATH exists."""
    client = build_client(ctx)
    run_operation(lambda: client.check_files(list(paths)), f"Check of {len(paths)} files")


@click.command()
@click.argument("pairs", nargs=-1, required=True, type=FILE_PAIR)
@click.pass_context
def rename(ctx: click.Context, pairs: tuple[FilePair, ...]) -> None:
    """Rename remote files given as SOURCE:TARGET pairs."""
    client = build_client(ctx)
    run_operation(lambda: client.rename_files(list(pairs)), f"Rename of {len(pairs)} files")


@click.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def delete(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Delete every remote PATH."""
    client = build_client(ctx)
    run_operation(lambda: client.delete_files(list(paths)), f"Delete of {len(paths)} files")
