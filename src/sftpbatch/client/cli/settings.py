"""Saved defaults commands for the sftpbatch CLI.

Commands:
- config show: Print the saved configuration
- config set: Save one configuration value
"""

from __future__ import annotations

import sys

import click

from sftpbatch.client.cli.config import (
    CONFIG_KEYS,
    get_config_file,
    load_config,
    parse_config_value,
    save_config,
)


@click.group()
def config() -> None:
    """Show or change saved defaults."""


@config.command("show")
def show() -> None:
    """Print the saved configuration."""
    saved = load_config()
    if not saved:
        click.echo(f"No configuration saved in {get_config_file()}")
        return
    for key in sorted(saved):
        click.echo(f"{key} = {saved[key]}")


@config.command("set")
@click.argument("key", type=click.Choice(sorted(CONFIG_KEYS)))
@click.argument("value")
def set_value(key: str, value: str) -> None:
    """Save KEY = VALUE as a default for later commands."""
    try:
        parsed = parse_config_value(key, value)
    except ValueError:
        click.echo(f"Error: invalid value for {key}: {value!r}", err=True)
        sys.exit(1)

    saved = load_config()
    saved[key] = parsed
    save_config(saved)
    click.echo(f"Saved {key} = {parsed}")
