"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from mockserver_mcp.cli_commands.operations import (
        clear,
        expect,
        requests,
        reset,
        status,
        verify,
    )
    from mockserver_mcp.cli_commands.serve import serve

    cli.add_command(serve)
    cli.add_command(status)
    cli.add_command(reset)
    cli.add_command(clear)
    cli.add_command(requests)
    cli.add_command(expect)
    cli.add_command(verify)
