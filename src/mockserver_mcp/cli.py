"""mockserver-mcp CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import click

from mockserver_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mockserver-mcp")
@click.option("--host", default=None, help="MockServer host (overrides MOCKSERVER_HOST).")
@click.option(
    "--port",
    type=click.IntRange(1, 65535),
    default=None,
    help="MockServer port (overrides MOCKSERVER_PORT).",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Per-call timeout in milliseconds (overrides MOCKSERVER_TIMEOUT).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for messages written to stderr.",
)
@click.pass_context
def main(
    ctx: click.Context,
    host: str | None,
    port: int | None,
    timeout: int | None,
    config_path: Path | None,
    log_level: str,
) -> None:
    """MockServer MCP — drive a MockServer instance from MCP tools or the shell."""
    from mockserver_mcp.cli_commands._output import configure_logging, fail
    from mockserver_mcp.config import MockServerSettings, load_settings
    from mockserver_mcp.errors import ConfigurationError

    configure_logging(log_level)

    try:
        base = load_settings(config_path) if config_path is not None else None
    except ConfigurationError as exc:
        fail(f"Configuration error: {exc}")

    settings = MockServerSettings.from_env(base=base)
    overrides = {
        key: value
        for key, value in (("host", host), ("port", port), ("timeout", timeout))
        if value is not None
    }
    ctx.obj = settings.model_copy(update=overrides)


# Register subcommands
from mockserver_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
