"""Main CLI entry point for the trade journal."""

from pathlib import Path
from typing import Optional

import click

from tradejournal.cli.entries import add, list_entries, remove, total
from tradejournal.config import ConfigError, load_config
from tradejournal.logger import setup_logging

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option(
    "--db", "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="TRADEJOURNAL_DB",
    help="SQLite database file (overrides config).",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/tradejournal/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, db_path: Optional[Path], config_path: Optional[Path], verbose: bool) -> None:
    """Trade Journal - record intraday trades and track net P&L.

    Log each trade's gross P&L with its STT, brokerage and other
    charges; the journal shows the net P&L per trade and in total.

    \b
    Quick Start:
      tradejournal add --pnl 1500 --stt 15 --brokerage 20
      tradejournal list
      tradejournal remove ID
    """
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))

    setup_logging("DEBUG" if verbose else config.logging.level)

    ctx.obj["config"] = config
    ctx.obj["db_path"] = (db_path or config.storage.db_path).expanduser()


cli.add_command(add)
cli.add_command(list_entries)
cli.add_command(remove)
cli.add_command(total)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
