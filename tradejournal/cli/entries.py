"""Trade entry commands for the trade journal CLI.

Handles adding, listing and removing trades and showing the total
net P&L.
"""

from datetime import datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.errors import JournalError, ValidationError
from tradejournal.models import Segment, TradeEntry

console = Console()

SEGMENT_STYLES = {
    Segment.EQUITY: "bold blue",
    Segment.FO: "bold magenta",
    Segment.MCX: "bold dark_orange",
}


def _get_service(ctx: click.Context):
    """Get the journal service for the configured database."""
    from tradejournal.db.store import DataStore
    from tradejournal.journal.service import JournalService

    return JournalService(DataStore(ctx.obj["db_path"]))


def _error_panel(message: str, error: Exception) -> None:
    console.print(Panel(
        f"[red]{message}[/red]\n\n{str(error)}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def format_pnl(value: float) -> str:
    """Format an amount in rupees, green when non-negative and red otherwise."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}₹{abs(value):,.2f}[/{color}]"


def _entry_summary(entry: TradeEntry) -> str:
    return (
        f"ID:        {entry.id}\n"
        f"Date:      {entry.date.isoformat()} {entry.time.strftime('%H:%M')}\n"
        f"Segment:   {entry.segment.value}\n"
        f"Gross P&L: {format_pnl(entry.pnl)}\n"
        f"Charges:   [red]-₹{entry.charges:,.2f}[/red]\n"
        f"Net P&L:   {format_pnl(entry.net)}"
    )


@click.command("add")
@click.option(
    "--date", "trade_date",
    default=lambda: datetime.now().date().isoformat(),
    show_default="today",
    help="Trade date (YYYY-MM-DD).",
)
@click.option(
    "--time", "trade_time",
    default=lambda: datetime.now().strftime("%H:%M"),
    show_default="now",
    help="Trade time (HH:MM).",
)
@click.option(
    "--segment",
    default=Segment.EQUITY.value,
    show_default=True,
    help="Market segment: Equity, FO or MCX.",
)
@click.option("--pnl", required=True, help="Gross P&L (negative for a loss).")
@click.option("--stt", default=None, help="STT paid.")
@click.option("--brokerage", default=None, help="Brokerage and exchange charges.")
@click.option("--other-charges", "other_charges", default=None, help="Any other charges.")
@click.pass_context
def add(
    ctx: click.Context,
    trade_date: str,
    trade_time: str,
    segment: str,
    pnl: str,
    stt: Optional[str],
    brokerage: Optional[str],
    other_charges: Optional[str],
) -> None:
    """Record a trade.

    Charges that are left out or are not numbers are recorded as 0.

    \b
    Examples:
      tradejournal add --pnl 1500 --stt 15 --brokerage 20
      tradejournal add --date 2024-01-10 --time 09:20 --segment FO --pnl=-300 --stt 5
    """
    fields = {
        "date": trade_date,
        "time": trade_time,
        "segment": segment,
        "pnl": pnl,
        "stt": stt,
        "brokerage": brokerage,
        "other_charges": other_charges,
    }

    try:
        entry = _get_service(ctx).add(fields)
    except ValidationError as e:
        _error_panel("Invalid trade:", e)
        raise SystemExit(1)
    except JournalError as e:
        _error_panel("Failed to add trade:", e)
        raise SystemExit(1)

    console.print(Panel(
        f"[bold green]Trade Added[/bold green]\n\n{_entry_summary(entry)}",
        title="[bold]New Trade[/bold]",
        border_style="green",
    ))


@click.command("list")
@click.pass_context
def list_entries(ctx: click.Context) -> None:
    """Show all trades, newest first, with net P&L and the total.

    \b
    Examples:
      tradejournal list
    """
    from tradejournal.journal.view import JournalView

    try:
        view = JournalView(_get_service(ctx))
        view.load()
    except JournalError as e:
        _error_panel("Failed to load trades:", e)
        raise SystemExit(1)

    if not view.entries:
        console.print(Panel(
            "[dim]No trades found. Add your first trade with 'tradejournal add'.[/dim]",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Date", style="bold")
    table.add_column("Time", style="dim")
    table.add_column("Segment")
    table.add_column("Gross P&L", justify="right")
    table.add_column("Charges", justify="right", style="red")
    table.add_column("Net P&L", justify="right")
    table.add_column("ID", style="dim", no_wrap=True)

    for entry in view.entries:
        style = SEGMENT_STYLES[entry.segment]
        table.add_row(
            entry.date.isoformat(),
            entry.time.strftime("%H:%M"),
            f"[{style}]{entry.segment.value}[/{style}]",
            format_pnl(entry.pnl),
            f"-₹{entry.charges:,.2f}",
            f"[bold]{format_pnl(entry.net)}[/bold]",
            entry.id,
        )

    console.print(table)
    console.print(f"\n[bold]Total Net P&L:[/bold] {format_pnl(view.total)}")
    console.print(f"[dim]Trades: {len(view.entries)}[/dim]")


@click.command("remove")
@click.argument("entry_id")
@click.option("-y", "--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_context
def remove(ctx: click.Context, entry_id: str, yes: bool) -> None:
    """Delete a trade.

    ENTRY_ID is the ID shown by 'tradejournal list'.

    \b
    Examples:
      tradejournal remove 3f2a...        # Asks before deleting
      tradejournal remove 3f2a... --yes  # Deletes without asking
    """
    try:
        service = _get_service(ctx)
        entry = service.get(entry_id)
    except JournalError as e:
        _error_panel("Failed to delete trade:", e)
        raise SystemExit(1)

    if entry is None:
        console.print(f"[yellow]Trade with ID {entry_id} not found[/yellow]")
        return

    console.print(Panel(_entry_summary(entry), title="[bold]Trade[/bold]", border_style="dim"))
    if not yes:
        click.confirm("Are you sure you want to delete this trade?", abort=True)

    try:
        service.remove(entry_id)
    except JournalError as e:
        _error_panel("Failed to delete trade:", e)
        raise SystemExit(1)

    console.print(f"[green]✓ Removed trade {entry_id}[/green]")


@click.command("total")
@click.pass_context
def total(ctx: click.Context) -> None:
    """Show the total net P&L across all trades.

    \b
    Examples:
      tradejournal total
    """
    from tradejournal.journal.calc import total_net

    try:
        entries = _get_service(ctx).list()
    except JournalError as e:
        _error_panel("Failed to load trades:", e)
        raise SystemExit(1)

    console.print(Panel(
        f"[bold]Total Net P&L:[/bold] {format_pnl(total_net(entries))}\n\n"
        f"[dim]Trades: {len(entries)}[/dim]",
        title="[bold cyan]P&L[/bold cyan]",
        border_style="cyan",
    ))
