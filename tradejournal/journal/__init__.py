"""Journal service, view and P&L calculations."""

from tradejournal.journal.calc import charges, net, parse_amount, total_net
from tradejournal.journal.service import JournalService
from tradejournal.journal.view import JournalView

__all__ = [
    "JournalService",
    "JournalView",
    "charges",
    "net",
    "parse_amount",
    "total_net",
]
