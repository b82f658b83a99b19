"""Presentation-side copy of the journal.

The view keeps a read-only snapshot of the entries last returned by the
service and updates it only after a mutation succeeds. A failed add or
remove leaves the snapshot as it was; a failed load clears it so that
stale rows are never shown as current.
"""

import logging
from typing import Any, Mapping, Optional

from tradejournal.errors import JournalError
from tradejournal.journal.calc import total_net
from tradejournal.journal.service import JournalService
from tradejournal.models import TradeEntry

logger = logging.getLogger(__name__)


def sort_key(entry: TradeEntry) -> tuple:
    """Ascending sort key; reverse it for newest-first display."""
    return (entry.date, entry.created_at)


class JournalView:
    """Cached list of entries with a running net total."""

    def __init__(self, service: JournalService):
        self.service = service
        self._entries: tuple[TradeEntry, ...] = ()
        self.loading = True
        self.error: Optional[JournalError] = None

    @property
    def entries(self) -> tuple[TradeEntry, ...]:
        return self._entries

    @property
    def total(self) -> float:
        """Total net P&L over the entries currently held."""
        return total_net(self._entries)

    def load(self) -> tuple[TradeEntry, ...]:
        """Replace the snapshot with a fresh list from the service."""
        try:
            entries = self.service.list()
        except JournalError as e:
            self._entries = ()
            self.error = e
            raise
        finally:
            self.loading = False
        self._entries = tuple(entries)
        self.error = None
        return self._entries

    def add(self, fields: Mapping[str, Any]) -> TradeEntry:
        """Add an entry and show it without reloading the whole list."""
        entry = self.service.add(fields)
        # Stable sort keeps the new entry ahead of any with an equal key.
        self._entries = tuple(
            sorted((entry,) + self._entries, key=sort_key, reverse=True)
        )
        return entry

    def remove(self, entry_id: str) -> bool:
        """Remove an entry and drop its row from the snapshot."""
        deleted = self.service.remove(entry_id)
        self._entries = tuple(e for e in self._entries if e.id != entry_id)
        return deleted
