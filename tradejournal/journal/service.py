"""Journal service: the authoritative collection of trade entries.

The service validates input from the presentation layer, assigns the
identity fields of new entries and delegates persistence to the
:class:`~tradejournal.db.store.DataStore`. Errors from the store are
logged and propagated unchanged; nothing is retried.
"""

import logging
import re
import uuid
from datetime import date, datetime, time
from typing import Any, Callable, Mapping, Optional

from tradejournal.db.store import DataStore
from tradejournal.errors import StorageUnavailable, ValidationError
from tradejournal.journal.calc import CHARGE_FIELDS, MAX_AMOUNT, parse_amount
from tradejournal.models import Segment, TradeEntry

logger = logging.getLogger(__name__)

SEGMENT_ALIASES = {
    "equity": Segment.EQUITY,
    "fo": Segment.FO,
    "f&o": Segment.FO,
    "mcx": Segment.MCX,
}

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"\d{2}:\d{2}(:\d{2})?")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_date(value: Any) -> date:
    """Parse a trade date from a date or an ISO 8601 ``YYYY-MM-DD`` string."""
    if _is_blank(value):
        raise ValidationError("date is required", field="date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not DATE_PATTERN.fullmatch(text):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)", field="date")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)", field="date")


def parse_time(value: Any) -> time:
    """Parse a time of day from a time or an ``HH:MM[:SS]`` string."""
    if _is_blank(value):
        raise ValidationError("time is required", field="time")
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    text = str(value).strip()
    if not TIME_PATTERN.fullmatch(text):
        raise ValidationError(f"Invalid time: {value!r} (expected HH:MM)", field="time")
    try:
        return time.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid time: {value!r} (expected HH:MM)", field="time")


def parse_segment(value: Any) -> Segment:
    """Parse a market segment; blank means Equity."""
    if _is_blank(value):
        return Segment.EQUITY
    if isinstance(value, Segment):
        return value
    segment = SEGMENT_ALIASES.get(str(value).strip().lower())
    if segment is None:
        choices = ", ".join(s.value for s in Segment)
        raise ValidationError(f"Invalid segment: {value!r} (expected one of {choices})", field="segment")
    return segment


def parse_pnl(value: Any) -> float:
    """Parse the gross P&L, which must be a finite number below MAX_AMOUNT in size."""
    if _is_blank(value):
        raise ValidationError("pnl is required", field="pnl")
    amount = parse_amount(value)
    if amount is None:
        raise ValidationError(f"Invalid pnl: {value!r} (expected a number)", field="pnl")
    if abs(amount) >= MAX_AMOUNT:
        raise ValidationError(f"pnl out of range: {value!r}", field="pnl")
    return amount


def parse_charge(name: str, value: Any) -> float:
    """Parse a charge field.

    Absent or non-numeric charges are recorded as zero rather than
    rejected, so a half-filled form can still be saved quickly.
    Negative charges and charges of MAX_AMOUNT or more are rejected.
    """
    amount = parse_amount(value)
    if amount is None:
        return 0.0
    if amount < 0:
        raise ValidationError(f"{name} cannot be negative: {value!r}", field=name)
    if amount >= MAX_AMOUNT:
        raise ValidationError(f"{name} out of range: {value!r}", field=name)
    return amount


class JournalService:
    """Lists, adds and removes trade entries."""

    def __init__(
        self,
        store: DataStore,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        """Initialize the journal service.

        Args:
            store: Backing data store.
            clock: Source of creation timestamps.
            id_factory: Source of new entry IDs.
        """
        self.store = store
        self._clock = clock
        self._id_factory = id_factory

    def list(self) -> list[TradeEntry]:
        """Get all entries, newest date first, then most recently created first.

        Raises:
            StorageUnavailable: If the store cannot be read.
        """
        try:
            entries = self.store.get_entries()
        except StorageUnavailable as e:
            logger.error("Failed to list trades: %s", e)
            raise
        logger.debug("Loaded %d trades", len(entries))
        return entries

    def get(self, entry_id: str) -> Optional[TradeEntry]:
        """Get a single entry by ID, or None if it does not exist."""
        try:
            return self.store.get_entry(entry_id)
        except StorageUnavailable as e:
            logger.error("Failed to load trade %s: %s", entry_id, e)
            raise

    def build_entry(self, fields: Mapping[str, Any]) -> TradeEntry:
        """Validate input fields and build a new entry with a fresh ID.

        Args:
            fields: Mapping with ``date``, ``time``, ``segment``, ``pnl``
                and optionally ``stt``, ``brokerage``, ``other_charges``.

        Raises:
            ValidationError: If date, time or pnl is missing or malformed,
                the segment is unknown or a charge is negative.
        """
        charges = {name: parse_charge(name, fields.get(name)) for name in CHARGE_FIELDS}
        return TradeEntry(
            id=self._id_factory(),
            date=parse_date(fields.get("date")),
            time=parse_time(fields.get("time")),
            segment=parse_segment(fields.get("segment")),
            pnl=parse_pnl(fields.get("pnl")),
            created_at=self._clock(),
            **charges,
        )

    def add(self, fields: Mapping[str, Any]) -> TradeEntry:
        """Validate and persist a new entry.

        Args:
            fields: Raw entry fields; see :meth:`build_entry`.

        Returns:
            The stored entry, including its assigned ID and timestamp.

        Raises:
            ValidationError: If the input is invalid.
            StorageUnavailable: If the entry could not be saved.
        """
        try:
            entry = self.build_entry(fields)
        except ValidationError as e:
            logger.info("Rejected trade: %s", e)
            raise

        try:
            self.store.insert_entry(entry)
        except StorageUnavailable as e:
            logger.error("Failed to save trade: %s", e)
            raise

        logger.info(
            "Added trade %s: %s %s %s pnl=%.2f net=%.2f",
            entry.id,
            entry.date.isoformat(),
            entry.time.strftime("%H:%M"),
            entry.segment.value,
            entry.pnl,
            entry.net,
        )
        return entry

    def remove(self, entry_id: str) -> bool:
        """Delete an entry.

        Removing an ID that does not exist is not an error.

        Returns:
            True if an entry was deleted, False if none had that ID.

        Raises:
            StorageUnavailable: If the delete could not be performed.
        """
        try:
            deleted = self.store.delete_entry(entry_id)
        except StorageUnavailable as e:
            logger.error("Failed to delete trade %s: %s", entry_id, e)
            raise

        if deleted:
            logger.info("Removed trade %s", entry_id)
        else:
            logger.debug("Trade %s not found, nothing removed", entry_id)
        return deleted
