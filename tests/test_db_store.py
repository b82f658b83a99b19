"""Property-based tests for the database store.

**Feature: trade-journal**
"""

import tempfile
import uuid
from datetime import date, datetime, time, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.db.store import DataStore
from tradejournal.errors import StorageUnavailable
from tradejournal.models import Segment, TradeEntry


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


def entry_strategy():
    """Generate valid TradeEntry objects for testing."""
    money = st.integers(min_value=0, max_value=10_000_000).map(lambda c: c / 100)
    return st.builds(
        TradeEntry,
        id=st.uuids().map(lambda u: u.hex),
        date=st.dates(min_value=date(2020, 1, 1), max_value=date(2030, 12, 31)),
        time=st.times(),
        segment=st.sampled_from(list(Segment)),
        pnl=st.integers(min_value=-10_000_000, max_value=10_000_000).map(lambda c: c / 100),
        stt=money,
        brokerage=money,
        other_charges=money,
        created_at=st.datetimes(
            min_value=datetime(2020, 1, 1),
            max_value=datetime(2030, 12, 31),
        ),
    )


def make_entry(**overrides) -> TradeEntry:
    fields = {
        "id": uuid.uuid4().hex,
        "date": date(2024, 1, 10),
        "time": time(9, 20),
        "segment": Segment.EQUITY,
        "pnl": 1500.0,
        "stt": 15.0,
        "brokerage": 20.0,
        "other_charges": 0.0,
        "created_at": datetime(2024, 1, 10, 9, 21),
    }
    fields.update(overrides)
    return TradeEntry(**fields)


class TestDatabaseSchemaCompleteness:
    """
    **Feature: trade-journal, Property: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopening_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "journal.db"
            entry = make_entry()
            DataStore(db_path).insert_entry(entry)

            assert DataStore(db_path).get_entries() == [entry]

    def test_unopenable_database(self):
        """A path that is a directory cannot be opened as a database."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(StorageUnavailable):
                DataStore(Path(tmpdir))


class TestEntryStorage:
    """
    **Feature: trade-journal, Property: Entry Round Trip**

    *For any* saved entry, the stored record should be retrievable
    with every field preserved.
    """

    @given(entry=entry_strategy())
    @settings(max_examples=50)
    def test_entry_save_retrieve(self, entry: TradeEntry):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            store.insert_entry(entry)

            assert store.get_entry(entry.id) == entry
            assert store.get_entries() == [entry]

    def test_numeric_fields_are_numbers(self, temp_db: DataStore):
        entry = make_entry()
        temp_db.insert_entry(entry)

        stored = temp_db.get_entry(entry.id)
        for name in ("pnl", "stt", "brokerage", "other_charges"):
            assert isinstance(getattr(stored, name), float)

    def test_duplicate_id_rejected(self, temp_db: DataStore):
        entry = make_entry()
        temp_db.insert_entry(entry)

        with pytest.raises(StorageUnavailable):
            temp_db.insert_entry(make_entry(id=entry.id, pnl=1.0))
        assert temp_db.get_entries() == [entry]

    def test_get_missing_entry(self, temp_db: DataStore):
        assert temp_db.get_entry("missing") is None


class TestEntryOrdering:
    """
    **Feature: trade-journal, Property: List Ordering**

    *For any* set of entries, a later date comes first; on the same
    date the later created_at comes first.
    """

    @given(entries=st.lists(entry_strategy(), min_size=0, max_size=20, unique_by=lambda e: e.id))
    @settings(max_examples=30)
    def test_newest_first(self, entries: list[TradeEntry]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            for entry in entries:
                store.insert_entry(entry)

            listed = store.get_entries()
            assert len(listed) == len(entries)
            for a, b in zip(listed, listed[1:]):
                assert (a.date, a.created_at) >= (b.date, b.created_at)

    def test_same_day_most_recent_first(self, temp_db: DataStore):
        first = make_entry(created_at=datetime(2024, 1, 10, 9, 0))
        second = make_entry(created_at=datetime(2024, 1, 10, 9, 0) + timedelta(microseconds=1))
        older_day = make_entry(date=date(2024, 1, 9), created_at=datetime(2024, 1, 11))
        for entry in (first, older_day, second):
            temp_db.insert_entry(entry)

        assert [e.id for e in temp_db.get_entries()] == [second.id, first.id, older_day.id]

    def test_identical_keys_use_insertion_order(self, temp_db: DataStore):
        first = make_entry()
        second = make_entry()
        temp_db.insert_entry(first)
        temp_db.insert_entry(second)

        assert [e.id for e in temp_db.get_entries()] == [second.id, first.id]


class TestEntryDeletion:
    """
    **Feature: trade-journal, Property: Delete Consistency**

    *For any* deleted entry, it should no longer be retrievable and
    the other entries should be untouched.
    """

    def test_delete_existing(self, temp_db: DataStore):
        keep = make_entry()
        drop = make_entry()
        temp_db.insert_entry(keep)
        temp_db.insert_entry(drop)

        assert temp_db.delete_entry(drop.id) is True
        assert temp_db.get_entry(drop.id) is None
        assert temp_db.get_entries() == [keep]

    def test_delete_missing(self, temp_db: DataStore):
        keep = make_entry()
        temp_db.insert_entry(keep)

        assert temp_db.delete_entry("missing") is False
        assert temp_db.get_entries() == [keep]

