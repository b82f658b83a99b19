"""Data models for the trade journal."""

from tradejournal.models.entry import Segment, TradeEntry

__all__ = [
    "Segment",
    "TradeEntry",
]
