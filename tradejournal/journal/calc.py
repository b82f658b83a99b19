"""Net P&L calculations.

All amounts are computed in ``Decimal`` from the shortest decimal string of
each float and rounded half away from zero to two places, so that
``1500 - 15 - 20`` is exactly ``1465.00`` and never ``1464.9999``.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Iterable, Mapping, Optional, Union

from tradejournal.models import TradeEntry

CENT = Decimal("0.01")

# Largest amount accepted on a new entry.
MAX_AMOUNT = 1e15

# Digits needed to quantize any finite float to paise.
PRECISION = 400

CHARGE_FIELDS = ("stt", "brokerage", "other_charges")

EntryLike = Union[TradeEntry, Mapping[str, Any]]


def parse_amount(value: Any) -> Optional[float]:
    """Parse a monetary amount.

    Args:
        value: A number or a numeric string.

    Returns:
        The amount as a float, or None if the value is absent,
        blank, non-numeric or not finite.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def _field(entry: EntryLike, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _decimal(entry: EntryLike, name: str) -> Decimal:
    """Field as a Decimal, treating absent or non-numeric values as zero."""
    amount = parse_amount(_field(entry, name))
    if amount is None:
        return Decimal(0)
    return Decimal(repr(amount))


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _charges(entry: EntryLike) -> Decimal:
    return sum((_decimal(entry, name) for name in CHARGE_FIELDS), Decimal(0))


def _net(entry: EntryLike) -> Decimal:
    return _round(_decimal(entry, "pnl") - _charges(entry))


def charges(entry: EntryLike) -> float:
    """Sum of STT, brokerage and other charges, rounded to 2 decimal places."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return float(_round(_charges(entry)))


def net(entry: EntryLike) -> float:
    """Gross P&L minus charges, rounded to 2 decimal places."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return float(_net(entry))


def total_net(entries: Iterable[EntryLike]) -> float:
    """Sum of the net P&L of every entry.

    Each entry's net is rounded as in :func:`net`; the sum is rounded
    once at the end.

    Args:
        entries: Entries currently on display.

    Returns:
        Total net P&L, 0.0 for no entries.
    """
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return float(_round(sum((_net(entry) for entry in entries), Decimal(0))))
