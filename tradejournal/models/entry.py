"""TradeEntry data model."""

from datetime import date as date_type
from datetime import datetime
from datetime import time as time_type
from enum import Enum

from pydantic import BaseModel, Field


class Segment(str, Enum):
    """Market segment a trade was taken in."""

    EQUITY = "Equity"
    FO = "FO"
    MCX = "MCX"


class TradeEntry(BaseModel):
    """Represents one recorded intraday trade."""

    id: str = Field(..., min_length=1, description="Service-assigned identifier")
    date: date_type = Field(..., description="Trade date")
    time: time_type = Field(..., description="Trade time of day")
    segment: Segment = Field(default=Segment.EQUITY, description="Market segment")
    pnl: float = Field(..., allow_inf_nan=False, description="Gross P&L")
    stt: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Securities transaction tax")
    brokerage: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Brokerage")
    other_charges: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Other charges")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {"frozen": True}

    @property
    def charges(self) -> float:
        """Total charges deducted from the gross P&L."""
        from tradejournal.journal.calc import charges

        return charges(self)

    @property
    def net(self) -> float:
        """Net P&L after charges, rounded to 2 decimal places."""
        from tradejournal.journal.calc import net

        return net(self)
