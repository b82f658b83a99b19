"""Trade Journal - record intraday trades and track net P&L after charges."""

__version__ = "0.1.0"
