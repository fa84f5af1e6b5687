"""Revenue split engine: commission splits and payout ledger for revenue events."""

__version__ = "0.1.0"
