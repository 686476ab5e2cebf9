"""Trade journal: ledger of trade confirmations and daily summaries."""

__version__ = "0.1.0"
