"""CSV export utilities."""

from trade_journal.csv.exporter import CsvExporter, CSV_COLUMNS

__all__ = [
    "CsvExporter",
    "CSV_COLUMNS",
]
