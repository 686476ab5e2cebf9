"""CSV export functionality."""

import csv
import io
from pathlib import Path

from trade_journal.services.journal_service import JournalService

CSV_COLUMNS = [
    "event_id",
    "date",
    "type",
    "ticker",
    "cost_at_open",
    "credit_at_close",
    "change_value",
    "change_percentage",
    "end_of_day_balance",
]


class CsvExporter:
    """
    CSV exporter for journal events.

    Exports every event, oldest first, for backup/transfer.
    """

    def __init__(self, journal_service: JournalService):
        self._journal = journal_service

    def export_text(self) -> str:
        """Render all events as CSV text."""
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
        writer.writeheader()

        for event in self._journal.list_events():
            writer.writerow({
                "event_id": event.event_id or "",
                "date": event.date.isoformat(),
                "type": event.event_type.value,
                "ticker": event.ticker,
                "cost_at_open": str(event.cost_at_open),
                "credit_at_close": str(event.credit_at_close),
                "change_value": str(event.change_value),
                "change_percentage": str(event.change_percentage),
                "end_of_day_balance": str(event.end_of_day_balance),
            })
        return buffer.getvalue()

    def export_csv(self, path: str) -> None:
        """
        Export events to a CSV file.

        Args:
            path: Output file path
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            csvfile.write(self.export_text())
