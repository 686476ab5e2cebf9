"""Extraction service: screenshots in, journal events out."""

import logging
from typing import Iterable

from trade_journal.core.exceptions import AppError
from trade_journal.domain.views import ImageUpload, ImportSummary
from trade_journal.providers.extraction_provider import ExtractionProvider
from trade_journal.services.journal_service import JournalService

logger = logging.getLogger(__name__)


class ExtractionService:
    """
    Turns uploaded screenshots into stored journal events.

    Each image is handled independently: one unreadable image is reported
    in the summary and the rest of the batch still goes through.
    """

    def __init__(
        self,
        provider: ExtractionProvider,
        journal_service: JournalService,
    ):
        self._provider = provider
        self._journal = journal_service

    def import_images(self, images: Iterable[ImageUpload]) -> ImportSummary:
        """Extract, normalize and store each image."""
        summary = ImportSummary()

        for image in images:
            try:
                raw = self._provider.extract(image)
                event = self._journal.record_event(raw)
            except AppError as exc:
                logger.warning("Skipping %s: %s", image.filename, exc.message)
                summary.error_count += 1
                summary.errors.append(f"{image.filename}: {exc.message}")
                continue

            summary.imported_count += 1
            summary.events.append(event)

        logger.info(
            "Extraction batch finished: %d imported, %d failed",
            summary.imported_count,
            summary.error_count,
        )
        return summary
