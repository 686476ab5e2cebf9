"""Stub extraction provider for offline use."""

from typing import Any

from trade_journal.core.exceptions import ExtractionError
from trade_journal.domain.views import ImageUpload


class StubExtractionProvider:
    """
    Provider used when no extraction API key is configured.

    Every image fails with ExtractionError, so uploads report a clear
    per-image error instead of crashing the batch.
    """

    def extract(self, image: ImageUpload) -> dict[str, Any]:
        raise ExtractionError(f"{image.filename}: extraction service not configured")
