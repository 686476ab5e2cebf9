"""Extraction provider protocol."""

from typing import Any, Protocol

from trade_journal.domain.views import ImageUpload


class ExtractionProvider(Protocol):
    """
    Protocol for image-to-record extraction services.

    Implementations return the raw record (an `imageType` discriminant plus
    type-specific fields, possibly malformed) and raise ExtractionError when
    no record can be produced.
    """

    def extract(self, image: ImageUpload) -> dict[str, Any]:
        """Extract a raw record from one screenshot."""
        ...
