"""Image extraction providers module."""

from trade_journal.providers.extraction_provider import ExtractionProvider
from trade_journal.providers.gemini_provider import GeminiExtractionProvider
from trade_journal.providers.stub_provider import StubExtractionProvider
from trade_journal.providers.factory import provider_from_settings

__all__ = [
    "ExtractionProvider",
    "GeminiExtractionProvider",
    "StubExtractionProvider",
    "provider_from_settings",
]
