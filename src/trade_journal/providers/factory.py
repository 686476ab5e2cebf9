"""Provider selection from settings."""

from trade_journal.config.settings import Settings
from trade_journal.providers.extraction_provider import ExtractionProvider
from trade_journal.providers.gemini_provider import GeminiExtractionProvider
from trade_journal.providers.stub_provider import StubExtractionProvider


def provider_from_settings(settings: Settings) -> ExtractionProvider:
    """Return the Gemini provider, or the stub when no API key is configured."""
    if not settings.extraction_api_key:
        return StubExtractionProvider()
    return GeminiExtractionProvider(
        api_key=settings.extraction_api_key,
        model=settings.extraction_model,
        base_url=settings.extraction_base_url,
        timeout_seconds=settings.extraction_timeout_seconds,
    )
