"""Gemini vision client that reads broker screenshots into raw records."""

import base64
import json
import logging
from typing import Any, Optional

import httpx

from trade_journal.core.exceptions import ExtractionError
from trade_journal.domain.views import ImageUpload

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """\
You are reading a screenshot from a stock brokerage app. Classify it and
extract its figures as JSON.

If it is a single closed trade, return:
{"imageType": "tradeConfirmation", "date": "YYYY-MM-DD", "ticker": "...",
 "costAtOpen": number, "creditAtClose": number,
 "changeValue": number, "changePercentage": number}

If it is an account summary for one day, return:
{"imageType": "dailySummary", "date": "YYYY-MM-DD",
 "changeValue": number, "changePercentage": number, "endOfDayBalance": number}

Use negative numbers for losses. Return only the JSON object.
"""


class GeminiExtractionProvider:
    """
    Extraction provider backed by the Generative Language API.

    Sends the image inline with a fixed prompt and asks for a JSON response.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def extract(self, image: ImageUpload) -> dict[str, Any]:
        """Send one image and return the parsed record."""
        url = f"{self._base_url}/models/{self._model}:generateContent"
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": EXTRACTION_PROMPT},
                        {
                            "inline_data": {
                                "mime_type": image.content_type,
                                "data": base64.b64encode(image.content).decode("ascii"),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {"responseMimeType": "application/json"},
        }

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(url, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Extraction request for %s failed: %s", image.filename, exc)
            raise ExtractionError(f"Extraction service unreachable: {exc}") from exc

        if resp.status_code >= 400:
            try:
                detail = resp.json().get("error", {}).get("message", resp.text)
            except (ValueError, AttributeError):
                detail = resp.text
            raise ExtractionError(f"Extraction service error {resp.status_code}: {detail}")

        return self._parse_response(resp)

    @staticmethod
    def _parse_response(resp: httpx.Response) -> dict[str, Any]:
        try:
            body = resp.json()
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ExtractionError("Extraction response had no content") from exc

        # Models sometimes wrap JSON in a markdown fence
        text = text.strip()
        if text.startswith("```"):
            text = text.strip("`")
            if text.lower().startswith("json"):
                text = text[4:]

        try:
            record = json.loads(text)
        except ValueError as exc:
            raise ExtractionError("Extraction response was not valid JSON") from exc

        if isinstance(record, list) and record:
            record = record[0]
        if not isinstance(record, dict):
            raise ExtractionError("Extraction response was not a JSON object")
        return record
