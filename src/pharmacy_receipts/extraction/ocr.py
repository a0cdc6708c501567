"""OCR engines: the hosted OCR.space API, or local Tesseract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import requests

from pharmacy_receipts.config import (
    OCR_API_URL,
    OCR_ENGINE,
    OCR_LANGUAGE,
    OCR_SPACE_API_KEY,
    REQUEST_TIMEOUT,
)
from pharmacy_receipts.errors import MissingDependencyError, OcrError
from pharmacy_receipts.models.receipt import PageImage


def parsed_text(payload: Any) -> str:
    """Text of the first parsed result in an OCR.space response.

    Anything that doesn't look like ``{"ParsedResults": [{"ParsedText": ...}]}``
    counts as no text recognized.
    """
    if not isinstance(payload, dict):
        return ""
    results = payload.get("ParsedResults")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return ""
    text = results[0].get("ParsedText")
    return text if isinstance(text, str) else ""


class TextRecognizer(ABC):
    """Recognizes the text on one page image."""

    @abstractmethod
    def recognize(self, page: PageImage) -> str:
        """Return the page's text. Raises OcrError if the engine is unreachable."""


class OcrSpaceClient(TextRecognizer):
    def __init__(
        self,
        api_key: str = OCR_SPACE_API_KEY,
        url: str = OCR_API_URL,
        language: str = OCR_LANGUAGE,
        engine: str = OCR_ENGINE,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.language = language
        self.engine = engine
        self.timeout = timeout
        self.session = session or requests.Session()

    def recognize(self, page: PageImage) -> str:
        try:
            with open(page.path, "rb") as f:
                response = self.session.post(
                    self.url,
                    headers={"apikey": self.api_key},
                    data={"language": self.language, "OCREngine": self.engine},
                    files={"file": (page.name, f, "image/png")},
                    timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.RequestException as e:
            raise OcrError(str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            return ""
        return parsed_text(payload)


class TesseractRecognizer(TextRecognizer):
    """Local OCR through Tesseract.

    Requires: pytesseract, Pillow (install with `pip install pharmacy-receipts[ocr]`).
    Construction fails with MissingDependencyError when they are absent, so
    the run stops before any page is rendered.
    """

    def __init__(self, language: str = OCR_LANGUAGE) -> None:
        try:
            from PIL import Image
            import pytesseract
        except ImportError as e:
            raise MissingDependencyError(
                "pytesseract", "Install with: pip install pharmacy-receipts[ocr]"
            ) from e
        self.language = language
        self._image = Image
        self._pytesseract = pytesseract

    def recognize(self, page: PageImage) -> str:
        try:
            with self._image.open(page.path) as img:
                return self._pytesseract.image_to_string(img, lang=self.language)
        except (OSError, self._pytesseract.TesseractError) as e:
            raise OcrError(str(e)) from e
