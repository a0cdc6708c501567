"""Configuration: OCR endpoint, API key, rendering defaults."""

import os

# OCR.space hosted OCR endpoint
OCR_API_URL = "https://api.ocr.space/parse/image"

# Free keys at https://ocr.space/ocrapi (500 requests/month)
PLACEHOLDER_API_KEY = "apikey"
OCR_SPACE_API_KEY = os.environ.get("OCR_SPACE_API_KEY", PLACEHOLDER_API_KEY)

OCR_LANGUAGE = "eng"
OCR_ENGINE = "2"

# Seconds to wait for the OCR service before skipping a page
REQUEST_TIMEOUT = 60.0

# Page images are written as <prefix>-<page>.png
PAGE_PREFIX = "scanned_page"
RASTER_DPI = 300

# External binaries that must be on PATH, with install hints
REQUIRED_TOOLS = {
    "pdftoppm": "Install with: brew install poppler (or apt-get install poppler-utils)",
    "pdfinfo": "Install with: brew install poppler (or apt-get install poppler-utils)",
}
TESSERACT_TOOL = {
    "tesseract": "Install with: brew install tesseract (or apt-get install tesseract-ocr)",
}
