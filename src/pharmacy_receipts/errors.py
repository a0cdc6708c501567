"""Errors raised along the receipt pipeline.

Everything deriving from ``ReceiptError`` except ``OcrError`` aborts the
run; the CLI prints the message and exits with status 1. ``OcrError`` is
per-page and absorbed by the pipeline.
"""


class ReceiptError(Exception):
    """Base class for receipt processing errors."""


class UsageError(ReceiptError):
    """Wrong number of command-line arguments."""


class MissingFileError(ReceiptError):
    """Input PDF does not exist or cannot be read."""


class MissingDependencyError(ReceiptError):
    """A required external tool is not on PATH."""

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        self.hint = hint
        message = f"Error: {tool} not found."
        if hint:
            message += f" {hint}"
        super().__init__(message)


class ConversionError(ReceiptError):
    """The rasterizer produced no page images."""


class OcrError(ReceiptError):
    """OCR request for a single page failed in transport."""
