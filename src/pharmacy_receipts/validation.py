"""Argument and environment checks run before any page is rendered."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from pharmacy_receipts.errors import MissingDependencyError, MissingFileError, UsageError

PROG_NAME = "pharmacy-receipts"


def usage() -> str:
    return f"Usage: {PROG_NAME} <pdf_file>\nExample: {PROG_NAME} costco_receipts.pdf"


def validate_args(args: Sequence[str]) -> Path:
    """Return the single PDF path in ``args`` or raise."""
    if len(args) != 1:
        raise UsageError(usage())

    pdf = Path(args[0])
    if not pdf.is_file() or not os.access(pdf, os.R_OK):
        raise MissingFileError(f"Error: PDF file '{args[0]}' not found")
    return pdf


def check_dependencies(
    tools: Mapping[str, str],
    which: Callable[[str], str | None] | None = None,
) -> None:
    """Raise MissingDependencyError for the first tool not found on PATH."""
    which = which or shutil.which
    for tool, hint in tools.items():
        if which(tool) is None:
            raise MissingDependencyError(tool, hint)
