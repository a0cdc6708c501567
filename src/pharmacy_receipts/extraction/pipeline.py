"""Per-run pipeline: scratch image set, OCR + extraction per page, accumulation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from pharmacy_receipts.config import PAGE_PREFIX
from pharmacy_receipts.errors import OcrError
from pharmacy_receipts.extraction.amounts import extract_amount
from pharmacy_receipts.extraction.ocr import TextRecognizer
from pharmacy_receipts.models.receipt import PageImage, PageOutcome, PageResult, RunningTotal

console = Console()


def remove_page_images(directory: Path, prefix: str = PAGE_PREFIX) -> int:
    """Delete every <prefix>-*.png in ``directory``. Returns how many were removed."""
    removed = 0
    for image in directory.glob(f"{prefix}-*.png"):
        try:
            image.unlink(missing_ok=True)
            removed += 1
        except OSError as e:
            console.print(f"[yellow]Warning: could not remove {escape(image.name)}: {escape(str(e))}[/yellow]")
    return removed


@contextmanager
def scratch_pages(directory: Path, prefix: str = PAGE_PREFIX) -> Iterator[Path]:
    """Scope the run's page images; they are removed however the block exits."""
    try:
        yield directory
    finally:
        remove_page_images(directory, prefix)


def process_page(page: PageImage, recognizer: TextRecognizer) -> PageResult:
    """OCR one page and extract its amount. OCR failures become a FAILED result."""
    try:
        text = recognizer.recognize(page)
    except OcrError as e:
        return PageResult(page=page, outcome=PageOutcome.FAILED, error=str(e))

    amount = extract_amount(text)
    if amount is None:
        return PageResult(page=page, outcome=PageOutcome.NOT_FOUND, text=text)
    return PageResult(page=page, outcome=PageOutcome.FOUND, amount=amount, text=text)


def process_pages(
    pages: Iterable[PageImage],
    recognizer: TextRecognizer,
    on_page: Callable[[PageResult], None] | None = None,
) -> RunningTotal:
    """Run every page through OCR in ascending page order and total the amounts."""
    total = RunningTotal()
    for page in sorted(pages, key=lambda p: p.index):
        result = process_page(page, recognizer)
        total.record(result)
        if on_page:
            on_page(result)
    return total
