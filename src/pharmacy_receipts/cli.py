"""Click CLI: total the "Patient Pays" amounts in a scanned receipt PDF."""

from __future__ import annotations

import tempfile
from functools import partial
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from pharmacy_receipts.config import (
    OCR_SPACE_API_KEY,
    PAGE_PREFIX,
    PLACEHOLDER_API_KEY,
    RASTER_DPI,
    REQUEST_TIMEOUT,
    REQUIRED_TOOLS,
    TESSERACT_TOOL,
)
from pharmacy_receipts.errors import ReceiptError
from pharmacy_receipts.extraction.ocr import OcrSpaceClient, TesseractRecognizer, TextRecognizer
from pharmacy_receipts.extraction.pipeline import process_pages, scratch_pages
from pharmacy_receipts.extraction.rasterize import PopplerRasterizer, Rasterizer
from pharmacy_receipts.models.receipt import PageResult
from pharmacy_receipts.reporting.summary import page_line, summary_report
from pharmacy_receipts.validation import check_dependencies, validate_args

console = Console()

ENGINES = ("ocrspace", "tesseract")


def _get_rasterizer(dpi: int) -> Rasterizer:
    return PopplerRasterizer(dpi=dpi)


def _get_recognizer(engine: str, timeout: float) -> TextRecognizer:
    if engine == "tesseract":
        return TesseractRecognizer()
    return OcrSpaceClient(timeout=timeout)


def _required_tools(engine: str) -> dict[str, str]:
    tools = dict(REQUIRED_TOOLS)
    if engine == "tesseract":
        tools.update(TESSERACT_TOOL)
    return tools


def _warn_placeholder_key(engine: str) -> None:
    if engine == "ocrspace" and OCR_SPACE_API_KEY == PLACEHOLDER_API_KEY:
        console.print("[yellow]Warning: Please set OCR_SPACE_API_KEY to your OCR.space API key[/yellow]")
        console.print("[yellow]Get a free key at: https://ocr.space/ocrapi[/yellow]")


def _show_page(result: PageResult, verbose: bool) -> None:
    console.print(f"Processing {escape(result.page.name)}...")
    page_line(result, verbose=verbose)


def _run(pdf: Path, engine: str, timeout: float, dpi: int, verbose: bool) -> None:
    rasterizer = _get_rasterizer(dpi)
    recognizer = _get_recognizer(engine, timeout)

    with tempfile.TemporaryDirectory(prefix="pharmacy-receipts-") as tmp:
        with scratch_pages(Path(tmp), PAGE_PREFIX) as workdir:
            console.print("Converting PDF pages to images...")
            pages = rasterizer.rasterize(pdf, workdir, PAGE_PREFIX)

            _warn_placeholder_key(engine)
            total = process_pages(pages, recognizer, on_page=partial(_show_page, verbose=verbose))

            summary_report(total)
            console.print("Cleaning up temporary files...")

    console.print("Done!")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("pdf_file", nargs=-1, metavar="PDF_FILE")
@click.option("--engine", type=click.Choice(ENGINES), default="ocrspace", show_default=True,
              help="OCR engine: hosted OCR.space API or local Tesseract")
@click.option("--timeout", type=float, default=REQUEST_TIMEOUT, show_default=True,
              help="Seconds to wait for the OCR service per page")
@click.option("--dpi", type=click.IntRange(min=50), default=RASTER_DPI, show_default=True,
              help="Rendering resolution for page images")
@click.option("-v", "--verbose", is_flag=True, help="Show OCR text for pages without a match")
def main(pdf_file: tuple[str, ...], engine: str, timeout: float, dpi: int, verbose: bool) -> None:
    """Sum the "Patient Pays" amounts on scanned pharmacy receipts in PDF_FILE."""
    try:
        pdf = validate_args(pdf_file)
        check_dependencies(_required_tools(engine))
        _run(pdf, engine, timeout, dpi, verbose)
    except ReceiptError as e:
        console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise SystemExit(1)
