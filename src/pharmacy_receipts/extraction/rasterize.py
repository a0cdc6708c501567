"""Render PDF pages to PNG files with pdf2image (poppler's pdftoppm)."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

from pdf2image import convert_from_path
from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError

from pharmacy_receipts.config import PAGE_PREFIX, RASTER_DPI
from pharmacy_receipts.errors import ConversionError
from pharmacy_receipts.models.receipt import PageImage

# pdftoppm appends "-<page>.png", zero-padded to the page count's width
_PAGE_NUMBER_RE = re.compile(r"-(\d+)\.png$")


def page_number(path: str | Path) -> int:
    """Page number pdftoppm encoded in an output file name."""
    m = _PAGE_NUMBER_RE.search(Path(path).name)
    if not m:
        raise ConversionError(f"Error: unexpected rasterizer output {Path(path).name}")
    return int(m.group(1))


class Rasterizer(ABC):
    """Turns a PDF into one image file per page."""

    @abstractmethod
    def rasterize(self, pdf: Path, output_dir: Path, prefix: str = PAGE_PREFIX) -> list[PageImage]:
        """Write <prefix>-<page>.png files into output_dir, in page order."""


class PopplerRasterizer(Rasterizer):
    def __init__(self, dpi: int = RASTER_DPI) -> None:
        self.dpi = dpi

    def rasterize(self, pdf: Path, output_dir: Path, prefix: str = PAGE_PREFIX) -> list[PageImage]:
        try:
            paths = convert_from_path(
                str(pdf),
                dpi=self.dpi,
                fmt="png",
                output_folder=str(output_dir),
                output_file=f"{prefix}-raw",
                paths_only=True,
            )
        except (PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError) as e:
            raise ConversionError(
                f"Error: PDF conversion failed. Check if the PDF file is valid. ({e})"
            ) from e

        pages = []
        for raw in sorted((Path(p) for p in paths), key=page_number):
            if not raw.exists():
                continue
            index = page_number(raw)
            target = output_dir / f"{prefix}-{index}.png"
            raw.rename(target)
            pages.append(PageImage(index=index, path=target))

        if not pages:
            raise ConversionError("Error: PDF conversion failed. Check if the PDF file is valid.")
        return pages
