from __future__ import annotations

from pathlib import Path

import pytest

from pharmacy_receipts import cli
from pharmacy_receipts.config import PAGE_PREFIX
from pharmacy_receipts.errors import ConversionError
from pharmacy_receipts.extraction.ocr import TextRecognizer
from pharmacy_receipts.extraction.rasterize import Rasterizer
from pharmacy_receipts.models.receipt import PageImage


class FakeRasterizer(Rasterizer):
    """Writes ``pages`` placeholder PNGs instead of calling poppler."""

    def __init__(self, pages: int, fail_after_writing: bool = False) -> None:
        self.pages = pages
        self.fail_after_writing = fail_after_writing
        self.calls = 0
        self.output_dir: Path | None = None
        self.written: list[Path] = []

    def rasterize(self, pdf: Path, output_dir: Path, prefix: str = PAGE_PREFIX) -> list[PageImage]:
        self.calls += 1
        self.output_dir = output_dir
        images = []
        for i in range(1, self.pages + 1):
            path = output_dir / f"{prefix}-{i}.png"
            path.write_bytes(b"\x89PNG fake")
            self.written.append(path)
            images.append(PageImage(index=i, path=path))
        if self.fail_after_writing or not images:
            raise ConversionError("Error: PDF conversion failed. Check if the PDF file is valid.")
        return images


class FakeRecognizer(TextRecognizer):
    """Returns canned text per page; exceptions in ``texts`` are raised instead."""

    def __init__(self, texts: list) -> None:
        self.texts = texts
        self.calls: list[int] = []

    def recognize(self, page: PageImage) -> str:
        self.calls.append(page.index)
        value = self.texts[page.index - 1]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def receipt_pdf(tmp_path: Path) -> Path:
    pdf = tmp_path / "receipts.pdf"
    pdf.write_bytes(b"%PDF-1.4\n%fake\n")
    return pdf


@pytest.fixture
def tools_present(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda tool: f"/usr/bin/{tool}")


@pytest.fixture
def fake_engines(monkeypatch, tools_present):
    """Install fake rasterizer/recognizer factories on the CLI.

    Returns a function ``install(texts, **rasterizer_kwargs)`` giving back
    the (rasterizer, recognizer) pair so tests can inspect calls.
    """
    monkeypatch.setattr(cli, "OCR_SPACE_API_KEY", "test-key")

    def install(texts: list, **kwargs):
        rasterizer = FakeRasterizer(len(texts), **kwargs)
        recognizer = FakeRecognizer(texts)
        monkeypatch.setattr(cli, "_get_rasterizer", lambda dpi: rasterizer)
        monkeypatch.setattr(cli, "_get_recognizer", lambda engine, timeout: recognizer)
        return rasterizer, recognizer

    return install
