"""Pydantic models for one run: page images, per-page results, the running total."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

CENTS = Decimal("0.01")


class PageOutcome(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class PageImage(BaseModel):
    """A rendered PNG for one PDF page."""

    index: int = Field(ge=1)
    path: Path

    model_config = {"frozen": True}

    @property
    def name(self) -> str:
        return self.path.name


class PageResult(BaseModel):
    """What OCR and extraction produced for a single page."""

    page: PageImage
    outcome: PageOutcome
    amount: Optional[Decimal] = Field(default=None, ge=0)
    text: str = ""
    error: str = ""

    model_config = {"frozen": True}


class RunningTotal(BaseModel):
    """Exact Decimal accumulator plus page counters for one run."""

    amount: Decimal = Decimal("0")
    pages: int = 0
    matched: int = 0
    failed: int = 0

    def record(self, result: PageResult) -> None:
        self.pages += 1
        if result.outcome == PageOutcome.FAILED:
            self.failed += 1
        if result.amount is not None:
            self.amount += result.amount
            self.matched += 1

    def display_amount(self) -> Decimal:
        """Total rounded half-up to cents; accumulation itself stays exact."""
        return self.amount.quantize(CENTS, rounding=ROUND_HALF_UP)
