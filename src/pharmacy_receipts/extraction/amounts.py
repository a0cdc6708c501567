"""Pull the "Patient Pays" amount out of recognized receipt text."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

# "Patient Pays:" (any case, any spacing between the words), an optional
# dollar sign, then digits with an optional fractional part.
#   Patient Pays: $12.34   -> 12.34
#   PATIENT PAYS: 5.00     -> 5.00
#   patient  pays:$ 7      -> 7
PATIENT_PAYS_PATTERN = re.compile(
    r"Patient\s+Pays:\s*\$?\s*(?P<amount>[0-9]+\.?[0-9]*)",
    re.IGNORECASE,
)


def extract_amount(text: str | None) -> Decimal | None:
    """Return the first Patient Pays amount in ``text``, or None.

    Only the first occurrence counts; a second label on the same page is
    ignored.
    """
    if not text:
        return None
    m = PATIENT_PAYS_PATTERN.search(text)
    if not m or not m.group("amount"):
        return None
    try:
        return Decimal(m.group("amount"))
    except InvalidOperation:
        return None
