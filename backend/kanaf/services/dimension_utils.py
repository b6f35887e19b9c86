"""
Shared helpers for the geometry engines: dimension validation, output
filtering and Persian number rendering.

Validation contract: a dimension is usable only if it is a positive finite
number. Anything else (None, '', non-numeric text, zero, negative, NaN, inf)
makes the calculator return an empty list rather than raise.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional

from kanaf.models.estimate_models import MaterialResult

_PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

_TO_LATIN = str.maketrans(
    _PERSIAN_DIGITS + _ARABIC_DIGITS + "٫",
    "0123456789" * 2 + ".",
)
_TO_PERSIAN = str.maketrans("0123456789.", _PERSIAN_DIGITS + "٫")


def normalize_digits(text: str) -> str:
    """Map Persian/Arabic-Indic digits and the Persian decimal mark to ASCII."""
    return text.translate(_TO_LATIN)


def to_persian_digits(value) -> str:
    if isinstance(value, float):
        text = f"{value:g}"
    else:
        text = str(value)
    return text.translate(_TO_PERSIAN)


def positive_dimension(value) -> Optional[float]:
    """Return ``value`` as a float if it is a positive finite number, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = normalize_digits(value.strip())
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def round_half_up(value: float) -> int:
    """Round to nearest with halves going up (0.5 -> 1), unlike ``round``."""
    return int(math.floor(value + 0.5))


def keep_positive(results: Iterable[MaterialResult]) -> List[MaterialResult]:
    """Drop zero and negative quantities; callers never see empty lines."""
    return [r for r in results if r.quantity > 0]
