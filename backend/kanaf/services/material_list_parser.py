"""
material_list_parser.py — Read a pasted or uploaded material list into
MaterialResult rows so it can join the session like any calculator run.

One material per line, quantity last before the unit:

    سازه F47 24 شاخه
    پیچ ۲.۵: ۱٬۵۰۰ عدد
    - پانل گچی 12 برگ

Persian / Arabic-Indic digits, the Persian decimal mark and thousands
separators are accepted. Unparseable lines are skipped with a warning.
"""
import logging
import re
from typing import List, Optional

from kanaf.config import UNIT_PIECE
from kanaf.models.estimate_models import MaterialResult
from kanaf.services.dimension_utils import normalize_digits

logger = logging.getLogger("kanaf-parser")

_DIGIT = r"[0-9۰-۹٠-٩]"
_LINE = re.compile(
    rf"^(?P<name>.+?)[\s:：]+"
    rf"(?P<qty>{_DIGIT}+(?:[,٬]{_DIGIT}{{3}})*(?:[.٫]{_DIGIT}+)?)"
    r"\s*(?P<unit>[^0-9۰-۹٠-٩]*)$"
)
_BULLET = re.compile(r"^\s*(?:[-•*]+|\d+[.)])\s+")

SOURCE_DESCRIPTION_PREFIX = "استخراج شده از فایل: "


def parse_quantity(text: str) -> float:
    return float(normalize_digits(text).replace(",", "").replace("٬", ""))


def parse_line(line: str) -> Optional[MaterialResult]:
    stripped = _BULLET.sub("", line.strip())
    if not stripped:
        return None
    match = _LINE.match(stripped)
    if not match:
        return None
    name = match.group("name").strip(" :-")
    if not name:
        return None
    unit = match.group("unit").strip() or UNIT_PIECE
    return MaterialResult(name, parse_quantity(match.group("qty")), unit)


def parse_material_list(text: str) -> List[MaterialResult]:
    results: List[MaterialResult] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        parsed = parse_line(line)
        if parsed is None:
            logger.warning("skipped unreadable material line %d: %r", number, line)
            continue
        if parsed.quantity <= 0:
            logger.warning("skipped non-positive quantity on line %d: %r", number, line)
            continue
        results.append(parsed)
    return results


def source_description(source_name: str) -> str:
    return f"{SOURCE_DESCRIPTION_PREFIX}{source_name}"
