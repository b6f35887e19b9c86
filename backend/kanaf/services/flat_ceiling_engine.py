"""
flat_ceiling_engine.py — Materials for flat (gypsum-board) suspended ceilings.

Framing for a room l × w:
  - F47 furring channels run along l, one row every 0.6 m across w (4 m pieces)
  - Each row is hung every 0.6 m; U36 drop pieces are 0.30 m per hanger (4 m stock)
  - L25 perimeter angle, 3 m pieces
  - Nail-and-charge anchors, one per hanger, sold in packs of 100
  - Structure screws (LN): two per hanger
  - Board screws (TN): every 0.2 m along the perimeter and along every F47 row
  - 1.2 × 2.4 m boards (2.88 m²)
"""
import logging
import math
from typing import List

from kanaf.config import UNIT_BRANCH, UNIT_PACK, UNIT_PIECE
from kanaf.models.estimate_models import MaterialResult
from kanaf.services.dimension_utils import keep_positive, positive_dimension, to_persian_digits

logger = logging.getLogger("kanaf-flat")


F47_ROW_SPACING_M: float = 0.6
F47_LENGTH_M: float = 4.0
HANGER_SPACING_M: float = 0.6
U36_DROP_PER_HANGER_M: float = 0.30
U36_LENGTH_M: float = 4.0
L25_LENGTH_M: float = 3.0
ANCHOR_PACK_SIZE: int = 100
STRUCTURE_SCREWS_PER_HANGER: int = 2
BOARD_SCREW_SPACING_M: float = 0.2
BOARD_SQM: float = 2.88                   # 1.2 × 2.4 board


def anchor_packs(count: int) -> int:
    """Anchors come in packs of 100; anything short of a full pack still needs one pack."""
    if 0 < count < ANCHOR_PACK_SIZE:
        return 1
    return math.ceil(count / ANCHOR_PACK_SIZE)


class FlatCeilingEngine:

    KEY: str = "flat"
    TITLE: str = "سقف فلت"

    def calculate(self, length, width) -> List[MaterialResult]:
        l = positive_dimension(length)
        w = positive_dimension(width)
        if l is None or w is None:
            logger.debug("flat ceiling skipped: invalid dimensions %r x %r", length, width)
            return []

        area = l * w
        perimeter = (l + w) * 2

        f47_rows = math.ceil(w / F47_ROW_SPACING_M)
        f47_total_length = f47_rows * l
        f47_pieces = math.ceil(f47_total_length / F47_LENGTH_M)

        hangers = f47_rows * math.ceil(l / HANGER_SPACING_M)
        u36_pieces = math.ceil(hangers * U36_DROP_PER_HANGER_M / U36_LENGTH_M)

        l25_pieces = math.ceil(perimeter / L25_LENGTH_M)
        anchors = anchor_packs(hangers)
        structure_screws = math.ceil(hangers * STRUCTURE_SCREWS_PER_HANGER)
        board_screws = math.ceil((perimeter + f47_total_length) / BOARD_SCREW_SPACING_M)
        boards = math.ceil(area / BOARD_SQM)

        return keep_positive([
            MaterialResult("سازه F47", f47_pieces, UNIT_BRANCH),
            MaterialResult("سازه U36", u36_pieces, UNIT_BRANCH),
            MaterialResult("نبشی L25", l25_pieces, UNIT_BRANCH),
            MaterialResult("پانل گچی", boards, UNIT_PIECE),
            MaterialResult("میخ و چاشنی", anchors, UNIT_PACK),
            MaterialResult("پیچ سازه به سازه (LN)", structure_screws, UNIT_PIECE),
            MaterialResult("پیچ پانل به سازه (TN)", board_screws, UNIT_PIECE),
        ])

    def describe(self, length, width) -> str:
        return (
            f"{self.TITLE} - طول {to_persian_digits(positive_dimension(length) or 0)} متر، "
            f"عرض {to_persian_digits(positive_dimension(width) or 0)} متر"
        )
