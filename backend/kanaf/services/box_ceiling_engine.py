"""
box_ceiling_engine.py — Materials for box / cove (hidden-light) ceilings,
measured as a single linear run in metres.
"""
import logging
import math
from typing import List

from kanaf.config import FASTENER_PACK_SIZE, UNIT_BRANCH, UNIT_PACK, UNIT_PIECE
from kanaf.models.estimate_models import MaterialResult
from kanaf.services.dimension_utils import (
    keep_positive,
    positive_dimension,
    round_half_up,
    to_persian_digits,
)

logger = logging.getLogger("kanaf-box")


# Field agreement: a 45 m box run consumes about 2200 screws
SCREWS_PER_METER: float = 2200 / 45
ANGLE_LENGTH_M: float = 1.0                # نبشی L25, one piece per metre of run
PANEL_RUN_M: float = 4.5                   # run covered by one panel


class BoxCeilingEngine:

    KEY: str = "box"
    TITLE: str = "باکس و نورمخفی"

    def calculate(self, length) -> List[MaterialResult]:
        l = positive_dimension(length)
        if l is None:
            logger.debug("box ceiling skipped: invalid length %r", length)
            return []

        screws = l * SCREWS_PER_METER
        # Packs round to nearest here, not up; kept as agreed with the store.
        screw_packs = round_half_up(screws / FASTENER_PACK_SIZE)
        angle_pieces = math.ceil(l / ANGLE_LENGTH_M)
        panels = math.ceil(l / PANEL_RUN_M)

        return keep_positive([
            MaterialResult("پیچ", screw_packs, UNIT_PACK),
            MaterialResult("نبشی L25", angle_pieces, UNIT_BRANCH),
            MaterialResult("پانل", panels, UNIT_PIECE),
        ])

    def describe(self, length) -> str:
        return f"{self.TITLE} - طول {to_persian_digits(positive_dimension(length) or 0)} متر"
