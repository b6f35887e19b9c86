"""
grid_ceiling_engine.py — Material takeoff for grid-suspended (T-bar) ceilings.

Layout for a rectangular room l × w:
  - Perimeter angle (L24) along all four walls, 3 m pieces
  - Main tees (T360) run along the long side, one run per 1.2 m of the short side
  - Cross tees (T120) run across, one run per 0.6 m of the long side minus one
  - Short tees (T60) fill each 0.72 m² (1.2 × 0.6) bay in half
  - 600 × 600 tiles (0.36 m²) with 3 % cut waste
  - Hangers at 0.8 per m², perimeter fasteners every 0.3 m
"""
import logging
import math
from typing import List

from kanaf.config import UNIT_BRANCH, UNIT_PIECE
from kanaf.models.estimate_models import MaterialResult
from kanaf.services.dimension_utils import keep_positive, positive_dimension, to_persian_digits

logger = logging.getLogger("kanaf-grid")


# ---------------------------------------------------------------------------
# Standard lengths and spacings (m)
# ---------------------------------------------------------------------------
PERIMETER_ANGLE_LENGTH_M: float = 3.0      # نبشی L24
MAIN_TEE_SPACING_M: float = 1.2
MAIN_TEE_LENGTH_M: float = 3.6             # سپری T360
CROSS_TEE_SPACING_M: float = 0.6
CROSS_TEE_LENGTH_M: float = 1.2            # سپری T120
SHORT_TEE_BAY_SQM: float = 0.72            # سپری T60, one per 1.2 × 0.6 bay
TILE_SQM: float = 0.36                     # 60 × 60 tile
TILE_WASTE_FACTOR: float = 1.03
HANGERS_PER_SQM: float = 0.8
FASTENER_SPACING_M: float = 0.3


class GridCeilingEngine:
    """Stateless calculator; one instance can serve any number of rooms."""

    KEY: str = "grid"
    TITLE: str = "سقف مشبک"

    def calculate(self, length, width) -> List[MaterialResult]:
        l = positive_dimension(length)
        w = positive_dimension(width)
        if l is None or w is None:
            logger.debug("grid ceiling skipped: invalid dimensions %r x %r", length, width)
            return []

        perimeter = (l + w) * 2
        area = l * w
        long_side = max(l, w)
        short_side = min(l, w)

        angle_pieces = math.ceil(perimeter / PERIMETER_ANGLE_LENGTH_M)

        main_runs = math.ceil(short_side / MAIN_TEE_SPACING_M)
        main_pieces = math.ceil(main_runs * long_side / MAIN_TEE_LENGTH_M)

        cross_runs = math.ceil(long_side / CROSS_TEE_SPACING_M) - 1
        cross_pieces = math.ceil(cross_runs * short_side / CROSS_TEE_LENGTH_M)

        short_tees = math.ceil(area / SHORT_TEE_BAY_SQM)
        tiles = math.ceil((area / TILE_SQM) * TILE_WASTE_FACTOR)
        hangers = math.ceil(area * HANGERS_PER_SQM)
        fasteners = math.ceil(perimeter / FASTENER_SPACING_M)

        return keep_positive([
            MaterialResult("نبشی L24", angle_pieces, UNIT_BRANCH),
            MaterialResult("سپری T360", main_pieces, UNIT_BRANCH),
            MaterialResult("سپری T120", cross_pieces, UNIT_BRANCH),
            MaterialResult("سپری T60", short_tees, UNIT_BRANCH),
            MaterialResult("تایل", tiles, UNIT_PIECE),
            MaterialResult("آویز", hangers, UNIT_PIECE),
            MaterialResult("میخ و چاشنی", fasteners, UNIT_PIECE),
        ])

    def describe(self, length, width) -> str:
        return (
            f"{self.TITLE} - طول {to_persian_digits(positive_dimension(length) or 0)} متر، "
            f"عرض {to_persian_digits(positive_dimension(width) or 0)} متر"
        )
