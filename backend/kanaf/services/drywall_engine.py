"""
drywall_engine.py — Materials for drywall partitions and lining walls.

A ``partition`` is boarded on both faces, a ``lining`` wall on one. Studs
stand every 0.6 m; runners frame the floor, ceiling and both ends. Rock-wool
insulation is optional and sold in packs of six 1.2 × 0.6 m slabs.
"""
import logging
import math
from typing import Dict, List

from kanaf.config import FASTENER_PACK_SIZE, UNIT_BRANCH, UNIT_PACK, UNIT_SHEET
from kanaf.models.estimate_models import MaterialResult
from kanaf.services.dimension_utils import keep_positive, positive_dimension, to_persian_digits

logger = logging.getLogger("kanaf-drywall")


RUNNER_LENGTH_M: float = 4.0
STUD_SPACING_M: float = 0.6
STUD_LENGTH_M: float = 3.0
BOARD_SQM: float = 2.88                   # 1.2 × 2.4 board
SCREW_SPACING_M: float = 0.2               # along each stud, per boarded face
WOOL_SLAB_SQM: float = 0.72               # 1.2 × 0.6 slab
WOOL_SLABS_PER_PACK: int = 6

# Boarded faces per wall type
WALL_FACES: Dict[str, int] = {
    "partition": 2,
    "lining": 1,
}
WALL_TYPE_LABELS: Dict[str, str] = {
    "partition": "دیوار دو طرف پانل",
    "lining": "دیوار پوششی یک طرف",
}


class DrywallEngine:

    KEY: str = "drywall"
    TITLE: str = "دیوار خشک"

    def calculate(self, length, height, wall_type: str = "partition",
                  include_insulation: bool = False) -> List[MaterialResult]:
        l = positive_dimension(length)
        h = positive_dimension(height)
        faces = WALL_FACES.get(wall_type)
        if l is None or h is None or faces is None:
            logger.debug(
                "drywall skipped: invalid input %r x %r (%r)", length, height, wall_type
            )
            return []

        wall_area = l * h

        runners = (
            math.ceil((l * 2) / RUNNER_LENGTH_M)       # floor + ceiling
            + math.ceil((h * 2) / RUNNER_LENGTH_M)     # both ends
        )
        stud_count = math.ceil(l / STUD_SPACING_M)
        stud_pieces = math.ceil((stud_count * h) / STUD_LENGTH_M)
        boards = math.ceil(wall_area * faces / BOARD_SQM)
        screw_packs = math.ceil(stud_count * h / SCREW_SPACING_M * faces / FASTENER_PACK_SIZE)

        results = [
            MaterialResult("پنل RG", boards, UNIT_SHEET),
            MaterialResult("رانر", runners, UNIT_BRANCH),
            MaterialResult("استاد", stud_pieces, UNIT_BRANCH),
            MaterialResult("پیچ ۲.۵", screw_packs, UNIT_PACK),
        ]
        if include_insulation:
            slabs = math.ceil(wall_area / WOOL_SLAB_SQM)
            results.append(MaterialResult("پشم سنگ", math.ceil(slabs / WOOL_SLABS_PER_PACK), UNIT_PACK))

        return keep_positive(results)

    def describe(self, length, height, wall_type: str = "partition",
                 include_insulation: bool = False) -> str:
        text = (
            f"{self.TITLE} ({WALL_TYPE_LABELS.get(wall_type, wall_type)}) - "
            f"طول {to_persian_digits(positive_dimension(length) or 0)} متر، "
            f"ارتفاع {to_persian_digits(positive_dimension(height) or 0)} متر"
        )
        if include_insulation:
            text += "، با پشم سنگ"
        return text
