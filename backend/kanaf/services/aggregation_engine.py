"""
aggregation_engine.py — Roll up every Estimation in the session into one line
per (material, unit).

Always recomputed from the full session; there is no incremental state.
Output order is the order in which each key first appears.
"""
import logging
from typing import Dict, Iterable, List, Tuple

from kanaf.models.estimate_models import AggregatedResult, Estimation, MaterialResult

logger = logging.getLogger("kanaf-aggregate")


class AggregationEngine:

    @staticmethod
    def key_of(result: MaterialResult) -> str:
        return f"{result.material}|{result.unit}"

    def aggregate(self, estimations: Iterable[Estimation]) -> List[AggregatedResult]:
        totals: Dict[str, Tuple[str, str, float]] = {}
        for estimation in estimations:
            for result in estimation.results:
                key = self.key_of(result)
                if key not in totals:
                    totals[key] = (result.material, result.unit, result.quantity)
                else:
                    material, unit, quantity = totals[key]
                    totals[key] = (material, unit, quantity + result.quantity)

        aggregated = [
            AggregatedResult(material=material, quantity=quantity, unit=unit)
            for material, unit, quantity in totals.values()
        ]
        logger.debug("aggregated %d distinct materials", len(aggregated))
        return aggregated

    def as_estimation(self, aggregated: Iterable[AggregatedResult],
                      description: str = "جمع کل برآورد") -> Estimation:
        """Pack an aggregate back into a single Estimation (e.g. to re-aggregate or export)."""
        return Estimation(
            id="aggregate",
            description=description,
            results=tuple(MaterialResult(a.material, a.quantity, a.unit) for a in aggregated),
        )


def aggregate(estimations: Iterable[Estimation]) -> List[AggregatedResult]:
    return AggregationEngine().aggregate(estimations)
