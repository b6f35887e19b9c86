"""
estimation_session.py — Estimation record builder and the caller-owned session list.

The session is an explicit object the UI layer creates and keeps; there is no
module-level list. Estimation records are immutable: an entry is replaced or
removed as a whole, never edited in place.
"""
import logging
import time
import uuid
from typing import Iterable, List, Optional, Tuple

from kanaf.models.estimate_models import Estimation, MaterialResult

logger = logging.getLogger("kanaf-session")


class EstimationNotFoundError(KeyError):
    """Raised by strict session operations for an id that is not in the session."""


def new_estimation_id() -> str:
    """Timestamp-based id with a random suffix so ids stay unique within a session."""
    return f"est-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def build_estimation(description: str, results: Iterable[MaterialResult],
                     estimation_id: Optional[str] = None) -> Estimation:
    """Wrap a calculator's output verbatim into an Estimation record."""
    return Estimation(
        id=estimation_id or new_estimation_id(),
        description=description,
        results=tuple(results),
    )


class EstimationSession:
    """In-memory list of Estimations for one estimating session."""

    def __init__(self, estimations: Iterable[Estimation] = ()) -> None:
        self._estimations: List[Estimation] = list(estimations)

    @property
    def estimations(self) -> Tuple[Estimation, ...]:
        return tuple(self._estimations)

    def __len__(self) -> int:
        return len(self._estimations)

    def __iter__(self):
        return iter(self.estimations)

    def add_estimation(self, description: str, results: Iterable[MaterialResult]) -> Estimation:
        """Append a new Estimation. Empty results are accepted; the UI warns before calling."""
        estimation = build_estimation(description, results)
        if not estimation.results:
            logger.warning("estimation %s added with no results", estimation.id,
                           extra={"estimation_id": estimation.id})
        self._estimations.append(estimation)
        logger.debug("estimation added: %s (%d materials)", description, len(estimation.results),
                     extra={"estimation_id": estimation.id})
        return estimation

    def get(self, estimation_id: str) -> Optional[Estimation]:
        for estimation in self._estimations:
            if estimation.id == estimation_id:
                return estimation
        return None

    def replace_estimation(self, estimation_id: str, description: str,
                           results: Iterable[MaterialResult]) -> Estimation:
        """Swap an entry for a new record with the same id and position."""
        for index, current in enumerate(self._estimations):
            if current.id == estimation_id:
                replacement = build_estimation(description, results, estimation_id=estimation_id)
                self._estimations[index] = replacement
                return replacement
        raise EstimationNotFoundError(estimation_id)

    def remove_estimation(self, estimation_id: str, strict: bool = False) -> bool:
        """Remove by id. Returns False for an unknown id unless ``strict``, which raises."""
        before = len(self._estimations)
        self._estimations = [e for e in self._estimations if e.id != estimation_id]
        removed = len(self._estimations) != before
        if not removed and strict:
            raise EstimationNotFoundError(estimation_id)
        return removed

    def clear_estimations(self) -> None:
        self._estimations = []
