"""
Engine-internal value types.

All of them are frozen: calculators produce MaterialResult lists, the session
wraps them into Estimation records, and every later stage builds new values
instead of mutating its inputs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class MaterialResult:
    material: str           # canonical display name, e.g. "سازه F47"
    quantity: float         # non-negative; may be fractional before rounding
    unit: str               # display unit label, e.g. "شاخه"

    def to_dict(self) -> Dict[str, Any]:
        return {"material": self.material, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class Estimation:
    """One user-confirmed calculator run kept in the estimating session."""
    id: str
    description: str
    results: Tuple[MaterialResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass(frozen=True)
class AggregatedResult:
    """Session-wide total for one (material, unit) key."""
    material: str
    quantity: float
    unit: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.material, self.unit)

    def to_dict(self) -> Dict[str, Any]:
        return {"material": self.material, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class ResolvedMaterial:
    is_new: bool            # True when no catalog product was matched
    product_id: str         # catalog id, or a placeholder derived from the material name
    name: str
    quantity: float
    unit: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isNew": self.is_new,
            "productId": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
        }
