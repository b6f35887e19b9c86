"""
catalog_engine.py — Resolve abstract material names to catalog products.

Per aggregated material:
  1. Pick the first ALIAS_TABLE entry with an alias contained in the
     lowercased material name (table order decides overlaps).
  2. Primary match: first catalog product whose lowercased name contains one
     of that entry's aliases, or the material name itself when no entry matched.
     Screw and nail products are only candidates for screw and nail materials.
  3. Fallback: first product of the entry's declared category.
  4. Fasteners counted per piece become 1000-count packs; everything else is
     rounded up to whole units.
  5. Unmatched materials get a placeholder id derived from their name and
     flow on as zero-priced, user-editable lines.

The catalog is a read-only snapshot for the duration of one call.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from kanaf.config import (
    BRAND_CHOICES,
    BRAND_MARKERS,
    FASTENER_KEYWORDS,
    FASTENER_PACK_SIZE,
    NEW_PRODUCT_ID_PREFIX,
    UNIT_PACK,
    UNIT_PIECE,
)
from kanaf.models.catalog_schema import CatalogCategory, CatalogProduct
from kanaf.models.estimate_models import AggregatedResult, ResolvedMaterial

logger = logging.getLogger("kanaf-catalog")


class CatalogContractError(ValueError):
    """The caller passed no catalog snapshot (None) to a resolve/assemble pass."""


@dataclass(frozen=True)
class AliasEntry:
    key: str
    aliases: Tuple[str, ...]
    category: str


CATEGORY_PROFILES = "پروفیل‌های گالوانیزه"
CATEGORY_PANELS = "پانل‌های گچی"
CATEGORY_GRID = "سقف مشبک"
CATEGORY_FASTENERS = "پیچ و اتصالات"
CATEGORY_INSULATION = "عایق"

# Ordered: first match wins. Screw entries sit above the panel entries because
# board-screw names contain the panel word ("پیچ پانل به سازه").
ALIAS_TABLE: Tuple[AliasEntry, ...] = (
    AliasEntry("پیچ سازه", ("پیچ سازه", "(ln)"), CATEGORY_FASTENERS),
    AliasEntry("پیچ پنل", ("پیچ پنل", "پیچ پانل", "پیچ کناف", "پیچ ۲.۵", "پیچ 2.5", "(tn)"), CATEGORY_FASTENERS),
    AliasEntry("میخ و چاشنی", ("میخ و چاشنی", "میخ", "چاشنی"), CATEGORY_FASTENERS),
    AliasEntry("پیچ", ("پیچ",), CATEGORY_FASTENERS),
    AliasEntry("پنل والیز", ("والیز",), CATEGORY_PANELS),
    AliasEntry("پنل RG", ("پنل rg", "پانل rg", "پنل گچی", "پانل گچی", "پنل", "پانل"), CATEGORY_PANELS),
    AliasEntry("سازه f47", ("f47", "اف ۴۷", "اف 47"), CATEGORY_PROFILES),
    AliasEntry("سازه u36", ("u36", "یو ۳۶", "یو 36"), CATEGORY_PROFILES),
    AliasEntry("نبشی L25", ("نبشی l25", "l25"), CATEGORY_PROFILES),
    AliasEntry("نبشی L24", ("نبشی l24", "l24"), CATEGORY_GRID),
    AliasEntry("رانر", ("رانر",), CATEGORY_PROFILES),
    AliasEntry("استاد", ("استاد",), CATEGORY_PROFILES),
    AliasEntry("سپری T360", ("t360",), CATEGORY_GRID),
    AliasEntry("سپری T120", ("t120",), CATEGORY_GRID),
    AliasEntry("سپری T60", ("t60",), CATEGORY_GRID),
    AliasEntry("تایل", ("تایل",), CATEGORY_GRID),
    AliasEntry("آویز", ("آویز",), CATEGORY_FASTENERS),
    AliasEntry("پشم سنگ", ("پشم سنگ", "پشم شیشه"), CATEGORY_INSULATION),
)

_WHITESPACE = re.compile(r"\s+")


def placeholder_id(material: str) -> str:
    """Stable id for an unmatched material: the same name always yields the same id."""
    return NEW_PRODUCT_ID_PREFIX + _WHITESPACE.sub("", material)


def is_fastener(material: str) -> bool:
    return any(keyword in material for keyword in FASTENER_KEYWORDS)


def coerce_products(products: Iterable[Any]) -> List[CatalogProduct]:
    """Accept CatalogProduct instances or raw catalog dicts."""
    if products is None:
        raise CatalogContractError("catalog products snapshot is required")
    return [p if isinstance(p, CatalogProduct) else CatalogProduct.model_validate(p) for p in products]


def coerce_categories(categories: Iterable[Any]) -> List[CatalogCategory]:
    if categories is None:
        raise CatalogContractError("catalog categories snapshot is required")
    return [c if isinstance(c, CatalogCategory) else CatalogCategory.model_validate(c) for c in categories]


class CatalogEngine:
    """
    Fuzzy product resolution against one catalog snapshot.

    ``alias_table`` defaults to ALIAS_TABLE; pass another ordered sequence to
    resolve against a different store's naming.
    """

    def __init__(self, alias_table: Sequence[AliasEntry] = ALIAS_TABLE) -> None:
        self.alias_table: Tuple[AliasEntry, ...] = tuple(alias_table)

    # -----------------------------------------------------------------------
    # Matching
    # -----------------------------------------------------------------------

    def find_alias_entry(self, material: str) -> Optional[AliasEntry]:
        name = material.lower()
        for entry in self.alias_table:
            if any(alias.lower() in name for alias in entry.aliases):
                return entry
        return None

    def _catalog_frame(self, products: List[CatalogProduct], brand: Optional[str]) -> pd.DataFrame:
        frame = pd.DataFrame(
            [{"pos": i, "id": p.id, "name": p.name, "category_id": p.category_id}
             for i, p in enumerate(products)],
            columns=["pos", "id", "name", "category_id"],
        )
        frame["name_lower"] = frame["name"].str.lower()
        frame["is_fastener"] = frame["name"].map(is_fastener).astype(bool)

        if brand is None or frame.empty:
            return frame
        if brand not in BRAND_CHOICES:
            logger.warning("unknown brand preference %r, matching the whole catalog", brand)
            return frame

        marker = BRAND_MARKERS["k-plus"]
        has_marker = frame["name_lower"].map(lambda n: marker in n).astype(bool)
        return frame.loc[has_marker] if brand == "k-plus" else frame.loc[~has_marker]

    @staticmethod
    def _first_name_match(frame: pd.DataFrame, needles: Sequence[str]) -> Optional[int]:
        """Catalog position of the first product containing any needle."""
        if frame.empty or not needles:
            return None
        mask = frame["name_lower"].map(lambda n: any(needle in n for needle in needles)).astype(bool)
        hits = frame.loc[mask]
        return None if hits.empty else int(hits.iloc[0]["pos"])

    @staticmethod
    def _first_in_category(frame: pd.DataFrame, categories: List[CatalogCategory],
                           category_name: str) -> Optional[int]:
        wanted = category_name.strip()
        category_ids = [c.id for c in categories if c.name.strip() == wanted]
        if frame.empty or not category_ids:
            return None
        hits = frame.loc[frame["category_id"].isin(category_ids)]
        return None if hits.empty else int(hits.iloc[0]["pos"])

    # -----------------------------------------------------------------------
    # Quantities
    # -----------------------------------------------------------------------

    @staticmethod
    def transform_quantity(material: str, quantity: float, unit: str) -> Tuple[int, str]:
        """Per-piece screws/nails -> 1000-count packs; everything else rounded up."""
        if is_fastener(material) and unit == UNIT_PIECE:
            return math.ceil(quantity / FASTENER_PACK_SIZE), UNIT_PACK
        return math.ceil(quantity), unit

    # -----------------------------------------------------------------------
    # Resolve
    # -----------------------------------------------------------------------

    def resolve(
        self,
        aggregated: Iterable[AggregatedResult],
        products: Iterable[Any],
        categories: Iterable[Any],
        brand: Optional[str] = None,
    ) -> List[ResolvedMaterial]:
        catalog = coerce_products(products)
        category_list = coerce_categories(categories)
        frame = self._catalog_frame(catalog, brand)
        non_fasteners = frame.loc[~frame["is_fastener"]]

        resolved: List[ResolvedMaterial] = []
        for item in aggregated:
            entry = self.find_alias_entry(item.material)
            if entry is not None:
                needles = [alias.lower() for alias in entry.aliases]
            else:
                needles = [item.material.lower()]

            # "پیچ پنل" must never satisfy a board's "پنل" alias
            candidates = frame if is_fastener(item.material) else non_fasteners
            position = self._first_name_match(candidates, needles)
            if position is None and entry is not None:
                position = self._first_in_category(frame, category_list, entry.category)
                if position is not None:
                    logger.debug("'%s' resolved by category fallback (%s)", item.material, entry.category)

            quantity, unit = self.transform_quantity(item.material, item.quantity, item.unit)

            if position is None:
                logger.warning("no catalog product for '%s'; emitting as new item", item.material)
                resolved.append(ResolvedMaterial(
                    is_new=True,
                    product_id=placeholder_id(item.material),
                    name=item.material,
                    quantity=quantity,
                    unit=unit,
                ))
            else:
                product = catalog[position]
                resolved.append(ResolvedMaterial(
                    is_new=False,
                    product_id=product.id,
                    name=product.name,
                    quantity=quantity,
                    unit=unit,
                ))
        return resolved
