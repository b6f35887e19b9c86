"""
invoice_engine.py — Turn resolved materials into invoice lines and a draft invoice.

Lines are unique per (product_id, unit): two materials that resolve to the
same product (usually through the category fallback) share one line with the
quantities summed. ``subtotal`` is computed after all merges.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from kanaf.config import (
    DRAFT_DESCRIPTION_JOINER,
    DRAFT_DESCRIPTION_PREFIX,
    INVOICE_DEFAULTS,
    INVOICE_NUMBER_WIDTH,
    INVOICE_PREFIX_FALLBACK,
    STORE_NAME_STOPWORDS,
)
from kanaf.models.estimate_models import ResolvedMaterial
from kanaf.models.invoice_models import DraftInvoice, InvoiceLineItem
from kanaf.services.catalog_engine import coerce_products

logger = logging.getLogger("kanaf-invoice")

_NON_LATIN = re.compile(r"[^a-zA-Z]")


def store_prefix(store_name: str) -> str:
    """Three-letter invoice prefix from the latin letters of a store name, else INV."""
    cleaned = store_name or ""
    for word in STORE_NAME_STOPWORDS:
        cleaned = cleaned.replace(word, "")
    cleaned = _NON_LATIN.sub("", cleaned).strip()
    if cleaned:
        return cleaned[:3].upper()
    return INVOICE_PREFIX_FALLBACK


def next_invoice_number(prefix: str, existing_count: int) -> str:
    return f"{prefix}-{str(existing_count + 1).zfill(INVOICE_NUMBER_WIDTH)}"


def draft_description(descriptions: Sequence[str]) -> str:
    parts = [d for d in descriptions if d]
    return DRAFT_DESCRIPTION_PREFIX + DRAFT_DESCRIPTION_JOINER.join(parts)


class InvoiceEngine:

    def assemble(self, resolved: Iterable[ResolvedMaterial],
                 products: Iterable[Any]) -> Dict[str, Any]:
        """
        Build invoice lines from resolver output.

        Returns ``{"items": List[InvoiceLineItem], "subtotal": float}``.
        New (unmatched) materials are priced at zero.
        """
        by_id: Dict[str, Any] = {}
        for catalog_product in coerce_products(products):
            by_id.setdefault(catalog_product.id, catalog_product)

        lines: Dict[Tuple[str, str], Dict[str, Any]] = {}
        for material in resolved:
            key = (material.product_id, material.unit)
            if key in lines:
                lines[key]["quantity"] += material.quantity
                logger.debug("merged '%s' into existing line %s", material.name, key)
                continue

            product = None if material.is_new else by_id.get(material.product_id)
            lines[key] = {
                "product_id": material.product_id,
                "product_name": material.name,
                "quantity": material.quantity,
                "unit": material.unit,
                "unit_price": product.price_for_unit(material.unit) if product else 0.0,
                "image_url": product.image_url if product else None,
            }

        items = [InvoiceLineItem(**line) for line in lines.values()]
        subtotal = sum(item.total_price for item in items)
        return {"items": items, "subtotal": subtotal}

    def build_draft(
        self,
        items: List[InvoiceLineItem],
        subtotal: float,
        descriptions: Sequence[str],
        invoice_number: str,
        issued_at: Optional[datetime] = None,
    ) -> DraftInvoice:
        """Wrap assembled lines into the payload handed to the invoice editor."""
        issued_at = issued_at or datetime.now(timezone.utc)
        return DraftInvoice(
            invoice_number=invoice_number,
            date=issued_at.isoformat(),
            items=items,
            subtotal=subtotal,
            total=subtotal,
            description=draft_description(descriptions),
            **INVOICE_DEFAULTS,
        )
