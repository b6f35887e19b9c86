"""
estimator_pipeline.py — End-to-end estimate: session Estimations ->
aggregate -> resolve against the catalog -> assemble lines -> draft invoice.

Every stage is a pure function of its inputs; the pipeline owns no state
besides its (stateless) engines.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from kanaf.config import get_settings
from kanaf.models.estimate_models import Estimation
from kanaf.models.invoice_models import DraftInvoice
from kanaf.services.aggregation_engine import AggregationEngine
from kanaf.services.box_ceiling_engine import BoxCeilingEngine
from kanaf.services.catalog_engine import CatalogEngine, coerce_categories, coerce_products
from kanaf.services.drywall_engine import DrywallEngine
from kanaf.services.flat_ceiling_engine import FlatCeilingEngine
from kanaf.services.grid_ceiling_engine import GridCeilingEngine
from kanaf.services.invoice_engine import InvoiceEngine, next_invoice_number, store_prefix
from kanaf.services.perf_monitor import timed

logger = logging.getLogger("kanaf-estimator")


# Calculator per assembly form; callers dispatch by form key
CALCULATORS: Dict[str, Any] = {
    GridCeilingEngine.KEY: GridCeilingEngine(),
    BoxCeilingEngine.KEY: BoxCeilingEngine(),
    FlatCeilingEngine.KEY: FlatCeilingEngine(),
    DrywallEngine.KEY: DrywallEngine(),
}


class EstimatorPipeline:

    def __init__(
        self,
        aggregation_engine: Optional[AggregationEngine] = None,
        catalog_engine: Optional[CatalogEngine] = None,
        invoice_engine: Optional[InvoiceEngine] = None,
    ) -> None:
        self.aggregation = aggregation_engine or AggregationEngine()
        self.catalog = catalog_engine or CatalogEngine()
        self.invoice = invoice_engine or InvoiceEngine()

    @timed
    def build_draft_invoice(
        self,
        estimations: Iterable[Estimation],
        products: Iterable[Any],
        categories: Iterable[Any],
        *,
        brand: Optional[str] = None,
        store_name: Optional[str] = None,
        existing_invoice_count: int = 0,
        issued_at: Optional[datetime] = None,
    ) -> DraftInvoice:
        estimations = list(estimations)
        # resolve and assemble must read the same snapshot
        products = coerce_products(products)
        categories = coerce_categories(categories)
        if store_name is None:
            store_name = get_settings().store_name

        aggregated = self.aggregation.aggregate(estimations)
        resolved = self.catalog.resolve(aggregated, products, categories, brand=brand)
        assembled = self.invoice.assemble(resolved, products)

        draft = self.invoice.build_draft(
            items=assembled["items"],
            subtotal=assembled["subtotal"],
            descriptions=[e.description for e in estimations],
            invoice_number=next_invoice_number(store_prefix(store_name), existing_invoice_count),
            issued_at=issued_at,
        )

        unmatched = sum(1 for r in resolved if r.is_new)
        logger.info(
            "draft %s: %d estimations, %d materials, %d lines, %d unmatched",
            draft.invoice_number,
            len(estimations),
            len(aggregated),
            len(draft.items),
            unmatched,
        )
        return draft
