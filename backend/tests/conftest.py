"""
conftest.py — Shared pytest fixtures for the Kanaf estimator test suite.

All tests are pure unit tests over in-memory values; no database, network or
file fixtures are defined here.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``kanaf.*`` imports resolve regardless of where pytest is invoked.
"""

import os
import sys

import pytest

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Engine fixtures (all stateless)
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def grid_engine():
    from kanaf.services.grid_ceiling_engine import GridCeilingEngine
    return GridCeilingEngine()


@pytest.fixture(scope="session")
def box_engine():
    from kanaf.services.box_ceiling_engine import BoxCeilingEngine
    return BoxCeilingEngine()


@pytest.fixture(scope="session")
def flat_engine():
    from kanaf.services.flat_ceiling_engine import FlatCeilingEngine
    return FlatCeilingEngine()


@pytest.fixture(scope="session")
def drywall_engine():
    from kanaf.services.drywall_engine import DrywallEngine
    return DrywallEngine()


@pytest.fixture(scope="session")
def aggregation_engine():
    from kanaf.services.aggregation_engine import AggregationEngine
    return AggregationEngine()


@pytest.fixture(scope="session")
def catalog_engine():
    from kanaf.services.catalog_engine import CatalogEngine
    return CatalogEngine()


@pytest.fixture(scope="session")
def invoice_engine():
    from kanaf.services.invoice_engine import InvoiceEngine
    return InvoiceEngine()


@pytest.fixture
def session():
    """Fresh, empty estimating session per test."""
    from kanaf.services.estimation_session import EstimationSession
    return EstimationSession()


# ---------------------------------------------------------------------------
# Catalog snapshot
# ---------------------------------------------------------------------------

@pytest.fixture
def categories():
    """
    Store categories as the data layer returns them (camelCase dicts).
    "عایق" exists but has no products, to exercise the empty-fallback path.
    """
    return [
        {"id": "cat-kanaf", "name": "کناف"},
        {"id": "cat-profiles", "name": "پروفیل‌های گالوانیزه", "parentId": "cat-kanaf"},
        {"id": "cat-panels", "name": "پانل‌های گچی", "parentId": "cat-kanaf"},
        {"id": "cat-grid", "name": "سقف مشبک"},
        {"id": "cat-fasteners", "name": "پیچ و اتصالات"},
        {"id": "cat-insulation", "name": "عایق"},
    ]


@pytest.fixture
def products():
    """
    Catalog products in catalog order. Order matters: the first matching
    product wins.

      - "پیچ پنل" is the only fastener, so LN screws and nail anchors fall
        back to it through the fastener category.
      - "پنل RG کی پلاس" is the only k-plus branded product.
      - "پیچ پنل" sells per pack (بسته) with a per-piece sub-unit price.
    """
    return [
        {"id": "p-f47", "name": "سازه F47", "unit": "شاخه", "price": 100000,
         "subCategoryId": "cat-profiles", "imageUrl": "https://img.example/f47.png"},
        {"id": "p-u36", "name": "سازه U36", "unit": "شاخه", "price": 80000,
         "subCategoryId": "cat-profiles"},
        {"id": "p-rg", "name": "پانل گچی (RG)", "unit": "عدد", "price": 150000,
         "subCategoryId": "cat-panels"},
        {"id": "p-screw", "name": "پیچ پنل", "unit": "بسته", "price": 450000,
         "subUnit": "عدد", "subUnitQuantity": 1000, "subUnitPrice": 500,
         "subCategoryId": "cat-fasteners"},
        {"id": "p-l25", "name": "نبشی L25", "unit": "شاخه", "price": 60000,
         "subCategoryId": "cat-profiles"},
        {"id": "p-tile", "name": "تایل 60x60", "unit": "عدد", "price": 90000,
         "subCategoryId": "cat-grid"},
        {"id": "p-rg-kplus", "name": "پنل RG کی پلاس", "unit": "عدد", "price": 210000,
         "subCategoryId": "cat-panels"},
    ]


@pytest.fixture
def catalog_products(products):
    """Same snapshot, validated into CatalogProduct models."""
    from kanaf.models.catalog_schema import CatalogProduct
    return [CatalogProduct.model_validate(p) for p in products]
