"""
Estimator configuration — single source of truth for unit labels, pack sizes,
placeholder ids, invoice defaults and environment-driven settings.

Import from here in all engines rather than hardcoding values.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env in dev (no-op when the file is missing)
load_dotenv()


# ── Unit labels ────────────────────────────────────────────────────────────────
# Display labels as they appear on invoices and in the product catalog.
UNIT_PIECE: str = "عدد"           # single piece
UNIT_BRANCH: str = "شاخه"         # one standard-length profile
UNIT_SHEET: str = "برگ"           # one board sheet
UNIT_PACK: str = "بسته"           # purchase pack / box


# ── Pack conversion ───────────────────────────────────────────────────────────
# Screws and nails are sold in 1000-count boxes.
FASTENER_PACK_SIZE: int = 1000

# A material whose name contains one of these is a fastener counted per piece.
FASTENER_KEYWORDS: tuple[str, ...] = ("پیچ", "میخ")


# ── Catalog resolution ────────────────────────────────────────────────────────

# Placeholder ids for unmatched materials: prefix + whitespace-stripped name
NEW_PRODUCT_ID_PREFIX: str = "new-"

# Brand preference filter. The marker is searched in lowercased product names.
BRAND_MARKERS: dict[str, str] = {
    "k-plus": "کی پلاس",
}
BRAND_CHOICES: tuple[str, ...] = ("k-plus", "miscellaneous")


# ── Invoice defaults ──────────────────────────────────────────────────────────

INVOICE_DEFAULTS: dict[str, object] = {
    "customer_id": "",              # assigned later in the invoice editor
    "customer_name": "",
    "customer_email": "",
    "status": "Pending",
    "discount": 0.0,
    "additions": 0.0,
    "tax": 0.0,
}

# Prefix used when the store name has no latin letters to derive one from
INVOICE_PREFIX_FALLBACK: str = "INV"
INVOICE_NUMBER_WIDTH: int = 4

# Words stripped from store names before deriving an invoice prefix
STORE_NAME_STOPWORDS: tuple[str, ...] = ("فروشگاه", "شرکت", "گروه")

DRAFT_DESCRIPTION_PREFIX: str = "ایجاد شده از برآورد مصالح: "
DRAFT_DESCRIPTION_JOINER: str = " + "


# ── Runtime settings ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    json_logs: bool = True
    store_name: str = "Est"


def get_settings() -> Settings:
    """Read runtime settings from the environment."""
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_logs=os.getenv("LOG_FORMAT", "json").lower() != "text",
        store_name=os.getenv("KANAF_STORE_NAME", "Est"),
    )
