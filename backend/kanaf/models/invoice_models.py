"""
Draft invoice payload handed to the invoice editor / persistence layer.

Field names are snake_case in Python and camelCase on the wire, matching the
dashboard's stored invoice shape. Dump with ``to_payload()``.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class InvoiceLineItem(BaseModel):
    """One invoice line; ``total_price`` is always ``quantity * unit_price``."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    product_id: str
    product_name: str
    quantity: float = Field(..., ge=0)
    unit: str
    unit_price: float = Field(0.0, ge=0)
    image_url: Optional[str] = None

    @computed_field(alias="totalPrice")
    @property
    def total_price(self) -> float:
        return self.quantity * self.unit_price


class DraftInvoice(BaseModel):
    """Strict contract for the invoice draft produced from an estimate."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "invoiceNumber": "EST-0001",
                "customerId": "",
                "date": "2025-01-01T00:00:00+00:00",
                "status": "Pending",
                "items": [
                    {
                        "productId": "p-f47",
                        "productName": "سازه F47",
                        "quantity": 8,
                        "unit": "شاخه",
                        "unitPrice": 100000,
                        "totalPrice": 800000,
                    }
                ],
                "subtotal": 800000,
                "total": 800000,
                "description": "ایجاد شده از برآورد مصالح: سقف فلت - طول ۴ متر، عرض ۳ متر",
            }
        },
    )

    invoice_number: str
    customer_id: str = ""           # selected later in the invoice editor
    customer_name: str = ""
    customer_email: str = ""
    date: str = Field(..., description="ISO 8601 timestamp")
    status: Literal["Paid", "Pending", "Overdue"] = "Pending"
    items: List[InvoiceLineItem] = Field(default_factory=list)
    subtotal: float = 0.0
    discount: float = 0.0
    additions: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    description: str = ""

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
