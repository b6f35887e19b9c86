from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogCategory(BaseModel):
    """Product category as stored by the dashboard's data layer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str = Field(..., description="Display name, e.g. پروفیل‌های گالوانیزه")
    parent_id: Optional[str] = None


class CatalogProduct(BaseModel):
    """
    Read-only catalog product. The engine never mutates these; a list of them
    is one consistent catalog snapshot for a resolve/assemble pass.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    unit: str = Field(..., description="Primary sale unit, e.g. شاخه / عدد / بسته")
    price: float = Field(0.0, ge=0, description="Price per primary unit")
    category_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("categoryId", "category_id", "subCategoryId", "sub_category_id"),
    )
    sub_unit: Optional[str] = None
    sub_unit_quantity: Optional[float] = Field(None, ge=0)
    sub_unit_price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None

    def price_for_unit(self, unit: str) -> float:
        """Price of one ``unit``; the sub-unit price applies when the line is sold per sub-unit."""
        if self.sub_unit and unit == self.sub_unit and self.sub_unit_price is not None:
            return float(self.sub_unit_price)
        return float(self.price)
