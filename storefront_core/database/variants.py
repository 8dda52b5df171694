"""
Database access methods for product variants
"""
from typing import Optional

from tinydb import Query

from storefront_core.data_model.variant import ProductVariant
from storefront_core.database.database import table


def get_by_id(variant_id: str) -> Optional[ProductVariant]:
    with table("variants") as variants:
        if doc := variants.get(Query().id == variant_id):
            return ProductVariant(**doc)
    return None


def get_product_id(variant_id: str) -> Optional[str]:
    """Get the id of the product a variant belongs to"""
    if variant := get_by_id(variant_id):
        return variant.product_id
    return None


def insert(variant: ProductVariant) -> None:
    with table("variants") as variants:
        variants.insert(variant.dict())
