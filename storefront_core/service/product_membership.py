import logging
from typing import Iterable, Optional, Set

from storefront_core.data_model.validation import OrderItem
from storefront_core.database import variants

log = logging.getLogger(__name__)


def resolve_product_id(item: OrderItem) -> Optional[str]:
    if item.variant_id:
        product_id = variants.get_product_id(item.variant_id)
        if product_id is None:
            log.debug(f"could not resolve variant {item.variant_id} to a product")
        return product_id
    return item.product_id


def resolve_product_ids(items: Iterable[OrderItem]) -> Set[str]:
    """Product ids of all items, skipping items whose variant is unknown"""
    product_ids = set()
    for item in items:
        if product_id := resolve_product_id(item):
            product_ids.add(product_id)
    return product_ids
