"""
Database access methods for orders
"""
from typing import List

from tinydb import Query

from storefront_core.data_model.order import Order
from storefront_core.data_model.promotion import normalize_code
from storefront_core.database.database import table


def insert(order: Order) -> None:
    with table("orders") as orders:
        orders.insert(order.dict())


def find_by_discount_code(code: str, limit: int) -> List[Order]:
    """Get orders that used the given discount code, newest first"""
    code = normalize_code(code)
    with table("orders") as orders:
        docs = orders.search(
            Query().discount_code.test(
                lambda value: value is not None and normalize_code(value) == code
            )
        )
    result = sorted((Order(**doc) for doc in docs), key=lambda o: o.created_at, reverse=True)
    return result[:limit]
