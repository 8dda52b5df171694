"""
Database access methods for loyalty transactions
"""
from typing import List

from tinydb import Query

from storefront_core.data_model.loyalty import LoyaltyTransaction
from storefront_core.database.database import table


def insert(transaction: LoyaltyTransaction) -> None:
    with table("loyalty_transactions") as transactions:
        transactions.insert(transaction.dict())


def get_latest_for_user(user_id: str, limit: int) -> List[LoyaltyTransaction]:
    with table("loyalty_transactions") as transactions:
        docs = transactions.search(Query().user_id == user_id)
    result = sorted(
        (LoyaltyTransaction(**doc) for doc in docs),
        key=lambda t: t.created_at,
        reverse=True,
    )
    return result[:limit]
