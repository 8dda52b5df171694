"""
Database access methods for promotions
"""
import logging
from typing import List, Optional

from tinydb import Query
from tinydb.operations import increment

from storefront_core.data_model.promotion import Promotion, normalize_code
from storefront_core.data_model.user import MembershipLevel
from storefront_core.database.database import table

log = logging.getLogger(__name__)


def get_all(
    *,
    is_active: Optional[bool] = None,
    membership_level: Optional[MembershipLevel] = None,
) -> List[Promotion]:
    """Get all promotions matching the filters, newest first"""
    with table("promotions") as promotions:
        docs = promotions.all()
    result = [Promotion(**doc) for doc in docs]
    if is_active is not None:
        result = [p for p in result if p.is_active == is_active]
    if membership_level is not None:
        result = [p for p in result if p.membership_level == membership_level]
    return sorted(result, key=lambda p: p.created_at, reverse=True)


def get_by_id(promotion_id: str) -> Optional[Promotion]:
    with table("promotions") as promotions:
        if doc := promotions.get(Query().id == promotion_id):
            return Promotion(**doc)
    return None


def get_by_code(code: str) -> Optional[Promotion]:
    """Get promotion by code, ignoring case and surrounding whitespace"""
    with table("promotions") as promotions:
        if doc := promotions.get(Query().code == normalize_code(code)):
            return Promotion(**doc)
    return None


def insert(promotion: Promotion) -> None:
    with table("promotions") as promotions:
        promotions.insert(promotion.dict(exclude={"status"}))


def update(promotion: Promotion) -> None:
    with table("promotions") as promotions:
        promotions.update(
            promotion.dict(exclude={"status", "used_count"}),
            Query().id == promotion.id,
        )


def delete(promotion_id: str) -> bool:
    with table("promotions") as promotions:
        removed_ids = promotions.remove(Query().id == promotion_id)
    return len(removed_ids) > 0


def increment_used_count(promotion_id: str) -> bool:
    """Add one to used_count within a single locked write, returns False if no such promotion"""
    with table("promotions") as promotions:
        updated_ids = promotions.update(
            increment("used_count"), Query().id == promotion_id
        )
    return len(updated_ids) > 0
