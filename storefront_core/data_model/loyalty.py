from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, validator

from storefront_core.data_model.user import MembershipLevel
from storefront_core.data_model.util import ensure_utc, new_id, utcnow


class LoyaltyTransaction(BaseModel):
    id: str
    user_id: str
    order_id: Optional[str] = None
    points_earned: int
    revenue: float = 0
    reason: str
    created_at: datetime

    _ensure_utc = validator("created_at", allow_reuse=True)(ensure_utc)

    @classmethod
    def create(cls, user_id: str, points_earned: int, reason: str, **kwargs) -> "LoyaltyTransaction":
        return LoyaltyTransaction(
            id=new_id(),
            user_id=user_id,
            points_earned=points_earned,
            reason=reason,
            created_at=utcnow(),
            **kwargs,
        )


class LoyaltySummary(BaseModel):
    points: int = 0
    level: Optional[MembershipLevel] = None
    transactions: List[LoyaltyTransaction] = []
