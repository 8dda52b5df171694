from datetime import datetime
from typing import Optional

from pydantic import BaseModel, validator

from storefront_core.data_model.util import ensure_utc


class GuestInfo(BaseModel):
    name: Optional[str]
    email: Optional[str]


class OrderTotals(BaseModel):
    subtotal: float = 0
    discount: float = 0
    shipping_fee: float = 0
    total: float = 0


class Order(BaseModel):
    id: str
    user_id: Optional[str] = None
    guest_info: Optional[GuestInfo] = None
    discount_code: Optional[str] = None
    totals: OrderTotals = OrderTotals()
    created_at: datetime

    _ensure_utc = validator("created_at", allow_reuse=True)(ensure_utc)

    def __str__(self):
        return f"Order[{self.id}]"


class PromotionUsage(BaseModel):
    """One order that redeemed a promotion, as shown in the usage history."""

    order_id: str
    user_id: Optional[str]
    user_name: Optional[str]
    user_email: Optional[str]
    order_total: float
    discount_amount: float
    created_at: datetime
