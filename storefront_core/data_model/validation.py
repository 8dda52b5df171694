from enum import Enum
from typing import Optional, List, Union, Literal

from pydantic import BaseModel, Field

from storefront_core.data_model.promotion import DiscountType


class OrderItem(BaseModel):
    variant_id: Optional[str] = None
    product_id: Optional[str] = None
    quantity: int = Field(1, ge=1)


class ValidationRequest(BaseModel):
    code: str
    order_total: float = Field(..., ge=0)
    user_id: Optional[str] = None
    items: List[OrderItem] = []


class FailureReason(str, Enum):
    CODE_NOT_FOUND = "code_not_found"
    PROMOTION_INACTIVE = "promotion_inactive"
    NOT_STARTED_YET = "not_started_yet"
    EXPIRED = "expired"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    BELOW_MINIMUM_ORDER = "below_minimum_order"
    PRODUCT_NOT_APPLICABLE = "product_not_applicable"
    MEMBERSHIP_REQUIRED = "membership_required"
    WRONG_MEMBERSHIP_TIER = "wrong_membership_tier"


class ValidationFailure(BaseModel):
    success: Literal[False] = False
    reason: FailureReason
    message: str


class ValidationSuccess(BaseModel):
    success: Literal[True] = True
    promotion_id: str
    discount_amount: float = 0
    shipping_discount: float = 0
    discount_type: DiscountType
    message: str


ValidationResult = Union[ValidationSuccess, ValidationFailure]
