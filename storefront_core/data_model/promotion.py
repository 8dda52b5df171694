from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, root_validator, validator

from storefront_core.data_model.user import MembershipLevel
from storefront_core.data_model.util import PropertyBaseModel, ensure_utc, new_id, utcnow


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    SHIPPING = "shipping"


class PromotionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"


def normalize_code(code: str) -> str:
    return code.strip().upper()


class Promotion(PropertyBaseModel):
    id: str
    code: str
    discount_type: DiscountType
    discount_value: float = Field(..., ge=0)
    max_discount: Optional[float] = Field(None, ge=0)
    membership_level: Optional[MembershipLevel] = None
    min_order_value: float = Field(0, ge=0)
    max_uses: int = Field(0, ge=0)
    used_count: int = Field(0, ge=0)
    applicable_products: List[str] = []
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    _normalize_code = validator("code", allow_reuse=True)(normalize_code)
    _ensure_utc = validator(
        "start_date", "end_date", "created_at", "updated_at", allow_reuse=True
    )(ensure_utc)

    def __str__(self):
        return f"Promotion[{self.id}, {self.code}]"

    @property
    def status(self) -> "PromotionStatus":
        return promotion_status(self)

    @classmethod
    def create(cls, data: "PromotionInput") -> "Promotion":
        now = utcnow()
        return Promotion(id=new_id(), created_at=now, updated_at=now, **data.dict())


def promotion_status(promotion: Promotion, now: datetime = None) -> PromotionStatus:
    now = ensure_utc(now) or utcnow()
    if not promotion.is_active:
        return PromotionStatus.INACTIVE
    if promotion.end_date is not None and promotion.end_date < now:
        return PromotionStatus.EXPIRED
    if promotion.start_date is not None and promotion.start_date > now:
        return PromotionStatus.INACTIVE
    if 0 < promotion.max_uses <= promotion.used_count:
        return PromotionStatus.EXPIRED
    return PromotionStatus.ACTIVE


class PromotionInput(BaseModel):
    code: str = Field(..., min_length=1)
    discount_type: DiscountType
    discount_value: float = Field(..., ge=0)
    max_discount: Optional[float] = Field(None, ge=0)
    membership_level: Optional[MembershipLevel] = None
    min_order_value: float = Field(0, ge=0)
    max_uses: int = Field(0, ge=0)
    applicable_products: List[str] = []
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = True

    _normalize_code = validator("code", allow_reuse=True)(normalize_code)
    _ensure_utc = validator("start_date", "end_date", allow_reuse=True)(ensure_utc)


class PromotionUpdate(BaseModel):
    code: Optional[str]
    discount_type: Optional[DiscountType]
    discount_value: Optional[float] = Field(None, ge=0)
    max_discount: Optional[float] = Field(None, ge=0)
    membership_level: Optional[MembershipLevel]
    min_order_value: Optional[float] = Field(None, ge=0)
    max_uses: Optional[int] = Field(None, ge=0)
    applicable_products: Optional[List[str]]
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    is_active: Optional[bool]

    @validator("code")
    def _normalize_code(cls, v):
        return normalize_code(v) if v is not None else v

    _ensure_utc = validator("start_date", "end_date", allow_reuse=True)(ensure_utc)

    @root_validator(pre=True)
    def _reject_null_required_fields(cls, values):
        # only max_discount, membership_level and the dates can be cleared
        for name in (
            "code",
            "discount_type",
            "discount_value",
            "min_order_value",
            "max_uses",
            "applicable_products",
            "is_active",
        ):
            if name in values and values[name] is None:
                raise ValueError(f"{name} may not be null")
        return values
