import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Set, Tuple

from storefront_core.data_model.promotion import DiscountType, Promotion
from storefront_core.data_model.user import User
from storefront_core.data_model.util import ensure_utc, utcnow
from storefront_core.data_model.validation import (
    FailureReason,
    OrderItem,
    ValidationFailure,
    ValidationRequest,
    ValidationResult,
    ValidationSuccess,
)
from storefront_core.database import users
from storefront_core.service import product_membership
from storefront_core.util.money import format_money

log = logging.getLogger(__name__)

ProductResolver = Callable[[Iterable[OrderItem]], Set[str]]
UserLookup = Callable[[str], Optional[User]]


def evaluate(
    promotion: Optional[Promotion],
    request: ValidationRequest,
    *,
    now: datetime = None,
    resolve_product_ids: ProductResolver = product_membership.resolve_product_ids,
    get_user: UserLookup = users.get_by_id,
) -> ValidationResult:
    """
    Check whether a promotion can be applied to an order and compute its discount.

    The checks run in a fixed order and the first one that fails determines the
    returned reason. Nothing is written; lookups happen only through
    resolve_product_ids and get_user.
    """
    now = ensure_utc(now) or utcnow()

    if promotion is None:
        return _fail(FailureReason.CODE_NOT_FOUND, "Code not found")
    if not promotion.is_active:
        return _fail(FailureReason.PROMOTION_INACTIVE, "Promotion is not active")
    if promotion.start_date is not None and promotion.start_date > now:
        return _fail(FailureReason.NOT_STARTED_YET, "Promotion is not started yet")
    if promotion.end_date is not None and promotion.end_date < now:
        return _fail(FailureReason.EXPIRED, "Promotion has expired")
    if 0 < promotion.max_uses <= promotion.used_count:
        return _fail(
            FailureReason.USAGE_LIMIT_REACHED,
            "Promotion has reached the maximum usage limit",
        )
    if request.order_total < promotion.min_order_value:
        return _fail(
            FailureReason.BELOW_MINIMUM_ORDER,
            f"Minimum order value is {format_money(promotion.min_order_value)}",
        )

    if promotion.applicable_products:
        product_ids = resolve_product_ids(request.items)
        if product_ids.isdisjoint(promotion.applicable_products):
            return _fail(
                FailureReason.PRODUCT_NOT_APPLICABLE,
                "This promotion is not applicable to products in your cart",
            )

    if promotion.membership_level is not None:
        if not request.user_id:
            return _fail(
                FailureReason.MEMBERSHIP_REQUIRED,
                "Promotion requires a member account",
            )
        user = get_user(request.user_id)
        if user is None or user.membership_level != promotion.membership_level:
            return _fail(
                FailureReason.WRONG_MEMBERSHIP_TIER,
                "Promotion is only applicable for other membership levels",
            )

    discount_amount, shipping_discount = compute_discount(promotion, request.order_total)
    return ValidationSuccess(
        promotion_id=promotion.id,
        discount_amount=discount_amount,
        shipping_discount=shipping_discount,
        discount_type=promotion.discount_type,
        message=f"Applied promotion {promotion.code} successfully",
    )


def compute_discount(promotion: Promotion, order_total: float) -> Tuple[float, float]:
    """Returns (discount_amount, shipping_discount)"""
    if promotion.discount_type == DiscountType.PERCENTAGE:
        discount_amount = order_total * promotion.discount_value / 100
        # a max_discount of 0 means no cap
        if promotion.max_discount and discount_amount > promotion.max_discount:
            discount_amount = promotion.max_discount
        return discount_amount, 0
    if promotion.discount_type == DiscountType.FIXED:
        # not capped at the order total
        return promotion.discount_value, 0
    if promotion.discount_type == DiscountType.SHIPPING:
        return 0, promotion.discount_value
    raise ValueError(f"unknown discount type {promotion.discount_type} of {promotion}")


def _fail(reason: FailureReason, message: str) -> ValidationFailure:
    log.debug(f"promotion rejected: {reason.value}")
    return ValidationFailure(reason=reason, message=message)
