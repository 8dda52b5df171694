import logging
from typing import Iterable, List, Optional

import gconf

from storefront_core.data_model.promotion import Promotion, PromotionInput, PromotionUpdate
from storefront_core.data_model.order import PromotionUsage
from storefront_core.data_model.user import MembershipLevel
from storefront_core.data_model.util import utcnow
from storefront_core.data_model.validation import OrderItem, ValidationRequest, ValidationResult
from storefront_core.database import orders, promotions, users
from storefront_core.service import discount
from storefront_core.service.exceptions import PromotionAlreadyExists, PromotionNotFound

log = logging.getLogger(__name__)


def create_promotion(data: PromotionInput) -> Promotion:
    if promotions.get_by_code(data.code):
        raise PromotionAlreadyExists(data.code)
    promotion = Promotion.create(data)
    promotions.insert(promotion)
    log.info(f"created {promotion}")
    return promotion


def list_promotions(
    is_active: Optional[bool] = None,
    membership_level: Optional[MembershipLevel] = None,
) -> List[Promotion]:
    return promotions.get_all(is_active=is_active, membership_level=membership_level)


def get_promotion_by_code(code: str) -> Optional[Promotion]:
    return promotions.get_by_code(code)


def get_promotion(promotion_id: str) -> Promotion:
    if promotion := promotions.get_by_id(promotion_id):
        return promotion
    raise PromotionNotFound(promotion_id)


def update_promotion(promotion_id: str, data: PromotionUpdate) -> Promotion:
    existing = get_promotion(promotion_id)
    changes = data.dict(exclude_unset=True)
    if changes.get("code") and changes["code"] != existing.code:
        if promotions.get_by_code(changes["code"]):
            raise PromotionAlreadyExists(changes["code"])

    updated = Promotion(
        **{**existing.dict(exclude={"status"}), **changes, "updated_at": utcnow()}
    )
    promotions.update(updated)
    log.info(f"updated {updated}: {', '.join(changes) or 'nothing'}")
    return updated


def delete_promotion(promotion_id: str) -> bool:
    deleted = promotions.delete(promotion_id)
    if deleted:
        log.info(f"deleted promotion {promotion_id}")
    return deleted


def validate_promotion(
    code: str,
    order_total: float,
    user_id: Optional[str] = None,
    items: Iterable[OrderItem] = (),
) -> ValidationResult:
    request = ValidationRequest(
        code=code, order_total=order_total, user_id=user_id, items=list(items)
    )
    promotion = promotions.get_by_code(request.code)
    result = discount.evaluate(promotion, request)
    log.debug(f"validated code {request.code!r} for order total {order_total}: {result}")
    return result


def get_promotion_usage_history(promotion_id: str) -> List[PromotionUsage]:
    promotion = get_promotion(promotion_id)
    limit = gconf.get("promotions.usage_history_limit", default=100)

    history = []
    for order in orders.find_by_discount_code(promotion.code, limit):
        user = users.get_by_id(order.user_id) if order.user_id else None
        guest = order.guest_info
        history.append(
            PromotionUsage(
                order_id=order.id,
                user_id=user.id if user else None,
                user_name=user.name if user else (guest.name if guest else None),
                user_email=user.email if user else (guest.email if guest else None),
                order_total=order.totals.total,
                discount_amount=order.totals.discount,
                created_at=order.created_at,
            )
        )
    return history
