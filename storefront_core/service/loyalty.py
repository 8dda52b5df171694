import logging
import math
from typing import Optional

import gconf
from pydantic import ValidationError

from storefront_core.data_model.loyalty import LoyaltySummary, LoyaltyTransaction
from storefront_core.data_model.order import Order
from storefront_core.data_model.user import MembershipLevel
from storefront_core.data_model.util import utcnow
from storefront_core.database import loyalty_transactions, users
from storefront_core.service.exceptions import UserNotFound
from storefront_core.util.misc import format_error
from storefront_core.util.signals import on_order_paid

log = logging.getLogger(__name__)

# highest tier first
_TIERS = [MembershipLevel.DIAMOND, MembershipLevel.GOLD, MembershipLevel.SILVER]


def calculate_membership_level(points: int) -> Optional[MembershipLevel]:
    thresholds = gconf.get("loyalty.thresholds")
    for level in _TIERS:
        if points >= thresholds[level.value]:
            return level
    return None


def earn_points(
    user_id: Optional[str],
    revenue: float,
    order_id: str = None,
    multiplier: float = None,
    reason: str = "Order completion",
) -> Optional[LoyaltyTransaction]:
    if not user_id or not revenue:
        return None
    if multiplier is None:
        multiplier = gconf.get("loyalty.points_multiplier")

    points_earned = math.floor(revenue * multiplier)
    if points_earned <= 0:
        return None

    transaction = LoyaltyTransaction.create(
        user_id, points_earned, reason, order_id=order_id, revenue=revenue
    )
    loyalty_transactions.insert(transaction)

    user = users.get_by_id(user_id)
    if user is None:
        log.warning(f"recorded {points_earned} points for unknown user {user_id}")
        return transaction

    user.loyalty_points += points_earned
    _update_membership(user)
    log.info(f"{user} earned {points_earned} points, now at {user.loyalty_points}")
    return transaction


def deduct_points(user_id: str, points: int, reason: str = "Redemption") -> LoyaltyTransaction:
    user = users.get_by_id(user_id)
    if user is None:
        raise UserNotFound(user_id)

    user.loyalty_points = max(0, user.loyalty_points - points)
    _update_membership(user)

    transaction = LoyaltyTransaction.create(user_id, -points, reason)
    loyalty_transactions.insert(transaction)
    log.info(f"deducted {points} points from {user}, now at {user.loyalty_points}")
    return transaction


def get_summary(user_id: str) -> LoyaltySummary:
    user = users.get_by_id(user_id)
    limit = gconf.get("loyalty.summary_transactions", default=10)
    return LoyaltySummary(
        points=user.loyalty_points if user else 0,
        level=user.membership_level if user else None,
        transactions=loyalty_transactions.get_latest_for_user(user_id, limit),
    )


def _update_membership(user):
    previous_level = user.membership_level
    user.membership_level = calculate_membership_level(user.loyalty_points)
    user.last_membership_update = utcnow()
    users.update(user)
    if user.membership_level != previous_level:
        log.info(f"{user} changed membership from {previous_level} to {user.membership_level}")


@on_order_paid.connect
def award_points_for_paid_order(order: Order):
    if not order.user_id:
        return
    # failures must not reach the payment flow
    try:
        earn_points(
            order.user_id,
            order.totals.subtotal - order.totals.discount,
            order_id=order.id,
            reason="Order payment completed",
        )
    except (OSError, ValidationError) as e:
        log.error(f"failed to award loyalty points for {order}: {format_error(e)}")
