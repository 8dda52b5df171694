import logging

from pydantic import ValidationError

from storefront_core.data_model.order import Order
from storefront_core.database import promotions
from storefront_core.util.misc import format_error
from storefront_core.util.signals import on_order_confirmed

log = logging.getLogger(__name__)


def increment(promotion_id: str):
    if not promotion_id:
        return
    if promotions.increment_used_count(promotion_id):
        log.debug(f"incremented usage of promotion {promotion_id}")
    else:
        log.warning(f"cannot increment usage of unknown promotion {promotion_id}")


@on_order_confirmed.connect
def increment_for_confirmed_order(order: Order):
    if not order.discount_code:
        return
    # failures must not reach the order flow
    try:
        if promotion := promotions.get_by_code(order.discount_code):
            increment(promotion.id)
        else:
            log.warning(f"{order} used unknown discount code {order.discount_code}")
    except (OSError, ValidationError) as e:
        log.error(f"failed to increment promotion usage for {order}: {format_error(e)}")
