from datetime import datetime, timedelta, timezone

from storefront_core.data_model.order import GuestInfo, Order, OrderTotals
from storefront_core.data_model.promotion import DiscountType, Promotion, PromotionInput
from storefront_core.data_model.user import MembershipLevel, User
from storefront_core.data_model.util import new_id
from storefront_core.data_model.variant import ProductVariant
from storefront_core.database import orders, promotions, users, variants


def days_from_now(days: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


def make_promotion(**kwargs) -> Promotion:
    data = {
        "code": "SALE10",
        "discount_type": DiscountType.PERCENTAGE,
        "discount_value": 10,
        **kwargs,
    }
    used_count = data.pop("used_count", 0)
    created_at = data.pop("created_at", None)
    promotion = Promotion.create(PromotionInput(**data))
    promotion.used_count = used_count
    if created_at:
        promotion.created_at = promotion.updated_at = created_at
    return promotion


def add_promotion(**kwargs) -> Promotion:
    promotion = make_promotion(**kwargs)
    promotions.insert(promotion)
    return promotion


def add_user(membership_level: MembershipLevel = None, loyalty_points: int = 0, **kwargs) -> User:
    user = User(
        id=kwargs.pop("id", new_id()),
        name=kwargs.pop("name", "Nguyen Van A"),
        email=kwargs.pop("email", "a@example.com"),
        membership_level=membership_level,
        loyalty_points=loyalty_points,
        **kwargs,
    )
    users.insert(user)
    return user


def add_variant(product_id: str, **kwargs) -> ProductVariant:
    variant = ProductVariant(
        id=kwargs.pop("id", new_id()),
        product_id=product_id,
        size=kwargs.pop("size", "M"),
        color=kwargs.pop("color", "black"),
        price=kwargs.pop("price", 250000),
        **kwargs,
    )
    variants.insert(variant)
    return variant


def make_order(discount_code: str = None, user_id: str = None, guest: GuestInfo = None, **kwargs) -> Order:
    return Order(
        id=kwargs.pop("id", new_id()),
        user_id=user_id,
        guest_info=guest,
        discount_code=discount_code,
        totals=kwargs.pop("totals", OrderTotals(subtotal=500000, discount=50000, total=450000)),
        created_at=kwargs.pop("created_at", datetime.now(timezone.utc)),
        **kwargs,
    )


def add_order(**kwargs) -> Order:
    order = make_order(**kwargs)
    orders.insert(order)
    return order
