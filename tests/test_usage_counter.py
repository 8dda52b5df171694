from concurrent.futures import ThreadPoolExecutor

from storefront_core.database import promotions
from storefront_core.service import usage_counter
from storefront_core.util.signals import on_order_confirmed
from tests.util import add_promotion, make_order


def test_increment():
    created = add_promotion(code="COUNT")
    usage_counter.increment(created.id)
    usage_counter.increment(created.id)
    assert promotions.get_by_id(created.id).used_count == 2


def test_increment_without_id_is_noop(mocker):
    spy = mocker.spy(promotions, "increment_used_count")
    usage_counter.increment(None)
    usage_counter.increment("")
    spy.assert_not_called()


def test_increment_unknown_promotion(memory_logger):
    usage_counter.increment("missing")
    assert any("unknown promotion missing" in r.getMessage() for r in memory_logger.records)


def test_concurrent_increments_are_not_lost():
    created = add_promotion(code="RUSH", max_uses=50)
    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(lambda _: usage_counter.increment(created.id), range(40)))
    assert promotions.get_by_id(created.id).used_count == 40


def test_confirmed_order_increments_usage():
    created = add_promotion(code="ORDERED")
    on_order_confirmed.send(make_order(discount_code="ordered"))
    assert promotions.get_by_id(created.id).used_count == 1


def test_confirmed_order_without_code():
    created = add_promotion(code="UNUSED")
    on_order_confirmed.send(make_order(discount_code=None))
    assert promotions.get_by_id(created.id).used_count == 0


def test_confirmed_order_with_unknown_code(memory_logger):
    on_order_confirmed.send(make_order(discount_code="NOSUCHCODE"))
    assert any("unknown discount code NOSUCHCODE" in r.getMessage() for r in memory_logger.records)


def test_confirmed_order_survives_storage_errors(mocker, memory_logger):
    mocker.patch(
        "storefront_core.database.promotions.get_by_code",
        side_effect=OSError("disk gone"),
    )
    on_order_confirmed.send(make_order(discount_code="BROKEN"))
    assert any(
        "failed to increment promotion usage" in r.getMessage() and "disk gone" in r.getMessage()
        for r in memory_logger.records
    )
