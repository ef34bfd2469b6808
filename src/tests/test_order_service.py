from datetime import datetime, timezone

import pytest
from sqlmodel import Session

from core.exceptions import AmbiguousDepositAddress
from models.orders import Order

from factories import DEPOSIT_ADDRESS, OTHER_ADDRESS


def add_orders(engine, *orders):
    with Session(engine) as session:
        for order in orders:
            session.add(order)
        session.commit()


def make_order(order_id, deposit_address=DEPOSIT_ADDRESS, deposit_method_id="eth"):
    return Order(
        id=order_id,
        deposit_method_id=deposit_method_id,
        deposit_address=deposit_address,
        created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )


def test_get_order(order_service, order):
    found = order_service.get_order("order-1")

    assert found is not None
    assert found.id == "order-1"
    assert found.deposit_address == DEPOSIT_ADDRESS


def test_get_order_missing(order_service, order):
    assert order_service.get_order("missing") is None


def test_find_order_by_deposit_address(order_service, order):
    found = order_service.find_order_by_deposit_address("eth", DEPOSIT_ADDRESS)

    assert found.id == "order-1"


def test_find_order_by_deposit_address_ignores_case(order_service, order):
    # nodes return checksummed addresses
    checksummed = "0x20F89Ba1b0fc1E83f9aEf0a134095Cd63F7e8CC7"

    found = order_service.find_order_by_deposit_address("eth", checksummed)

    assert found.id == "order-1"


def test_find_order_by_deposit_address_other_method(order_service, order):
    assert order_service.find_order_by_deposit_address("etharb", DEPOSIT_ADDRESS) is None


def test_find_order_by_deposit_address_unknown(order_service, order):
    assert order_service.find_order_by_deposit_address("eth", OTHER_ADDRESS) is None


def test_unassigned_address_never_matches(engine, order_service):
    add_orders(engine, make_order("order-2", deposit_address=None))

    assert order_service.find_order_by_deposit_address("eth", DEPOSIT_ADDRESS) is None


def test_find_order_by_deposit_address_ambiguous(engine, order_service, order):
    add_orders(engine, make_order("order-2", deposit_address=DEPOSIT_ADDRESS.upper()))

    with pytest.raises(AmbiguousDepositAddress) as exc_info:
        order_service.find_order_by_deposit_address("eth", DEPOSIT_ADDRESS)

    assert sorted(exc_info.value.order_ids) == ["order-1", "order-2"]
