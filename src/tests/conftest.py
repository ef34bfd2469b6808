from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from core.constants import NetworkChain
from core.context import WorkerContext
from models.orders import Order
from schemas.native_method import NativeMethod
from services.order_service import OrderService

from factories import ACCOUNT, DEPOSIT_ADDRESS, FakeLedger


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def order_service(engine):
    return OrderService(engine)


@pytest.fixture
def native_method():
    return NativeMethod(
        asset="ETH", id="eth", account=ACCOUNT, network=NetworkChain.ethereum
    )


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def order(engine):
    order = Order(
        id="order-1",
        deposit_method_id="eth",
        deposit_address=DEPOSIT_ADDRESS,
        created_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
    )
    with Session(engine) as session:
        session.add(order)
        session.commit()
        session.refresh(order)
    return order


@pytest.fixture
def worker_context(native_method, order_service, ledger):
    return WorkerContext(
        network=NetworkChain.ethereum,
        native_method=native_method,
        order_service=order_service,
        chain_node_service=Mock(),
        ledger_service=ledger,
        etherscan_service=Mock(),
        max_candidates=10,
        scan_concurrency=10,
    )
