from typing import Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from core.exceptions import AmbiguousDepositAddress
from models.orders import Order


class OrderService:
    def __init__(self, engine: Engine):
        self.engine = engine

    def get_order(self, order_id: str) -> Optional[Order]:
        with Session(self.engine) as session:
            return session.get(Order, order_id)

    def find_order_by_deposit_address(
        self, deposit_method_id: str, address: str
    ) -> Optional[Order]:
        with Session(self.engine) as session:
            orders = session.exec(
                select(Order)
                .where(Order.deposit_method_id == deposit_method_id)
                .where(func.lower(Order.deposit_address) == address.lower())
            ).all()

        if len(orders) > 1:
            raise AmbiguousDepositAddress(
                deposit_method_id, address, [order.id for order in orders]
            )

        return orders[0] if orders else None
