import logging

from schemas.native_method import NativeMethod
from services.ledger_service import LedgerService
from services.order_service import OrderService
from utils.amount_utils import calculate_total_debit, to_major_unit
from utils.transaction_utils import get_native_deposit_unique_id, validate_transaction

logger = logging.getLogger(__name__)


class DepositScanner:
    def __init__(
        self,
        native_method: NativeMethod,
        order_service: OrderService,
        ledger_service: LedgerService,
    ):
        self.native_method = native_method
        self.order_service = order_service
        self.ledger_service = ledger_service

    def _is_paid_to_account(self, tx) -> bool:
        return (
            tx.to_address is not None
            and tx.to_address.lower() == self.native_method.account.lower()
            and tx.gas_price is not None
        )

    def scan(self, record) -> bool:
        """Credit the order funded by this transaction. True when a deposit was stored.

        Raises MalformedTransaction, InvalidAmount, ExternalUnavailable or
        AmbiguousDepositAddress; a False return is never an error.
        """
        tx = validate_transaction(record)

        if not self._is_paid_to_account(tx):
            return False

        total = calculate_total_debit(tx.value, tx.gas_limit, tx.gas_price)

        order = self.order_service.find_order_by_deposit_address(
            self.native_method.id, tx.from_address
        )
        if order is None:
            return False

        total_as_ether = to_major_unit(total)

        was_credited = self.ledger_service.maybe_credit(
            order_id=order.id,
            txid=tx.hash,
            amount=total_as_ether,
            unique_id=get_native_deposit_unique_id(self.native_method, tx.hash),
        )
        if not was_credited:
            return False

        logger.info(
            "Stored deposit. %s. %s %s (value %s) for order %s",
            tx.hash,
            total_as_ether,
            self.native_method.asset,
            to_major_unit(tx.value),
            order.id,
        )
        return True
