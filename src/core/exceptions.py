class DepositReconciliationError(Exception):
    pass


class InvalidAmount(DepositReconciliationError, ValueError):
    pass


class MalformedTransaction(DepositReconciliationError):
    pass


class ExternalUnavailable(DepositReconciliationError):
    """An explorer, node or ledger call failed or returned an unusable payload."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class AmbiguousDepositAddress(DepositReconciliationError):
    def __init__(self, deposit_method_id: str, address: str, order_ids):
        super().__init__(
            f"Deposit address {address} ({deposit_method_id}) "
            f"matches {len(order_ids)} orders: {', '.join(order_ids)}"
        )
        self.deposit_method_id = deposit_method_id
        self.address = address
        self.order_ids = list(order_ids)
