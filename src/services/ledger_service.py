import logging

import requests

from core.exceptions import ExternalUnavailable

logger = logging.getLogger(__name__)

MAYBE_CREATE_DEPOSIT_MUTATION = """
mutation MaybeInternalCreateDeposit(
  $orderId: String!
  $tx: DepositTxInput!
  $amount: String!
  $uniqueId: String!
) {
  maybeInternalCreateDeposit(
    orderId: $orderId
    tx: $tx
    amount: $amount
    uniqueId: $uniqueId
  )
}
"""


class LedgerService:
    def __init__(self, graphql_url: str, api_key: str = None, timeout: float = 30):
        self.graphql_url = graphql_url
        self.api_key = api_key
        self.timeout = timeout

    def _create_header(self) -> dict:
        headers = {
            "accept": "application/json",
            "content-type": "application/json",
        }
        if self.api_key:
            headers["authorization"] = f"Bearer {self.api_key}"
        return headers

    def maybe_credit(
        self, order_id: str, txid: str, amount: str, unique_id: str
    ) -> bool:
        """Credit `amount` to the order unless `unique_id` was already credited.

        Returns True only when this call created the deposit. False means the
        deposit already exists or the order can't take it.
        """
        payload = {
            "query": MAYBE_CREATE_DEPOSIT_MUTATION,
            "variables": {
                "orderId": order_id,
                "tx": {"txid": txid},
                "amount": amount,
                "uniqueId": unique_id,
            },
        }
        try:
            response = requests.post(
                self.graphql_url,
                headers=self._create_header(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ExternalUnavailable("ledger", f"Request failed: {e}")

        if response.status_code != 200:
            raise ExternalUnavailable(
                "ledger", f"Request failed with status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError:
            raise ExternalUnavailable("ledger", "Response is not JSON")

        if data.get("errors"):
            messages = ", ".join(
                error.get("message", str(error)) for error in data["errors"]
            )
            raise ExternalUnavailable("ledger", f"GraphQL errors: {messages}")

        result = (data.get("data") or {}).get("maybeInternalCreateDeposit")
        if not isinstance(result, bool):
            raise ExternalUnavailable(
                "ledger", f"Unexpected maybeInternalCreateDeposit result {result!r}"
            )

        logger.debug(
            "maybeInternalCreateDeposit %s for order %s returned %s",
            unique_id,
            order_id,
            result,
        )
        return result
