import logging
from datetime import datetime, timezone
from typing import List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from core import constants
from core.exceptions import ExternalUnavailable
from schemas.transactions import CandidateTransaction

logger = logging.getLogger(__name__)

_transaction_list_adapter = TypeAdapter(List[CandidateTransaction])


class EtherscanService:
    def __init__(
        self,
        api_key: str,
        chain_id: int,
        base_url: str = "https://api.etherscan.io/v2/api",
        page_size: int = 10000,
        timeout: float = 30,
    ):
        self.api_key = api_key
        self.chain_id = chain_id
        self.base_url = base_url
        self.page_size = page_size
        self.timeout = timeout

    def _get(self, params: dict) -> dict:
        query_params = {"chainid": self.chain_id, **params, "apikey": self.api_key}
        try:
            response = requests.get(
                self.base_url, params=query_params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ExternalUnavailable("etherscan", f"Request failed: {e}")

        if response.status_code != 200:
            raise ExternalUnavailable(
                "etherscan", f"Request failed with status {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError:
            raise ExternalUnavailable("etherscan", "Response is not JSON")

        if not isinstance(payload, dict) or "result" not in payload:
            raise ExternalUnavailable("etherscan", f"Unexpected response {payload}")
        return payload

    def get_block_number_before(self, created_at: datetime) -> Optional[int]:
        """Block mined at or before `created_at`, or None when it can't be resolved."""
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        timestamp = int(created_at.timestamp())
        try:
            payload = self._get(
                {
                    "module": "block",
                    "action": "getblocknobytime",
                    "timestamp": timestamp,
                    "closest": "before",
                }
            )
            if payload.get("status") != constants.ETHERSCAN_STATUS_OK:
                raise ExternalUnavailable(
                    "etherscan", f"{payload.get('message')}: {payload['result']}"
                )
            return int(payload["result"])
        except (ExternalUnavailable, TypeError, ValueError) as e:
            logger.error(
                "Error fetching block number for order timestamp %s: %s",
                timestamp,
                e,
                exc_info=True,
            )
            return None

    def get_transactions(
        self, address: str, start_block: int
    ) -> List[CandidateTransaction]:
        """Normal transactions of `address` from `start_block`, newest first."""
        payload = self._get(
            {
                "module": "account",
                "action": "txlist",
                "address": address,
                "startblock": start_block,
                "page": 1,
                "offset": self.page_size,
                "sort": "desc",
            }
        )

        if payload.get("status") != constants.ETHERSCAN_STATUS_OK:
            if payload.get("message") == constants.ETHERSCAN_NO_TRANSACTIONS_MESSAGE:
                return []
            raise ExternalUnavailable(
                "etherscan", f"{payload.get('message')}: {payload['result']}"
            )

        try:
            transactions = _transaction_list_adapter.validate_python(payload["result"])
        except ValidationError as e:
            raise ExternalUnavailable("etherscan", f"Malformed transaction list: {e}")

        return [
            tx
            for tx in transactions
            if tx.is_error != constants.ETHERSCAN_TX_ERROR_FLAG
        ]
