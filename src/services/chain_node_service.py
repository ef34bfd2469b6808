import logging
from typing import Optional

import requests
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from core.exceptions import ExternalUnavailable

logger = logging.getLogger(__name__)


def _to_plain(value):
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(value)
    return value


class ChainNodeService:
    def __init__(self, rpc_url: str = None, timeout: float = 30, web3: Web3 = None):
        if web3 is None:
            web3 = Web3(
                Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout})
            )
        self.w3 = web3

    def get_transaction(self, tx_hash: str) -> Optional[dict]:
        """Transaction by hash with bytes as 0x strings.

        None when the node doesn't know the transaction.
        """
        try:
            tx = self.w3.eth.get_transaction(tx_hash)
        except TransactionNotFound:
            return None
        except (requests.RequestException, Web3Exception, ValueError) as e:
            raise ExternalUnavailable("node", f"get_transaction {tx_hash} failed: {e}")

        if tx is None:
            return None

        return {key: _to_plain(value) for key, value in dict(tx).items()}
