from unittest.mock import Mock

import pytest
import requests
from hexbytes import HexBytes
from web3.datastructures import AttributeDict
from web3.exceptions import TransactionNotFound

from core.exceptions import ExternalUnavailable
from services.chain_node_service import ChainNodeService

from factories import ACCOUNT, BLOCK_HASH, DEPOSIT_ADDRESS, TX_HASH


@pytest.fixture
def mock_web3():
    return Mock()


@pytest.fixture
def service(mock_web3):
    return ChainNodeService(web3=mock_web3)


def test_get_transaction_normalizes_hex_values(service, mock_web3):
    mock_web3.eth.get_transaction.return_value = AttributeDict(
        {
            "hash": HexBytes(TX_HASH),
            "from": DEPOSIT_ADDRESS,
            "to": ACCOUNT,
            "value": 5 * 10**18,
            "gas": 21000,
            "gasPrice": 10**9,
            "blockHash": HexBytes(BLOCK_HASH),
            "blockNumber": 19000010,
        }
    )

    tx = service.get_transaction(TX_HASH)

    mock_web3.eth.get_transaction.assert_called_once_with(TX_HASH)
    assert tx["hash"] == TX_HASH
    assert tx["blockHash"] == BLOCK_HASH
    assert tx["from"] == DEPOSIT_ADDRESS
    assert tx["value"] == 5 * 10**18
    assert tx["gasPrice"] == 10**9


def test_get_transaction_pending_has_no_block_hash(service, mock_web3):
    mock_web3.eth.get_transaction.return_value = AttributeDict(
        {"hash": HexBytes(TX_HASH), "blockHash": None}
    )

    assert service.get_transaction(TX_HASH)["blockHash"] is None


def test_get_transaction_not_found(service, mock_web3):
    mock_web3.eth.get_transaction.side_effect = TransactionNotFound(
        f"Transaction with hash: '{TX_HASH}' not found."
    )

    assert service.get_transaction(TX_HASH) is None


def test_get_transaction_network_error(service, mock_web3):
    mock_web3.eth.get_transaction.side_effect = requests.ConnectionError(
        "Network error"
    )

    with pytest.raises(ExternalUnavailable, match="Network error"):
        service.get_transaction(TX_HASH)


def test_get_transaction_rpc_error(service, mock_web3):
    # web3 surfaces JSON-RPC error responses as ValueError
    mock_web3.eth.get_transaction.side_effect = ValueError(
        {"code": -32005, "message": "daily request count exceeded"}
    )

    with pytest.raises(ExternalUnavailable, match="daily request count exceeded"):
        service.get_transaction(TX_HASH)
