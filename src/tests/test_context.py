import pytest
from sqlmodel import create_engine

from core.config import Settings
from core.constants import NetworkChain
from core.context import build_native_method, build_worker_context

from factories import ACCOUNT


def make_settings(**overrides):
    values = {
        "ETHER_MAINNET_INFURA_URL": "http://localhost:8545",
        "BASE_MAINNET_NETWORK_RPC": "http://localhost:8546",
        "EVM_ACCOUNT": ACCOUNT,
        "ETHERSCAN_API_KEY": "explorer-key",
        "SCAN_CONCURRENCY": 4,
    }
    values.update(overrides)
    return Settings(**values)


def test_database_uri_is_assembled():
    settings = Settings(
        POSTGRES_SERVER="db", POSTGRES_USER="app", POSTGRES_PASSWORD="pw"
    )

    uri = str(settings.SQLALCHEMY_DATABASE_URI)
    assert uri.startswith("postgresql+psycopg://app:pw@db")
    assert uri.endswith("/orders")


@pytest.mark.parametrize(
    "network, method_id",
    [
        (NetworkChain.ethereum, "eth"),
        (NetworkChain.arbitrum_one, "etharb"),
        (NetworkChain.base, "ethbase"),
        (NetworkChain.sepolia, "ethsepolia"),
    ],
)
def test_build_native_method(network, method_id):
    native_method = build_native_method(make_settings(), network)

    assert native_method.asset == "ETH"
    assert native_method.id == method_id
    assert native_method.account == ACCOUNT


def test_build_worker_context():
    context = build_worker_context(
        make_settings(), NetworkChain.base, engine=create_engine("sqlite://")
    )

    assert context.network == NetworkChain.base
    assert context.native_method.id == "ethbase"
    assert context.etherscan_service.chain_id == 8453
    assert context.scan_concurrency == 4
    assert context.max_candidates == 10


def test_build_worker_context_without_explorer_key():
    context = build_worker_context(
        make_settings(ETHERSCAN_API_KEY=None),
        NetworkChain.ethereum,
        engine=create_engine("sqlite://"),
    )

    assert context.etherscan_service is None


def test_build_worker_context_without_rpc_url():
    with pytest.raises(ValueError, match="arbitrum_one"):
        build_worker_context(
            make_settings(),
            NetworkChain.arbitrum_one,
            engine=create_engine("sqlite://"),
        )
