from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from core import constants
from core.config import Settings
from core.constants import NetworkChain
from core.db import create_db_engine
from schemas.native_method import NativeMethod
from services.chain_node_service import ChainNodeService
from services.etherscan_service import EtherscanService
from services.ledger_service import LedgerService
from services.order_service import OrderService


@dataclass
class WorkerContext:
    network: NetworkChain
    native_method: NativeMethod
    order_service: OrderService
    chain_node_service: ChainNodeService
    ledger_service: LedgerService
    # None when no explorer API key is configured
    etherscan_service: Optional[EtherscanService]
    max_candidates: int = constants.MAX_CANDIDATE_TRANSACTIONS
    scan_concurrency: int = constants.SCAN_CONCURRENCY


def build_native_method(settings: Settings, network: NetworkChain) -> NativeMethod:
    asset, method_id = constants.NATIVE_DEPOSIT_METHODS[network]
    return NativeMethod(
        asset=asset, id=method_id, account=settings.EVM_ACCOUNT or "", network=network
    )


def build_worker_context(
    settings: Settings, network: NetworkChain, engine: Engine = None
) -> WorkerContext:
    rpc_url = settings.rpc_url_for(network.value)
    if not rpc_url:
        raise ValueError(f"No RPC url configured for {network.value}")

    etherscan_service = None
    if settings.ETHERSCAN_API_KEY:
        etherscan_service = EtherscanService(
            api_key=settings.ETHERSCAN_API_KEY,
            chain_id=constants.CHAIN_IDS[network],
            base_url=settings.ETHERSCAN_API_URL,
            page_size=settings.ETHERSCAN_PAGE_SIZE,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    return WorkerContext(
        network=network,
        native_method=build_native_method(settings, network),
        order_service=OrderService(engine or create_db_engine(settings)),
        chain_node_service=ChainNodeService(
            rpc_url, timeout=settings.HTTP_TIMEOUT_SECONDS
        ),
        ledger_service=LedgerService(
            settings.LEDGER_GRAPHQL_URL,
            api_key=settings.LEDGER_API_KEY,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        ),
        etherscan_service=etherscan_service,
        max_candidates=settings.MAX_CANDIDATE_TRANSACTIONS,
        scan_concurrency=settings.SCAN_CONCURRENCY,
    )
