import enum


# create network enum: Ethereum, ArbitrumOne, Base, Sepolia
class NetworkChain(str, enum.Enum):
    ethereum = "ethereum"
    arbitrum_one = "arbitrum_one"
    base = "base"
    sepolia = "sepolia"


CHAIN_IDS = {
    NetworkChain.ethereum: 1,
    NetworkChain.arbitrum_one: 42161,
    NetworkChain.base: 8453,
    NetworkChain.sepolia: 11155111,
}

# (asset, deposit method id) of the native coin deposited on each network
NATIVE_DEPOSIT_METHODS = {
    NetworkChain.ethereum: ("ETH", "eth"),
    NetworkChain.arbitrum_one: ("ETH", "etharb"),
    NetworkChain.base: ("ETH", "ethbase"),
    NetworkChain.sepolia: ("ETH", "ethsepolia"),
}

ETHERSCAN_STATUS_OK = "1"
ETHERSCAN_NO_TRANSACTIONS_MESSAGE = "No transactions found"
ETHERSCAN_TX_ERROR_FLAG = "1"


MAX_CANDIDATE_TRANSACTIONS = 10
SCAN_CONCURRENCY = 10


class ReconciliationOutcome(str, enum.Enum):
    ORDER_NOT_FOUND = "order_not_found"
    NO_DEPOSIT_ADDRESS = "no_deposit_address"
    BLOCK_UNRESOLVED = "block_unresolved"
    HISTORY_UNAVAILABLE = "history_unavailable"
    COMPLETED = "completed"
