from typing import Any, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    ENVIRONMENT_NAME: str = "Development"

    @property
    def is_production(self):
        return self.ENVIRONMENT_NAME == "Production"

    PROJECT_NAME: str = "native-deposit-reconciler"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "orders"
    SQLALCHEMY_DATABASE_URI: PostgresDsn | None = Field(
        default=None, validate_default=True
    )

    ETHER_MAINNET_INFURA_URL: str | None = None
    ARBITRUM_MAINNET_INFURA_URL: str | None = None
    BASE_MAINNET_NETWORK_RPC: str | None = None
    SEPOLIA_TESTNET_INFURA_URL: str | None = None

    # Receiving account every native deposit is swept into
    EVM_ACCOUNT: str | None = None

    ETHERSCAN_API_KEY: str | None = None
    ETHERSCAN_API_URL: str = "https://api.etherscan.io/v2/api"
    ETHERSCAN_PAGE_SIZE: int = 10000

    LEDGER_GRAPHQL_URL: str = "http://localhost:4000/internal/graphql"
    LEDGER_API_KEY: Optional[str] = None

    AWS_REGION: str = "ap-southeast-1"
    SQS_API_KEY: Optional[str] = None
    SQS_API_SECRET: Optional[str] = None
    EVM_NATIVE_CONFIRM_QUEUE_PREFIX: str = "evm-native-confirm"
    SQS_WAIT_TIME_SECONDS: int = 20
    SQS_IDLE_SLEEP_SECONDS: float = 5

    HTTP_TIMEOUT_SECONDS: float = 30
    MAX_CANDIDATE_TRANSACTIONS: int = 10
    SCAN_CONCURRENCY: int = 10

    # Seq log
    SEQ_SERVER_URL: Optional[str] = None
    SEQ_SERVER_API_KEY: Optional[str] = None

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: str | None, info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v
        return PostgresDsn.build(
            scheme="postgresql+psycopg",
            username=info.data.get("POSTGRES_USER"),
            password=info.data.get("POSTGRES_PASSWORD"),
            host=info.data.get("POSTGRES_SERVER"),
            path=f"{info.data.get('POSTGRES_DB') or ''}",
        )

    def rpc_url_for(self, network: str) -> str | None:
        return {
            "ethereum": self.ETHER_MAINNET_INFURA_URL,
            "arbitrum_one": self.ARBITRUM_MAINNET_INFURA_URL,
            "base": self.BASE_MAINNET_NETWORK_RPC,
            "sepolia": self.SEPOLIA_TESTNET_INFURA_URL,
        }.get(network)

    class Config:

        case_sensitive = True
        env_file = "../.env"
        extra = "allow"


settings = Settings()
