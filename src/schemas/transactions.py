from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CandidateTransaction(BaseModel):
    """Row of the explorer `txlist` response, newest first."""

    model_config = ConfigDict(populate_by_name=True)

    hash: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: str
    is_error: Optional[str] = Field(default=None, alias="isError")


class FullTransaction(BaseModel):
    """Transaction as returned by the chain node, amounts in wei."""

    model_config = ConfigDict(populate_by_name=True)

    hash: str
    from_address: str = Field(alias="from")
    to_address: Optional[str] = Field(default=None, alias="to")
    value: int
    gas_limit: int = Field(alias="gas")
    gas_price: Optional[int] = Field(default=None, alias="gasPrice")
    block_hash: str = Field(alias="blockHash")
    block_number: Optional[int] = Field(default=None, alias="blockNumber")
