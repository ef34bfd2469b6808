from pydantic import BaseModel, ConfigDict

from core.constants import NetworkChain


class NativeMethod(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset: str
    id: str
    account: str
    network: NetworkChain
