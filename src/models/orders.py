from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Order(SQLModel, table=True):
    __tablename__ = "orders"

    id: str = Field(primary_key=True)
    deposit_method_id: str = Field(index=True)
    # Unassigned once the order completes or is cancelled
    deposit_address: Optional[str] = Field(default=None, index=True)
    created_at: datetime
