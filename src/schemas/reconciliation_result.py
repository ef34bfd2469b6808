from typing import List

from pydantic import BaseModel

from core.constants import ReconciliationOutcome


class ReconciliationResult(BaseModel):
    order_id: str
    outcome: ReconciliationOutcome
    candidates: int = 0
    credited: List[str] = []
    failed: List[str] = []
    skipped: List[str] = []
