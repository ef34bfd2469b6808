from collections.abc import Mapping
from typing import Iterable, List

from pydantic import ValidationError

from core.constants import MAX_CANDIDATE_TRANSACTIONS
from core.exceptions import InvalidAmount, MalformedTransaction
from schemas.native_method import NativeMethod
from schemas.transactions import CandidateTransaction, FullTransaction


def _has_positive_value(tx: CandidateTransaction) -> bool:
    try:
        return int(tx.value) > 0
    except ValueError:
        raise InvalidAmount(f"Transaction {tx.hash} has invalid value {tx.value!r}")


def filter_candidate_transactions(
    transactions: Iterable[CandidateTransaction],
    limit: int = MAX_CANDIDATE_TRANSACTIONS,
) -> List[CandidateTransaction]:
    # Only transactions with a value and only the first `limit` of those.
    # Paginating instead would return fewer transactions when pages hold zero
    # value ones, so this filters first and slices after.
    return [tx for tx in transactions if _has_positive_value(tx)][:limit]


def validate_transaction(record) -> FullTransaction:
    if not isinstance(record, Mapping):
        raise MalformedTransaction("tx is not object")

    if not record.get("from"):
        raise MalformedTransaction("from missing")

    if not isinstance(record.get("hash"), str):
        raise MalformedTransaction("txid must be string")

    if not isinstance(record.get("blockHash"), str):
        raise MalformedTransaction(f"blockHash must be string ({record['hash']})")

    try:
        return FullTransaction.model_validate(dict(record))
    except ValidationError as e:
        raise MalformedTransaction(f"Invalid transaction {record['hash']}: {e}")


def get_native_deposit_unique_id(native_method: NativeMethod, tx_hash: str) -> str:
    return f"evm-native:{native_method.id}:{tx_hash.lower()}"
