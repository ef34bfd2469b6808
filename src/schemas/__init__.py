from .native_method import NativeMethod
from .transactions import CandidateTransaction, FullTransaction
from .reconciliation_result import ReconciliationResult
