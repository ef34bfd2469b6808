import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from core.constants import ReconciliationOutcome
from core.context import WorkerContext
from core.exceptions import ExternalUnavailable, InvalidAmount
from models.orders import Order
from schemas.reconciliation_result import ReconciliationResult
from schemas.transactions import CandidateTransaction
from services.deposit_scanner import DepositScanner
from utils.transaction_utils import filter_candidate_transactions

logger = logging.getLogger(__name__)

CREDITED = "credited"
NOT_CREDITED = "not_credited"
SKIPPED = "skipped"
FAILED = "failed"
# node or ledger outage, retried through queue redelivery
UNAVAILABLE = "unavailable"


class NativeDepositReconciliationJob:
    """Checks the deposit address of one order for missed native deposits."""

    def __init__(self, context: WorkerContext):
        self.context = context
        self.scanner = DepositScanner(
            context.native_method, context.order_service, context.ledger_service
        )

    def _resolve_start_block(self, order: Order) -> Optional[int]:
        return self.context.etherscan_service.get_block_number_before(
            order.created_at
        )

    def _scan_candidate(self, candidate: CandidateTransaction) -> str:
        try:
            tx = self.context.chain_node_service.get_transaction(candidate.hash)

            if tx is None:
                # The node and the explorer index are not always in sync
                logger.error("Transaction %s not found", candidate.hash)
                return SKIPPED

            logger.info("Scanning tx %s", candidate.hash)

            return CREDITED if self.scanner.scan(tx) else NOT_CREDITED
        except ExternalUnavailable as e:
            logger.error("Error scanning tx %s: %s", candidate.hash, e, exc_info=True)
            return UNAVAILABLE
        except Exception as e:
            logger.error("Error scanning tx %s: %s", candidate.hash, e, exc_info=True)
            return FAILED

    def _scan_candidates(self, candidates: List[CandidateTransaction]) -> List[str]:
        if not candidates:
            return []

        with ThreadPoolExecutor(
            max_workers=self.context.scan_concurrency,
            thread_name_prefix="native-deposit-scan",
        ) as executor:
            return list(executor.map(self._scan_candidate, candidates))

    def run(self, order_id: str) -> ReconciliationResult:
        """Raises ExternalUnavailable once every candidate was tried if the node
        or the ledger was unreachable for any of them, so the task is redelivered.
        """
        logger.info(
            "Processing queued task to look at order %s for deposits", order_id
        )

        order = self.context.order_service.get_order(order_id)

        if order is None:
            logger.error("Order %s not found", order_id)
            return ReconciliationResult(
                order_id=order_id, outcome=ReconciliationOutcome.ORDER_NOT_FOUND
            )

        if not order.deposit_address:
            # The deposit address may have been unassigned
            logger.error("Order %s has no deposit address", order_id)
            return ReconciliationResult(
                order_id=order_id, outcome=ReconciliationOutcome.NO_DEPOSIT_ADDRESS
            )

        block_number = self._resolve_start_block(order)

        if block_number is None:
            logger.error("Could not resolve a start block for order %s", order_id)
            return ReconciliationResult(
                order_id=order_id, outcome=ReconciliationOutcome.BLOCK_UNRESOLVED
            )

        try:
            # In descending order
            txs = self.context.etherscan_service.get_transactions(
                order.deposit_address, block_number
            )
            candidates = filter_candidate_transactions(
                txs, limit=self.context.max_candidates
            )
        except (ExternalUnavailable, InvalidAmount) as e:
            logger.error(
                "Error fetching txs for order %s: %s", order_id, e, exc_info=True
            )
            return ReconciliationResult(
                order_id=order_id, outcome=ReconciliationOutcome.HISTORY_UNAVAILABLE
            )

        logger.info(
            "Found %s transactions (%s candidates) for order %s",
            len(txs),
            len(candidates),
            order_id,
        )

        statuses = self._scan_candidates(candidates)

        unavailable = [
            c.hash for c, s in zip(candidates, statuses) if s == UNAVAILABLE
        ]
        if unavailable:
            raise ExternalUnavailable(
                "scan",
                f"order {order_id}: {len(unavailable)} of {len(candidates)} txs "
                f"could not be checked ({', '.join(unavailable)})",
            )

        result = ReconciliationResult(
            order_id=order_id,
            outcome=ReconciliationOutcome.COMPLETED,
            candidates=len(candidates),
            credited=[c.hash for c, s in zip(candidates, statuses) if s == CREDITED],
            failed=[c.hash for c, s in zip(candidates, statuses) if s == FAILED],
            skipped=[c.hash for c, s in zip(candidates, statuses) if s == SKIPPED],
        )

        logger.info(
            "Finished order %s: %s credited, %s failed, %s skipped",
            order_id,
            len(result.credited),
            len(result.failed),
            len(result.skipped),
        )
        return result
