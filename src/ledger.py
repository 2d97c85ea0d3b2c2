import logging
from typing import List

from errors import LedgerError
from models import AccountSnapshot, ProcessingStats, Transaction
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class Ledger:
    """
    Sole owner of account balances and deposit history for one run.

    Records are applied one at a time, in input order. A record that fails
    validation is logged and dropped; it never aborts the run.
    """

    def __init__(self):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self.stats = ProcessingStats()

    def apply(self, transaction: Transaction) -> None:
        try:
            self._processor.process_transaction(transaction)
        except LedgerError as e:
            self.stats.record_rejection(type(e).__name__)
            logger.warning(f"Rejected {transaction}: {e}")
            return
        self.stats.record_success()

    def accounts(self) -> List[AccountSnapshot]:
        """Snapshot of every client seen so far, ordered by client id."""
        return [account.snapshot() for account in self._state.get_all_accounts()]
