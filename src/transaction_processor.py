import logging

from amount import ZERO
from errors import (
    ClientMismatch,
    DuplicateTransactionId,
    InsufficientFunds,
    InvalidDisputeState,
    LockedAccount,
    MalformedRecord,
    UnknownAccount,
    UnknownTransaction,
)
from models import ClientAccount, DepositRecord, DisputeState, Transaction, TransactionType
from state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions against state.
    Each handler checks every precondition before mutating anything and
    raises a LedgerError subclass when the transaction must be rejected.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> None:
        """
        Apply a single transaction.

        Raises:
            LedgerError: the transaction was rejected and state is unchanged,
                apart from the client's account being registered if this was
                the first record to mention it.
        """
        account = self._state.get_or_create_account(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(account, transaction)

    def _check_amount(self, transaction: Transaction) -> None:
        if transaction.amount is None:
            raise MalformedRecord(f"{transaction.transaction_type.value} without an amount", transaction)
        if transaction.amount < ZERO:
            raise MalformedRecord(f"negative amount {transaction.amount}", transaction)

    def _check_spendable(self, account: ClientAccount, transaction: Transaction) -> None:
        if account.locked:
            raise LockedAccount(f"account {account.client_id} is locked", transaction)
        if self._state.is_transaction_applied(transaction.transaction_id):
            raise DuplicateTransactionId(f"tx {transaction.transaction_id} already applied", transaction)

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> None:
        self._check_amount(transaction)
        self._check_spendable(account, transaction)

        account.credit(transaction.amount)
        self._state.store_deposit(
            DepositRecord(
                transaction_id=transaction.transaction_id,
                client_id=transaction.client_id,
                amount=transaction.amount,
            )
        )

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> None:
        self._check_amount(transaction)
        if not self._state.has_deposits(transaction.client_id):
            raise UnknownAccount(f"no deposit on record for client {transaction.client_id}", transaction)
        self._check_spendable(account, transaction)
        if account.available < transaction.amount:
            raise InsufficientFunds(
                f"available {account.available} is less than {transaction.amount}", transaction
            )

        account.debit(transaction.amount)
        self._state.mark_transaction_applied(transaction.transaction_id)

    def _find_deposit(self, transaction: Transaction, expected: DisputeState) -> DepositRecord:
        """Look up the deposit a dispute-family transaction refers to and check its state."""
        original = self._state.get_deposit(transaction.transaction_id)

        if original is None:
            raise UnknownTransaction(f"no deposit with tx {transaction.transaction_id}", transaction)

        if original.client_id != transaction.client_id:
            raise ClientMismatch(
                f"tx {transaction.transaction_id} belongs to client {original.client_id}", transaction
            )

        if original.dispute_state != expected:
            raise InvalidDisputeState(
                f"tx {transaction.transaction_id} is {original.dispute_state.value}, expected {expected.value}",
                transaction,
            )
        return original

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._find_deposit(transaction, DisputeState.NONE)

        account.hold(original.amount)
        original.dispute_state = DisputeState.DISPUTED

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._find_deposit(transaction, DisputeState.DISPUTED)

        account.release_hold(original.amount)
        original.dispute_state = DisputeState.NONE

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._find_deposit(transaction, DisputeState.DISPUTED)

        account.remove_held(original.amount)
        account.locked = True
        original.dispute_state = DisputeState.CHARGED_BACK
        logger.info(f"Chargeback on tx {transaction.transaction_id}: account {account.client_id} locked")
