"""
Rejection reasons raised by TransactionProcessor and caught by Ledger.apply.

Every handler checks all of its preconditions before touching state, so a
raised LedgerError always means the record had no effect.

    LedgerError
    ├── MalformedRecord
    ├── UnknownAccount
    ├── DuplicateTransactionId
    ├── InsufficientFunds
    ├── LockedAccount
    └── InvalidDisputeState
        ├── UnknownTransaction
        └── ClientMismatch
"""

from typing import Optional

from models import Transaction


class LedgerError(Exception):
    """Base class for records the ledger refuses to apply."""

    def __init__(self, message: str, transaction: Optional[Transaction] = None):
        self.transaction = transaction
        super().__init__(message)


class MalformedRecord(LedgerError):
    """Row could not be parsed, or an amount is missing or negative."""


class UnknownAccount(LedgerError):
    """Withdrawal for a client with no accepted deposit."""


class DuplicateTransactionId(LedgerError):
    """Deposit or withdrawal reusing a transaction id already applied."""


class InsufficientFunds(LedgerError):
    """Withdrawal larger than the available balance."""


class LockedAccount(LedgerError):
    """Deposit or withdrawal against an account frozen by a chargeback."""


class InvalidDisputeState(LedgerError):
    """Dispute, resolve or chargeback attempted from the wrong dispute state."""


class UnknownTransaction(InvalidDisputeState):
    """Referenced transaction id has no deposit on record."""


class ClientMismatch(InvalidDisputeState):
    """Referenced deposit belongs to a different client."""
