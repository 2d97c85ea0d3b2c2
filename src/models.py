from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from amount import Amount, ZERO

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class DisputeState(Enum):
    NONE = "none"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Amount] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Amount = ZERO
    held: Amount = ZERO
    locked: bool = False

    @property
    def total(self) -> Amount:
        return self.available + self.held

    def credit(self, amount: Amount) -> None:
        self.available += amount

    def debit(self, amount: Amount) -> None:
        self.available -= amount

    def hold(self, amount: Amount) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Amount) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Amount) -> None:
        self.held -= amount

    def snapshot(self) -> "AccountSnapshot":
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )


@dataclass
class DepositRecord:
    """History entry kept for every accepted deposit, so it can be disputed later."""

    transaction_id: int
    client_id: int
    amount: Amount
    dispute_state: DisputeState = DisputeState.NONE


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Amount
    held: Amount
    total: Amount
    locked: bool

    def as_row(self) -> List[str]:
        return [
            str(self.client_id),
            str(self.available),
            str(self.held),
            str(self.total),
            str(self.locked).lower(),
        ]


@dataclass
class ProcessingStats:
    """Counters for one run. Rejections are keyed by error class name."""

    applied: int = 0
    rejected: int = 0
    malformed: int = 0
    rejections: Counter = field(default_factory=Counter)

    def record_success(self) -> None:
        self.applied += 1

    def record_rejection(self, reason: str) -> None:
        self.rejected += 1
        self.rejections[reason] += 1

    def record_malformed(self) -> None:
        self.malformed += 1
