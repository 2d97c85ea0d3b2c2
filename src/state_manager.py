from typing import Dict, List, Optional, Set

from models import ClientAccount, DepositRecord


class StateManager:
    """
    Owns all ledger state for one run: client accounts, deposit history for
    dispute lookups, the clients that have made a deposit, and the set of
    transaction ids already applied.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._deposits: Dict[int, DepositRecord] = {}
        # Withdrawals are not disputable, so only their ids are kept.
        self._applied_transaction_ids: Set[int] = set()
        self._funded_client_ids: Set[int] = set()

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def store_deposit(self, record: DepositRecord) -> None:
        """Store deposit for future dispute lookups."""
        self._deposits[record.transaction_id] = record
        self._funded_client_ids.add(record.client_id)
        self._applied_transaction_ids.add(record.transaction_id)

    def has_deposits(self, client_id: int) -> bool:
        """Check if the client has at least one accepted deposit."""
        return client_id in self._funded_client_ids

    def get_deposit(self, transaction_id: int) -> Optional[DepositRecord]:
        """Retrieve stored deposit by transaction ID."""
        return self._deposits.get(transaction_id)

    def mark_transaction_applied(self, transaction_id: int) -> None:
        self._applied_transaction_ids.add(transaction_id)

    def is_transaction_applied(self, transaction_id: int) -> bool:
        """Check if a deposit or withdrawal with this id was already applied."""
        return transaction_id in self._applied_transaction_ids

    def get_all_accounts(self) -> List[ClientAccount]:
        """Return all accounts ordered by client id (for final output)."""
        return [self._accounts[client_id] for client_id in sorted(self._accounts)]
