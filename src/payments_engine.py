import csv
import logging
from typing import Dict, Iterable, List, Optional

from amount import Amount
from errors import MalformedRecord
from ledger import Ledger
from models import AccountSnapshot, Transaction, TransactionType, MAX_CLIENT_ID, MAX_TRANSACTION_ID

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Reads transaction records from CSV and feeds them, in file order, to a Ledger.
    Malformed rows are logged and skipped.
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        self._ledger = ledger if ledger is not None else Ledger()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def process_file(self, filepath: str) -> List[AccountSnapshot]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")
        with open(filepath, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
            return self.process_rows(f)

    def process_rows(self, lines: Iterable[str]) -> List[AccountSnapshot]:
        """Process CSV text lines (header first) and return final account states."""
        reader = csv.DictReader(lines)
        for row in reader:
            try:
                transaction = self._parse_csv_row(row)
            except MalformedRecord as e:
                self._ledger.stats.record_malformed()
                logger.warning(f"Failed to parse row {row}: {e}")
                continue
            self._ledger.apply(transaction)

        stats = self._ledger.stats
        logger.info(f"Applied: {stats.applied}, Rejected: {stats.rejected}, Malformed: {stats.malformed}")
        return self._ledger.accounts()

    def _parse_csv_row(self, row: Dict[Optional[str], Optional[str]]) -> Transaction:
        """Parse CSV row into Transaction."""
        if None in row:
            raise MalformedRecord(f"too many fields: {row[None]}")
        try:
            normalized = {k.strip(): (v or "").strip() for k, v in row.items()}

            transaction_type = TransactionType(normalized["type"].lower())
            client_id = self._parse_id(normalized["client"], MAX_CLIENT_ID)
            transaction_id = self._parse_id(normalized["tx"], MAX_TRANSACTION_ID)

            amount = None
            amount_str = normalized.get("amount", "")
            if amount_str:
                amount = Amount.parse(amount_str)
        except (KeyError, ValueError) as e:
            raise MalformedRecord(str(e)) from e

        return Transaction(
            transaction_type=transaction_type,
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )

    @staticmethod
    def _parse_id(text: str, maximum: int) -> int:
        if not (text.isascii() and text.isdigit()):
            raise ValueError(f"invalid id {text!r}")
        value = int(text)
        if value > maximum:
            raise ValueError(f"id {value} exceeds {maximum}")
        return value
