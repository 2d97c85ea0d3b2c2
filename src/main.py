import csv
import sys
import logging
from typing import Iterable, TextIO

from models import AccountSnapshot
from payments_engine import PaymentsEngine

OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


def write_accounts(accounts: Iterable[AccountSnapshot], stream: TextIO) -> None:
    """Write account snapshots as CSV, amounts with exactly 4 decimal places."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for account in accounts:
        writer.writerow(account.as_row())


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(sys.argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[1]
    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        print(f"Cannot read {filepath}: {e}", file=sys.stderr)
        sys.exit(1)

    write_accounts(accounts, sys.stdout)


if __name__ == "__main__":
    main()
