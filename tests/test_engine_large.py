import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from amount import Amount
from payments_engine import PaymentsEngine


def run(csv_file):
    engine = PaymentsEngine()
    return engine, {account.client_id: account for account in engine.process_file(str(csv_file))}


class TestPaymentsEngineLargeScale:
    def test_1000_accounts_6000_transactions(self, tmp_path):
        """Test with 1000 accounts and 6000 transactions."""
        num_clients = 1000
        rows = ["type, client, tx, amount"]
        tx_id = 1

        # Each client gets: 3 deposits (100, 200, 300) and 2 withdrawals (50, 100)
        for client_id in range(1, num_clients + 1):
            rows.append(f"deposit, {client_id}, {tx_id}, 100")
            tx_id += 1
            rows.append(f"deposit, {client_id}, {tx_id}, 200")
            tx_id += 1
            rows.append(f"deposit, {client_id}, {tx_id}, 300")
            tx_id += 1
            rows.append(f"withdrawal, {client_id}, {tx_id}, 50")
            tx_id += 1
            rows.append(f"withdrawal, {client_id}, {tx_id}, 100")
            tx_id += 1

        # Extra deposit for each client
        for client_id in range(1, num_clients + 1):
            rows.append(f"deposit, {client_id}, {tx_id}, 50")
            tx_id += 1

        expected_balance = Amount.parse("500")  # 450 + 50

        csv_file = tmp_path / "large_test.csv"
        csv_file.write_text('\n'.join(rows))

        engine, accounts = run(csv_file)

        assert len(accounts) == num_clients
        assert list(accounts) == sorted(accounts)
        assert engine.ledger.stats.applied == 6 * num_clients
        assert engine.ledger.stats.rejected == 0

        for client_id in range(1, num_clients + 1):
            assert accounts[client_id].available == expected_balance, \
                f"Client {client_id}: expected {expected_balance}, got {accounts[client_id].available}"
            assert accounts[client_id].held == Amount(0)
            assert accounts[client_id].locked is False

    def test_with_disputes_resolves_chargebacks(self, tmp_path):
        """Test with disputes, resolves, and chargebacks across 50 accounts."""
        rows = ["type, client, tx, amount"]

        # Client 1-10: Normal deposits only
        for client_id in range(1, 11):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 100")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 150")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 3}, 250")

        # Client 11-20: Deposit -> Dispute -> Resolve
        for client_id in range(11, 21):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 100")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 150")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 3}, 250")
        for client_id in range(11, 21):
            rows.append(f"dispute, {client_id}, {client_id * 100 + 1},")
        for client_id in range(11, 21):
            rows.append(f"resolve, {client_id}, {client_id * 100 + 1},")

        # Client 21-30: Deposit -> Dispute -> Chargeback, then a rejected deposit
        for client_id in range(21, 31):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 100")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 150")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 3}, 250")
        for client_id in range(21, 31):
            rows.append(f"dispute, {client_id}, {client_id * 100 + 1},")
        for client_id in range(21, 31):
            rows.append(f"chargeback, {client_id}, {client_id * 100 + 1},")
        for client_id in range(21, 31):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 4}, 1000")

        # Client 31-40: Deposit -> Withdrawal -> Dispute (on deposit)
        for client_id in range(31, 41):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 150")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 250")
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 3}, 100")
        for client_id in range(31, 41):
            rows.append(f"dispute, {client_id}, {client_id * 100 + 1},")

        # Client 41-50: Multiple deposits, dispute middle one, resolve
        for client_id in range(41, 51):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 100")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 200")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 3}, 300")
        for client_id in range(41, 51):
            rows.append(f"dispute, {client_id}, {client_id * 100 + 2},")
        for client_id in range(41, 51):
            rows.append(f"resolve, {client_id}, {client_id * 100 + 2},")

        csv_file = tmp_path / "disputes_test.csv"
        csv_file.write_text('\n'.join(rows))

        engine, accounts = run(csv_file)

        for client_id in range(1, 11):
            assert accounts[client_id].available == Amount.parse("500"), f"Client {client_id}"
            assert accounts[client_id].held == Amount(0)
            assert accounts[client_id].locked is False

        for client_id in range(11, 21):
            assert accounts[client_id].available == Amount.parse("500"), f"Client {client_id}"
            assert accounts[client_id].held == Amount(0)
            assert accounts[client_id].locked is False

        for client_id in range(21, 31):
            assert accounts[client_id].available == Amount.parse("400"), f"Client {client_id}"
            assert accounts[client_id].held == Amount(0)
            assert accounts[client_id].total == Amount.parse("400")
            assert accounts[client_id].locked is True

        for client_id in range(31, 41):
            assert accounts[client_id].available == Amount.parse("150"), f"Client {client_id}"
            assert accounts[client_id].held == Amount.parse("150")
            assert accounts[client_id].total == Amount.parse("300")
            assert accounts[client_id].locked is False

        for client_id in range(41, 51):
            assert accounts[client_id].available == Amount.parse("600"), f"Client {client_id}"
            assert accounts[client_id].held == Amount(0)
            assert accounts[client_id].locked is False

        assert engine.ledger.stats.rejections["LockedAccount"] == 10

    def test_interleaved_clients_with_overdrawn_disputes(self, tmp_path):
        """Disputes after spending push available negative; half the clients are charged back."""
        num_clients = 300
        rows = ["type, client, tx, amount"]

        def tx(phase, client_id):
            return phase * 1000 + client_id

        phases = [
            ("deposit", "100.0001"),
            ("withdrawal", "80"),
            ("dispute", ""),
        ]
        for phase, (kind, amount) in enumerate(phases):
            for client_id in range(1, num_clients + 1):
                target = tx(0, client_id) if kind == "dispute" else tx(phase, client_id)
                rows.append(f"{kind}, {client_id}, {target}, {amount}")

        for client_id in range(2, num_clients + 1, 2):
            rows.append(f"chargeback, {client_id}, {tx(0, client_id)},")
        for client_id in range(1, num_clients + 1):
            rows.append(f"deposit, {client_id}, {tx(5, client_id)}, 10")
        for client_id in range(1, num_clients + 1, 2):
            rows.append(f"resolve, {client_id}, {tx(0, client_id)},")

        csv_file = tmp_path / "interleaved.csv"
        csv_file.write_text('\n'.join(rows))

        engine, accounts = run(csv_file)

        assert len(accounts) == num_clients
        for client_id, account in accounts.items():
            assert account.total == account.available + account.held
            if client_id % 2 == 0:
                assert account.as_row() == [str(client_id), "-80.0000", "0.0000", "-80.0000", "true"]
            else:
                assert account.as_row() == [str(client_id), "30.0001", "0.0000", "30.0001", "false"]

        assert engine.ledger.stats.rejections == {"LockedAccount": num_clients // 2}
        assert engine.ledger.stats.malformed == 0
