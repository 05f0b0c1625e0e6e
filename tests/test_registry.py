import sys
import os
import types
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import Transaction, TransactionType, AccountSummary
from registry import Registry


class TestRegistry:
    def setup_method(self):
        self.registry = Registry()

    def test_empty(self):
        assert len(self.registry) == 0
        assert list(self.registry.snapshot()) == []
        assert self.registry.get(1) is None

    def test_route_creates_ledger(self):
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=7, transaction_id=1, amount=Decimal("2")))

        assert 7 in self.registry
        assert len(self.registry) == 1
        assert self.registry.get(7).available == Decimal("2")

    def test_rejected_transaction_still_creates_ledger(self):
        self.registry.route(Transaction(TransactionType.CHARGEBACK, client_id=3, transaction_id=1))

        assert 3 in self.registry
        assert self.registry.get(3).summary() == AccountSummary(
            client_id=3, available=Decimal("0"), held=Decimal("0"), total=Decimal("0"), locked=False,
        )

    def test_routes_by_client(self):
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("1.0")))
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=2, transaction_id=2, amount=Decimal("2.0")))
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=3, amount=Decimal("2.0")))
        self.registry.route(Transaction(TransactionType.WITHDRAWAL, client_id=1, transaction_id=4, amount=Decimal("1.5")))
        self.registry.route(Transaction(TransactionType.WITHDRAWAL, client_id=2, transaction_id=5, amount=Decimal("3.0")))

        assert self.registry.get(1).available == Decimal("1.5")
        assert self.registry.get(2).available == Decimal("2.0")

    def test_dispute_is_scoped_to_client(self):
        """Client cannot dispute another client's transaction."""
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("100")))
        self.registry.route(Transaction(TransactionType.DISPUTE, client_id=2, transaction_id=1))

        assert self.registry.get(1).available == Decimal("100")
        assert self.registry.get(1).held == Decimal("0")
        assert self.registry.get(2).held == Decimal("0")

    def test_locked_client_does_not_affect_others(self):
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("5")))
        self.registry.route(Transaction(TransactionType.DISPUTE, client_id=1, transaction_id=1))
        self.registry.route(Transaction(TransactionType.CHARGEBACK, client_id=1, transaction_id=1))
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=2, transaction_id=2, amount=Decimal("5")))

        assert self.registry.get(1).locked is True
        assert self.registry.get(2).locked is False
        assert self.registry.get(2).available == Decimal("5")

    def test_snapshot_is_lazy(self):
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("1")))
        assert isinstance(self.registry.snapshot(), types.GeneratorType)

    def test_snapshot_contents(self):
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=2, transaction_id=1, amount=Decimal("3")))
        self.registry.route(Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=2, amount=Decimal("4")))
        self.registry.route(Transaction(TransactionType.DISPUTE, client_id=1, transaction_id=2))

        summaries = {summary.client_id: summary for summary in self.registry.snapshot()}

        assert summaries == {
            1: AccountSummary(client_id=1, available=Decimal("0"), held=Decimal("4"), total=Decimal("4"), locked=False),
            2: AccountSummary(client_id=2, available=Decimal("3"), held=Decimal("0"), total=Decimal("3"), locked=False),
        }
