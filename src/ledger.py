import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional

from models import Transaction, TransactionType, AccountSummary

logger = logging.getLogger(__name__)


@dataclass
class Ledger:
    """
    Balances and dispute bookkeeping for a single client.

    Invalid transactions are dropped without raising; the only trace of a
    drop is a debug log line. `total` is stored rather than derived because
    a chargeback takes the amount out of `held` and `available` but leaves
    `total` as it was.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    locked: bool = False
    _posted: Dict[int, Transaction] = field(default_factory=dict, repr=False)
    _open_disputes: Dict[int, Transaction] = field(default_factory=dict, repr=False)
    _resolved_disputes: Dict[int, Transaction] = field(default_factory=dict, repr=False)

    def apply(self, transaction: Transaction) -> None:
        """Apply one transaction to this ledger, or ignore it if it is invalid."""
        if self.locked:
            logger.debug(f"Client {self.client_id} is locked, ignoring {transaction}")
            return

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(transaction)

    def summary(self) -> AccountSummary:
        return AccountSummary(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )

    def get_posted(self, transaction_id: int) -> Optional[Transaction]:
        """Stored deposit/withdrawal for a transaction id, or None."""
        return self._posted.get(transaction_id)

    def is_disputed(self, transaction_id: int) -> bool:
        return transaction_id in self._open_disputes

    def is_resolved(self, transaction_id: int) -> bool:
        return transaction_id in self._resolved_disputes

    def _handle_deposit(self, transaction: Transaction) -> None:
        amount = transaction.amount_or_zero
        self.available += amount
        self.total += amount
        # Last write wins for dispute lookups on a reused id.
        self._posted[transaction.transaction_id] = transaction

    def _handle_withdrawal(self, transaction: Transaction) -> None:
        amount = transaction.amount_or_zero
        if amount > self.available:
            logger.debug(f"Withdrawal tx {transaction.transaction_id}: insufficient funds (available {self.available}, requested {amount})")
            return

        self.available -= amount
        self.total -= amount
        self._posted[transaction.transaction_id] = transaction

    def _handle_dispute(self, transaction: Transaction) -> None:
        original = self._posted.get(transaction.transaction_id)
        if original is None:
            logger.debug(f"Dispute for tx {transaction.transaction_id}: no such transaction for client {self.client_id}")
            return

        # No guard against a repeated dispute: each one shifts the amount again.
        amount = original.amount_or_zero
        self.available -= amount
        self.held += amount
        self._open_disputes[transaction.transaction_id] = transaction

    def _handle_resolve(self, transaction: Transaction) -> None:
        if transaction.transaction_id not in self._open_disputes:
            logger.debug(f"Resolve for tx {transaction.transaction_id}: transaction not disputed")
            return

        original = self._posted.get(transaction.transaction_id)
        if original is None:
            return

        # The id stays in _open_disputes, so a second resolve releases again.
        amount = original.amount_or_zero
        self.held -= amount
        self.available += amount
        self._resolved_disputes[transaction.transaction_id] = transaction

    def _handle_chargeback(self, transaction: Transaction) -> None:
        if transaction.transaction_id not in self._open_disputes:
            logger.debug(f"Chargeback for tx {transaction.transaction_id}: transaction not disputed")
            return

        if transaction.transaction_id in self._resolved_disputes:
            logger.debug(f"Chargeback for tx {transaction.transaction_id}: dispute already resolved")
            return

        original = self._posted.get(transaction.transaction_id)
        if original is None:
            return

        amount = original.amount_or_zero
        self.locked = True
        self.held -= amount
        self.available -= amount
