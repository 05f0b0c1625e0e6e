from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    @property
    def amount_or_zero(self) -> Decimal:
        """Amount to apply; a missing amount counts as zero."""
        if self.amount is None:
            return Decimal("0")
        return self.amount

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class AccountSummary:
    """Externally visible state of one client's ledger."""

    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


class ProcessingStats:
    """Counters for the end-of-run report."""

    def __init__(self):
        self.transactions_read = 0
        self.by_type = {transaction_type: 0 for transaction_type in TransactionType}

    def record(self, transaction: Transaction) -> None:
        self.transactions_read += 1
        self.by_type[transaction.transaction_type] += 1

    def report(self, num_clients: int) -> str:
        breakdown = ", ".join(
            f"{transaction_type.value}={count}" for transaction_type, count in self.by_type.items()
        )
        return f"Processed: {self.transactions_read} ({breakdown}), Clients: {num_clients}"
