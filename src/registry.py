from typing import Dict, Iterator, Optional

from models import Transaction, AccountSummary
from ledger import Ledger


class Registry:
    """
    Owns every client ledger and routes transactions to them.
    Ledgers are created on the first transaction that names their client.
    """

    def __init__(self):
        self._ledgers: Dict[int, Ledger] = {}

    def route(self, transaction: Transaction) -> None:
        """Apply a transaction to its client's ledger, creating the ledger if needed."""
        self.get_or_create_ledger(transaction.client_id).apply(transaction)

    def get_or_create_ledger(self, client_id: int) -> Ledger:
        """Get existing ledger or create new one."""
        if client_id not in self._ledgers:
            self._ledgers[client_id] = Ledger(client_id=client_id)
        return self._ledgers[client_id]

    def get(self, client_id: int) -> Optional[Ledger]:
        return self._ledgers.get(client_id)

    def snapshot(self) -> Iterator[AccountSummary]:
        """Lazily yield the visible state of every ledger (for final output)."""
        for ledger in self._ledgers.values():
            yield ledger.summary()

    def __len__(self) -> int:
        return len(self._ledgers)

    def __contains__(self, client_id: int) -> bool:
        return client_id in self._ledgers
