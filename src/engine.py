import logging
from typing import Iterable, List, Optional

from models import Transaction, AccountSummary, ProcessingStats
from registry import Registry
from csv_io import read_transactions

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Streams transactions, in input order, through a Registry of client ledgers.
    The registry is owned by the caller when one is passed in.
    """

    def __init__(self, registry: Optional[Registry] = None):
        self._registry = registry if registry is not None else Registry()
        self._stats = ProcessingStats()

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> List[AccountSummary]:
        """
        Process CSV file and return final account states.

        Raises FileNotFoundError or TransactionParseError; transactions read
        before a malformed row have already been applied.
        """
        logger.info(f"Processing transactions from {filepath}")
        return self.process_transactions(read_transactions(filepath))

    def process_transactions(self, transactions: Iterable[Transaction]) -> List[AccountSummary]:
        for transaction in transactions:
            self._stats.record(transaction)
            self._registry.route(transaction)

        logger.info(self._stats.report(len(self._registry)))
        return list(self._registry.snapshot())
