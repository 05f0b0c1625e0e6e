import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, Optional

from models import Transaction, TransactionType, AccountSummary

logger = logging.getLogger(__name__)

OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


class TransactionParseError(ValueError):
    """A CSV row could not be turned into a Transaction."""

    def __init__(self, line_number: int, row: Dict[str, Optional[str]], reason: str):
        self.line_number = line_number
        self.row = row
        self.reason = reason
        super().__init__(f"line {line_number}: {reason} in row {row}")


def read_transactions(filepath: str) -> Iterator[Transaction]:
    """
    Lazily read transactions from a CSV file with a
    `type, client, tx, amount` header.

    Raises:
        OSError: the input file cannot be opened.
        TransactionParseError: a row is malformed or the file is not valid
            UTF-8 CSV. Nothing after it is read.
    """
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f, skipinitialspace=True, strict=True)
        try:
            for row in reader:
                yield parse_row(row, reader.line_num)
        except (UnicodeDecodeError, csv.Error) as e:
            raise TransactionParseError(reader.line_num, {}, str(e)) from e


def parse_row(row: Dict[Optional[str], Optional[str]], line_number: int = 0) -> Transaction:
    """Parse CSV row into Transaction."""
    # DictReader puts surplus fields under None and fills short rows with None.
    normalized = {
        key.strip(): (value or "").strip()
        for key, value in row.items()
        if isinstance(key, str)
    }

    try:
        transaction_type = TransactionType(normalized["type"].lower())
        client_id = _parse_id(normalized["client"], MAX_CLIENT_ID)
        transaction_id = _parse_id(normalized["tx"], MAX_TRANSACTION_ID)

        amount = None
        amount_str = normalized.get("amount", "")
        if amount_str:
            if not amount_str.isascii() or "_" in amount_str:
                raise ValueError(f"invalid amount {amount_str!r}")
            amount = Decimal(amount_str)
            if not amount.is_finite():
                raise ValueError(f"amount must be finite, got {amount_str!r}")
    except KeyError as e:
        raise TransactionParseError(line_number, row, f"missing column {e}") from e
    except (ValueError, InvalidOperation) as e:
        raise TransactionParseError(line_number, row, str(e) or "invalid amount") from e

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(value: str, max_value: int) -> int:
    # int() alone would take "1_0", "+1" and non-ASCII digits.
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"identifier must be an unsigned integer, got {value!r}")
    parsed = int(value)
    if parsed > max_value:
        raise ValueError(f"identifier {parsed} out of range (max {max_value})")
    return parsed


def format_amount(value: Decimal) -> str:
    """Format a balance without exponent and without trailing zeros."""
    normalized = value.normalize()
    return f"{normalized:f}"


def write_accounts(summaries: Iterable[AccountSummary], filepath: str) -> int:
    """Write account summaries as CSV. Returns the number of rows written."""
    count = 0
    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(OUTPUT_HEADER)
        for summary in summaries:
            writer.writerow([
                summary.client_id,
                format_amount(summary.available),
                format_amount(summary.held),
                format_amount(summary.total),
                str(summary.locked).lower(),
            ])
            count += 1

    logger.info(f"Wrote {count} accounts to {filepath}")
    return count
