import sys
import logging

from engine import PaymentsEngine
from csv_io import TransactionParseError, write_accounts

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)

OUTPUT_PATH = "accounts.csv"


def main():
    if len(sys.argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[1]
    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        logger.error(f"Cannot read {filepath}: {e.strerror or e}")
        sys.exit(1)
    except TransactionParseError as e:
        logger.error(f"Malformed transaction in {filepath}, {e}")
        sys.exit(1)

    write_accounts(accounts, OUTPUT_PATH)

    # Final processing report to stderr
    print(engine.stats.report(len(engine.registry)), file=sys.stderr)


if __name__ == "__main__":
    main()
