"""CSV import pipeline.

Each record is normalized and inserted on its own. A bad amount, an
unparseable date, a malformed record or a failed insert costs that one row
and is reported in the result; the rest of the file still goes in. There is
no batch rollback, so rows before a storage fault stay committed.
"""

import csv
import io
import logging
import sqlite3
from collections.abc import Iterator

from spent.dates import normalize_date
from spent.domain.models import CategoryName, ColumnMapping, ImportResult, Money
from spent.domain.transactions import extract_import_row, import_row_number, parse_amount
from spent.errors import SpentError
from spent.store.ledger import LedgerStore

logger = logging.getLogger(__name__)


def read_records(csv_text: str) -> Iterator[list[str] | csv.Error]:
    """Yield CSV records, or the csv.Error for records that fail to parse.

    Blank lines are skipped. The reader picks up at the next line after an
    error, so one malformed record never ends the iteration.
    """
    reader = csv.reader(io.StringIO(csv_text), strict=True)
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield e
            continue

        if record:
            yield record


def import_csv(
    ledger: LedgerStore,
    csv_text: str,
    container_id: int,
    mapping: ColumnMapping,
    has_header: bool,
) -> ImportResult:
    """Import transactions from CSV text into a container.

    Args:
        ledger: Store that receives the rows.
        csv_text: Raw CSV content.
        container_id: Target container.
        mapping: Zero-based column positions.
        has_header: Whether the first record is a header to skip.

    Returns:
        ImportResult with counts and one message per failed row.
    """
    result = ImportResult()
    records = read_records(csv_text)

    if has_header:
        next(records, None)

    for index, record in enumerate(records):
        row_number = import_row_number(index, has_header)

        if isinstance(record, csv.Error):
            result.record_error(f"Row {row_number}: Failed to parse CSV record: {record}")
            continue

        raw = extract_import_row(record, mapping)

        try:
            amount: Money = parse_amount(raw["amount"])
        except ValueError:
            result.record_error(f"Row {row_number}: Invalid amount '{raw['amount']}'")
            continue

        try:
            date = normalize_date(raw["date"])
        except ValueError:
            result.record_error(f"Row {row_number}: Invalid date '{raw['date']}'")
            continue

        try:
            ledger.insert(
                container_id,
                amount,
                raw["description"].strip(),
                CategoryName(raw["category"].strip()),
                date,
            )
        except (SpentError, sqlite3.Error) as e:
            result.record_error(f"Row {row_number}: Failed to insert: {e}")
            continue

        result.success_count += 1

    for message in result.errors:
        logger.warning(message)
    logger.info(
        "Imported %d rows into container %d (%d errors)", result.success_count, container_id, result.error_count
    )
    return result
