"""CSV export of record and aggregate tables."""

import csv
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel

from salesprep.models.records import NormalizedRecord

CLEANED_COLUMNS = (
    "transaction_id",
    "customer_id",
    "customer_email",
    "product_sku",
    "quantity",
    "amount_usd",
    "currency_detected",
    "order_date",
    "ship_country",
    "payment_method",
    "category",
    "email_was_inferred",
    "quantity_was_adjusted",
    "unparsed_fields",
)


def _format(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Y" if value else "N"
    return str(value)


def write_csv(rows: Sequence[BaseModel], path: Path, columns: Sequence[str] | None = None) -> int:
    """Write pydantic rows to ``path``. Returns the number of rows written.

    Booleans are written as Y/N, None as an empty cell. Without ``columns``
    the model's own field order is used.
    """
    if columns is None:
        columns = list(type(rows[0]).model_fields) if rows else []
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(columns)
        for row in rows:
            writer.writerow([_format(getattr(row, column)) for column in columns])
    return len(rows)


def write_cleaned_records(records: Sequence[NormalizedRecord], path: Path) -> int:
    return write_csv(records, path, CLEANED_COLUMNS)
