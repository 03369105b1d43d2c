"""Base adapter interface for raw record ingestion."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from salesprep.exceptions import IngestionError
from salesprep.models.records import RAW_COLUMNS, RawRecord

REQUIRED_COLUMNS = ("transaction_id", "customer_id")


def _cell(value: Any) -> str | None:
    """Raw cells stay strings; blanks become None."""
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


class BaseAdapter(ABC):
    """Abstract base class for all ingestion adapters."""

    @abstractmethod
    def parse(self, file_path: Path) -> list[RawRecord]:
        """Parse a file and return its rows as RawRecords."""
        ...

    def validate(self, records: list[RawRecord]) -> list[str]:
        """Return messages for rows that cannot take part in reconciliation."""
        errors: list[str] = []
        for row, record in enumerate(records, start=1):
            if not record.transaction_id.strip():
                errors.append(f"Row {row}: missing transaction_id")
            if not record.customer_id.strip():
                errors.append(f"Row {row}: missing customer_id")
        return errors

    @staticmethod
    def _to_raw_record(row: Mapping[str, Any], source: Path, line: int) -> RawRecord:
        values = {column: _cell(row.get(column)) for column in RAW_COLUMNS}
        for column in REQUIRED_COLUMNS:
            if values[column] is None:
                values[column] = ""
        values["product_sku"] = values["product_sku"] or ""
        try:
            return RawRecord(**values)
        except ValidationError as exc:
            raise IngestionError(str(source), f"row {line}: {exc}") from exc
