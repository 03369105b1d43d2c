"""Ingestion adapters for reading raw sales records."""

from pathlib import Path

from salesprep.exceptions import IngestionError
from salesprep.ingestion.base import BaseAdapter
from salesprep.ingestion.csv_adapter import CsvAdapter
from salesprep.ingestion.json_adapter import JsonAdapter

_ADAPTERS: dict[str, type[BaseAdapter]] = {
    ".csv": CsvAdapter,
    ".json": JsonAdapter,
}


def get_adapter(file_path: Path) -> BaseAdapter:
    """Pick an adapter by file extension."""
    adapter_cls = _ADAPTERS.get(file_path.suffix.lower())
    if adapter_cls is None:
        supported = ", ".join(sorted(_ADAPTERS))
        raise IngestionError(str(file_path), f"unsupported file type (expected {supported})")
    return adapter_cls()


__all__ = ["BaseAdapter", "CsvAdapter", "JsonAdapter", "get_adapter"]
