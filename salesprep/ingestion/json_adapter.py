"""JSON adapter: a list of raw record objects."""

import json
from pathlib import Path

from salesprep.exceptions import IngestionError
from salesprep.ingestion.base import BaseAdapter
from salesprep.models.records import RawRecord


class JsonAdapter(BaseAdapter):
    """Imports a JSON array of objects keyed by raw column name."""

    def parse(self, file_path: Path) -> list[RawRecord]:
        if not file_path.exists():
            raise IngestionError(str(file_path), "file not found")
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise IngestionError(str(file_path), f"cannot read JSON: {exc}") from exc

        if isinstance(raw, dict):
            raw = [raw]
        if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
            raise IngestionError(str(file_path), "expected a JSON object or a list of objects")

        return [
            self._to_raw_record(item, file_path, index)
            for index, item in enumerate(raw, start=1)
        ]
