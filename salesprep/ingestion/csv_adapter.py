"""CSV adapter for raw sales exports."""

import csv
import logging
from pathlib import Path

from salesprep.exceptions import IngestionError
from salesprep.ingestion.base import REQUIRED_COLUMNS, BaseAdapter
from salesprep.models.records import RawRecord

logger = logging.getLogger(__name__)


class CsvAdapter(BaseAdapter):
    """Reads a headed CSV file whose columns match the raw sales schema.

    Header names are matched case-insensitively; unknown columns are ignored
    and missing optional columns read as None.
    """

    def parse(self, file_path: Path) -> list[RawRecord]:
        if not file_path.exists():
            raise IngestionError(str(file_path), "file not found")

        try:
            with file_path.open(newline="", encoding="utf-8-sig") as handle:
                reader = csv.DictReader(handle)
                if reader.fieldnames is None:
                    raise IngestionError(str(file_path), "file is empty")
                header = {name: name.strip().lower() for name in reader.fieldnames}
                missing = [c for c in REQUIRED_COLUMNS if c not in header.values()]
                if missing:
                    raise IngestionError(
                        str(file_path), f"missing required columns: {', '.join(missing)}"
                    )
                records = [
                    self._to_raw_record(
                        {header[k]: v for k, v in row.items() if k is not None},
                        file_path,
                        line,
                    )
                    for line, row in enumerate(reader, start=2)
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise IngestionError(str(file_path), str(exc)) from exc

        logger.info("Read %d raw records from %s", len(records), file_path)
        return records
