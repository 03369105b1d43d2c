"""Custom exceptions for salesprep."""


class SalesPrepError(Exception):
    """Base exception for cleaning and reconciliation errors."""


class FieldParseError(SalesPrepError):
    """Raised when a single raw field cannot be normalized.

    Field errors are recoverable: the record normalizer catches them and
    marks the field as unparsed instead of dropping the record.
    """

    field_name = "field"

    def __init__(self, raw: str | None, message: str):
        self.raw = raw
        self.field = self.field_name
        super().__init__(f"Cannot parse {self.field} {raw!r}: {message}")


class AmountParseError(FieldParseError):
    """Raised when a cleaned amount string is not a valid decimal."""

    field_name = "amount"


class DateFormatError(FieldParseError):
    """Raised when a date string matches none of the supported shapes."""

    field_name = "order_date"


class QuantityParseError(FieldParseError):
    """Raised when a quantity is present but not an integer."""

    field_name = "quantity"


class EmailShapeViolation(FieldParseError):
    """Raised when a repaired email still fails the local@domain.tld shape."""

    field_name = "customer_email"


class ConfigError(SalesPrepError):
    """Raised when a required lookup table or config file cannot be loaded."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Config error from {source}: {message}")


class IngestionError(SalesPrepError):
    """Raised when a raw input file cannot be read."""

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(f"Ingestion error for {file_path}: {message}")
