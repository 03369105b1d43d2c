"""Raw, normalized and canonical transaction record models."""

from collections.abc import Iterator
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from salesprep.models.enums import RecordStatus

RAW_COLUMNS = (
    "transaction_id",
    "customer_id",
    "customer_email",
    "product_sku",
    "quantity",
    "amount",
    "currency",
    "order_date",
    "ship_country",
    "payment_method",
    "category",
)


class RawRecord(BaseModel):
    """One untyped input row, exactly as read from the source."""

    model_config = ConfigDict(frozen=True)

    transaction_id: str
    customer_id: str
    customer_email: str | None = None
    product_sku: str = ""
    quantity: str | None = None
    amount: str | None = None
    currency: str | None = None
    order_date: str | None = None
    ship_country: str | None = None
    payment_method: str | None = None
    category: str | None = None


class NormalizedRecord(BaseModel):
    """A raw record after field normalization.

    Typed fields that failed to parse are left as None and their raw text is
    kept in ``unparsed`` keyed by field name.
    """

    model_config = ConfigDict(frozen=True)

    source_row: int = Field(ge=1)
    transaction_id: str
    customer_id: str
    customer_email: str
    product_sku: str
    quantity: int | None
    amount_usd: Decimal | None
    currency_detected: str | None
    order_date: date | None
    ship_country: str | None
    payment_method: str | None = None
    category: str
    email_was_inferred: bool = False
    email_was_repaired: bool = False
    amount_was_converted: bool = False
    quantity_was_adjusted: bool = False
    date_was_ambiguous: bool = False
    unparsed: dict[str, str | None] = Field(default_factory=dict)
    status: RecordStatus = RecordStatus.PENDING

    @property
    def email_completeness_rank(self) -> int:
        """0 when the email arrived well-formed, 1 when it was inferred or repaired."""
        if self.email_was_inferred or self.email_was_repaired:
            return 1
        return 0

    @property
    def is_fully_parsed(self) -> bool:
        return not self.unparsed

    @property
    def unparsed_fields(self) -> str:
        """The ``unparsed`` map as ``field=raw`` pairs, e.g. ``amount=12 EUR; quantity=two``."""
        pairs = sorted(self.unparsed.items())
        return "; ".join(f"{field}={raw or ''}" for field, raw in pairs)


class DuplicateEntry(BaseModel):
    """A discarded duplicate and the survivor that superseded it."""

    transaction_id: str
    duplicate_row: int
    survivor_row: int
    reason: str


class AuditTrail(BaseModel):
    entries: list[DuplicateEntry] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DuplicateEntry]:  # type: ignore[override]
        return iter(self.entries)


class CanonicalDataset(BaseModel):
    """The kept records of a batch, one per transaction_id."""

    records: list[NormalizedRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[NormalizedRecord]:  # type: ignore[override]
        return iter(self.records)

    @property
    def transaction_ids(self) -> list[str]:
        return [r.transaction_id for r in self.records]

    def get(self, transaction_id: str) -> NormalizedRecord | None:
        for record in self.records:
            if record.transaction_id == transaction_id:
                return record
        return None
