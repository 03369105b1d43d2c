"""Field normalizers and the record normalizer that applies them."""

from salesprep.normalization.amount import AmountResult, detect_currency, normalize_amount
from salesprep.normalization.category import normalize_category
from salesprep.normalization.country import normalize_country
from salesprep.normalization.dates import (
    DateResult,
    classify_date,
    is_ambiguous_slash_date,
    normalize_date,
    resolve_slash_date,
)
from salesprep.normalization.email import EmailRepair, is_valid_email, repair_email
from salesprep.normalization.quantity import (
    QuantityResult,
    clamp_quantity,
    reset_out_of_range_quantity,
)
from salesprep.normalization.record import RecordNormalizer

__all__ = [
    "AmountResult",
    "DateResult",
    "EmailRepair",
    "QuantityResult",
    "RecordNormalizer",
    "clamp_quantity",
    "classify_date",
    "detect_currency",
    "is_ambiguous_slash_date",
    "is_valid_email",
    "normalize_amount",
    "normalize_category",
    "normalize_country",
    "normalize_date",
    "repair_email",
    "reset_out_of_range_quantity",
    "resolve_slash_date",
]
