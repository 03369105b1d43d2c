"""Engine configuration: lookup tables, validation windows and ceilings.

The exchange-rate, country-synonym and category-alias tables are injected
into the normalizers through :class:`EngineConfig` rather than read from
module constants, so a run can swap or extend them from a JSON file.
"""

import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from salesprep.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Approximate rates as of March 2024: 1 unit of currency = N USD.
DEFAULT_EXCHANGE_RATES: dict[str, Decimal] = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("1.08"),
    "GBP": Decimal("1.26"),
    "JPY": Decimal("0.0067"),
    "CAD": Decimal("0.74"),
}

CANONICAL_COUNTRIES = (
    "United States",
    "United Kingdom",
    "Canada",
    "Germany",
    "France",
    "Spain",
    "Italy",
    "Netherlands",
    "Belgium",
    "Australia",
    "Japan",
    "South Korea",
    "India",
    "Mexico",
)

_COUNTRY_SPELLINGS: dict[str, tuple[str, ...]] = {
    "United States": (
        "USA", "US", "U.S.", "U.S.A.", "UNITED STATES", "UNITED STATES OF AMERICA", "AMERICA",
    ),
    "United Kingdom": ("UK", "ENGLAND", "SCOTLAND", "UNITED KINGDOM"),
    "Canada": ("CA", "CANADA"),
    "Germany": ("DE", "DEUTSCHLAND", "GERMANY"),
    "France": ("FR", "FRANCE"),
    "Spain": ("ES", "ESPANA", "SPAIN"),
    "Italy": ("IT", "ITALY"),
    "Netherlands": ("NL", "NETHERLANDS"),
    "Belgium": ("BE", "BELGIQUE", "BELGIUM"),
    "Australia": ("AU", "AUS", "AUSTRALIA"),
    "Japan": ("JP", "JAPAN"),
    "South Korea": ("KR", "SOUTH KOREA"),
    "India": ("IN", "INDIA"),
    "Mexico": ("MX", "MÉXICO", "MEXICO"),
}

DEFAULT_COUNTRY_SYNONYMS: dict[str, str] = {
    spelling: canonical
    for canonical, spellings in _COUNTRY_SPELLINGS.items()
    for spelling in spellings
}

DEFAULT_CATEGORY_ALIASES: dict[str, str] = {
    "HOME": "Home & Garden",
    "TOYS & GAMES": "Toys",
}

UNCATEGORIZED = "Uncategorized"


class EngineConfig(BaseModel):
    """Everything the normalization engine needs besides the records themselves."""

    exchange_rates: dict[str, Decimal] = Field(
        default_factory=lambda: dict(DEFAULT_EXCHANGE_RATES)
    )
    country_synonyms: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_COUNTRY_SYNONYMS)
    )
    category_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_ALIASES)
    )
    date_window_start: date = date(2024, 1, 1)
    date_window_end: date = date(2024, 12, 31)
    quantity_ceiling: int = Field(default=100, ge=1)
    amount_ceiling: Decimal = Field(default=Decimal("100000"), gt=0)
    country_ceiling: int = Field(default=20, ge=1)
    outlier_stddevs: Decimal = Field(default=Decimal("3"), gt=0)

    @field_validator("exchange_rates")
    @classmethod
    def _check_rates(cls, rates: dict[str, Decimal]) -> dict[str, Decimal]:
        if not rates:
            raise ValueError("exchange rate table is empty")
        normalized: dict[str, Decimal] = {}
        for code, rate in rates.items():
            if rate <= 0:
                raise ValueError(f"exchange rate for {code} must be positive, got {rate}")
            normalized[code.strip().upper()] = rate
        return normalized

    @field_validator("country_synonyms", "category_aliases")
    @classmethod
    def _check_lookup(cls, table: dict[str, str]) -> dict[str, str]:
        if not table:
            raise ValueError("lookup table is empty")
        normalized: dict[str, str] = {}
        for key, value in table.items():
            if not value or not value.strip():
                raise ValueError(f"lookup entry {key!r} maps to an empty value")
            normalized[key.strip().upper()] = value.strip()
        return normalized

    @model_validator(mode="after")
    def _check_window(self) -> "EngineConfig":
        if self.date_window_start > self.date_window_end:
            raise ValueError(
                f"date window start {self.date_window_start} is after end {self.date_window_end}"
            )
        return self


def load_config(path: Path | None = None) -> EngineConfig:
    """Load an EngineConfig from a JSON file, merging it over the defaults.

    Any failure is fatal and surfaces as ConfigError so a run aborts before
    a single record is processed.
    """
    if path is None:
        return EngineConfig()

    source = str(path)
    if not path.exists():
        raise ConfigError(source, "file not found")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(source, f"cannot read JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(source, "top-level JSON value must be an object")

    try:
        config = EngineConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(source, str(exc)) from exc

    logger.info(
        "Loaded config from %s: %d exchange rates, %d country synonyms",
        source, len(config.exchange_rates), len(config.country_synonyms),
    )
    return config
