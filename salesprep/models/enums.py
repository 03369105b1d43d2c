"""Enumerations for salesprep."""

from enum import StrEnum


class RecordStatus(StrEnum):
    PENDING = "PENDING"
    KEPT = "KEPT"
    DUPLICATE = "DUPLICATE"


class DateShape(StrEnum):
    US_SLASH = "MM/DD/YYYY"
    DAY_FIRST_SLASH = "DD/MM/YYYY"
    DAY_FIRST_DASH = "DD-MM-YYYY"
    ISO_SLASH = "YYYY/MM/DD"
    ISO_DASH = "YYYY-MM-DD"
    OTHER = "OTHER"


class AmountFormat(StrEnum):
    USD_SYMBOL = "USD Symbol"
    EUR_SYMBOL = "EUR Symbol"
    GBP_SYMBOL = "GBP Symbol"
    JPY_SYMBOL = "JPY Symbol"
    CONTAINS_COMMA = "Contains Comma"
    PARENTHESES = "Negative (Parentheses)"
    CLEAN_NUMERIC = "Clean Numeric"
    OTHER = "Other Format"


class CheckSeverity(StrEnum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class TransactionSize(StrEnum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    ENTERPRISE = "Enterprise"


class Region(StrEnum):
    NORTH_AMERICA = "North America"
    EUROPE = "Europe"
    ASIA = "Asia"
    OCEANIA = "Oceania"
    OTHER = "Other"


class DayType(StrEnum):
    WEEKDAY = "Weekday"
    WEEKEND = "Weekend"


class CustomerSegment(StrEnum):
    ONE_TIME = "One-time"
    OCCASIONAL = "Occasional"
    REGULAR = "Regular"
    FREQUENT = "Frequent"


class PerformanceCategory(StrEnum):
    ABOVE_AVERAGE = "Above Average"
    BELOW_AVERAGE = "Below Average"
