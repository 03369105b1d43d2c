"""Category standardization."""

from collections.abc import Mapping

from salesprep.config import UNCATEGORIZED


def normalize_category(raw: str | None, aliases: Mapping[str, str]) -> str:
    """Fill missing categories and fold known aliases (keys are upper-case)."""
    if raw is None or not raw.strip():
        return UNCATEGORIZED
    alias = aliases.get(raw.strip().upper())
    if alias is not None:
        return alias
    return raw
