"""Country name standardization against a synonym table."""

from collections.abc import Mapping


def normalize_country(raw: str | None, synonyms: Mapping[str, str]) -> str | None:
    """Map a raw country spelling to its canonical name.

    Keys of ``synonyms`` are upper-case spellings. Values not in the table are
    title-cased and kept; they are an open bucket, not an error.
    """
    if raw is None or not raw.strip():
        return None
    key = raw.strip().upper()
    canonical = synonyms.get(key)
    if canonical is not None:
        return canonical
    return raw.strip().title()
