"""Email repair: synthesize missing addresses and complete truncated domains."""

import logging
import re
from typing import NamedTuple

from salesprep.exceptions import EmailShapeViolation

logger = logging.getLogger(__name__)

VALID_EMAIL_RE = re.compile(r"^[^@]+@[^@]+\.[^@]+$")
MIN_EMAIL_LENGTH = 5

INFERRED_DOMAIN = "inferred.com"
PLACEHOLDER_DOMAIN = "domain.com"
KNOWN_PROVIDERS = ("gmail", "yahoo", "hotmail", "outlook")

_NULL_MARKERS = {"", "NULL"}
_UNSAFE_ID_CHARS_RE = re.compile(r"[@\s]+")


class EmailRepair(NamedTuple):
    email: str
    was_inferred: bool
    was_repaired: bool


def is_valid_email(email: str | None) -> bool:
    """True for strings shaped like local@domain.tld of at least 5 characters."""
    if email is None:
        return False
    return len(email) >= MIN_EMAIL_LENGTH and VALID_EMAIL_RE.match(email) is not None


def inferred_email(customer_id: str) -> str:
    """Synthesize an address from a customer id.

    Runs of ``@`` and whitespace in the id become ``_`` so the result always has
    exactly one ``@``.
    """
    safe_id = _UNSAFE_ID_CHARS_RE.sub("_", customer_id.strip())
    return f"customer_{safe_id}@{INFERRED_DOMAIN}"


def _apply_repair_rules(email: str) -> str:
    for provider in KNOWN_PROVIDERS:
        if email.endswith(f"@{provider}"):
            return f"{email}.com"
    if email.endswith("@"):
        return f"{email}{PLACEHOLDER_DOMAIN}"
    if "@" in email and "." not in email.rsplit("@", 1)[1]:
        return f"{email}.com"
    return email


def _check_shape(raw: str | None, email: str) -> str:
    if not is_valid_email(email):
        raise EmailShapeViolation(raw, f"repaired value {email!r} is not local@domain.tld")
    return email


def repair_email(raw: str | None, customer_id: str) -> EmailRepair:
    """Return a well-shaped email for a customer.

    Rules, first match wins: a missing value (None, empty or the literal
    ``NULL``) becomes ``customer_<id>@inferred.com``; a bare provider domain
    such as ``@gmail`` gets ``.com``; a trailing ``@`` gets ``domain.com``; a
    domain without a dot gets ``.com``; anything else is kept. Repaired
    output is lower-cased. Inferred addresses keep the customer id as given,
    except that ``@`` and whitespace become ``_``. An address that still fails
    the shape check after repair is replaced by the inferred address.
    """
    if raw is None or raw.strip() in _NULL_MARKERS:
        return EmailRepair(_check_shape(raw, inferred_email(customer_id)), True, False)

    original = raw.strip().lower()
    repaired = _apply_repair_rules(original)
    try:
        email = _check_shape(raw, repaired)
    except EmailShapeViolation as exc:
        logger.warning("%s; falling back to inferred address for customer %s", exc, customer_id)
        return EmailRepair(_check_shape(raw, inferred_email(customer_id)), True, True)
    return EmailRepair(email, False, email != original)
