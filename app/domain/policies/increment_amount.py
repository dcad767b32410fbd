"""IncrementAmountPolicy — strict parsing of client-supplied increment amounts."""

from __future__ import annotations

import re

from app.domain.errors import InvalidAmount

_AMOUNT_RE = re.compile(r"[+-]?[0-9]{1,19}")


def parse_amount(raw: str, max_abs: int) -> int:
    """Parse *raw* into an increment amount.

    Only an optional sign followed by ASCII digits is accepted: no whitespace,
    underscores, decimal points or non-ASCII digits (all of which ``int()``
    would otherwise tolerate).

    Args:
        raw: the path segment as received.
        max_abs: largest accepted absolute value.

    Returns:
        The parsed integer.

    Raises:
        InvalidAmount: if *raw* is not a well-formed integer or exceeds *max_abs*.
    """
    if not _AMOUNT_RE.fullmatch(raw):
        raise InvalidAmount(raw, "must be an integer")

    amount = int(raw)
    if abs(amount) > max_abs:
        raise InvalidAmount(raw, f"must be between -{max_abs} and {max_abs}")
    return amount
