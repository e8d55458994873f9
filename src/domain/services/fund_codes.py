"""Fund code normalization.

Positions, legacy profile columns and price feeds spell fund codes in
different ways ("L Income", "LIncome", "g fund", "L-2050").  Every lookup
between them goes through normalize_fund_code() so that one canonical key
indexes both prices and positions.

Canonical codes:
    G, F, C, S, I         base funds
    L-INCOME              lifecycle income fund
    L2025 … L2075         dated lifecycle funds

Unknown codes are returned trimmed and uppercased; callers treat them as
unpriced rather than invalid.
"""

from __future__ import annotations

import re

BASE_FUND_CODES: tuple[str, ...] = ("G", "F", "C", "S", "I")
LIFECYCLE_INCOME = "L-INCOME"

# Baseline rows every user should have (see BackfillService).
BASELINE_FUND_CODES: tuple[str, ...] = BASE_FUND_CODES + (LIFECYCLE_INCOME,)

_SEPARATORS = re.compile(r"[\s\-_]+")
_DATED_LIFECYCLE = re.compile(r"^L(20\d{2})$")

_ALIASES: dict[str, str] = {
    "LINCOME": LIFECYCLE_INCOME,
    "LIFECYCLEINCOME": LIFECYCLE_INCOME,
    **{f"{code}FUND": code for code in BASE_FUND_CODES},
}


def normalize_fund_code(raw_code: str | None) -> str:
    """Map a fund code spelling to its canonical key.

    >>> normalize_fund_code("L Income")
    'L-INCOME'
    >>> normalize_fund_code(" c ")
    'C'
    >>> normalize_fund_code("l-2050")
    'L2050'
    """
    if raw_code is None:
        return ""
    trimmed = raw_code.strip().upper()
    if not trimmed:
        return ""

    compact = _SEPARATORS.sub("", trimmed)
    if compact in BASE_FUND_CODES:
        return compact
    if compact in _ALIASES:
        return _ALIASES[compact]
    match = _DATED_LIFECYCLE.match(compact)
    if match:
        return f"L{match.group(1)}"
    return trimmed
