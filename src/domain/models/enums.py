"""Domain enumerations for retirement fund valuation.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings.
"""

from enum import Enum


class PositionSource(str, Enum):
    """Where the positions behind a valuation summary came from."""

    STORED = "stored"                  # fund_positions rows
    LEGACY_PROFILE = "legacy_profile"  # synthesized from profile percentages
    EMPTY = "empty"
