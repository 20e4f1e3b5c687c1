"""Utility functions for ChronoPlan."""

from chronoplan.utils.masking import mask_key
from chronoplan.utils.date_parsing import (
    parse_clock_time,
    parse_month_argument,
    to_local_date,
)

__all__ = [
    "mask_key",
    "parse_clock_time",
    "parse_month_argument",
    "to_local_date",
]
