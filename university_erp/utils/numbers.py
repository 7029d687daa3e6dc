"""Rounding helpers for currency amounts"""

import math


def round_amount(value: float) -> int:
    """Round half up to a whole currency amount"""
    return int(math.floor(value + 0.5))
