"""
Utility modules for the event booking wizard.
"""

from .date import DateUtils
from .logging import configure_logging, get_logger
from .money import format_price, round_money, to_decimal
from .validation import ValidationUtils

__all__ = [
    "DateUtils",
    "configure_logging",
    "get_logger",
    "format_price",
    "round_money",
    "to_decimal",
    "ValidationUtils",
]
