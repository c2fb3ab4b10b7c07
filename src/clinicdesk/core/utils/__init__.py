"""
Utility functions for ClinicDesk application.

This module provides common utility functions used throughout
the application for various operations.
"""

from .crypto_utils import (
    hash_password,
    verify_password,
)
from .datetime_utils import (
    calculate_age,
    epoch_millis,
    get_current_timestamp,
    parse_date,
    two_digit_year,
)

__all__ = [
    # Datetime utilities
    "get_current_timestamp",
    "parse_date",
    "two_digit_year",
    "epoch_millis",
    "calculate_age",
    # Crypto utilities
    "hash_password",
    "verify_password",
]
