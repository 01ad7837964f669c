"""
Checksum and calendar validators.

Pure algorithmic predicates used by the card and date rules:
- luhn_check: Luhn digit-weighting checksum
- is_valid_date: Calendar-aware MM/DD/YYYY check
"""

import re

from modules.feedback.core.base import BaseCheck
from modules.feedback.core.registry import register_check
from shared.utils.helpers import strip_non_digits

DATE_PATTERN = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")

MIN_YEAR = 1900
MAX_YEAR = 2100

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule"""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def luhn_check(value: str) -> bool:
    """
    Validate a card-like number with the Luhn checksum.

    Non-digit characters are stripped first, so spacing and dashes
    do not affect the result.

    Args:
        value: Number to check, e.g. "4539 1488 0343 6467"

    Returns:
        True if the digit sum is divisible by 10
    """
    digits = strip_non_digits(value)
    if not digits or not digits.isdigit():
        return False

    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        # Every second digit, starting left of the check digit
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0


def is_valid_date(value: str) -> bool:
    """
    Validate a MM/DD/YYYY date against the calendar.

    Args:
        value: Date string

    Returns:
        True for a real calendar date between 1900 and 2100
    """
    match = DATE_PATTERN.fullmatch(value)
    if not match:
        return False

    month, day, year = (int(part) for part in match.groups())

    if not 1 <= month <= 12:
        return False
    if not 1 <= day <= 31:
        return False
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False

    max_day = DAYS_IN_MONTH[month - 1]
    if month == 2 and is_leap_year(year):
        max_day = 29

    return day <= max_day


@register_check("luhn")
class LuhnCheck(BaseCheck):
    """
    Luhn checksum over the digits of the value.

    Example:
        - id: luhn
          label: Valid card checksum
          check: luhn
    """

    def check(self, value: str) -> bool:
        return luhn_check(value)


@register_check("calendar_date")
class CalendarDateCheck(BaseCheck):
    """
    Calendar-aware MM/DD/YYYY date check.

    Example:
        - id: valid
          label: Valid date
          check: calendar_date
    """

    def check(self, value: str) -> bool:
        return is_valid_date(value)
