"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import Tuple


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def resolve_date(year: int, month: int, day: int) -> str:
    """ISO date for day-of-month, clamped to the last day of shorter months"""
    actual_day = min(day, days_in_month(year, month))
    return date(year, month, actual_day).isoformat()


def month_for_offset(today: date, offset: int) -> Tuple[int, int]:
    """
    (year, month) that lies `offset` months before today's month.

    Month numbers at or below zero borrow from the year:
    offset 1 in January is December of the previous year.
    """
    year = today.year
    month = today.month - offset
    while month <= 0:
        month += 12
        year -= 1
    return year, month


def start_of_offset_month(today: date, offset: int) -> date:
    """First calendar day of the month `offset` months back"""
    year, month = month_for_offset(today, offset)
    return date(year, month, 1)


def ordinal_suffix(day: int) -> str:
    """English ordinal suffix: 1st, 2nd, 3rd, 11th, 22nd"""
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
