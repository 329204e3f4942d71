# Copyright 2026 The tzoracle Authors
#
# MIT License

"""
Proleptic Gregorian calendar arithmetic on Instants (milliseconds since the
Unix epoch), and the parsers of the time and offset strings used by the
regime and vector records.
"""

import re
from typing import Tuple
from typing import Union

from tzoracle.data_types.oracle_types import LocalDateTime
from tzoracle.data_types.oracle_types import MILLIS_PER_DAY
from tzoracle.data_types.oracle_types import MILLIS_PER_HOUR
from tzoracle.data_types.oracle_types import MILLIS_PER_MINUTE
from tzoracle.data_types.oracle_types import MILLIS_PER_SECOND
from tzoracle.data_types.oracle_types import WEEKDAY_NAMES

INVALID_SECONDS = 999999  # 277h46m69s

# ISO-8601 specifies Monday=1, Sunday=7
WEEK_TO_WEEK_INDEX = {
    'Mon': 1,
    'Tue': 2,
    'Wed': 3,
    'Thu': 4,
    'Fri': 5,
    'Sat': 6,
    'Sun': 7,
}

DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

# 'YYYY-MM-DD hh:mm[:ss]', the year may be negative.
INSTANT_STRING_RE = re.compile(
    r'^(-?\d+)-(\d\d)-(\d\d)[ T](\d\d):(\d\d)(?::(\d\d))?Z?$'
)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0) and ((year % 100 != 0) or (year % 400) == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given (year, month)."""
    days = DAYS_IN_MONTH[month - 1]
    if month == 2:
        days += is_leap_year(year)
    return days


def days_from_civil(year: int, month: int, day: int) -> int:
    """Return the number of days from 1970-01-01 to the given date of the
    proleptic Gregorian calendar. Uses the shifted March-based year of
    Howard Hinnant's algorithm, so that the leap day is the last day of the
    year. Python's floor division makes it valid for negative years too.
    """
    y = year - (month <= 2)
    era = y // 400
    yoe = y - era * 400  # [0, 399]
    doy = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy  # [0, 146096]
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil(). Returns (year, month, day)."""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + (3 if mp < 10 else -9)
    year = yoe + era * 400 + (month <= 2)
    return (year, month, day)


def iso_weekday(days: int) -> int:
    """Return the ISO weekday (Mon=1, Sun=7) of the given epoch days.
    1970-01-01 was a Thursday.
    """
    return (days + 3) % 7 + 1


def weekday_to_index(weekday: Union[int, str]) -> int:
    """Convert 'Sat' (or 'Saturday', or 6) into the ISO weekday number."""
    if isinstance(weekday, int):
        if weekday < 1 or weekday > 7:
            raise ValueError(f'Invalid weekday {weekday}')
        return weekday
    index = WEEK_TO_WEEK_INDEX.get(weekday[:3].title())
    if index is None:
        raise ValueError(f"Invalid weekday '{weekday}'")
    return index


def create_local_date_time(
    year: int,
    month: int,
    day: int,
    weekday: Union[int, str, None],
    hour: int,
    minute: int,
    second: int,
    millisecond: int = 0,
) -> LocalDateTime:
    """Create a validated LocalDateTime. If 'weekday' is None, it is derived
    from the date, otherwise it must match the date. Raises ValueError.
    """
    if month < 1 or month > 12:
        raise ValueError(f'Invalid month {month}')
    if day < 1 or day > days_in_month(year, month):
        raise ValueError(f'Invalid day {year:04}-{month:02}-{day:02}')
    if hour < 0 or hour > 23:
        raise ValueError(f'Invalid hour {hour}')
    if minute < 0 or minute > 59:
        raise ValueError(f'Invalid minute {minute}')
    if second < 0 or second > 59:
        raise ValueError(f'Invalid second {second}')
    if millisecond < 0 or millisecond > 999:
        raise ValueError(f'Invalid millisecond {millisecond}')

    actual_weekday = iso_weekday(days_from_civil(year, month, day))
    if weekday is not None:
        expected_weekday = weekday_to_index(weekday)
        if expected_weekday != actual_weekday:
            raise ValueError(
                f'Weekday {WEEKDAY_NAMES[expected_weekday]} does not match '
                f'{year:04}-{month:02}-{day:02} '
                f'({WEEKDAY_NAMES[actual_weekday]})'
            )

    return LocalDateTime(
        year=year,
        month=month,
        day=day,
        weekday=actual_weekday,
        hour=hour,
        minute=minute,
        second=second,
        millisecond=millisecond,
    )


def to_wall_millis(ldt: LocalDateTime) -> int:
    """Return the milliseconds since the epoch of the given fields, as if they
    were a UTC reading.
    """
    days = days_from_civil(ldt.year, ldt.month, ldt.day)
    return (
        days * MILLIS_PER_DAY
        + ldt.hour * MILLIS_PER_HOUR
        + ldt.minute * MILLIS_PER_MINUTE
        + ldt.second * MILLIS_PER_SECOND
        + ldt.millisecond
    )


def from_wall_millis(millis: int) -> LocalDateTime:
    """Inverse of to_wall_millis()."""
    days, millis_of_day = divmod(millis, MILLIS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, millis_of_day = divmod(millis_of_day, MILLIS_PER_HOUR)
    minute, millis_of_day = divmod(millis_of_day, MILLIS_PER_MINUTE)
    second, millisecond = divmod(millis_of_day, MILLIS_PER_SECOND)
    return LocalDateTime(
        year=year,
        month=month,
        day=day,
        weekday=iso_weekday(days),
        hour=hour,
        minute=minute,
        second=second,
        millisecond=millisecond,
    )


def format_instant(instant: int) -> str:
    """Format an Instant as an ISO-8601 UTC string."""
    ldt = from_wall_millis(instant)
    return (
        f'{ldt.year:04}-{ldt.month:02}-{ldt.day:02}'
        f'T{ldt.hour:02}:{ldt.minute:02}:{ldt.second:02}'
        f'.{ldt.millisecond:03}Z'
    )


def parse_instant_string(instant_string: str) -> int:
    """Parse 'YYYY-MM-DD hh:mm[:ss]' in UTC into an Instant. Raises
    ValueError.
    """
    m = INSTANT_STRING_RE.match(instant_string.strip())
    if not m:
        raise ValueError(f"Invalid instant '{instant_string}'")
    year, month, day, hour, minute = (int(g) for g in m.groups()[:5])
    second = int(m.group(6)) if m.group(6) else 0
    ldt = create_local_date_time(
        year, month, day, None, hour, minute, second)
    return to_wall_millis(ldt)


def time_string_to_seconds(time_string: str) -> int:
    """Converts the '[+-]hh:mm:ss' string into +/- total seconds from 00:00.
    Returns INVALID_SECONDS if there is a parsing error.
    """
    if not time_string:
        return INVALID_SECONDS

    sign = 1
    if time_string[0] == '-':
        sign = -1
        time_string = time_string[1:]
    elif time_string[0] == '+':
        time_string = time_string[1:]

    try:
        elems = time_string.split(':')
        hour = int(elems[0])
        minute = int(elems[1]) if len(elems) > 1 else 0
        second = int(elems[2]) if len(elems) > 2 else 0
        if len(elems) > 3:
            return INVALID_SECONDS
    except ValueError:
        return INVALID_SECONDS

    # The sign has been consumed, so every component must be non-negative.
    if hour < 0 or hour > 25:
        return INVALID_SECONDS
    if minute < 0 or minute > 59:
        return INVALID_SECONDS
    if second < 0 or second > 59:
        return INVALID_SECONDS
    return sign * ((hour * 60 + minute) * 60 + second)


def div_to_zero(a: int, b: int) -> int:
    """Integer division (a/b) that truncates towards 0, instead of -infinity as
    is default for Python. Assumes b is positive, but a can be negative or
    positive.
    """
    return a // b if a >= 0 else (a - 1) // b + 1


def truncate_to_granularity(a: int, b: int) -> int:
    """Truncate a to the granularity of b.
    """
    return b * div_to_zero(a, b)


def offset_string_to_minutes(offset_string: str) -> int:
    """Convert an offset such as '+3', '-4:56:02' or '5:30' into minutes,
    truncating any seconds towards zero. Raises ValueError.
    """
    seconds = time_string_to_seconds(offset_string.strip())
    if seconds == INVALID_SECONDS:
        raise ValueError(f"Invalid offset '{offset_string}'")
    return truncate_to_granularity(seconds, 60) // 60


def minutes_to_offset_string(minutes: int) -> str:
    """Convert minutes to +hh:mm or -hh:mm."""
    if minutes < 0:
        sign = '-'
        minutes = -minutes
    else:
        sign = '+'
    h, m = divmod(minutes, 60)
    return f'{sign}{h:02}:{m:02}'
