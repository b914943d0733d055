"""
Date and time helpers shared by the datetime codecs and the string codec.

Values arriving from an entity can be ``datetime``/``date`` objects, pandas
or NumPy timestamps, epoch milliseconds, or strings in just about any
format. Everything is normalized to a ``datetime`` before being rendered
with a fixed column pattern.
"""
import datetime
import logging
import re
from typing import Any

import dateutil.parser
import numpy as np
import pandas as pd
from entitymap.exceptions import TypeConversionError

logger = logging.getLogger(__name__)

__all__ = [
    'parse_datetime',
    'parse_time',
    'format_datetime',
    'isoformat_utc',
]

_PATTERN_TOKENS = re.compile(r'YYYY|SSS|MM|DD|HH|mm|ss')


def _is_null(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _normalize(dt: datetime.datetime, utc: bool) -> datetime.datetime:
    if not utc:
        return dt
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    try:
        return dt.astimezone(datetime.timezone.utc)
    except (OverflowError, ValueError) as e:
        raise TypeConversionError(f'Date value out of range in UTC: {dt!r}') from e


def _from_epoch_millis(value: float, utc: bool) -> datetime.datetime:
    try:
        if utc:
            return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc)
        return datetime.datetime.fromtimestamp(value / 1000)
    except (OverflowError, OSError, ValueError) as e:
        raise TypeConversionError(f'Epoch value out of range: {value}') from e


def _from_string(value: str) -> datetime.datetime:
    text = value.strip()
    try:
        return dateutil.parser.isoparse(text)
    except (ValueError, OverflowError):
        pass
    try:
        return dateutil.parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise TypeConversionError(f'Unparseable date value: {value!r}') from e


def parse_datetime(value: Any, utc: bool = True) -> datetime.datetime | None:
    """Convert a date-like value into a ``datetime``.

    Null-like input (None, NaN, NaT, blank string) returns None. Input that
    cannot be read as a date raises TypeConversionError.

    With ``utc`` set, aware values are converted to UTC and naive values are
    taken to already be UTC. Without it, the wall-clock value is kept.

    >>> parse_datetime('2020-01-02T03:04:05.678Z')
    datetime.datetime(2020, 1, 2, 3, 4, 5, 678000, tzinfo=datetime.timezone.utc)
    >>> parse_datetime(0)
    datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    >>> parse_datetime('') is None
    True
    """
    if _is_null(value):
        return None

    if isinstance(value, bool):
        raise TypeConversionError(f'Boolean is not a date value: {value!r}')

    if isinstance(value, pd.Timestamp):
        return _normalize(value.to_pydatetime(), utc)

    if isinstance(value, np.datetime64):
        return _normalize(pd.Timestamp(value).to_pydatetime(), utc)

    if isinstance(value, datetime.datetime):
        return _normalize(value, utc)

    if isinstance(value, datetime.date):
        return _normalize(datetime.datetime.combine(value, datetime.time.min), utc)

    if isinstance(value, datetime.time):
        today = datetime.date.today()
        return _normalize(datetime.datetime.combine(today, value), utc)

    if isinstance(value, int | float | np.integer | np.floating):
        return _from_epoch_millis(float(value), utc)

    if isinstance(value, bytes):
        try:
            value = value.decode()
        except UnicodeDecodeError as e:
            raise TypeConversionError(f'Undecodable date bytes: {value!r}') from e

    if isinstance(value, str):
        return _normalize(_from_string(value), utc)

    raise TypeConversionError(f'Unsupported date value type: {type(value).__name__}')


def parse_time(value: Any) -> datetime.time | None:
    """Convert a time-of-day value into a naive ``datetime.time``.

    No time zone conversion is applied.

    >>> parse_time('14:30:45')
    datetime.time(14, 30, 45)
    >>> parse_time('7:05')
    datetime.time(7, 5)
    """
    if _is_null(value):
        return None

    if isinstance(value, datetime.time):
        return value.replace(tzinfo=None)

    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.time.fromisoformat(text).replace(tzinfo=None)
        except ValueError:
            pass
        if re.fullmatch(r'\d{1,2}:\d{2}(:\d{2}(\.\d+)?)?', text):
            hour, minute, *rest = text.split(':')
            second = float(rest[0]) if rest else 0.0
            try:
                return datetime.time(int(hour), int(minute), int(second),
                                     int(round((second % 1) * 1_000_000)))
            except ValueError as e:
                raise TypeConversionError(f'Invalid time value: {value!r}') from e

    dt = parse_datetime(value, utc=False)
    return dt.time() if dt is not None else None


def format_datetime(value: datetime.datetime | datetime.time, pattern: str) -> str:
    """Render a value using a moment-style pattern.

    Supported tokens: YYYY, MM, DD, HH, mm, ss and SSS (milliseconds).

    >>> format_datetime(datetime.datetime(2020, 1, 2, 3, 4, 5, 678900), 'YYYY-MM-DD HH:mm:ss.SSS')
    '2020-01-02 03:04:05.678'
    """
    def token(match: re.Match) -> str:
        match match.group(0):
            case 'YYYY':
                return f'{value.year:04d}'
            case 'MM':
                return f'{value.month:02d}'
            case 'DD':
                return f'{value.day:02d}'
            case 'HH':
                return f'{value.hour:02d}'
            case 'mm':
                return f'{value.minute:02d}'
            case 'ss':
                return f'{value.second:02d}'
            case 'SSS':
                return f'{value.microsecond // 1000:03d}'

    return _PATTERN_TOKENS.sub(token, pattern)


def isoformat_utc(value: Any) -> str:
    """Render a date-like value as an ISO-8601 UTC string with milliseconds.

    >>> isoformat_utc(datetime.date(2023, 5, 15))
    '2023-05-15T00:00:00.000Z'
    """
    dt = parse_datetime(value, utc=True)
    if dt is None:
        raise TypeConversionError(f'Cannot format null date value: {value!r}')
    return format_datetime(dt, 'YYYY-MM-DDTHH:mm:ss.SSS') + 'Z'
