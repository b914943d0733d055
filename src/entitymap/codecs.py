"""
Scalar codecs: paired encode/decode functions for one column type family.

``encode`` turns an application value into something the column can store
and returns ``attrdict(value=...)``, optionally with a ``type`` hint code.
``decode`` takes the stored value and the hint recorded at encode time and
rebuilds the application value.

Codecs never raise. Unparseable input is logged and either stored as NULL
(datetime codecs) or handed back unchanged (string codec decode).
"""
import datetime
import decimal
import json
import logging
from collections.abc import Mapping
from typing import Any

import numpy as np
import pandas as pd
from entitymap.datetimes import format_datetime, isoformat_utc
from entitymap.datetimes import parse_datetime, parse_time
from entitymap.exceptions import TypeConversionError

from libb import attrdict

logger = logging.getLogger(__name__)

__all__ = [
    'BOOLEAN_TYPE',
    'OBJECT_TYPE',
    'ARRAY_TYPE',
    'DATE_TYPE',
    'HINT_TYPES',
    'Codec',
    'PassthroughCodec',
    'DatetimeCodec',
    'StringCodec',
    'DEFAULT',
    'STRING',
    'TIMESTAMP',
    'SECONDDATE',
    'DATE',
    'TIME',
]

BOOLEAN_TYPE = 'b'
OBJECT_TYPE = 'o'
ARRAY_TYPE = 'a'
DATE_TYPE = 'd'

HINT_TYPES = frozenset({BOOLEAN_TYPE, OBJECT_TYPE, ARRAY_TYPE, DATE_TYPE})


class Codec:
    """Base class for column value codecs.
    """

    name = 'DEFAULT'

    def encode(self, value: Any) -> attrdict:
        """Convert an application value to its storable form.
        """
        return attrdict(value=value)

    def decode(self, value: Any, hint: str | None = None) -> Any:
        """Convert a stored value back to its application form.
        """
        return value

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.name!r})'


class PassthroughCodec(Codec):
    """Stores and returns values as they are."""


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str | int | float) and not value


class DatetimeCodec(Codec):
    """Codec for DATE, TIME, SECONDDATE and TIMESTAMP columns.

    Both directions render the value with the column pattern, so a read
    returns a formatted string rather than a ``datetime``. Values that are
    missing or cannot be read as dates become None.

    All columns except TIME are normalized to UTC. TIME values are read as
    naive wall-clock times.
    """

    def __init__(self, name: str, pattern: str, utc: bool = True) -> None:
        self.name = name
        self.pattern = pattern
        self.utc = utc

    def _parse(self, value: Any) -> datetime.datetime | datetime.time | None:
        if self.utc:
            return parse_datetime(value, utc=True)
        return parse_time(value)

    def _format(self, value: Any) -> str | None:
        if _is_blank(value):
            return None
        try:
            parsed = self._parse(value)
        except TypeConversionError as e:
            logger.debug(f'Invalid {self.name} value {value!r}: {e}')
            return None
        if parsed is None:
            return None
        return format_datetime(parsed, self.pattern)

    def encode(self, value: Any) -> attrdict:
        return attrdict(value=self._format(value))

    def decode(self, value: Any, hint: str | None = None) -> str | None:
        return self._format(value)


def _json_default(value: Any) -> Any:
    """Serialize values ``json`` does not know natively.
    """
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray | pd.Series):
        return value.tolist()
    if isinstance(value, datetime.date | np.datetime64):
        return isoformat_utc(value)
    if isinstance(value, decimal.Decimal):
        return float(value)
    if isinstance(value, set | frozenset):
        return list(value)
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def to_json(value: Any) -> str:
    """Compact JSON text, matching the separators used by existing rows.
    """
    return json.dumps(value, separators=(',', ':'), default=_json_default)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool | np.bool_)


def _is_date(value: Any) -> bool:
    return isinstance(value, datetime.date | np.datetime64)


def _is_array(value: Any) -> bool:
    return isinstance(value, list | tuple | np.ndarray | pd.Series)


def _is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


class StringCodec(Codec):
    """Codec for the character column types.

    Values that are not plain strings or numbers are stored as text and
    tagged with a hint code so they can be rebuilt on read:

    - ``b`` boolean, stored as ``true``/``false``
    - ``d`` date, stored as an ISO-8601 UTC string
    - ``a`` array, stored as JSON text
    - ``o`` object, stored as JSON text

    The checks run in that order. A boolean or a date must never fall
    through to the object check.
    """

    name = 'STRING'

    def encode(self, value: Any) -> attrdict:
        try:
            if _is_boolean(value):
                return attrdict(value=to_json(bool(value)), type=BOOLEAN_TYPE)
            if _is_date(value):
                if pd.isna(value):
                    return attrdict(value=None)
                return attrdict(value=isoformat_utc(value), type=DATE_TYPE)
            if _is_array(value):
                return attrdict(value=to_json(value), type=ARRAY_TYPE)
            if _is_object(value):
                return attrdict(value=to_json(dict(value)), type=OBJECT_TYPE)
        except (TypeError, ValueError, TypeConversionError) as e:
            logger.error(f'Error serializing {type(value).__name__}: {e}')
            return attrdict(value=str(value))
        return attrdict(value=value)

    def decode(self, value: Any, hint: str | None = None) -> Any:
        if hint == OBJECT_TYPE:
            return self._loads(value, 'OBJECT')
        if hint == ARRAY_TYPE:
            return self._loads(value, 'ARRAY')
        if hint == DATE_TYPE:
            try:
                return parse_datetime(value, utc=True)
            except TypeConversionError:
                logger.error(f'Error parsing DATE: {value}')
                return value
        if hint == BOOLEAN_TYPE:
            return self._loads(value, 'BOOLEAN')
        return value

    @staticmethod
    def _loads(value: Any, label: str) -> Any:
        try:
            return json.loads(value)
        except (TypeError, ValueError):
            logger.error(f'Error parsing {label}: {value}')
            return value


DEFAULT = PassthroughCodec()
STRING = StringCodec()
TIMESTAMP = DatetimeCodec('TIMESTAMP', 'YYYY-MM-DD HH:mm:ss.SSS')
SECONDDATE = DatetimeCodec('SECONDDATE', 'YYYY-MM-DD HH:mm:ss')
DATE = DatetimeCodec('DATE', 'YYYY-MM-DD')
TIME = DatetimeCodec('TIME', 'HH:mm:ss', utc=False)
