"""
Column type classification.

Groups the native column type names of the store into five families and
answers whether a type name may appear in a filter/comparison expression.

Character string types  VARCHAR, NVARCHAR, ALPHANUM, SHORTTEXT
Datetime types          DATE, TIME, SECONDDATE, TIMESTAMP
Numeric types           TINYINT, SMALLINT, INTEGER, BIGINT, SMALLDECIMAL,
                        DECIMAL, REAL, DOUBLE
Binary types            VARBINARY
Large Object types      BLOB, CLOB, NCLOB, TEXT
"""
import enum
import logging

logger = logging.getLogger(__name__)

__all__ = [
    'TypeFamily',
    'CHARACTER_TYPES',
    'DATETIME_TYPES',
    'NUMERIC_TYPES',
    'BINARY_TYPES',
    'LOB_TYPES',
    'ALLOWED_TYPES',
    'classify',
    'is_allowed',
]


class TypeFamily(enum.Enum):
    CHARACTER = 'character'
    DATETIME = 'datetime'
    NUMERIC = 'numeric'
    BINARY = 'binary'
    LOB = 'lob'


CHARACTER_TYPES = frozenset({'VARCHAR', 'NVARCHAR', 'ALPHANUM', 'SHORTTEXT'})
DATETIME_TYPES = frozenset({'DATE', 'TIME', 'SECONDDATE', 'TIMESTAMP'})
NUMERIC_TYPES = frozenset({
    'TINYINT',
    'SMALLINT',
    'INTEGER',
    'BIGINT',
    'SMALLDECIMAL',
    'DECIMAL',
    'REAL',
    'DOUBLE',
})
BINARY_TYPES = frozenset({'VARBINARY'})
LOB_TYPES = frozenset({'BLOB', 'CLOB', 'NCLOB', 'TEXT'})

_FAMILIES = {
    TypeFamily.CHARACTER: CHARACTER_TYPES,
    TypeFamily.DATETIME: DATETIME_TYPES,
    TypeFamily.NUMERIC: NUMERIC_TYPES,
    TypeFamily.BINARY: BINARY_TYPES,
    TypeFamily.LOB: LOB_TYPES,
}

# types allowed in where clause
ALLOWED_TYPES = CHARACTER_TYPES | DATETIME_TYPES | NUMERIC_TYPES | BINARY_TYPES | LOB_TYPES


def classify(type_name: str | None) -> TypeFamily | None:
    """Return the family of a column type name.

    Matching is exact and case-sensitive; callers upper-case first.

    >>> classify('NVARCHAR')
    <TypeFamily.CHARACTER: 'character'>
    >>> classify('varchar') is None
    True
    """
    if not type_name:
        return None
    for family, names in _FAMILIES.items():
        if type_name in names:
            return family
    return None


def is_allowed(type_name: str | None) -> bool:
    """Check whether a column type may appear in a comparison expression.

    >>> is_allowed('integer')
    True
    >>> is_allowed('GEOMETRY')
    False
    >>> is_allowed('')
    False
    """
    if not type_name:
        return False
    return type_name.upper() in ALLOWED_TYPES
