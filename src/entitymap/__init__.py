"""
Value mapping between entities and rows of a relational column store.

Entities hold booleans, dates, arrays and nested objects; the store has a
fixed set of scalar column types. Values are encoded per column type on
write, and a JSON type hint column on each row lets them be rebuilt on
read.

All operations can be called either as:
- Module functions: entitymap.to_row(entity, table_spec)
- EntityMapper methods: mapper.to_row(entity, table_spec)
"""
__version__ = '0.1.0'

from entitymap.classifier import ALLOWED_TYPES, TypeFamily, classify
from entitymap.classifier import is_allowed
from entitymap.codecs import ARRAY_TYPE, BOOLEAN_TYPE, DATE_TYPE, OBJECT_TYPE
from entitymap.codecs import Codec, DatetimeCodec, PassthroughCodec
from entitymap.codecs import StringCodec
from entitymap.entity import Entity, Record
from entitymap.exceptions import MapperError, TypeConversionError
from entitymap.exceptions import ValidationError
from entitymap.marshal import EntityMapper, from_row, hint_map, to_row
from entitymap.options import SENECA_TYPE_COLUMN, MapperOptions
from entitymap.query import comparable_fields, fix_query
from entitymap.registry import CodecRegistry, get_codec, register_codec
from entitymap.schema import ColumnSpec, TableSpec

__all__ = [
    'ALLOWED_TYPES',
    'ARRAY_TYPE',
    'BOOLEAN_TYPE',
    'DATE_TYPE',
    'OBJECT_TYPE',
    'SENECA_TYPE_COLUMN',
    'Codec',
    'CodecRegistry',
    'ColumnSpec',
    'DatetimeCodec',
    'Entity',
    'EntityMapper',
    'MapperError',
    'MapperOptions',
    'PassthroughCodec',
    'Record',
    'StringCodec',
    'TableSpec',
    'TypeConversionError',
    'TypeFamily',
    'ValidationError',
    'classify',
    'comparable_fields',
    'fix_query',
    'from_row',
    'get_codec',
    'hint_map',
    'is_allowed',
    'register_codec',
    'to_row',
]
