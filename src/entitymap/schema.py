"""
Column and table specifications.

The table specification is supplied by the caller (normally read from the
store's catalog) and maps entity field names to column metadata. Only the
column type name is needed to pick a codec; the rest is carried along for
callers that want it.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Self

from entitymap.classifier import TypeFamily, classify

logger = logging.getLogger(__name__)

__all__ = ['ColumnSpec', 'TableSpec', 'type_name_for', 'table_name_of']


def _first(mapping: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return None


class ColumnSpec:
    """Metadata for a single column.
    """

    def __init__(self,
                 name: str,
                 type_name: str | None = None,
                 nullable: bool | None = None,
                 length: int | None = None,
                 precision: int | None = None,
                 scale: int | None = None):
        """
        Initialize column specification

        Args:
            name: Column name, same as the entity field name
            type_name: Native column type name (e.g. NVARCHAR, TIMESTAMP)
            nullable: Whether the column allows NULL values
            length: Declared length (character and binary types)
            precision: Numeric precision
            scale: Numeric scale
        """
        self.name = name
        self.type_name = type_name.upper() if type_name else None
        self.nullable = nullable
        self.length = length
        self.precision = precision
        self.scale = scale

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> Self:
        """Create a ColumnSpec from a catalog row.

        Accepts the upper-case catalog keys (COLUMN_NAME, DATA_TYPE_NAME,
        IS_NULLABLE, LENGTH, SCALE) as well as snake case and the
        ``dataTypeName`` spelling.
        """
        nullable = _first(metadata, 'IS_NULLABLE', 'is_nullable', 'nullable')
        if isinstance(nullable, str):
            nullable = nullable.upper() == 'TRUE'
        return cls(
            name=_first(metadata, 'COLUMN_NAME', 'column_name', 'name'),
            type_name=_first(metadata, 'DATA_TYPE_NAME', 'data_type_name', 'dataTypeName', 'type_name'),
            nullable=nullable,
            length=_first(metadata, 'LENGTH', 'length'),
            precision=_first(metadata, 'PRECISION', 'precision'),
            scale=_first(metadata, 'SCALE', 'scale'),
            )

    @property
    def family(self) -> TypeFamily | None:
        return classify(self.type_name)

    def __repr__(self) -> str:
        return f'ColumnSpec(name={self.name!r}, type_name={self.type_name!r})'

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.
        """
        return {
            'name': self.name,
            'type_name': self.type_name,
            'nullable': self.nullable,
            'length': self.length,
            'precision': self.precision,
            'scale': self.scale,
            }


class TableSpec:
    """Column specifications of one table, keyed by column name.
    """

    def __init__(self, name: str | None = None,
                 columns: Mapping[str, ColumnSpec] | Iterable[ColumnSpec] | None = None):
        self.name = name
        if columns is None:
            columns = {}
        if not isinstance(columns, Mapping):
            columns = {col.name: col for col in columns}
        self.columns: dict[str, ColumnSpec] = dict(columns)

    @classmethod
    def from_metadata(cls, name: str | None, rows: Iterable[Mapping[str, Any]]) -> Self:
        """Build a TableSpec from catalog rows, one per column.
        """
        return cls(name, [ColumnSpec.from_metadata(row) for row in rows])

    def get(self, field: str) -> ColumnSpec | None:
        return self.columns.get(field)

    def type_name_for(self, field: str) -> str | None:
        spec = self.get(field)
        return spec.type_name if spec else None

    def family_for(self, field: str) -> TypeFamily | None:
        return classify(self.type_name_for(field))

    def __contains__(self, field: str) -> bool:
        return field in self.columns

    def __repr__(self) -> str:
        return f'TableSpec(name={self.name!r}, columns={list(self.columns)})'


def _spec_type_name(spec: Any) -> str | None:
    if spec is None:
        return None
    if isinstance(spec, ColumnSpec):
        return spec.type_name
    if isinstance(spec, str):
        return spec or None
    if isinstance(spec, Mapping):
        return _first(spec, 'type_name', 'dataTypeName', 'DATA_TYPE_NAME', 'data_type_name')
    return getattr(spec, 'type_name', None) or getattr(spec, 'dataTypeName', None)


def type_name_for(table_spec: Any, field: str) -> str | None:
    """Get the column type name of a field, or None when it is not known.

    ``table_spec`` may be a TableSpec, a mapping with a ``columns`` entry,
    or a plain mapping of field name to column specification.
    """
    if table_spec is None:
        return None
    if isinstance(table_spec, TableSpec):
        return table_spec.type_name_for(field)
    columns = table_spec
    if isinstance(table_spec, Mapping) and isinstance(table_spec.get('columns'), Mapping):
        columns = table_spec['columns']
    elif hasattr(table_spec, 'columns') and isinstance(table_spec.columns, Mapping):
        columns = table_spec.columns
    if not isinstance(columns, Mapping):
        return None
    return _spec_type_name(columns.get(field))


def table_name_of(table_spec: Any) -> str | None:
    """Get the table name carried by a specification, if any."""
    if isinstance(table_spec, Mapping):
        name = table_spec.get('name')
        return name if isinstance(name, str) else None
    return getattr(table_spec, 'name', None)
