"""
Query field filtering.

Filter specifications coming from the entity layer can carry directive
keys (suffixed with ``$``, e.g. ``sort$`` or ``limit$``) and an ``id``
directive given as a callable. Neither belongs in a comparison against
the store.
"""
import logging
from collections.abc import Mapping
from typing import Any

from entitymap.classifier import is_allowed
from entitymap.schema import type_name_for

logger = logging.getLogger(__name__)

__all__ = ['DIRECTIVE_SUFFIX', 'fix_query', 'comparable_fields']

DIRECTIVE_SUFFIX = '$'


def fix_query(entity_spec: Any, query: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a filter specification without directive keys.

    ``entity_spec`` identifies the entity being queried and is accepted for
    call-site symmetry; filtering does not depend on it.

    >>> fix_query(None, {'name': 'x', 'name$': 'startsWith', 'id': lambda: 1})
    {'name': 'x'}
    >>> fix_query(None, {'id': 7, 'sort$': {'name': 1}})
    {'id': 7}
    """
    fixed = {key: value for key, value in query.items()
             if not key.endswith(DIRECTIVE_SUFFIX)}

    if callable(fixed.get('id')):
        del fixed['id']

    return fixed


def comparable_fields(query: Mapping[str, Any], table_spec: Any) -> dict[str, Any]:
    """Keep the fields whose column type may appear in a comparison.

    Fields with no column specification, or whose type is not recognized,
    are dropped.
    """
    kept = {}
    for field, value in query.items():
        type_name = type_name_for(table_spec, field)
        if is_allowed(type_name):
            kept[field] = value
        else:
            logger.debug(f'Dropping {field} from comparison: column type {type_name} not allowed')
    return kept
