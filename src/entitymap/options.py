from dataclasses import dataclass

from entitymap.exceptions import ValidationError

from libb import ConfigOptions

__all__ = [
    'MapperOptions',
    'OMIT_FALSY',
    'OMIT_NULL',
    'SENECA_TYPE_COLUMN',
]

SENECA_TYPE_COLUMN = 'seneca'

OMIT_FALSY = 'falsy'
OMIT_NULL = 'null'


@dataclass
class MapperOptions(ConfigOptions):
    """Options

    - hint_column: Reserved row column holding the JSON type hint map
      (default: `seneca`)
    - omit: Which encoded values leave a field out of the row.
      `falsy` drops None, empty string, 0 and False (rows written by earlier
      versions have this shape). `null` drops only None/NaN, so 0 and False
      are stored.
    """
    hint_column: str = SENECA_TYPE_COLUMN
    omit: str = OMIT_FALSY

    def __post_init__(self):
        if self.omit not in {OMIT_FALSY, OMIT_NULL}:
            raise ValidationError(f'omit must be one of: {[OMIT_FALSY, OMIT_NULL]}')
        if not self.hint_column:
            raise ValidationError('hint_column must be a non-empty column name')
