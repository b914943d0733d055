"""
Configuration for column type name aliases.

A JSON file can map type names the codec table does not know to ones it
does, per column or globally:

    {
        "aliases": {"CHAR": "VARCHAR", "LONGDATE": "TIMESTAMP"},
        "columns": {"users.created": "TIMESTAMP"}
    }
"""
import json
import logging
import pathlib

logger = logging.getLogger(__name__)


class TypeMappingConfig:
    """Configuration for custom type name aliases"""

    _instance = None

    @classmethod
    def get_instance(cls):
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def __init__(self, config_file=None):
        self._aliases = {}
        self._columns = {}

        if config_file:
            self.load_config(config_file)
        else:
            default_locations = [
                pathlib.Path('~/.config/entitymap/type_mapping.json').expanduser(),
                '/etc/entitymap/type_mapping.json',
                'type_mapping.json'  # Current directory
            ]

            for location in default_locations:
                if pathlib.Path(location).exists():
                    self.load_config(location)
                    break

    def load_config(self, config_file):
        """Load configuration from file, merging over what is already set"""
        try:
            with pathlib.Path(config_file).open() as f:
                config = json.load(f)

            for alias, type_name in config.get('aliases', {}).items():
                self.add_alias(alias, type_name)

            for column, type_name in config.get('columns', {}).items():
                self._columns[column.lower()] = type_name.upper()

            logger.info(f'Loaded type mapping configuration from {config_file}')
        except Exception as e:
            logger.warning(f'Failed to load type mapping config: {e}')

    def add_alias(self, alias, type_name):
        """Map an unknown type name onto a known one"""
        self._aliases[alias.upper()] = type_name.upper()

    def add_column_mapping(self, table_name, column_name, type_name):
        """Force the type name used for a specific column"""
        key = f'{table_name.lower()}.{column_name.lower()}' if table_name else column_name.lower()
        self._columns[key] = type_name.upper()

    def resolve(self, type_name):
        """Return the aliased type name, or the name unchanged"""
        if not type_name:
            return type_name
        return self._aliases.get(type_name.upper(), type_name)

    def get_type_for_column(self, table_name, column_name):
        """Get configured type name for a specific column"""
        if table_name:
            key = f'{table_name.lower()}.{column_name.lower()}'
            if key in self._columns:
                return self._columns[key]

        return self._columns.get(column_name.lower())

    def clear(self):
        self._aliases.clear()
        self._columns.clear()
