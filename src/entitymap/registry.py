"""
Codec lookup by column type name.

``get_codec`` is total: every type name, including None and names nobody
has heard of, maps to some codec. Unknown names get the passthrough codec.
"""
import logging

from entitymap import codecs
from entitymap.classifier import CHARACTER_TYPES, classify
from entitymap.codecs import Codec
from entitymap.config.type_mapping import TypeMappingConfig

logger = logging.getLogger(__name__)

__all__ = ['CodecRegistry', 'get_codec', 'register_codec']


class CodecRegistry:
    """Registry of codecs keyed by column type name.

    Lookup order:
    1. Codecs registered with ``register_codec``
    2. Aliases from ``TypeMappingConfig``
    3. Built-in table (character types, the four datetime types)
    4. Passthrough
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'CodecRegistry':
        """Get singleton instance.
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def __init__(self, config: TypeMappingConfig | None = None) -> None:
        self._config = config
        self._custom: dict[str, Codec] = {}
        self._builtin: dict[str, Codec] = {name: codecs.STRING for name in CHARACTER_TYPES}
        for codec in (codecs.TIMESTAMP, codecs.SECONDDATE, codecs.DATE, codecs.TIME):
            self._builtin[codec.name] = codec

    @property
    def config(self) -> TypeMappingConfig:
        if self._config is None:
            self._config = TypeMappingConfig.get_instance()
        return self._config

    def register_codec(self, type_name: str, codec: Codec) -> None:
        """Register a codec for a type name, taking precedence over the table.
        """
        self._custom[type_name.upper()] = codec

    def unregister_codec(self, type_name: str) -> None:
        self._custom.pop(type_name.upper(), None)

    def get_codec(self, type_name: str | None) -> Codec:
        """Get the codec for a column type name.
        """
        if type_name and type_name in self._custom:
            return self._custom[type_name]

        resolved = self.config.resolve(type_name)
        if resolved and resolved in self._custom:
            return self._custom[resolved]
        if resolved in self._builtin:
            return self._builtin[resolved]
        if classify(resolved) is None:
            logger.debug(f'Type {type_name} not mapped. Using default mapper.')
        return codecs.DEFAULT


def get_codec(type_name: str | None) -> Codec:
    """Look up a codec in the shared registry."""
    return CodecRegistry.get_instance().get_codec(type_name)


def register_codec(type_name: str, codec: Codec) -> None:
    """Register a codec in the shared registry."""
    CodecRegistry.get_instance().register_codec(type_name, codec)
