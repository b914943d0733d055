"""
Mapper-specific exception classes.
"""


class MapperError(Exception):
    """Base class for all entitymap errors.
    """


class TypeConversionError(MapperError):
    """Error converting a value between its application and column forms.

    Raised by the parsing helpers and caught at the codec boundary, so it
    never reaches callers of ``encode``/``decode``.
    """


class ValidationError(MapperError):
    """Error in input validation.
    """
