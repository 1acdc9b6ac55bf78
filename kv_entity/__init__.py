"""kv-entity - decode flat key/value sources into typed entity trees"""

import logging

from ._version import version as __version__
from .bridge import SyncDictParser
from .errors import EntityMappingError, UnreachableTypeError, UnsupportedNestedArrayError
from .options import MapOptions, ParserOptions
from .parser import DictParser
from .schema import EntitySchema, FieldDefinition, schema_from_dict
from .sources import CallableSource, MappingSource, ValueSource


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "CallableSource",
    "DictParser",
    "EntityMappingError",
    "EntitySchema",
    "FieldDefinition",
    "MapOptions",
    "MappingSource",
    "ParserOptions",
    "SyncDictParser",
    "UnreachableTypeError",
    "UnsupportedNestedArrayError",
    "ValueSource",
    "__version__",
    "schema_from_dict",
]
