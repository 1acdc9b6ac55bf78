"""Exceptions raised while mapping a flat source onto an entity tree."""

from __future__ import annotations


class EntityMappingError(Exception):
    """Base class for fatal mapping failures."""


class UnsupportedNestedArrayError(EntityMappingError):
    """An array field declares ``array`` as its item type."""


class UnreachableTypeError(EntityMappingError):
    """Scalar conversion was asked to handle a non-scalar field type.

    Field dispatch never routes arrays or entity types to the scalar
    converter, so seeing this means the schema and dispatch disagree.
    """
