"""Whitelist paths and the parent path stack used to build flat keys."""

from .parents import ParentPath
from .whitelist import PathEntry, PathWhitelist


__all__ = ["ParentPath", "PathEntry", "PathWhitelist"]
