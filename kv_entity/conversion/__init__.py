"""Scalar parsing and text sanitization."""

from .sanitize import escape_text, sanitize_html
from .scalars import convert_scalar, parse_bool, parse_float, parse_int


__all__ = ["convert_scalar", "escape_text", "parse_bool", "parse_float", "parse_int", "sanitize_html"]
