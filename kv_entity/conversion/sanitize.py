"""HTML escaping and allowlist sanitization for submitted text."""

from __future__ import annotations

import html

import nh3


def escape_text(raw: str) -> str:
    """Escape all markup so the value renders as plain text."""
    return html.escape(raw, quote=True)


def sanitize_html(raw: str) -> str:
    """Decode entities, then strip anything outside nh3's default tag allowlist."""
    return nh3.clean(html.unescape(raw))
