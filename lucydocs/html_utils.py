"""HTML utility functions for lucydocs.

Functions:
    escape_html: Escape special HTML characters in a string.
    strip_tags: Drop markup from an inline HTML fragment.
    generate_heading_id: Build an anchor slug from heading text.
"""

from __future__ import annotations

import html
import re

_TAG_RE = re.compile(r"<[^>]+>")


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Examples:
        >>> escape_html('<script>alert("XSS")</script>')
        '&lt;script&gt;alert(&quot;XSS&quot;)&lt;/script&gt;'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def strip_tags(fragment: str) -> str:
    """Return the text of an inline HTML fragment with entities decoded."""
    return html.unescape(_TAG_RE.sub("", fragment))


def generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Examples:
        >>> generate_heading_id("Final States!")
        'final-states'
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")
