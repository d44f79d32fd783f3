"""
Base tag injection for forwarded HTML documents.

The preview frame renders the document from a string, so the browser has no
idea where it came from. A ``<base>`` element pointing at the original origin
makes relative ``href``/``src`` values resolve against the real site. This is
the only rewrite performed; CSS ``url()`` references, inline handlers and
script fetch targets are left alone.
"""

import re
from typing import Optional

HTML_CONTENT_TYPE = "text/html"

# Opening head tag, any casing, optional attributes. Comments are matched
# first so a commented-out <head> is skipped; <header> never matches.
_HEAD_OR_COMMENT = re.compile(
    r"<!--.*?-->|(<head(?=[\s/>])[^>]*>)", re.IGNORECASE | re.DOTALL
)


def is_html(content_type: str) -> bool:
    return HTML_CONTENT_TYPE in (content_type or "").lower()


def build_base_tag(origin: str) -> str:
    return f'<base href="{origin}/" />'


def find_head_insertion_point(html: str) -> Optional[int]:
    """Index just past the first real opening ``<head>`` tag, if any."""
    for match in _HEAD_OR_COMMENT.finditer(html):
        if match.group(1):
            return match.end(1)
    return None


def inject_base_tag(html: str, origin: str) -> str:
    """
    Insert a base tag as the first child of the document head.

    Documents without a head element are wrapped in a minimal document so the
    tag still has somewhere to live.
    """
    base_tag = build_base_tag(origin)
    position = find_head_insertion_point(html)
    if position is None:
        return (
            f"<!DOCTYPE html><html><head>{base_tag}</head>"
            f"<body>{html}</body></html>"
        )
    return f"{html[:position]}{base_tag}{html[position:]}"
