"""Small text helpers shared by the blog and back-office code."""

from __future__ import annotations

import html
import re
import unicodedata

_TAG_RE = re.compile(r"<[^>]+>")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def strip_tags(value: str) -> str:
    """Remove HTML tags and unescape entities."""
    return html.unescape(_TAG_RE.sub("", value or ""))


def slugify(value: str) -> str:
    """Lowercase ASCII slug with runs of other characters collapsed to ``-``.

    >>> slugify("Plan Pro Été")
    'plan-pro-ete'
    """
    ascii_value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM_RE.sub("-", ascii_value.lower()).strip("-")


def excerpt(value: str, length: int) -> str:
    """First ``length`` characters of the tag-stripped text followed by ``...``."""
    return strip_tags(value)[:length] + "..."
