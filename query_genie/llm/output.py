from __future__ import annotations

import re

from .composer import QueryStyle

_BARE_FENCE_RE = re.compile(r"\A```\s*")
_TRAILING_FENCE_RE = re.compile(r"\s*```\s*\Z")


def clean_response(text: str | None, style: QueryStyle = QueryStyle.SQL) -> str:
    """Strip one surrounding code fence (or single backticks) from model output.

    Only the outer markers and surrounding whitespace are removed; the query
    itself is returned as-is. Single backticks are stripped only when no
    triple fence was found, so a fenced query may still end in a quoted
    identifier.
    """
    if not text:
        return ""
    style = QueryStyle(style)
    tagged = re.compile(rf"\A```{style.fence_tag}\s*")
    cleaned, opened = tagged.subn("", text, count=1)
    if not opened:
        cleaned, opened = _BARE_FENCE_RE.subn("", cleaned, count=1)
    cleaned, closed = _TRAILING_FENCE_RE.subn("", cleaned, count=1)
    if not (opened or closed):
        cleaned = re.sub(r"\A`", "", cleaned, count=1)
        cleaned = re.sub(r"`\Z", "", cleaned, count=1)
    return cleaned.strip()
