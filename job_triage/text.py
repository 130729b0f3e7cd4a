"""Text helpers shared by adapters, normalization and scoring."""
from __future__ import annotations

import html
import re
import unicodedata
from typing import Iterable

_TAG_RE = re.compile(r"<[^>]*>?")
_WS_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")

REQ_BULLET_RE = re.compile(
    r"(?:^|\n)\s*(?:[-*•]|\d+\.)\s+(.+?)(?=\n\s*(?:[-*•]|\d+\.)\s+|\n\s*\n|\Z)",
    flags=re.DOTALL,
)


def strip_markup(text: str | None) -> str:
    """Drop HTML tags and entities, collapse whitespace."""
    if not text:
        return ""
    no_tags = _TAG_RE.sub(" ", text)
    return _WS_RE.sub(" ", html.unescape(no_tags)).strip()


def truncate(text: str, limit: int = 150, suffix: str = "...") -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + suffix


def canonical(text: str | None) -> str:
    """Comparable form: accents folded, lowercase, only [a-z0-9] kept.

    "Négociation" and "negociation" both become ``negociation``.
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in folded if not unicodedata.combining(c))
    return _NON_ALNUM_RE.sub("", folded.lower())


def uniq_preserve_order(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for it in items:
        if not it:
            continue
        key = it.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out


def extract_requirements(description: str, max_items: int = 8) -> list[str]:
    """Bullet-like lines of a description, used as a naive requirements list."""
    if not description:
        return []
    cleaned = description.replace("\r", "")
    cleaned = re.sub(r"<\s*li[^>]*>", "\n- ", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"<\s*br\s*/?>", "\n", cleaned, flags=re.IGNORECASE)
    cleaned = _TAG_RE.sub("", cleaned)
    items = [_WS_RE.sub(" ", m.group(1)).strip() for m in REQ_BULLET_RE.finditer(cleaned)]
    items = [it for it in items if 3 <= len(it) <= 120]
    return uniq_preserve_order(items)[:max_items]
