"""
Slug normalizer — display name → canonical identifier.

The slug keys a project everywhere: registry, folder name, nginx
file, proxy router and hostname label. It must therefore be stable
(no locale, no time) and idempotent.
"""

from __future__ import annotations

import re
import unicodedata

# French/Western accents seen in project names. Anything not listed is
# handled by the decomposition pass below.
_ACCENTS = {
    "é": "e", "è": "e", "ê": "e", "ë": "e",
    "à": "a", "â": "a", "ä": "a",
    "î": "i", "ï": "i",
    "ô": "o", "ö": "o",
    "ù": "u", "û": "u", "ü": "u",
    "ÿ": "y",
    "ç": "c",
}

_HYPHEN_RUNS = re.compile(r"-{2,}")


def normalize_slug(value: str) -> str:
    """Lowercase, transliterate, hyphenate.

    >>> normalize_slug("Mon Café -- Été")
    'mon-cafe-ete'
    """
    slug = value.lower()
    for accented, plain in _ACCENTS.items():
        slug = slug.replace(accented, plain)

    slug = _strip_marks(slug).lower()
    slug = "".join(ch if ch.isalnum() else "-" for ch in slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def _strip_marks(value: str) -> str:
    """Decompose and drop combining marks (ñ → n, ø stays)."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
