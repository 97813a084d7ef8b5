"""URL slug helpers."""

import re
from typing import Iterable

_ACCENTS = str.maketrans({
    "á": "a", "à": "a", "ä": "a", "â": "a",
    "é": "e", "è": "e", "ë": "e", "ê": "e",
    "í": "i", "ì": "i", "ï": "i", "î": "i",
    "ó": "o", "ò": "o", "ö": "o", "ô": "o",
    "ú": "u", "ù": "u", "ü": "u", "û": "u",
    "ñ": "n",
    "ç": "c",
})

_SLUG_RE = re.compile(r"^[a-z0-9-]+$")


def generate_slug(text) -> str:
    """'Ultra Perú 2025!' -> 'ultra-peru-2025'."""
    if not text or not isinstance(text, str):
        return ""

    slug = text.lower().strip().translate(_ACCENTS)
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    if not slug:
        return False
    return (
        bool(_SLUG_RE.fullmatch(slug))
        and not slug.startswith("-")
        and not slug.endswith("-")
        and "--" not in slug
    )


def generate_unique_slug(base: str, existing: Iterable[str] = ()) -> str:
    """Slug for base, suffixed -1, -2, ... until it is not in existing."""
    taken = set(existing)
    slug = generate_slug(base)
    candidate = slug
    counter = 1
    while candidate in taken:
        candidate = f"{slug}-{counter}"
        counter += 1
    return candidate
