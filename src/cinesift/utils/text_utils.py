"""Text processing utilities."""

import hashlib
import locale
import re
import unicodedata
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote_plus

NOT_AVAILABLE = "N/A"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """Parse the integer a string starts with.

    OMDb packs units and ranges into its text fields ("94 min",
    "1995–1998"); only the leading number matters.

    Args:
        value: Raw field value.

    Returns:
        Leading integer, or None if the value does not start with one.
    """
    if not value:
        return None

    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse a numeric string, treating the OMDb sentinel as missing.

    Args:
        value: Raw field value such as "6.4" or "N/A".

    Returns:
        Float value, or None if missing or unparsable.
    """
    if not value or value.strip() == NOT_AVAILABLE:
        return None

    try:
        result = float(value.strip())
    except ValueError:
        return None

    # NaN never compares, treat it like a missing rating
    if result != result:
        return None
    return result


def contains_ignore_case(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring check.

    Args:
        haystack: Text to search in.
        needle: Text to look for.

    Returns:
        True if needle occurs in haystack.
    """
    if not haystack:
        return False
    return needle.casefold() in haystack.casefold()


def contains_any(text: Optional[str], keywords: Iterable[str]) -> bool:
    """Check whether text contains any of the keywords (case-insensitive)."""
    if not text:
        return False
    folded = text.casefold()
    return any(keyword.casefold() in folded for keyword in keywords if keyword)


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated field, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def title_sort_key(title: str) -> Tuple[str, str]:
    """Locale-aware sort key for a title.

    Accents are folded before collation so "Émile" sorts with the E's
    even under the C locale. The casefolded title breaks ties.

    Args:
        title: Movie title.

    Returns:
        Collation key under the current LC_COLLATE locale.
    """
    folded = title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return locale.strxfrm(base), folded


def build_search_links(title: str, year: str) -> dict:
    """Build web search links for watching a movie.

    Args:
        title: Movie title.
        year: Release year text.

    Returns:
        Mapping of site name to search URL.
    """
    query = f"{title} {year} full movie".strip()
    return {
        "youtube": f"https://www.youtube.com/results?search_query={quote_plus(query)}",
        "google": f"https://www.google.com/search?q={quote_plus(query + ' free streaming')}",
    }


def fingerprint(*parts: object) -> str:
    """Short stable fingerprint of the given values."""
    digest = hashlib.sha1("|".join(str(part) for part in parts).encode("utf-8"))
    return digest.hexdigest()[:12]
