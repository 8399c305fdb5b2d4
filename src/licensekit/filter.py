"""Filter and rank catalog entries for display."""

from __future__ import annotations

import unicodedata
from typing import Iterable, List, Tuple

from licensekit.models import ALL_CATEGORIES, CatalogQuery, LicenseCategory, LicenseEntry


CATEGORIES: Tuple[str, ...] = (
    ALL_CATEGORIES,
    LicenseCategory.PERMISSIVE.value,
    LicenseCategory.COPYLEFT.value,
    LicenseCategory.WEAK_COPYLEFT.value,
    LicenseCategory.PUBLIC_DOMAIN.value,
)


def collation_key(text: str) -> Tuple[str, str]:
    """Locale-independent approximation of a root-locale collation key.
    
    Accents and case are ignored at the primary level, so "Éclipse" sorts
    next to "eclipse". Ties are broken on the case-swapped text so
    lowercase sorts before uppercase, as root-locale collation does.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    primary = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (primary.casefold(), text.swapcase())


def matches_search(entry: LicenseEntry, search_term: str) -> bool:
    """Check whether the term is a case-insensitive substring of name or key."""
    if not search_term:
        return True
    term = search_term.lower()
    return term in entry.name.lower() or term in entry.identifier.lower()


def matches_category(entry: LicenseEntry, category: str) -> bool:
    """Check the entry against a category filter ("All" matches everything)."""
    return category == ALL_CATEGORIES or entry.category.value == category


def sort_key(entry: LicenseEntry) -> Tuple[int, Tuple[str, str], str]:
    """Popular entries first, then by display name, then by identifier."""
    return (0 if entry.popular else 1, collation_key(entry.name), entry.identifier)


class CatalogFilter:
    """Apply a CatalogQuery to a sequence of entries."""
    
    def filter(
        self,
        entries: Iterable[LicenseEntry],
        query: CatalogQuery,
    ) -> List[LicenseEntry]:
        """Return matching entries, popular licenses first.
        
        An unknown or empty category simply yields no matches.
        """
        matched = [
            entry for entry in entries
            if matches_search(entry, query.search_term)
            and matches_category(entry, query.category)
        ]
        return sorted(matched, key=sort_key)
