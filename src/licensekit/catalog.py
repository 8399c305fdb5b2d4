"""License catalog: curated popular licenses merged with the SPDX list."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from licensekit.errors import CatalogLoadError
from licensekit.log import get_logger
from licensekit.models import LicenseCategory, LicenseEntry

log = get_logger(__name__)


# Hand-picked licenses surfaced first in every listing
POPULAR_LICENSES: Tuple[LicenseEntry, ...] = (
    LicenseEntry(
        identifier="MIT",
        name="MIT License",
        description=(
            "A short and simple permissive license with conditions only "
            "requiring preservation of copyright and license notices."
        ),
        category=LicenseCategory.PERMISSIVE,
        popular=True,
    ),
    LicenseEntry(
        identifier="Apache-2.0",
        name="Apache License 2.0",
        description=(
            "A permissive license that also provides an express grant of "
            "patent rights from contributors to users."
        ),
        category=LicenseCategory.PERMISSIVE,
        popular=True,
    ),
    LicenseEntry(
        identifier="GPL-3.0-only",
        name="GNU General Public License v3.0",
        description=(
            "Permissions of this strong copyleft license are conditioned on "
            "making available complete source code."
        ),
        category=LicenseCategory.COPYLEFT,
        popular=True,
    ),
    LicenseEntry(
        identifier="BSD-3-Clause",
        name="BSD 3-Clause License",
        description=(
            "A permissive license similar to the BSD 2-Clause License, but "
            "with a 3rd clause that prohibits others from using the name of "
            "the project or its contributors to promote derived products "
            "without written consent."
        ),
        category=LicenseCategory.PERMISSIVE,
        popular=True,
    ),
    LicenseEntry(
        identifier="BSD-2-Clause",
        name="BSD 2-Clause License",
        description=(
            "A permissive license that comes in two variants, the BSD "
            "2-Clause and BSD 3-Clause."
        ),
        category=LicenseCategory.PERMISSIVE,
        popular=True,
    ),
    LicenseEntry(
        identifier="MPL-2.0",
        name="Mozilla Public License 2.0",
        description=(
            "A weak copyleft license that permits integration with "
            "proprietary software, but requires the licensed components to "
            "remain open source."
        ),
        category=LicenseCategory.WEAK_COPYLEFT,
        popular=True,
    ),
    LicenseEntry(
        identifier="ISC",
        name="ISC License",
        description=(
            "A permissive license lets people do anything with your code "
            "with proper attribution and without warranty."
        ),
        category=LicenseCategory.PERMISSIVE,
        popular=True,
    ),
    LicenseEntry(
        identifier="Unlicense",
        name="The Unlicense",
        description=(
            "A license with no conditions whatsoever which dedicates works "
            "to the public domain."
        ),
        category=LicenseCategory.PUBLIC_DOMAIN,
        popular=True,
    ),
)


def _require_str(item: Mapping[str, Any], key: str) -> str:
    """Fetch a non-empty string field from a source record."""
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        raise CatalogLoadError(f"Catalog record is missing '{key}': {dict(item)!r}")
    return value


def _curated_entry(item: Any) -> LicenseEntry:
    """Convert a curated source record into a popular LicenseEntry."""
    if isinstance(item, LicenseEntry):
        return LicenseEntry(
            identifier=item.identifier,
            name=item.name,
            description=item.description,
            category=item.category,
            popular=True,
        )
    if not isinstance(item, Mapping):
        raise CatalogLoadError(f"Unsupported curated record: {item!r}")
    
    category = item.get("category") or LicenseCategory.OTHER
    if not isinstance(category, LicenseCategory):
        try:
            category = LicenseCategory.parse(str(category))
        except ValueError as e:
            raise CatalogLoadError(str(e)) from e
    
    description = item.get("description")
    if description is not None and not isinstance(description, str):
        raise CatalogLoadError(f"Invalid description for {item.get('identifier')!r}")
    
    return LicenseEntry(
        identifier=_require_str(item, "identifier"),
        name=_require_str(item, "name"),
        description=description,
        category=category,
        popular=True,
    )


def _canonical_entry(item: Any) -> LicenseEntry:
    """Convert a canonical `{identifier, name}` record into a LicenseEntry."""
    if isinstance(item, tuple) and len(item) == 2:
        item = {"identifier": item[0], "name": item[1]}
    if not isinstance(item, Mapping):
        raise CatalogLoadError(f"Unsupported catalog record: {item!r}")
    return LicenseEntry(
        identifier=_require_str(item, "identifier"),
        name=_require_str(item, "name"),
    )


class CatalogIndex:
    """Immutable, ordered view of every known license.

    Use :meth:`load` to build one from source data; the constructor trusts
    its input and performs no validation.
    """
    
    def __init__(
        self,
        entries: Iterable[LicenseEntry],
        texts: Optional[Mapping[str, str]] = None,
    ):
        self._entries: Tuple[LicenseEntry, ...] = tuple(entries)
        self._texts: Mapping[str, str] = texts if texts is not None else {}
        self._by_key: Dict[str, LicenseEntry] = {}
        for entry in self._entries:
            self._by_key.setdefault(entry.identifier.lower(), entry)
    
    @classmethod
    def load(
        cls,
        curated: Iterable[Any],
        canonical: Iterable[Any],
        texts: Optional[Mapping[str, str]] = None,
    ) -> "CatalogIndex":
        """Merge curated and canonical sources into a validated index.

        Curated entries come first in their own order, followed by canonical
        entries not already present. The same identifier spelled exactly the
        same way is merged; spellings differing only by case are rejected.

        Raises:
            CatalogLoadError: if a source is malformed or identifiers collide
        """
        entries: List[LicenseEntry] = []
        seen: Dict[str, str] = {}
        
        def add(entry: LicenseEntry, merge_exact: bool) -> None:
            key = entry.identifier.lower()
            existing = seen.get(key)
            if existing is not None:
                if merge_exact and existing == entry.identifier:
                    return
                raise CatalogLoadError(
                    f"Duplicate license identifier: {entry.identifier!r} "
                    f"collides with {existing!r}"
                )
            seen[key] = entry.identifier
            entries.append(entry)
        
        try:
            for item in curated:
                add(_curated_entry(item), merge_exact=False)
            for item in canonical:
                add(_canonical_entry(item), merge_exact=True)
        except CatalogLoadError:
            raise
        except (TypeError, AttributeError) as e:
            raise CatalogLoadError(f"Failed to read catalog source: {e}") from e
        
        if texts is not None and not isinstance(texts, Mapping):
            raise CatalogLoadError("License texts must be a mapping of identifier to body")
        
        log.debug("Loaded license catalog with %d entries", len(entries))
        return cls(entries, texts)
    
    @property
    def texts(self) -> Mapping[str, str]:
        """Identifier to license body lookup."""
        return self._texts
    
    def all_entries(self) -> Tuple[LicenseEntry, ...]:
        """Every entry in insertion order."""
        return self._entries
    
    def identifiers(self) -> List[str]:
        """Canonical identifiers in insertion order."""
        return [entry.identifier for entry in self._entries]
    
    def popular(self) -> List[LicenseEntry]:
        """Curated entries in curated order."""
        return [entry for entry in self._entries if entry.popular]
    
    def find_by_identifier(self, key: str) -> Optional[LicenseEntry]:
        """Look up an entry case-insensitively, returning None when absent."""
        return self._by_key.get(key.strip().lower())
    
    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.find_by_identifier(key) is not None
    
    def __iter__(self) -> Iterator[LicenseEntry]:
        return iter(self._entries)
    
    def __len__(self) -> int:
        return len(self._entries)
