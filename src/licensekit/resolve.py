"""Resolve user-entered license keys to canonical catalog identifiers."""

from __future__ import annotations

from licensekit.catalog import CatalogIndex
from licensekit.errors import (
    AmbiguousIdentifierError,
    EmptyIdentifierError,
    LicenseNotFoundError,
)
from licensekit.log import get_logger

log = get_logger(__name__)


class Resolver:
    """Exact, case-insensitive identifier resolution.
    
    There is deliberately no fuzzy matching: ``mit`` resolves to ``MIT``,
    ``Apache 2`` does not resolve at all.
    """
    
    def __init__(self, index: CatalogIndex):
        self.index = index
    
    def resolve(self, raw: str) -> str:
        """Return the identifier exactly as the catalog spells it.
        
        Raises:
            EmptyIdentifierError: if the input is blank
            LicenseNotFoundError: if nothing in the catalog matches
            AmbiguousIdentifierError: if several catalog entries match
        """
        wanted = (raw or "").strip()
        if not wanted:
            raise EmptyIdentifierError()
        
        folded = wanted.lower()
        matches = [
            identifier for identifier in self.index.identifiers()
            if identifier.lower() == folded
        ]
        
        if not matches:
            raise LicenseNotFoundError(wanted)
        if len(matches) > 1:
            log.error("Catalog integrity violation: %r matches %s", wanted, matches)
            raise AmbiguousIdentifierError(wanted, matches)
        
        return matches[0]
