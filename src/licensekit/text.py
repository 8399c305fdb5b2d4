"""Retrieve license bodies for resolved identifiers."""

from __future__ import annotations

from licensekit.catalog import CatalogIndex
from licensekit.errors import TextUnavailableError, UnknownIdentifierError
from licensekit.log import get_logger
from licensekit.models import LicenseText

log = get_logger(__name__)


class TextProvider:
    """Look up the full license text for a catalog identifier.
    
    Bodies are returned exactly as the text source supplies them, with
    placeholders such as ``<year>`` or ``<copyright holders>`` left intact.
    """
    
    def __init__(self, index: CatalogIndex):
        self.index = index
    
    def get_text(self, identifier: str) -> LicenseText:
        """Return the name and body for ``identifier``.
        
        Raises:
            UnknownIdentifierError: if the identifier is not in the catalog
            TextUnavailableError: if the catalog has no body for the entry
        """
        entry = self.index.find_by_identifier(identifier)
        if entry is None:
            log.warning("Text requested for identifier outside the catalog: %r", identifier)
            raise UnknownIdentifierError(identifier)
        
        try:
            body = self.index.texts[entry.identifier]
        except KeyError:
            body = None
        
        if not isinstance(body, str) or not body:
            log.warning("Catalog entry %s has no license text", entry.identifier)
            raise TextUnavailableError(entry.identifier)
        
        return LicenseText(identifier=entry.identifier, name=entry.name, body=body)
