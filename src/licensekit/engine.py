"""High-level engine used by front ends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Optional

from licensekit.catalog import CatalogIndex
from licensekit.detect import ExistingLicenseDetector
from licensekit.errors import LicenseError
from licensekit.filter import CatalogFilter
from licensekit.models import (
    ALL_CATEGORIES,
    DEFAULT_MANIFEST,
    CatalogQuery,
    ExistingLicenseSignal,
    LicenseEntry,
    LicenseText,
)
from licensekit.resolve import Resolver
from licensekit.text import TextProvider


@dataclass(frozen=True)
class Selection:
    """Outcome of turning a raw license key into license text."""
    raw: str
    text: Optional[LicenseText] = None
    error: Optional[LicenseError] = None
    
    @property
    def ok(self) -> bool:
        return self.text is not None
    
    @property
    def message(self) -> str:
        """Text to show the user for a failed selection."""
        return str(self.error) if self.error else ""


class LicenseEngine:
    """Wire the catalog, resolver, text provider, detector and filter together.
    
    Front ends keep their own state; every method here takes its inputs
    explicitly and returns plain values.
    """
    
    def __init__(self, index: CatalogIndex):
        self.index = index
        self.resolver = Resolver(index)
        self.texts = TextProvider(index)
        self.catalog_filter = CatalogFilter()
    
    def check(
        self,
        project_files: AbstractSet[str],
        manifest_license: Optional[str] = None,
        manifest_name: str = DEFAULT_MANIFEST,
    ) -> ExistingLicenseSignal:
        """Run existing-license detection."""
        detector = ExistingLicenseDetector(manifest_name=manifest_name)
        return detector.detect(project_files, manifest_license)
    
    def candidates(
        self,
        search_term: str = "",
        category: str = ALL_CATEGORIES,
    ) -> List[LicenseEntry]:
        """Filtered and ranked catalog entries."""
        query = CatalogQuery(search_term=search_term, category=category)
        return self.catalog_filter.filter(self.index.all_entries(), query)
    
    def popular(self) -> List[LicenseEntry]:
        return self.index.popular()
    
    def suggestions(self) -> List[str]:
        return self.index.identifiers()
    
    def select(self, raw: str) -> Selection:
        """Resolve ``raw`` and fetch its text, reporting failures as values."""
        try:
            identifier = self.resolver.resolve(raw)
            text = self.texts.get_text(identifier)
        except LicenseError as e:
            return Selection(raw=raw, error=e)
        return Selection(raw=raw, text=text)
