"""Data models for licensekit."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


SPDX_LICENSE_URL = "https://spdx.org/licenses/{identifier}.html"
ALL_CATEGORIES = "All"
UNLICENSED = "UNLICENSED"
DEFAULT_MANIFEST = "package.json"


class LicenseCategory(Enum):
    """License classification shown to users."""
    PERMISSIVE = "Permissive"
    COPYLEFT = "Copyleft"
    WEAK_COPYLEFT = "Weak Copyleft"
    PUBLIC_DOMAIN = "Public Domain"
    OTHER = "Other"
    
    @classmethod
    def parse(cls, value: str) -> "LicenseCategory":
        """Parse a category from its display value or enum name."""
        wanted = value.strip().lower()
        for category in cls:
            if wanted in (category.value.lower(), category.name.lower()):
                return category
        raise ValueError(f"Unknown license category: {value!r}")


class ManifestValue(Enum):
    """Which form of the license is persisted into a manifest."""
    NAME = "name"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class LicenseEntry:
    """One license in the catalog."""
    identifier: str
    name: str
    description: Optional[str] = None
    category: LicenseCategory = LicenseCategory.OTHER
    popular: bool = False
    
    @property
    def spdx_url(self) -> str:
        """Link to the license page on spdx.org."""
        return SPDX_LICENSE_URL.format(identifier=self.identifier)


@dataclass(frozen=True)
class LicenseText:
    """Full license body together with its display name."""
    identifier: str
    name: str
    body: str


@dataclass(frozen=True)
class CatalogQuery:
    """Search term and category used to filter the catalog."""
    search_term: str = ""
    category: str = ALL_CATEGORIES


@dataclass(frozen=True)
class ExistingLicenseSignal(ABC):
    """Result of looking for an existing license in a project."""
    
    @property
    def needs_license(self) -> bool:
        """True when nothing was found and a license should be added."""
        return False
    
    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary of the signal."""


@dataclass(frozen=True)
class NotFound(ExistingLicenseSignal):
    """No license file and no usable manifest field."""
    
    @property
    def needs_license(self) -> bool:
        return True
    
    @property
    def description(self) -> str:
        return "No license found"


@dataclass(frozen=True)
class FoundFile(ExistingLicenseSignal):
    """A license file is present in the project root."""
    filename: str
    
    @property
    def description(self) -> str:
        return f"Found license file: {self.filename}"


@dataclass(frozen=True)
class FoundManifestField(ExistingLicenseSignal):
    """The manifest declares a license."""
    value: str
    manifest: str = DEFAULT_MANIFEST
    
    @property
    def description(self) -> str:
        return f"Found license in {self.manifest}: {self.value}"
