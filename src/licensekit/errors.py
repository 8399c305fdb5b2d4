"""Exception hierarchy for licensekit."""

from __future__ import annotations

from typing import Sequence


class LicenseError(Exception):
    """Base class for all licensekit errors."""
    pass


class CatalogLoadError(LicenseError):
    """Raised when the license catalog sources cannot be read or are inconsistent."""
    pass


class ConfigError(LicenseError):
    """Raised when configuration values are invalid."""
    pass


class EmptyIdentifierError(LicenseError):
    """Raised when a blank license identifier is submitted."""
    
    def __init__(self) -> None:
        super().__init__("License key cannot be empty")


class LicenseNotFoundError(LicenseError):
    """Raised when an identifier does not match any catalog entry."""
    
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f'License "{identifier}" not found in SPDX license list')


class AmbiguousIdentifierError(LicenseError):
    """Raised when several catalog entries match the same identifier."""
    
    def __init__(self, identifier: str, matches: Sequence[str]) -> None:
        self.identifier = identifier
        self.matches = tuple(matches)
        super().__init__(
            f'License "{identifier}" matches several catalog entries: '
            f'{", ".join(self.matches)}'
        )


class UnknownIdentifierError(LicenseError):
    """Raised when text is requested for an identifier outside the catalog."""
    
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f'License "{identifier}" is not in the catalog')


class TextUnavailableError(LicenseError):
    """Raised when a catalog entry has no license body registered."""
    
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f'License text for "{identifier}" not available')


class ProjectError(LicenseError):
    """Raised when license artifacts cannot be written to a project."""
    pass
