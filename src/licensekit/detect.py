"""Detect whether a project already carries a license."""

from __future__ import annotations

from typing import AbstractSet, Optional

from licensekit.log import get_logger
from licensekit.models import (
    DEFAULT_MANIFEST,
    UNLICENSED,
    ExistingLicenseSignal,
    FoundFile,
    FoundManifestField,
    NotFound,
)

log = get_logger(__name__)


# Checked in this order, case-sensitively
LICENSE_FILE_CANDIDATES = (
    "LICENSE",
    "LICENSE.md",
    "LICENSE.txt",
    "license",
    "license.md",
    "license.txt",
)


def _usable_manifest_value(value: object) -> Optional[str]:
    """Return the manifest license value if it declares a real license."""
    if not isinstance(value, str):
        return None
    if not value or value == UNLICENSED:
        return None
    return value


class ExistingLicenseDetector:
    """Decide whether a project needs a license.
    
    A license file in the project root wins over a manifest declaration,
    since manifest fields are often stale placeholders. Only file names are
    considered: a file called ``LICENSE`` with arbitrary content counts.
    The detector performs no I/O and never raises.
    """
    
    def __init__(self, manifest_name: str = DEFAULT_MANIFEST):
        self.manifest_name = manifest_name
    
    def detect(
        self,
        project_files: AbstractSet[str],
        manifest_license: Optional[str] = None,
    ) -> ExistingLicenseSignal:
        """Return the strongest license signal found in the project."""
        files = project_files or frozenset()
        manifest_value = _usable_manifest_value(manifest_license)
        
        for candidate in LICENSE_FILE_CANDIDATES:
            if candidate in files:
                if manifest_value is not None:
                    log.info(
                        "Ignoring %s license %r in favour of %s",
                        self.manifest_name, manifest_value, candidate,
                    )
                return FoundFile(candidate)
        
        if manifest_value is not None:
            return FoundManifestField(manifest_value, manifest=self.manifest_name)
        
        return NotFound()
