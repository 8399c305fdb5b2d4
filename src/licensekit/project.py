"""Project filesystem probe and license output sink."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

from licensekit.errors import ProjectError
from licensekit.log import get_logger
from licensekit.models import DEFAULT_MANIFEST, LicenseText, ManifestValue

log = get_logger(__name__)


LICENSE_FILENAME = "LICENSE"
PACKAGE_JSON = "package.json"
PYPROJECT_TOML = "pyproject.toml"


class ManifestError(ProjectError):
    """Exception raised when a manifest cannot be parsed."""
    pass


@dataclass
class ProjectSnapshot:
    """What the probe found in a project root."""
    root: Path
    files: FrozenSet[str] = field(default_factory=frozenset)
    manifest_license: Optional[str] = None
    manifest_name: str = DEFAULT_MANIFEST


@dataclass
class WriteResult:
    """Files touched while applying a license."""
    license_path: Path
    manifest_path: Optional[Path] = None
    manifest_license: Optional[str] = None


class PackageJsonManifest:
    """Reads and updates the `license` field of package.json."""
    
    filename = PACKAGE_JSON
    
    def parse_license(self, content: str) -> Optional[str]:
        """Extract the license declaration from package.json content."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Failed to parse package.json: {e}")
        
        if not isinstance(data, dict):
            raise ManifestError("package.json must contain a JSON object")
        
        value = data.get("license")
        # Legacy form: {"type": "MIT", "url": "..."}
        if isinstance(value, dict):
            value = value.get("type")
        return value if isinstance(value, str) else None
    
    def update_license(self, content: str, value: str) -> str:
        """Return package.json content with its license field replaced."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Failed to parse package.json: {e}")
        
        if not isinstance(data, dict):
            raise ManifestError("package.json must contain a JSON object")
        
        data["license"] = value
        return json.dumps(data, indent=2, ensure_ascii=False)


class PyProjectManifest:
    """Reads the license declaration of pyproject.toml (PEP 621 and Poetry)."""
    
    filename = PYPROJECT_TOML
    
    def parse_license(self, content: str) -> Optional[str]:
        """Extract the license declaration from pyproject.toml content."""
        try:
            import tomllib
        except ImportError:
            import tomli as tomllib
        
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestError(f"Failed to parse TOML: {e}")
        
        value: Any = data.get("project", {}).get("license")
        if isinstance(value, dict):
            value = value.get("text")
        if value is None:
            value = data.get("tool", {}).get("poetry", {}).get("license")
        return value if isinstance(value, str) else None


MANIFESTS = (PackageJsonManifest, PyProjectManifest)


def list_project_files(root: Path) -> FrozenSet[str]:
    """Return the names of regular files directly inside ``root``."""
    root = Path(root)
    try:
        return frozenset(p.name for p in root.iterdir() if p.is_file())
    except OSError as e:
        raise ProjectError(f"Cannot list project directory {root}: {e}") from e


def read_manifest_license(root: Path) -> Dict[str, Optional[str]]:
    """Read the license field from the first manifest present in ``root``.

    Returns a dict with ``manifest`` (file name or None) and ``license``
    (declared value or None). Unreadable manifests are logged and treated
    as declaring nothing.
    """
    root = Path(root)
    
    for manifest_class in MANIFESTS:
        manifest = manifest_class()
        path = root / manifest.filename
        if not path.is_file():
            continue
        
        try:
            value = manifest.parse_license(path.read_text(encoding='utf-8'))
        except (ManifestError, OSError, UnicodeDecodeError) as e:
            log.warning("Ignoring unreadable manifest %s: %s", path, e)
            return {"manifest": manifest.filename, "license": None}
        
        return {"manifest": manifest.filename, "license": value}
    
    return {"manifest": None, "license": None}


def probe_project(root: Path) -> ProjectSnapshot:
    """Collect the file names and manifest license of a project root."""
    root = Path(root)
    files = list_project_files(root)
    manifest = read_manifest_license(root)
    
    return ProjectSnapshot(
        root=root,
        files=files,
        manifest_license=manifest["license"],
        manifest_name=manifest["manifest"] or DEFAULT_MANIFEST,
    )


def manifest_license_value(text: LicenseText, manifest_value: ManifestValue) -> str:
    """Pick the string written to the manifest's license field."""
    if manifest_value is ManifestValue.IDENTIFIER:
        return text.identifier
    return text.name


def write_license(
    root: Path,
    text: LicenseText,
    manifest_value: ManifestValue,
    overwrite: bool = False,
) -> WriteResult:
    """Write ``LICENSE`` and update package.json if the project has one.

    The body is written exactly as retrieved. pyproject.toml is never
    rewritten.

    Raises:
        ProjectError: if LICENSE exists and ``overwrite`` is False, or if
            any file cannot be written
    """
    root = Path(root)
    license_path = root / LICENSE_FILENAME
    
    if license_path.exists() and not overwrite:
        raise ProjectError(f"{license_path} already exists")
    
    try:
        license_path.write_text(text.body, encoding='utf-8', newline='')
    except OSError as e:
        raise ProjectError(f"Failed to write license file: {e}") from e
    log.info("Wrote %s (%s)", license_path, text.identifier)
    
    result = WriteResult(license_path=license_path)
    
    package_json = root / PACKAGE_JSON
    if package_json.is_file():
        value = manifest_license_value(text, manifest_value)
        manifest = PackageJsonManifest()
        try:
            updated = manifest.update_license(package_json.read_text(encoding='utf-8'), value)
            package_json.write_text(updated, encoding='utf-8')
        except (ManifestError, OSError) as e:
            raise ProjectError(f"Failed to update {package_json}: {e}") from e
        log.info("Set license in %s to %r", package_json, value)
        result.manifest_path = package_json
        result.manifest_license = value
    
    return result
