"""SPDX license-list-data client."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional

import httpx

from licensekit.cache import LicenseCache
from licensekit.catalog import POPULAR_LICENSES, CatalogIndex
from licensekit.errors import CatalogLoadError, LicenseError
from licensekit.log import get_logger

log = get_logger(__name__)


SPDX_DATA_URL = "https://raw.githubusercontent.com/spdx/license-list-data/main/json"
DEFAULT_TIMEOUT = 30.0


class SpdxError(LicenseError):
    """Exception raised for SPDX data fetch errors."""
    pass


class SpdxClient:
    """Client for the published SPDX license list and license texts."""
    
    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = SPDX_DATA_URL,
        cache: Optional[LicenseCache] = None,
    ):
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self._client: Optional[httpx.Client] = None
    
    def __enter__(self) -> "SpdxClient":
        self._client = httpx.Client(timeout=self.timeout, follow_redirects=True)
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
    
    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None
    
    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, follow_redirects=True)
        return self._client
    
    def _get_json(self, path: str) -> Optional[Any]:
        """GET a JSON document below the base URL; None on 404."""
        url = f"{self.base_url}/{path}"
        log.debug("Fetching %s", url)
        
        try:
            response = self.client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise SpdxError(f"Timed out fetching {url}") from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise SpdxError(f"SPDX data error: {e}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise SpdxError(f"Failed to fetch {url}: {e}") from e
    
    def fetch_license_list(self) -> List[Dict[str, str]]:
        """Return `{identifier, name}` records for non-deprecated licenses."""
        cache_key = f"{self.base_url}/licenses.json"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                try:
                    return self._check_records(cached)
                except SpdxError as e:
                    log.warning("Ignoring malformed cached license list: %s", e)
        
        data = self._get_json("licenses.json")
        if data is None:
            raise SpdxError("SPDX license list not found")
        
        records = self._parse_license_list(data)
        if self.cache is not None:
            self.cache.set(cache_key, records)
        return records
    
    def _parse_license_list(self, data: Any) -> List[Dict[str, str]]:
        """Extract identifier/name pairs from licenses.json.

        Raises:
            SpdxError: if the document does not have the licenses.json shape
        """
        if not isinstance(data, dict):
            raise SpdxError("SPDX license list is not a JSON object")
        
        licenses = data.get("licenses", [])
        if not isinstance(licenses, list):
            raise SpdxError('SPDX license list "licenses" is not an array')
        
        records = []
        for item in licenses:
            if not isinstance(item, dict):
                raise SpdxError(f"Malformed SPDX license record: {item!r}")
            identifier = item.get("licenseId")
            name = item.get("name")
            if not identifier or not name:
                continue
            if not isinstance(identifier, str) or not isinstance(name, str):
                raise SpdxError(f"Malformed SPDX license record: {item!r}")
            if item.get("isDeprecatedLicenseId"):
                continue
            records.append({"identifier": identifier, "name": name})
        return records
    
    def _check_records(self, records: Any) -> List[Dict[str, str]]:
        """Validate records read back from the cache."""
        if not isinstance(records, list):
            raise SpdxError("cached license records are not a list")
        for record in records:
            if not (
                isinstance(record, dict)
                and isinstance(record.get("identifier"), str)
                and isinstance(record.get("name"), str)
            ):
                raise SpdxError(f"Malformed cached license record: {record!r}")
        return records
    
    def fetch_license_text(self, identifier: str) -> Optional[str]:
        """Return the license body for ``identifier``, or None if SPDX has none."""
        cache_key = f"{self.base_url}/details/{identifier}.json"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if isinstance(cached, str) and cached:
                return cached
        
        data = self._get_json(f"details/{identifier}.json")
        if data is None:
            return None
        if not isinstance(data, dict):
            raise SpdxError(f"SPDX details for {identifier} is not a JSON object")
        
        body = data.get("licenseText")
        if not isinstance(body, str) or not body:
            return None
        
        if self.cache is not None:
            self.cache.set(cache_key, body)
        return body


class SpdxTextSource(Mapping[str, str]):
    """Read-only identifier-to-body mapping that fetches texts on first use.

    Failed fetches surface as missing keys so callers see the entry as having
    no text available.
    """
    
    def __init__(self, client: SpdxClient, identifiers: List[str]):
        self._client = client
        self._identifiers = list(identifiers)
        self._known = set(self._identifiers)
        self._bodies: Dict[str, str] = {}
    
    def __getitem__(self, identifier: str) -> str:
        if identifier in self._bodies:
            return self._bodies[identifier]
        if identifier not in self._known:
            raise KeyError(identifier)
        
        try:
            body = self._client.fetch_license_text(identifier)
        except SpdxError as e:
            log.warning("Could not fetch text for %s: %s", identifier, e)
            raise KeyError(identifier) from e
        
        if body is None:
            raise KeyError(identifier)
        self._bodies[identifier] = body
        return body
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._identifiers)
    
    def __len__(self) -> int:
        return len(self._identifiers)


def load_spdx_catalog(client: SpdxClient) -> CatalogIndex:
    """Build a catalog from the live SPDX list with lazily fetched texts.

    Raises:
        CatalogLoadError: if the license list cannot be fetched or parsed
    """
    try:
        records = client.fetch_license_list()
    except SpdxError as e:
        raise CatalogLoadError(f"Could not load SPDX license list: {e}") from e
    
    identifiers = [entry.identifier for entry in POPULAR_LICENSES]
    seen = set(identifiers)
    identifiers += [r["identifier"] for r in records if r["identifier"] not in seen]
    texts = SpdxTextSource(client, identifiers)
    return CatalogIndex.load(POPULAR_LICENSES, records, texts)
