"""Offline license catalog shipped inside the package.

The snapshot covers the most common SPDX licenses. Bodies are bundled for
every popular license and the main GPL family; the rest report their text as
unavailable until the live SPDX source is used.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Dict, List

from licensekit.catalog import POPULAR_LICENSES, CatalogIndex
from licensekit.errors import CatalogLoadError
from licensekit.log import get_logger

log = get_logger(__name__)


DATA_PACKAGE = "licensekit"
DATA_DIR = "data"
LIST_FILENAME = "licenses.json"
TEXTS_DIR = "texts"


def _data_root():
    return resources.files(DATA_PACKAGE).joinpath(DATA_DIR)


def read_bundled_list() -> List[Dict[str, str]]:
    """Read `{identifier, name}` records from the bundled license list."""
    try:
        raw = _data_root().joinpath(LIST_FILENAME).read_text(encoding="utf-8")
        data = json.loads(raw)
        return [
            {"identifier": item["licenseId"], "name": item["name"]}
            for item in data["licenses"]
            if not item.get("isDeprecatedLicenseId")
        ]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise CatalogLoadError(f"Failed to read bundled license list: {e}") from e


def read_bundled_texts() -> Dict[str, str]:
    """Read every bundled license body, keyed by identifier."""
    texts: Dict[str, str] = {}
    try:
        for item in _data_root().joinpath(TEXTS_DIR).iterdir():
            if not item.name.endswith(".txt"):
                continue
            identifier = item.name[: -len(".txt")]
            texts[identifier] = item.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(f"Failed to read bundled license texts: {e}") from e
    log.debug("Loaded %d bundled license texts", len(texts))
    return texts


def load_bundled_catalog() -> CatalogIndex:
    """Build a catalog from the bundled snapshot."""
    return CatalogIndex.load(POPULAR_LICENSES, read_bundled_list(), read_bundled_texts())
