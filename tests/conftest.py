"""Shared fixtures for licensekit tests."""

import pytest

from licensekit.catalog import POPULAR_LICENSES, CatalogIndex


SAMPLE_CANONICAL = [
    {"identifier": "0BSD", "name": "BSD Zero Clause License"},
    {"identifier": "Apache-2.0", "name": "Apache License 2.0"},
    {"identifier": "GPL-2.0-only", "name": "GNU General Public License v2.0 only"},
    {"identifier": "GPL-3.0-only", "name": "GNU General Public License v3.0 only"},
    {"identifier": "MIT", "name": "MIT License"},
    {"identifier": "MIT-0", "name": "MIT No Attribution"},
    {"identifier": "Zlib", "name": "zlib License"},
    {"identifier": "CC0-1.0", "name": "Creative Commons Zero v1.0 Universal"},
]

SAMPLE_TEXTS = {
    "MIT": "MIT License\n\nCopyright (c) <year> <copyright holders>\n\nPermission is hereby granted...\n",
    "Apache-2.0": "Apache License\nVersion 2.0, January 2004\n",
    "GPL-3.0-only": "GNU GENERAL PUBLIC LICENSE\nVersion 3, 29 June 2007\n",
    "BSD-3-Clause": "Copyright (c) <year> <owner>.\n\nRedistribution and use...\n",
    "BSD-2-Clause": "Copyright (c) <year> <owner>\n\nRedistribution and use...\n",
    "MPL-2.0": "Mozilla Public License Version 2.0\n",
    "ISC": "ISC License\n\nCopyright (c) <year> <copyright holders>\n",
    "Unlicense": "This is free and unencumbered software released into the public domain.\n",
    "0BSD": "Copyright (C) <year> by <copyright holders>\n",
    "Zlib": "zlib License\n\n(C) <year> <copyright holders>\n",
    "CC0-1.0": "Creative Commons Legal Code\n\nCC0 1.0 Universal\n",
    "GPL-2.0-only": "GNU GENERAL PUBLIC LICENSE\nVersion 2, June 1991\n",
}


@pytest.fixture
def sample_catalog():
    """Catalog built from the curated list and a small fabricated SPDX list.

    MIT-0 deliberately has no text.
    """
    return CatalogIndex.load(POPULAR_LICENSES, SAMPLE_CANONICAL, dict(SAMPLE_TEXTS))
