"""Tests for catalog filtering and ranking."""

from licensekit.filter import CATEGORIES, CatalogFilter, collation_key
from licensekit.models import CatalogQuery, LicenseCategory, LicenseEntry


def _names(entries):
    return [entry.name for entry in entries]


class TestCatalogFilter:
    """Tests for CatalogFilter."""
    
    def test_empty_query_returns_everything(self, sample_catalog):
        """Test the default query keeps every entry."""
        result = CatalogFilter().filter(sample_catalog.all_entries(), CatalogQuery())
        
        assert len(result) == len(sample_catalog)
    
    def test_popular_first_then_alphabetical(self, sample_catalog):
        """Test popular entries precede the rest, each group sorted by name."""
        result = CatalogFilter().filter(sample_catalog.all_entries(), CatalogQuery("", "All"))
        popular = [e for e in result if e.popular]
        others = [e for e in result if not e.popular]
        
        assert result == popular + others
        assert _names(popular) == [
            "Apache License 2.0",
            "BSD 2-Clause License",
            "BSD 3-Clause License",
            "GNU General Public License v3.0",
            "ISC License",
            "MIT License",
            "Mozilla Public License 2.0",
            "The Unlicense",
        ]
        assert _names(others) == [
            "BSD Zero Clause License",
            "Creative Commons Zero v1.0 Universal",
            "GNU General Public License v2.0 only",
            "MIT No Attribution",
            "zlib License",
        ]
    
    def test_search_term(self, sample_catalog):
        """Test search matches name or identifier, case-insensitively."""
        result = CatalogFilter().filter(sample_catalog.all_entries(), CatalogQuery("mit"))
        keys = [e.identifier for e in result]
        
        assert "MIT" in keys
        assert "MIT-0" in keys
        for entry in result:
            assert "mit" in entry.name.lower() or "mit" in entry.identifier.lower()
        assert "Apache-2.0" not in keys
    
    def test_search_matches_identifier_only(self, sample_catalog):
        """Test an identifier substring absent from the name still matches."""
        result = CatalogFilter().filter(sample_catalog.all_entries(), CatalogQuery("0bsd"))
        
        assert [e.identifier for e in result] == ["0BSD"]
    
    def test_category(self, sample_catalog):
        """Test category filtering is exact."""
        result = CatalogFilter().filter(
            sample_catalog.all_entries(), CatalogQuery(category="Copyleft")
        )
        
        assert [e.identifier for e in result] == ["GPL-3.0-only"]
    
    def test_category_and_search(self, sample_catalog):
        """Test category and search combine."""
        result = CatalogFilter().filter(
            sample_catalog.all_entries(), CatalogQuery("bsd", "Permissive")
        )
        
        assert [e.identifier for e in result] == ["BSD-2-Clause", "BSD-3-Clause"]
    
    def test_other_category(self, sample_catalog):
        """Test canonical-only entries are reachable through Other."""
        result = CatalogFilter().filter(
            sample_catalog.all_entries(), CatalogQuery(category="Other")
        )
        
        assert all(not e.popular for e in result)
        assert len(result) == 5
    
    def test_no_matches(self, sample_catalog):
        """Test a query with no matches yields an empty list."""
        catalog_filter = CatalogFilter()
        
        assert catalog_filter.filter(sample_catalog.all_entries(), CatalogQuery("zzz")) == []
        assert catalog_filter.filter(
            sample_catalog.all_entries(), CatalogQuery(category="Proprietary")
        ) == []
    
    def test_idempotent(self, sample_catalog):
        """Test filtering twice gives identical output."""
        catalog_filter = CatalogFilter()
        query = CatalogQuery("license", "All")
        
        once = catalog_filter.filter(sample_catalog.all_entries(), query)
        twice = catalog_filter.filter(once, query)
        
        assert once == twice
        assert once == catalog_filter.filter(sample_catalog.all_entries(), query)
    
    def test_identical_names_ordered_by_identifier(self):
        """Test ties on display name fall back to identifier order."""
        entries = [
            LicenseEntry("Same-2", "Same License"),
            LicenseEntry("Same-1", "Same License"),
        ]
        
        result = CatalogFilter().filter(entries, CatalogQuery())
        
        assert [e.identifier for e in result] == ["Same-1", "Same-2"]
    
    def test_collation_ignores_case_and_accents(self):
        """Test the collation key sorts like a locale-aware comparison."""
        entries = [
            LicenseEntry("B", "beta License"),
            LicenseEntry("E", "Éclair License"),
            LicenseEntry("A", "Alpha License"),
            LicenseEntry("Z", "zeta License"),
        ]
        
        result = CatalogFilter().filter(entries, CatalogQuery())
        
        assert _names(result) == [
            "Alpha License", "beta License", "Éclair License", "zeta License",
        ]
        assert collation_key("Éclair")[0] == "eclair"
    
    def test_lowercase_before_uppercase(self):
        """Test names differing only in case put lowercase first."""
        entries = [
            LicenseEntry("Upper", "MIT License"),
            LicenseEntry("Lower", "mit license"),
        ]
        
        result = CatalogFilter().filter(entries, CatalogQuery())
        
        assert [e.identifier for e in result] == ["Lower", "Upper"]
        assert collation_key("a") < collation_key("A")


class TestCategories:
    """Tests for the category list."""
    
    def test_categories(self):
        """Test the category list starts with All."""
        assert CATEGORIES[0] == "All"
        assert LicenseCategory.WEAK_COPYLEFT.value in CATEGORIES
    
    def test_parse_category(self):
        """Test categories parse from value or name."""
        assert LicenseCategory.parse("weak copyleft") == LicenseCategory.WEAK_COPYLEFT
        assert LicenseCategory.parse("PUBLIC_DOMAIN") == LicenseCategory.PUBLIC_DOMAIN
