"""Tests for the license engine facade."""

from licensekit.engine import LicenseEngine
from licensekit.errors import (
    EmptyIdentifierError,
    LicenseNotFoundError,
    TextUnavailableError,
)
from licensekit.models import FoundFile, NotFound


class TestLicenseEngine:
    """Tests for LicenseEngine."""
    
    def test_select_success(self, sample_catalog):
        """Test a valid key yields license text."""
        selection = LicenseEngine(sample_catalog).select("apache-2.0")
        
        assert selection.ok
        assert selection.text.identifier == "Apache-2.0"
        assert selection.text.name == "Apache License 2.0"
        assert selection.error is None
    
    def test_select_empty(self, sample_catalog):
        """Test blank input is reported as a value, not raised."""
        selection = LicenseEngine(sample_catalog).select("  ")
        
        assert not selection.ok
        assert isinstance(selection.error, EmptyIdentifierError)
        assert selection.message == "License key cannot be empty"
    
    def test_select_not_found(self, sample_catalog):
        """Test unknown keys are reported with the input echoed."""
        selection = LicenseEngine(sample_catalog).select("NotARealLicense123")
        
        assert isinstance(selection.error, LicenseNotFoundError)
        assert "NotARealLicense123" in selection.message
    
    def test_select_text_unavailable(self, sample_catalog):
        """Test missing bodies are reported as a distinct error."""
        selection = LicenseEngine(sample_catalog).select("mit-0")
        
        assert isinstance(selection.error, TextUnavailableError)
    
    def test_check(self, sample_catalog):
        """Test detection through the engine."""
        engine = LicenseEngine(sample_catalog)
        
        assert engine.check({"LICENSE"}, "MIT") == FoundFile("LICENSE")
        assert engine.check(set(), "UNLICENSED") == NotFound()
    
    def test_candidates(self, sample_catalog):
        """Test candidates are filtered and ranked."""
        engine = LicenseEngine(sample_catalog)
        
        result = engine.candidates("gpl")
        
        assert [e.identifier for e in result] == ["GPL-3.0-only", "GPL-2.0-only"]
        assert engine.candidates(category="Public Domain")[0].identifier == "Unlicense"
    
    def test_suggestions_and_popular(self, sample_catalog):
        """Test suggestion and popular lists."""
        engine = LicenseEngine(sample_catalog)
        
        assert engine.suggestions() == sample_catalog.identifiers()
        assert len(engine.popular()) == 8
