"""Tests for configuration loading."""

from pathlib import Path

import pytest

from licensekit.config import Settings, parse_manifest_value
from licensekit.errors import ConfigError
from licensekit.models import ManifestValue


class TestSettings:
    """Tests for Settings.from_env."""
    
    def test_defaults(self):
        """Test defaults with an empty environment."""
        settings = Settings.from_env({})
        
        assert settings.offline is False
        assert settings.cache_ttl_hours == 168
        assert settings.manifest_value == ManifestValue.NAME
    
    def test_environment_overrides(self, tmp_path):
        """Test every variable is honoured."""
        settings = Settings.from_env({
            "LICENSEKIT_CACHE_DIR": str(tmp_path),
            "LICENSEKIT_CACHE_TTL": "2",
            "LICENSEKIT_TIMEOUT": "5.5",
            "LICENSEKIT_OFFLINE": "yes",
            "LICENSEKIT_SPDX_URL": "https://mirror.example.com/json",
            "LICENSEKIT_MANIFEST_VALUE": "identifier",
        })
        
        assert settings.cache_dir == Path(tmp_path)
        assert settings.cache_ttl_hours == 2
        assert settings.timeout == 5.5
        assert settings.offline is True
        assert settings.spdx_url == "https://mirror.example.com/json"
        assert settings.manifest_value == ManifestValue.IDENTIFIER
    
    @pytest.mark.parametrize("key,value", [
        ("LICENSEKIT_CACHE_TTL", "soon"),
        ("LICENSEKIT_CACHE_TTL", "-1"),
        ("LICENSEKIT_TIMEOUT", "0"),
        ("LICENSEKIT_OFFLINE", "maybe"),
        ("LICENSEKIT_MANIFEST_VALUE", "spdx"),
    ])
    def test_invalid_values(self, key, value):
        """Test invalid values raise ConfigError."""
        with pytest.raises(ConfigError):
            Settings.from_env({key: value})


class TestManifestValue:
    """Tests for manifest value parsing."""
    
    def test_parse(self):
        """Test accepted spellings."""
        assert parse_manifest_value("name") == ManifestValue.NAME
        assert parse_manifest_value("Identifier") == ManifestValue.IDENTIFIER
        assert parse_manifest_value("id") == ManifestValue.IDENTIFIER
