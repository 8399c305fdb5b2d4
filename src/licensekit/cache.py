"""Cache for SPDX license data."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from licensekit.log import get_logger

log = get_logger(__name__)


DEFAULT_CACHE_DIR = Path.home() / ".cache" / "licensekit"
DEFAULT_TTL_HOURS = 24 * 7


@dataclass
class CacheEntry:
    """A cached SPDX response."""
    key: str
    value: Any
    cached_at: str  # ISO format datetime
    
    def is_expired(self, ttl_hours: int = DEFAULT_TTL_HOURS) -> bool:
        """Check if cache entry has expired."""
        cached_time = datetime.fromisoformat(self.cached_at)
        expiry = cached_time + timedelta(hours=ttl_hours)
        return datetime.now() > expiry


class LicenseCache:
    """File-based JSON cache for license list and license text lookups."""
    
    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        ttl_hours: int = DEFAULT_TTL_HOURS,
        enabled: bool = True,
    ):
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self.ttl_hours = ttl_hours
        self.enabled = enabled
        
        if self.enabled:
            try:
                self.cache_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                log.warning("Disabling cache, cannot create %s: %s", self.cache_dir, e)
                self.enabled = False
    
    def _cache_key(self, key: str) -> str:
        """Generate a file-safe cache key."""
        return hashlib.sha256(key.encode()).hexdigest()[:16]
    
    def _cache_path(self, cache_key: str) -> Path:
        """Get cache file path for a key."""
        return self.cache_dir / f"{cache_key}.json"
    
    def get(self, key: str) -> Optional[Any]:
        """Get a cached value.

        Returns None if not cached or expired.
        """
        if not self.enabled:
            return None
        
        cache_path = self._cache_path(self._cache_key(key))
        
        if not cache_path.exists():
            return None
        
        try:
            data = json.loads(cache_path.read_text(encoding='utf-8'))
            entry = CacheEntry(**data)
            
            if entry.is_expired(self.ttl_hours):
                cache_path.unlink(missing_ok=True)
                return None
            
            return entry.value
        
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            log.debug("Dropping unreadable cache entry %s", cache_path)
            cache_path.unlink(missing_ok=True)
            return None
    
    def set(self, key: str, value: Any) -> None:
        """Cache a JSON-serializable value."""
        if not self.enabled:
            return
        
        cache_path = self._cache_path(self._cache_key(key))
        entry = CacheEntry(
            key=key,
            value=value,
            cached_at=datetime.now().isoformat(),
        )
        
        try:
            cache_path.write_text(
                json.dumps(asdict(entry), indent=2),
                encoding='utf-8'
            )
        except OSError as e:
            log.warning("Failed to write cache entry %s: %s", cache_path, e)
    
    def clear(self) -> int:
        """Clear all cached entries. Returns number of entries cleared."""
        if not self.enabled or not self.cache_dir.exists():
            return 0
        
        count = 0
        for cache_file in self.cache_dir.glob("*.json"):
            try:
                cache_file.unlink()
                count += 1
            except OSError as e:
                log.warning("Failed to remove %s: %s", cache_file, e)
        
        return count
    
    def clear_expired(self) -> int:
        """Clear only expired cache entries. Returns number cleared."""
        if not self.enabled or not self.cache_dir.exists():
            return 0
        
        count = 0
        for cache_file in self.cache_dir.glob("*.json"):
            try:
                data = json.loads(cache_file.read_text(encoding='utf-8'))
                entry = CacheEntry(**data)
                expired = entry.is_expired(self.ttl_hours)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError, OSError):
                expired = True
            
            if expired:
                try:
                    cache_file.unlink()
                    count += 1
                except OSError as e:
                    log.warning("Failed to remove %s: %s", cache_file, e)
        
        return count
    
    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        if not self.enabled or not self.cache_dir.exists():
            return {"enabled": False, "entries": 0, "size_bytes": 0}
        
        entries = list(self.cache_dir.glob("*.json"))
        total_size = sum(f.stat().st_size for f in entries if f.exists())
        
        return {
            "enabled": True,
            "entries": len(entries),
            "size_bytes": total_size,
            "cache_dir": str(self.cache_dir.absolute()),
            "ttl_hours": self.ttl_hours,
        }
