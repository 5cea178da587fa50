"""
Content discovery services.
"""

from blimari.services.content.discovery_service import (
    DiscoveryService,
    normalize_sources,
    rank_by_rating,
)

__all__ = ["DiscoveryService", "normalize_sources", "rank_by_rating"]
