# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .aggregator import PlaylistAggregator

__all__ = [
    "PlaylistAggregator",
]
