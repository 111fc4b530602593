"""Roster statistics: snapshots, rankings, and caching."""
from .models import StatsSnapshot, DimensionStats, RankedGroup
from .stats import compute_stats
from .cache import StatsCache, records_fingerprint
