"""
Pydantic schemas for the stats snapshot.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from roster.analytics.common import sanitize_for_json
from roster.config import DOMAIN_DIMENSION, GENDER_DIMENSION, TOP_GROUPS_DEFAULT


class RankedGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    count: int
    percentage: float


class DimensionStats(BaseModel):
    """Counts, percentages and ranking for one grouping dimension."""
    model_config = ConfigDict(frozen=True)

    dimension: str
    contributing: int                    # records that produced a key
    counts: dict[str, int]
    percentages: dict[str, float]
    ranking: tuple[RankedGroup, ...] = ()

    def top(self, k: int = TOP_GROUPS_DEFAULT) -> list[RankedGroup]:
        return list(self.ranking[:k])


class StatsSnapshot(BaseModel):
    """Immutable aggregate over one batch of records."""
    model_config = ConfigDict(frozen=True)

    total: int
    dimensions: dict[str, DimensionStats]

    def __contains__(self, dimension: str) -> bool:
        return dimension in self.dimensions

    def dimension(self, name: str) -> DimensionStats:
        try:
            return self.dimensions[name]
        except KeyError:
            raise KeyError(f"Dimension not in snapshot: {name}") from None

    def top(self, dimension: str, k: int = TOP_GROUPS_DEFAULT) -> list[RankedGroup]:
        """First k ranked groups; dashboards show the top 10 domains."""
        return self.dimension(dimension).top(k)

    # ------------------------------------------------------------------
    # Shortcuts for the two dimensions the dashboard always renders
    # ------------------------------------------------------------------

    @property
    def gender_counts(self) -> dict[str, int]:
        return self.dimension(GENDER_DIMENSION).counts

    @property
    def gender_percentages(self) -> dict[str, float]:
        return self.dimension(GENDER_DIMENSION).percentages

    @property
    def domains(self) -> list[RankedGroup]:
        return list(self.dimension(DOMAIN_DIMENSION).ranking)

    def to_dict(self) -> dict[str, Any]:
        return sanitize_for_json(self.model_dump())
