"""
Roster statistics: group counts, percentages and rankings per dimension.

Dimensions:
  gender        normalized to Male / Female / Other / Unknown
  email_domain  lower-cased text after the first '@'; emailless records skipped
  <any field>   trimmed field value; blank values group under Unknown
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

import pandas as pd

from roster.analytics.common import pct_of_total
from roster.analytics.models import DimensionStats, RankedGroup, StatsSnapshot
from roster.config import DEFAULT_DIMENSIONS, DOMAIN_DIMENSION, GENDER_DIMENSION
from roster.data.normalize import email_domains, normalize_genders, text_keys

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _records_frame(records: Iterable[Mapping]) -> pd.DataFrame:
    """Copy records into an object-dtype frame so values are never coerced."""
    return pd.DataFrame([dict(r) for r in records], dtype=object)


def _column(df: pd.DataFrame, name: str) -> pd.Series:
    if name in df.columns:
        return df[name]
    return pd.Series([None] * len(df), index=df.index, dtype=object)


def _grouping_keys(df: pd.DataFrame, dimension: str) -> pd.Series | None:
    """Grouping key per contributing record, or None to omit the dimension."""
    if dimension == GENDER_DIMENSION:
        return normalize_genders(_column(df, GENDER_DIMENSION))
    if dimension == DOMAIN_DIMENSION:
        return email_domains(_column(df, "email"))
    if dimension not in df.columns:
        return None
    return text_keys(df[dimension])


def dimension_stats(dimension: str, keys: pd.Series) -> DimensionStats:
    """Count, rank and percentage one Series of grouping keys.

    Ranking is count descending, then key ascending.
    """
    contributing = len(keys)
    grouped = (
        keys.astype(str)
        .value_counts()
        .rename_axis("key")
        .reset_index(name="count")
        .sort_values(["count", "key"], ascending=[False, True], kind="mergesort")
    )

    ranking = []
    for _, r in grouped.iterrows():
        count = int(r["count"])
        ranking.append(RankedGroup(
            key=str(r["key"]),
            count=count,
            percentage=pct_of_total(count, contributing),
        ))

    return DimensionStats(
        dimension=dimension,
        contributing=contributing,
        counts={g.key: g.count for g in ranking},
        percentages={g.key: g.percentage for g in ranking},
        ranking=tuple(ranking),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_stats(
    records: Iterable[Mapping],
    dimensions: Sequence[str] | None = None,
) -> StatsSnapshot:
    """Aggregate records into a frozen StatsSnapshot.

    Defaults to gender and email_domain. A free-text dimension whose field is
    absent from every record is left out of the snapshot. Never raises for
    malformed values; the input is not mutated.
    """
    dims = list(dict.fromkeys(dimensions)) if dimensions else list(DEFAULT_DIMENSIONS)
    df = _records_frame(records)

    result = {}
    for dim in dims:
        keys = _grouping_keys(df, dim)
        if keys is None:
            logger.debug("Dimension %r absent from every record; omitted", dim)
            continue
        result[dim] = dimension_stats(dim, keys)

    logger.debug("Computed stats over %d records for %s", len(df), list(result))
    return StatsSnapshot(total=len(df), dimensions=result)
