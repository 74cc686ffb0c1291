"""Transformer module: derived metrics computed from scraped quarters."""

from screener_yoy.transformer.growth import (
    GROWTH_ROW_LENGTH,
    QUARTERS_SHOWN,
    UNAVAILABLE,
    GrowthValue,
    compute_yoy,
    growth_pct,
    prior_year_label,
)

__all__ = [
    "GROWTH_ROW_LENGTH",
    "QUARTERS_SHOWN",
    "UNAVAILABLE",
    "GrowthValue",
    "compute_yoy",
    "growth_pct",
    "prior_year_label",
]
