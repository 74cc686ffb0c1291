"""Year-over-year growth for the last six published quarters.

Quarters are matched by exact label: the prior-year counterpart of
``"Mar 2024"`` is ``"Mar 2023"``. The result is always twelve values,
``[sales, profit]`` per quarter, oldest first, front-padded with
:data:`UNAVAILABLE` when fewer than six quarters exist.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from screener_yoy.scraper.quarterly import QuarterObservation

__all__ = [
    "GROWTH_ROW_LENGTH",
    "QUARTERS_SHOWN",
    "UNAVAILABLE",
    "GrowthValue",
    "compute_yoy",
    "growth_pct",
    "prior_year_label",
]

UNAVAILABLE = "-"
QUARTERS_SHOWN = 6
GROWTH_ROW_LENGTH = QUARTERS_SHOWN * 2

GrowthValue = float | str


def prior_year_label(label: str) -> str | None:
    """Return the same-month label one year earlier.

    Parameters
    ----------
    label : str
        Quarter label in ``"<Month> <Year>"`` form, e.g. ``"Jun 2024"``.

    Returns
    -------
    str | None
        ``"Jun 2023"`` for ``"Jun 2024"``; ``None`` when the label does not
        split on a single space into a month and an integer year.
    """
    parts = label.split(" ")
    if len(parts) < 2:
        return None
    month, year_str = parts[0], parts[1]
    try:
        year = int(year_str)
    except ValueError:
        return None
    return f"{month} {year - 1}"


def growth_pct(current: float, prior: float) -> GrowthValue:
    """Percentage change from ``prior`` to ``current``, rounded to 2 decimals.

    The denominator is ``abs(prior)`` so growth from a loss keeps the sign of
    the change. A zero prior value yields :data:`UNAVAILABLE`.
    """
    if prior == 0:
        return UNAVAILABLE
    value = (current - prior) / abs(prior) * 100
    if not math.isfinite(value):
        return UNAVAILABLE
    return round(value, 2)


def compute_yoy(quarters: Sequence[QuarterObservation]) -> list[GrowthValue]:
    """Compute sales and profit YOY growth for the last six quarters.

    Parameters
    ----------
    quarters : Sequence[QuarterObservation]
        Observations in source (chronological) order. Not reordered or
        deduplicated; when a label repeats, its last occurrence is the one
        used as a prior-year reference.

    Returns
    -------
    list[GrowthValue]
        Exactly :data:`GROWTH_ROW_LENGTH` values.

    Examples
    --------
    >>> from screener_yoy.scraper.quarterly import QuarterObservation
    >>> compute_yoy([QuarterObservation("Mar 2022", 100, 10), QuarterObservation("Mar 2023", 120, 8)])[-2:]
    [20.0, -20.0]
    """
    index_by_label = {q.label: idx for idx, q in enumerate(quarters)}

    values: list[GrowthValue] = []
    for quarter in quarters[-QUARTERS_SHOWN:]:
        prior_label = prior_year_label(quarter.label)
        prior_idx = index_by_label.get(prior_label) if prior_label is not None else None

        if prior_idx is None:
            values.extend([UNAVAILABLE, UNAVAILABLE])
            continue

        prior = quarters[prior_idx]
        values.append(growth_pct(quarter.sales, prior.sales))
        values.append(growth_pct(quarter.profit, prior.profit))

    padding = [UNAVAILABLE] * (GROWTH_ROW_LENGTH - len(values))
    return padding + values
