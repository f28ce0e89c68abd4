from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping

import numpy as np
import pandas as pd
import requests

from city_core.config import DashboardProfile
from city_core.loaders.data_io import Source, read_csv_resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    """One (city, year) row. Identity is (city, year); values map metric key -> float."""
    city: str
    year: int
    values: Mapping[str, float] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __reduce__(self):
        # mappingproxy does not pickle (st.cache_data pickles results)
        return (Observation, (self.city, self.year, dict(self.values)))

    def value(self, metric: str) -> float:
        return self.values[metric]


def _as_year(raw: pd.Series) -> pd.Series:
    """Numeric year or NaN when missing / non-numeric / not integral."""
    y = pd.to_numeric(raw.str.strip(), errors="coerce")
    return y.where(np.isfinite(y) & (y == np.floor(y)))


def _as_number(raw: pd.Series) -> pd.Series:
    v = pd.to_numeric(raw.str.strip(), errors="coerce")
    return v.where(np.isfinite(v))


def parse_city_rows(frame: pd.DataFrame, profile: DashboardProfile) -> List[Observation]:
    """
    Turn raw CSV text columns into Observations, in file order.
    Rows with a blank city, a missing/invalid year or a non-numeric metric are
    dropped and logged. A missing required column raises KeyError.
    """
    required = [profile.city_col, profile.year_col, *(m.column for m in profile.metrics)]
    missing = [c for c in required if c not in frame.columns]
    if missing:
        raise KeyError(f"CSV is missing required column(s): {missing}")

    d = frame[required].astype(str)
    city = d[profile.city_col].str.strip()
    year = _as_year(d[profile.year_col])
    metrics = {m.key: _as_number(d[m.column]) for m in profile.metrics}

    out: List[Observation] = []
    for i in range(len(d)):
        row_no = i + 2  # header is line 1
        if not city.iat[i]:
            logger.warning("Dropping row %d: missing city", row_no)
            continue
        if pd.isna(year.iat[i]):
            logger.warning("Dropping row %d (%s): invalid year %r", row_no, city.iat[i], d[profile.year_col].iat[i])
            continue
        bad = [m.column for m in profile.metrics if pd.isna(metrics[m.key].iat[i])]
        if bad:
            logger.warning(
                "Dropping row %d (%s %d): non-numeric %s",
                row_no, city.iat[i], int(year.iat[i]), ", ".join(bad),
            )
            continue
        out.append(
            Observation(
                city=city.iat[i],
                year=int(year.iat[i]),
                values={k: float(s.iat[i]) for k, s in metrics.items()},
            )
        )

    dropped = len(d) - len(out)
    if dropped:
        logger.info("Parsed %d observations (%d rows dropped)", len(out), dropped)
    return out


def load_city_observations(source: Source, profile: DashboardProfile) -> List[Observation]:
    """
    Fetch + parse the city CSV. Whole-resource failures are logged and give [],
    which the pages treat as "still loading".
    """
    try:
        frame = read_csv_resource(source)
        return parse_city_rows(frame, profile)
    except (OSError, UnicodeDecodeError, requests.RequestException, pd.errors.ParserError, pd.errors.EmptyDataError, KeyError):
        logger.error("Failed to load city data from %s", source, exc_info=True)
        return []
