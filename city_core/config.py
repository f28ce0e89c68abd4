# city_core/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple, Union

import streamlit as st
from streamlit.errors import StreamlitAPIException

# default data locations (served alongside the app)
DATA_CSV = Path("data") / "data.csv"
EVENTS_CSV = Path("data") / "events.csv"

PALETTE_VIVID = ("#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd", "#8c564b")
PALETTE_CATEGORY10 = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)


@dataclass(frozen=True)
class MetricDef:
    key: str
    column: str
    label: str
    axis_label: str
    color: str
    dash: str = "none"
    stroke_width: float = 3.0


@dataclass(frozen=True)
class Margin:
    top: int = 50
    right: int = 150
    bottom: int = 50
    left: int = 80


@dataclass(frozen=True)
class Padding:
    """Y-domain padding: [max(0, min * min_factor), max * max_factor]."""
    min_factor: float = 0.9
    max_factor: float = 1.1


@dataclass(frozen=True)
class DashboardProfile:
    name: str
    title: str
    metrics: Tuple[MetricDef, ...]
    palette: Tuple[str, ...]
    default_cities: Tuple[str, ...]
    default_metrics: Tuple[str, ...]
    width: int = 1000
    height: int = 500
    margin: Margin = field(default_factory=Margin)
    padding: Padding = field(default_factory=Padding)
    city_col: str = "City"
    year_col: str = "Year"

    @property
    def metric_keys(self) -> Tuple[str, ...]:
        return tuple(m.key for m in self.metrics)

    @property
    def primary_metric(self) -> str:
        return self.metrics[0].key

    def metric(self, key: str) -> MetricDef:
        for m in self.metrics:
            if m.key == key:
                return m
        raise ValueError(f"unknown metric {key!r} for profile {self.name!r}")


COST_OF_LIVING = MetricDef(
    key="costOfLiving",
    column="Cost of Living",
    label="Cost of Living",
    axis_label="Cost of Living Index",
    color="#4e79a7",
)
VIOLENT_CRIME_RATE = MetricDef(
    key="violentCrimeRate",
    column="Violent Crime Rate",
    label="Violent Crime Rate",
    axis_label="Violent Crime Rate",
    color="#e15759",
    dash="5,5",
)
CRIME_RATE = MetricDef(
    key="crimeRate",
    column="Crime Rate",
    label="Crime Rate",
    axis_label="Crime Rate",
    color="#e15759",
    dash="5,5",
)

PROFILES: Dict[str, DashboardProfile] = {
    "violent": DashboardProfile(
        name="violent",
        title="City Cost of Living and Violent Crime Rate (2014-2024)",
        metrics=(COST_OF_LIVING, VIOLENT_CRIME_RATE),
        palette=PALETTE_VIVID,
        default_cities=("New York City", "Houston"),
        default_metrics=("costOfLiving", "violentCrimeRate"),
        width=1000,
        height=500,
        margin=Margin(top=50, right=150, bottom=50, left=80),
    ),
    "crime": DashboardProfile(
        name="crime",
        title="The Cost of Living Alongside Crime Rates",
        metrics=(COST_OF_LIVING, CRIME_RATE),
        palette=PALETTE_CATEGORY10,
        default_cities=("New York City", "Houston"),
        default_metrics=("costOfLiving", "crimeRate"),
        width=800,
        height=400,
        margin=Margin(top=50, right=60, bottom=50, left=60),
    ),
}
DEFAULT_PROFILE = "violent"


def get_profile(name: str = DEFAULT_PROFILE) -> DashboardProfile:
    """Look up a built-in profile; KeyError for unknown names."""
    if name not in PROFILES:
        raise KeyError(f"unknown dashboard profile {name!r} (choose from {sorted(PROFILES)})")
    return PROFILES[name]


def _secret(key: str, default: Union[str, Path]) -> Union[str, Path]:
    # no secrets.toml is fine for local runs
    try:
        value = st.secrets.get(key)
    except (FileNotFoundError, StreamlitAPIException):
        return default
    return str(value).strip() if value else default


def data_source() -> Union[str, Path]:
    return _secret("CITY_DATA_CSV", DATA_CSV)


def events_source() -> Union[str, Path]:
    return _secret("EVENTS_CSV", EVENTS_CSV)
