from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence, Tuple

from city_core.config import DashboardProfile


def _dedupe(items: Iterable[str]) -> Tuple[str, ...]:
    # de-dupe preserving order
    seen, uniq = set(), []
    for x in items:
        if x not in seen:
            seen.add(x)
            uniq.append(x)
    return tuple(uniq)


def toggle(items: Tuple[str, ...], x: str) -> Tuple[str, ...]:
    """
    Remove x if present (unless that would leave nothing), otherwise append it.
    """
    if x in items:
        if len(items) > 1:
            return tuple(i for i in items if i != x)
        return items
    return items + (x,)


@dataclass(frozen=True, eq=False)
class Selection:
    """
    Selected cities and metrics. The tuples keep display order; equality and
    hashing only look at membership.
    """
    cities: Tuple[str, ...]
    metrics: Tuple[str, ...]

    def __post_init__(self):
        cities = _dedupe(self.cities)
        metrics = _dedupe(self.metrics)
        if not cities:
            raise ValueError("Selection needs at least one city")
        if not metrics:
            raise ValueError("Selection needs at least one metric")
        object.__setattr__(self, "cities", cities)
        object.__setattr__(self, "metrics", metrics)

    def __eq__(self, other):
        if not isinstance(other, Selection):
            return NotImplemented
        return frozenset(self.cities) == frozenset(other.cities) and frozenset(self.metrics) == frozenset(other.metrics)

    def __hash__(self):
        return hash((frozenset(self.cities), frozenset(self.metrics)))

    def toggle_city(self, city: str) -> "Selection":
        return replace(self, cities=toggle(self.cities, city))

    def toggle_metric(self, metric: str) -> "Selection":
        return replace(self, metrics=toggle(self.metrics, metric))

    def has_city(self, city: str) -> bool:
        return city in self.cities

    def has_metric(self, metric: str) -> bool:
        return metric in self.metrics

    @classmethod
    def initial(cls, profile: DashboardProfile, available_cities: Sequence[str]) -> "Selection":
        """Profile defaults that exist in the data; first available city otherwise."""
        cities = [c for c in profile.default_cities if c in available_cities]
        if not cities:
            cities = list(available_cities[:1]) or list(profile.default_cities[:1])
        return cls(cities=tuple(cities), metrics=tuple(profile.default_metrics))
