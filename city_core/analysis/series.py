from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from city_core.analysis.selection import Selection
from city_core.loaders.city_csv import Observation


@dataclass(frozen=True)
class CitySeries:
    """One city's observations in ascending year order."""
    city: str
    observations: Tuple[Observation, ...]

    @property
    def years(self) -> List[int]:
        return [o.year for o in self.observations]

    def values(self, metric: str) -> List[float]:
        return [o.value(metric) for o in self.observations]

    def __len__(self) -> int:
        return len(self.observations)


def all_cities(observations: Iterable[Observation]) -> List[str]:
    """Distinct cities in first-seen order."""
    return list(dict.fromkeys(o.city for o in observations))


def group_by_city(observations: Iterable[Observation]) -> List[CitySeries]:
    groups: Dict[str, List[Observation]] = {}
    for o in observations:
        groups.setdefault(o.city, []).append(o)
    return [
        CitySeries(city, tuple(sorted(obs, key=lambda o: o.year)))
        for city, obs in groups.items()
    ]


def filtered_observations(observations: Sequence[Observation], selection: Selection) -> List[Observation]:
    return [o for o in observations if selection.has_city(o.city)]


def filter_series(observations: Sequence[Observation], selection: Selection) -> List[CitySeries]:
    """
    Series for the selected cities, in selection order.
    Selected names with no data give no series.
    """
    by_city = {s.city: s for s in group_by_city(filtered_observations(observations, selection))}
    return [by_city[c] for c in selection.cities if c in by_city]
