"""
Lifestyle advice lookup for herb recommendation service.
"""

from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from category_classifier import GENERAL_CATEGORY


class LifestyleAdvisor:
    """
    Returns the fixed lifestyle tips for a category, or the general tips
    for categories without an entry.
    """

    def __init__(self, lifestyle_map: Mapping[str, Sequence[str]]):
        if GENERAL_CATEGORY not in lifestyle_map:
            raise ValueError(f"Lifestyle map needs a '{GENERAL_CATEGORY}' entry")
        self.lifestyle_map = MappingProxyType({k: tuple(v) for k, v in lifestyle_map.items()})

    def advise(self, category: str) -> Tuple[str, ...]:
        return self.lifestyle_map.get(category, self.lifestyle_map[GENERAL_CATEGORY])
