"""
Herb Matcher module for herb recommendation service.
Maps keywords onto the static symptom-herb table and produces a short,
deduplicated list of herb recommendations.
"""

from typing import List, Sequence, Tuple

from category_classifier import is_loose_match
from schemas import HerbRecommendation, SymptomHerbs


class HerbMatcher:
    """
    Rule-based matcher from keywords to herbs.
    Falls back to a fixed pair of general-wellness herbs when nothing matches.
    """

    def __init__(self, symptom_herbs: Sequence[SymptomHerbs],
                 fallback_herbs: Sequence[HerbRecommendation], limit: int = 3):
        """
        Initialize herb matcher with its reference tables.

        Args:
            symptom_herbs: Ordered symptom key -> herbs table
            fallback_herbs: Herbs returned when no symptom key matches
            limit: Maximum number of distinct herbs to return
        """
        self.symptom_herbs = tuple(symptom_herbs)
        self.fallback_herbs = tuple(fallback_herbs)
        self.limit = limit

    def collect_matches(self, keywords: Sequence[str]) -> List[HerbRecommendation]:
        """
        Gather every herb listed under a symptom key matching any keyword.

        Args:
            keywords: Extracted keywords

        Returns:
            Herbs in discovery order (keyword order, then table order),
            duplicates included
        """
        matches = []
        for keyword in keywords:
            for entry in self.symptom_herbs:
                if is_loose_match(keyword, entry.symptom):
                    matches.extend(entry.herbs)
        return matches

    def match(self, keywords: Sequence[str]) -> Tuple[HerbRecommendation, ...]:
        """
        Recommend up to `limit` distinct herbs for the keywords.

        The first occurrence of each herb id wins, so the reason and dosage
        come from the first symptom key that matched it.

        Args:
            keywords: Extracted keywords

        Returns:
            Between 1 and `limit` herbs, unique by herb id
        """
        unique = {}
        for herb in self.collect_matches(keywords):
            if herb.herb_id not in unique:
                unique[herb.herb_id] = herb
                if len(unique) == self.limit:
                    break

        if not unique:
            return self.fallback_herbs

        return tuple(unique.values())
