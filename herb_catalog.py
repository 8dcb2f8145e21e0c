"""
Herb catalog module for herb recommendation service.
Read-only browsing and search over the published herbs, with fuzzy
matching on plant names for typo tolerance.
"""

from typing import List, Optional, Sequence

from rapidfuzz import fuzz, utils

from schemas import CatalogHerb


class HerbCatalog:
    """
    In-memory view of the herb catalog reference table.
    Only published herbs are visible.
    """

    def __init__(self, herbs: Sequence[CatalogHerb], fuzzy_threshold: float = 85):
        """
        Initialize the catalog.

        Args:
            herbs: Catalog entries
            fuzzy_threshold: Minimum rapidfuzz partial ratio for a fuzzy hit
        """
        self.herbs = tuple(sorted((h for h in herbs if h.is_published), key=lambda h: h.plant_name.lower()))
        self._by_id = {h.id: h for h in self.herbs}
        self.fuzzy_threshold = fuzzy_threshold

    def all(self) -> List[CatalogHerb]:
        return list(self.herbs)

    def get(self, herb_id: int) -> Optional[CatalogHerb]:
        return self._by_id.get(herb_id)

    def _matches_search(self, herb: CatalogHerb, query: str) -> bool:
        """
        Substring match on plant or scientific name, else fuzzy match on the plant name.
        """
        plant_name = herb.plant_name.lower()
        if query in plant_name or query in herb.scientific_name.lower():
            return True

        # Very short queries produce too many fuzzy hits
        if len(query) < 3:
            return False

        score = fuzz.partial_ratio(query, plant_name, processor=utils.default_process)
        return score >= self.fuzzy_threshold

    def search(self, search: Optional[str] = None, category: Optional[str] = None) -> List[CatalogHerb]:
        """
        Search published herbs.

        Args:
            search: Optional name query (case-insensitive, typo tolerant)
            category: Optional exact category filter (case-insensitive)

        Returns:
            Matching herbs sorted by plant name
        """
        results = self.herbs

        query = (search or "").strip().lower()
        if query:
            results = [h for h in results if self._matches_search(h, query)]

        wanted = (category or "").strip().lower()
        if wanted:
            results = [h for h in results if (h.category or "").lower() == wanted]

        return list(results)
