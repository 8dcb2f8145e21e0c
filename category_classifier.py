"""
Category classification module for herb recommendation service.
Maps extracted keywords onto a coarse health category and a severity label.
"""

from typing import Iterable, Sequence

from schemas import CategoryTerms, SymptomAnalysis

GENERAL_CATEGORY = "general"
MILD = "mild"
MODERATE = "moderate"


def is_loose_match(keyword: str, term: str) -> bool:
    """
    Bidirectional substring test shared by the classifier and the herb matcher.

    Deliberately loose so plurals and variants match ("headaches" ~ "headache"),
    at the cost of false positives such as "ear" ~ "fear" or "i" ~ "anxiety".
    """
    return keyword in term or term in keyword


def count_matches(keywords: Iterable[str], terms: Sequence[str]) -> int:
    """
    Count keywords that loosely match at least one term.

    Args:
        keywords: Extracted keywords
        terms: Association terms of one category

    Returns:
        Number of matching keywords
    """
    return sum(1 for keyword in keywords if any(is_loose_match(keyword, term) for term in terms))


class CategoryClassifier:
    """
    Picks the category whose terms match the most keywords.

    Categories are scanned in the order given; a later category only wins
    with a strictly greater count, so earlier categories take ties.
    """

    def __init__(self, categories: Sequence[CategoryTerms], max_keywords: int = 10,
                 moderate_threshold: int = 3):
        self.categories = tuple(categories)
        self.max_keywords = max_keywords
        self.moderate_threshold = moderate_threshold

    def classify(self, keywords: Sequence[str]) -> SymptomAnalysis:
        """
        Classify keywords into a category with severity.

        Args:
            keywords: Keywords from extract_keywords

        Returns:
            SymptomAnalysis with the winning category ("general" when nothing
            matches), "moderate" severity when the winning count exceeds the
            threshold, and the first max_keywords keywords
        """
        best_category = GENERAL_CATEGORY
        best_count = 0

        for category in self.categories:
            matches = count_matches(keywords, category.terms)
            if matches > best_count:
                best_count = matches
                best_category = category.name

        return SymptomAnalysis(
            category=best_category,
            severity=MODERATE if best_count > self.moderate_threshold else MILD,
            keywords=tuple(keywords[:self.max_keywords]),
        )
