"""
Symptom analyzer module for herb recommendation service.
Combines keyword extraction, category classification, herb matching and
lifestyle advice into a single recommendation.

The analyzer is a pure function of its input and the reference tables it
was built with: no I/O, no shared mutable state, safe to call concurrently.
"""

import argparse
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from tabulate import tabulate

from category_classifier import CategoryClassifier
from config import configure_logging
from herb_matcher import HerbMatcher
from lifestyle_advisor import LifestyleAdvisor
from reference_data import get_reference_tables, load_reference_tables
from schemas import Recommendation, ReferenceTables
from symptom_extractor import extract_keywords


class SymptomAnalyzer:
    """
    Produces a Recommendation for free-text symptom input.
    """

    def __init__(self, tables: ReferenceTables):
        """
        Build the analyzer's components from the reference tables.

        Args:
            tables: Validated reference tables from reference_data
        """
        self.tables = tables
        self.classifier = CategoryClassifier(
            tables.categories,
            max_keywords=tables.meta.max_keywords,
            moderate_threshold=tables.meta.moderate_threshold,
        )
        self.matcher = HerbMatcher(
            tables.symptom_herbs,
            tables.fallback_herbs,
            limit=tables.meta.max_recommendations,
        )
        self.advisor = LifestyleAdvisor(tables.lifestyle)
        self.disclaimer = tables.meta.disclaimer

    def analyze(self, symptoms_text: Optional[str]) -> Recommendation:
        """
        Analyze symptom text and recommend herbs.

        Args:
            symptoms_text: Free-text symptom description (may be empty)

        Returns:
            Recommendation with analysis, 1-3 distinct herbs, disclaimer and
            lifestyle tips
        """
        keywords = extract_keywords(symptoms_text)
        analysis = self.classifier.classify(keywords)
        herbs = self.matcher.match(keywords)
        lifestyle = self.advisor.advise(analysis.category)

        logger.debug(
            "Analyzed {} keywords -> category={} severity={} herbs={}",
            len(keywords),
            analysis.category,
            analysis.severity,
            [h.herb_id for h in herbs],
        )

        return Recommendation(
            analysis=analysis,
            recommendations=herbs,
            disclaimer=self.disclaimer,
            lifestyle=lifestyle,
        )


def create_analyzer(artifacts_dir: Union[str, Path, None] = None) -> SymptomAnalyzer:
    """
    Create a SymptomAnalyzer.

    Args:
        artifacts_dir: Directory with reference tables; when omitted the
            process-wide tables are used

    Returns:
        Configured SymptomAnalyzer instance
    """
    if artifacts_dir is None:
        return SymptomAnalyzer(get_reference_tables())
    return SymptomAnalyzer(load_reference_tables(artifacts_dir))


@lru_cache(maxsize=1)
def _default_analyzer() -> SymptomAnalyzer:
    return create_analyzer()


def analyze_symptoms(symptoms_text: Optional[str]) -> Recommendation:
    """
    Convenience function to analyze text with the default reference tables.
    """
    return _default_analyzer().analyze(symptoms_text)


def print_recommendation(text: str, recommendation: Recommendation) -> None:
    analysis = recommendation.analysis
    print(f"\n📝 Symptoms: '{text}'")
    print(f"🎯 Category: {analysis.category} ({analysis.severity})")
    print(f"🔑 Keywords: {', '.join(analysis.keywords) or '-'}")

    table_data = [
        [herb.herb_id, herb.herb_name, herb.scientific_name, herb.reason, herb.dosage]
        for herb in recommendation.recommendations
    ]
    print(tabulate(table_data, headers=["ID", "Herb", "Scientific Name", "Reason", "Dosage"], tablefmt="grid"))

    print("Lifestyle:")
    for tip in recommendation.lifestyle:
        print(f"• {tip}")


def main(argv=None):
    """
    CLI entry point: analyze the given symptom texts, or a set of samples.
    """
    parser = argparse.ArgumentParser(description="Recommend Ayurvedic herbs for symptom descriptions")
    parser.add_argument("symptoms", nargs="*", help="Symptom descriptions to analyze")
    parser.add_argument("--artifacts-dir", default=None, help="Directory with reference tables")
    args = parser.parse_args(argv)

    configure_logging()

    analyzer = create_analyzer(args.artifacts_dir)

    samples = args.symptoms or [
        "I have a terrible headache and can't sleep",
        "Stomach bloating after every meal",
        "Persistent cough and sore throat",
        "",
    ]

    for text in samples:
        print_recommendation(text, analyzer.analyze(text))

    print(f"\n⚠️ {analyzer.disclaimer}")


if __name__ == "__main__":
    main()
