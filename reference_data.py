"""
Reference data module for herb recommendation service.
Loads the static lookup tables (symptom categories, symptom-herb map,
fallback herbs, lifestyle tips, herb catalog, analyzer meta) from JSON
artifacts and validates them once at startup.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

from loguru import logger
from pydantic import ValidationError

from category_classifier import GENERAL_CATEGORY
from config import get_settings
from schemas import (
    AnalyzerMeta,
    CatalogHerb,
    CategoryTerms,
    HerbRecommendation,
    ReferenceTables,
    SymptomHerbs,
)

CATEGORIES_FILE = "symptom_categories.json"
SYMPTOM_HERBS_FILE = "symptom_herb_map.json"
FALLBACK_FILE = "fallback_herbs.json"
LIFESTYLE_FILE = "lifestyle_map.json"
CATALOG_FILE = "herb_catalog.json"
META_FILE = "meta.json"


def _load_json(path: Path) -> Any:
    """
    Read one JSON artifact.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON value

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Reference table not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path.name}: {e}") from e


def _expect(value: Any, kind: type, name: str) -> Any:
    if not isinstance(value, kind) or len(value) == 0:
        raise ValueError(f"{name} must be a non-empty {kind.__name__}")
    return value


def _validate_tables(tables: ReferenceTables) -> None:
    """
    Check cross-table consistency that the per-file schemas can't express.

    Raises:
        ValueError: On the first inconsistency found
    """
    category_names = [c.name for c in tables.categories]
    if len(set(category_names)) != len(category_names):
        raise ValueError(f"Duplicate category names in {CATEGORIES_FILE}")
    if GENERAL_CATEGORY in category_names:
        raise ValueError(f"'{GENERAL_CATEGORY}' is reserved and cannot be a classifier category")
    for category in tables.categories:
        if not category.terms or any(not term for term in category.terms):
            raise ValueError(f"Category '{category.name}' needs non-empty terms")

    symptom_keys = [entry.symptom for entry in tables.symptom_herbs]
    if len(set(symptom_keys)) != len(symptom_keys):
        raise ValueError(f"Duplicate symptom keys in {SYMPTOM_HERBS_FILE}")
    for entry in tables.symptom_herbs:
        if not entry.symptom:
            raise ValueError("Symptom keys must be non-empty")
        if not 1 <= len(entry.herbs) <= 2:
            raise ValueError(f"Symptom '{entry.symptom}' must list 1-2 herbs, got {len(entry.herbs)}")

    fallback_ids = [herb.herb_id for herb in tables.fallback_herbs]
    if len(fallback_ids) != 2 or len(set(fallback_ids)) != 2:
        raise ValueError(f"{FALLBACK_FILE} must hold exactly two distinct herbs")

    if GENERAL_CATEGORY not in tables.lifestyle:
        raise ValueError(f"{LIFESTYLE_FILE} must contain a '{GENERAL_CATEGORY}' entry")

    catalog_ids = {herb.id for herb in tables.catalog}
    referenced = {herb.herb_id for entry in tables.symptom_herbs for herb in entry.herbs}
    referenced.update(fallback_ids)
    missing = sorted(referenced - catalog_ids)
    if missing:
        raise ValueError(f"Herb ids missing from {CATALOG_FILE}: {missing}")


def load_reference_tables(artifacts_dir: Union[str, Path, None] = None) -> ReferenceTables:
    """
    Load and validate every reference table from the artifacts directory.

    Args:
        artifacts_dir: Directory holding the JSON artifacts; defaults to
            the ARTIFACTS_DIR setting

    Returns:
        Immutable ReferenceTables instance

    Raises:
        FileNotFoundError: If an artifact file is missing
        ValueError: If an artifact is malformed or the tables disagree
    """
    base = Path(artifacts_dir) if artifacts_dir is not None else get_settings().artifacts_dir

    categories = _expect(_load_json(base / CATEGORIES_FILE), list, CATEGORIES_FILE)
    symptom_herbs = _expect(_load_json(base / SYMPTOM_HERBS_FILE), list, SYMPTOM_HERBS_FILE)
    fallback = _expect(_load_json(base / FALLBACK_FILE), list, FALLBACK_FILE)
    lifestyle = _expect(_load_json(base / LIFESTYLE_FILE), dict, LIFESTYLE_FILE)
    catalog = _expect(_load_json(base / CATALOG_FILE), list, CATALOG_FILE)
    meta = _expect(_load_json(base / META_FILE), dict, META_FILE)

    try:
        tables = ReferenceTables(
            categories=tuple(CategoryTerms.model_validate(c) for c in categories),
            symptom_herbs=tuple(SymptomHerbs.model_validate(s) for s in symptom_herbs),
            fallback_herbs=tuple(HerbRecommendation.model_validate(h) for h in fallback),
            lifestyle=lifestyle,
            catalog=tuple(CatalogHerb.model_validate(h) for h in catalog),
            meta=AnalyzerMeta.model_validate(meta),
        )
    except ValidationError as e:
        raise ValueError(f"Malformed reference table in {base}: {e}") from e

    _validate_tables(tables)

    logger.info(
        "Loaded reference tables from {}: {} categories, {} symptom keys, {} lifestyle lists, {} catalog herbs",
        base,
        len(tables.categories),
        len(tables.symptom_herbs),
        len(tables.lifestyle),
        len(tables.catalog),
    )
    return tables


@lru_cache(maxsize=1)
def get_reference_tables() -> ReferenceTables:
    """
    Process-wide reference tables, loaded on first use and never mutated.
    """
    return load_reference_tables()
