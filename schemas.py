"""
Pydantic models shared by the analyzer, the herb catalog and the API.
Attributes are snake_case; JSON uses camelCase aliases.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class HerbRecommendation(FrozenModel):
    herb_id: int
    herb_name: str
    scientific_name: str
    reason: str
    dosage: str
    benefits: Tuple[str, ...]


class SymptomAnalysis(FrozenModel):
    category: str
    severity: Literal["mild", "moderate"]
    keywords: Tuple[str, ...]


class Recommendation(FrozenModel):
    analysis: SymptomAnalysis
    recommendations: Tuple[HerbRecommendation, ...]
    disclaimer: str
    lifestyle: Tuple[str, ...]


# Reference tables

class CategoryTerms(FrozenModel):
    name: str
    terms: Tuple[str, ...]


class SymptomHerbs(FrozenModel):
    symptom: str
    herbs: Tuple[HerbRecommendation, ...]


class AnalyzerMeta(FrozenModel):
    disclaimer: str
    max_keywords: int = Field(10, gt=0)
    max_recommendations: int = Field(3, gt=0)
    moderate_threshold: int = Field(3, ge=0)


class CatalogHerb(FrozenModel):
    id: int
    plant_name: str
    scientific_name: str
    description: str
    benefits: str
    category: Optional[str] = None
    usage_instructions: Optional[str] = None
    is_published: bool = True


class ReferenceTables(FrozenModel):
    categories: Tuple[CategoryTerms, ...]
    symptom_herbs: Tuple[SymptomHerbs, ...]
    fallback_herbs: Tuple[HerbRecommendation, ...]
    lifestyle: Dict[str, Tuple[str, ...]]
    catalog: Tuple[CatalogHerb, ...]
    meta: AnalyzerMeta


# API request/response bodies

class RecommendRequest(BaseModel):
    # Left untyped so the handler can answer 400 for non-string input
    symptoms: Any = Field(None, description="Free-text description of symptoms")


class HistoryEntry(FrozenModel):
    id: int
    user_id: str
    symptoms: str
    recommendation: str  # serialized Recommendation JSON
    recommended_herbs: List[int]
    created_at: datetime


class BookmarkRequest(FrozenModel):
    herb_id: int


class Bookmark(FrozenModel):
    id: int
    user_id: str
    herb_id: int
    created_at: datetime
