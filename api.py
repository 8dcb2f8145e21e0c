"""
FastAPI application for herb recommendation service.

Sample curl request:
curl -X POST "http://localhost:8000/api/ai/recommend" \
     -H "Content-Type: application/json" \
     -H "X-User-Id: user-123" \
     -d '{"symptoms": "I have a terrible headache and can'"'"'t sleep"}'

Catalog search:
curl "http://localhost:8000/api/herbs?search=tulsi"
"""

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from bookmark_store import InMemoryBookmarkStore
from config import configure_logging, get_settings
from herb_catalog import HerbCatalog
from history_store import InMemoryHistoryStore
from reference_data import get_reference_tables
from schemas import (
    Bookmark,
    BookmarkRequest,
    CatalogHerb,
    HistoryEntry,
    Recommendation,
    RecommendRequest,
)
from symptom_analyzer import SymptomAnalyzer

# Loaded once on startup (or on first request)
analyzer: Optional[SymptomAnalyzer] = None
herb_catalog: Optional[HerbCatalog] = None
history_store = InMemoryHistoryStore()
bookmark_store = InMemoryBookmarkStore()


def load_artifacts():
    """
    Load reference tables and build the analyzer and catalog.
    """
    global analyzer, herb_catalog

    try:
        tables = get_reference_tables()
        analyzer = SymptomAnalyzer(tables)
        herb_catalog = HerbCatalog(tables.catalog, fuzzy_threshold=get_settings().herb_search_cutoff)
        logger.info("Reference data loaded: {} herbs in catalog", len(herb_catalog.herbs))
    except Exception:
        logger.exception("Error loading reference data")
        raise


def get_analyzer() -> SymptomAnalyzer:
    if analyzer is None:
        load_artifacts()
    return analyzer


def get_herb_catalog() -> HerbCatalog:
    if herb_catalog is None:
        load_artifacts()
    return herb_catalog


def get_history_store() -> InMemoryHistoryStore:
    return history_store


def get_bookmark_store() -> InMemoryBookmarkStore:
    return bookmark_store


def get_current_user(x_user_id: Optional[str] = Header(None)) -> str:
    """
    Resolve the caller's user id set by the upstream session layer.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Load artifacts on application startup.
    """
    configure_logging()
    logger.info("Starting Herb Recommendation API...")
    load_artifacts()
    logger.info("API startup completed")
    yield


# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Herb Recommendation API",
    description="Keyword-based Ayurvedic herb recommendations for symptom descriptions",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Herb Recommendation API",
        "version": "1.0.0",
        "endpoints": {
            "recommend": "/api/ai/recommend",
            "history": "/api/user/history",
            "bookmarks": "/api/user/bookmarks",
            "herbs": "/api/herbs",
            "docs": "/docs",
            "health": "/health"
        }
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    """
    return {
        "status": "healthy",
        "artifacts_loaded": analyzer is not None and herb_catalog is not None
    }


@app.post("/api/ai/recommend", response_model=Recommendation)
def recommend(
    request: Optional[RecommendRequest] = None,
    user_id: str = Depends(get_current_user),
    symptom_analyzer: SymptomAnalyzer = Depends(get_analyzer),
    store: InMemoryHistoryStore = Depends(get_history_store),
):
    """
    Analyze the caller's symptoms, record the result in their history and return it.
    """
    symptoms = request.symptoms if request is not None else None
    if not symptoms or not isinstance(symptoms, str):
        raise HTTPException(status_code=400, detail="Symptoms text is required")

    try:
        recommendation = symptom_analyzer.analyze(symptoms)
        store.record(user_id, symptoms, recommendation)
        logger.info(
            "Recommendation for user {}: category={} herbs={}",
            user_id,
            recommendation.analysis.category,
            [h.herb_id for h in recommendation.recommendations],
        )
        return recommendation

    except HTTPException:
        raise
    except Exception:
        logger.exception("Error generating recommendation")
        raise HTTPException(status_code=500, detail="Failed to generate recommendation")


@app.get("/api/user/history", response_model=List[HistoryEntry])
def user_history(
    user_id: str = Depends(get_current_user),
    store: InMemoryHistoryStore = Depends(get_history_store),
):
    return store.list_for_user(user_id)


@app.post("/api/user/bookmarks", response_model=Bookmark, status_code=201)
def add_bookmark(
    request: BookmarkRequest,
    user_id: str = Depends(get_current_user),
    catalog: HerbCatalog = Depends(get_herb_catalog),
    store: InMemoryBookmarkStore = Depends(get_bookmark_store),
):
    if catalog.get(request.herb_id) is None:
        raise HTTPException(status_code=404, detail="Herb not found")
    return store.add(user_id, request.herb_id)


@app.delete("/api/user/bookmarks/{herb_id}", status_code=204)
def remove_bookmark(
    herb_id: int,
    user_id: str = Depends(get_current_user),
    store: InMemoryBookmarkStore = Depends(get_bookmark_store),
):
    store.remove(user_id, herb_id)
    return Response(status_code=204)


@app.get("/api/user/bookmarks", response_model=List[Bookmark])
def user_bookmarks(
    user_id: str = Depends(get_current_user),
    store: InMemoryBookmarkStore = Depends(get_bookmark_store),
):
    return store.list_for_user(user_id)


@app.get("/api/herbs", response_model=List[CatalogHerb])
def list_herbs(
    search: Optional[str] = None,
    category: Optional[str] = None,
    catalog: HerbCatalog = Depends(get_herb_catalog),
):
    return catalog.search(search=search, category=category)


@app.get("/api/herbs/{herb_id}", response_model=CatalogHerb)
def get_herb(herb_id: int, catalog: HerbCatalog = Depends(get_herb_catalog)):
    herb = catalog.get(herb_id)
    if herb is None:
        raise HTTPException(status_code=404, detail="Herb not found")
    return herb


def find_available_port(start_port=8000, max_port=8010):
    """
    Find an available port starting from start_port up to max_port.

    Raises:
        RuntimeError: If no available port found
    """
    import socket

    for port in range(start_port, max_port + 1):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('0.0.0.0', port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available port found between {start_port} and {max_port}")


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    try:
        port = find_available_port(settings.api_port_start, settings.api_port_end)
        logger.info("API running on http://localhost:{}", port)
        logger.info("API Documentation: http://localhost:{}/docs", port)
        uvicorn.run(app, host="0.0.0.0", port=port)
    except RuntimeError as e:
        logger.error("{}", e)
