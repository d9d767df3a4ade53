"""Core routes for the Prompt Enhancer API (root, health check, cache stats)."""

from fastapi import APIRouter, Depends

from api.dependencies import get_enhancer_service, get_response_cache
from api.schemas import CacheStatsResponse, HealthResponse, RootResponse
from services.ai_service import PromptEnhancerService
from utils.cache import ResponseCache

router = APIRouter(tags=["Core"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="API root",
    description="Returns API name and version.",
)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Prompt Enhancer API", "version": "1.0.0"}


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health status and whether a Gemini key is configured.",
)
async def health(service: PromptEnhancerService = Depends(get_enhancer_service)) -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "gemini_configured": bool(service.api_key)}


@router.get(
    "/api/cache/stats",
    response_model=CacheStatsResponse,
    summary="Cache statistics",
    description="Hit/miss counters and occupancy of the reference-image response cache.",
)
async def cache_stats(cache: ResponseCache = Depends(get_response_cache)) -> dict:
    """Response cache statistics endpoint."""
    return cache.get_stats()
