"""Pydantic request/response models for the Prompt Enhancer API."""

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Response Models
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "Prompt Enhancer API", "version": "1.0.0"}]}}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    gemini_configured: bool = False

    model_config = {"json_schema_extra": {"examples": [{"status": "healthy", "gemini_configured": True}]}}


class EnhanceParamsResponse(BaseModel):
    """Suggested generation parameters."""

    model_config = ConfigDict(populate_by_name=True)

    aspect_ratio: str | None = Field(default=None, alias="aspectRatio")
    notes: str | None = None


class EnhanceResponse(BaseModel):
    """Enhanced prompt variants."""

    clean: str
    detailed: str
    extreme: str
    negative: str
    params: EnhanceParamsResponse

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "clean": "A red dragon emblem, flat vector logo",
                    "detailed": "A coiled red dragon emblem, flat vector shapes, strong silhouette",
                    "extreme": "A coiled red dragon emblem with sharp wing geometry, two-tone palette",
                    "negative": "photorealistic, 3d render, bevel, text, watermark, blurry, low quality",
                    "params": {"aspectRatio": "1:1"},
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Error body shared by all failure responses."""

    error: str
    detail: str | list | None = None


class QuotaErrorResponse(ErrorResponse):
    """Quota exhaustion error with a retry hint."""

    retryAfterSeconds: int | None = None


class CacheStatsResponse(BaseModel):
    """Response cache statistics."""

    total_requests: int
    hits: int
    misses: int
    hit_rate: float
    entry_count: int
    max_entries: int
    ttl_seconds: float
