"""Prompt enhancement routes for the Prompt Enhancer API (text idea and reference image)."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from api.dependencies import get_enhancer_service
from api.schemas import EnhanceResponse, ErrorResponse, QuotaErrorResponse
from api.validation import InvalidRequestError, validate_analyze_request, validate_enhance_request
from services.ai_service import MissingCredentialError, NonJSONOutputError, PromptEnhancerService
from services.provider_errors import classify_provider_error, extract_retry_after_seconds
from utils.retry import ModelOverloadedError, ProviderErrorKind, QuotaExceededError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Prompt Enhancement"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    429: {"model": QuotaErrorResponse, "description": "Quota exceeded on every model"},
    500: {"model": ErrorResponse, "description": "Missing credential or unexpected failure"},
    502: {"model": ErrorResponse, "description": "Model returned non-JSON output"},
    503: {"model": ErrorResponse, "description": "Model overloaded"},
}


def _quota_response(detail: str, retry_after_seconds: int | None) -> JSONResponse:
    headers = {"Retry-After": str(retry_after_seconds)} if retry_after_seconds else None
    return JSONResponse(
        status_code=429,
        content={
            "error": "Quota exceeded",
            "detail": detail,
            "retryAfterSeconds": retry_after_seconds,
        },
        headers=headers,
    )


def _overloaded_response(detail: str) -> JSONResponse:
    return JSONResponse(status_code=503, content={"error": "Model overloaded", "detail": detail})


def error_response(exc: Exception, failure_label: str) -> JSONResponse:
    """Translate a pipeline exception into the HTTP error contract.

    Args:
        exc: Exception raised while handling the request
        failure_label: Error text for unclassified failures (e.g. 'Enhance failed')

    Returns:
        JSONResponse with the matching status code
    """
    if isinstance(exc, InvalidRequestError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    if isinstance(exc, MissingCredentialError):
        logger.error("GEMINI_API_KEY is not configured")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    if isinstance(exc, QuotaExceededError):
        logger.warning(f"Quota exceeded on all models (retry after: {exc.retry_after_seconds}s)")
        return _quota_response(str(exc), exc.retry_after_seconds)

    if isinstance(exc, ModelOverloadedError):
        logger.warning(f"All models overloaded: {exc}")
        return _overloaded_response(str(exc))

    if isinstance(exc, NonJSONOutputError):
        logger.warning(f"Model returned non-JSON output: {exc.raw_text[:200]}")
        return JSONResponse(status_code=502, content={"error": str(exc), "detail": exc.raw_text})

    # Stray provider errors that escaped the fallback loop
    kind = classify_provider_error(exc)
    if kind == ProviderErrorKind.QUOTA_EXCEEDED:
        return _quota_response(str(exc), extract_retry_after_seconds(exc))
    if kind == ProviderErrorKind.OVERLOADED:
        return _overloaded_response(str(exc))

    logger.exception(f"{failure_label}: {exc}")
    return JSONResponse(status_code=500, content={"error": failure_label, "detail": str(exc)})


@router.post(
    "/api/enhance",
    response_model=EnhanceResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    summary="Enhance a text idea",
    description="Turn a short idea into clean, detailed and extreme prompt variants plus a negative prompt.",
)
async def enhance(
    body: Any = Body(None),
    service: PromptEnhancerService = Depends(get_enhancer_service),
) -> Any:
    """Text-flow enhancement endpoint."""
    try:
        enhance_request = validate_enhance_request(body)
        result = await service.enhance(enhance_request)
    except Exception as e:
        return error_response(e, "Enhance failed")
    return result.to_dict()


@router.post(
    "/api/analyze",
    response_model=EnhanceResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    summary="Enhance from a reference image",
    description=(
        "Multipart form with 'image' (required), 'idea', 'target', 'artStyle' and "
        "'mode' ('recreate' or 'style-only'). Identical requests within ten minutes "
        "are served from cache."
    ),
)
async def analyze(
    image: UploadFile | None = File(None, description="Reference image"),
    idea: str | None = Form(None),
    target: str | None = Form(None),
    art_style: str | None = Form(None, alias="artStyle"),
    mode: str | None = Form(None, description="'recreate' or 'style-only'"),
    service: PromptEnhancerService = Depends(get_enhancer_service),
) -> Any:
    """Image-flow enhancement endpoint."""
    try:
        analyze_request = await validate_analyze_request(
            image=image,
            idea=idea,
            target=target,
            art_style=art_style,
            mode=mode,
        )
        result = await service.analyze(analyze_request)
    except Exception as e:
        return error_response(e, "Analyze failed")
    return result.to_dict()
