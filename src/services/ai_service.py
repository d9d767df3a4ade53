"""AI service for prompt enhancement using Google GenAI.

Runs the enhancement pipeline for both flows:
    assemble instruction -> call Gemini (retry + model fallback)
    -> normalize output -> (cache, image flow only)
"""

import json
import logging
from typing import Any, Optional, Sequence

from google.genai import Client
from google.genai import types

from models.enhance import AnalyzeRequest, EnhanceRequest, EnhanceResult
from services.normalizer import normalize_output
from services.prompt_builder import build_analyze_prompt, build_enhance_prompt
from services.prompts import (
    ENHANCE_RESPONSE_SCHEMA,
    FALLBACK_PROMPT_IMAGE,
    FALLBACK_PROMPT_TEXT,
    strip_markdown_code_blocks,
)
from services.provider_errors import classify_provider_error, extract_retry_after_seconds
from utils.cache import ResponseCache, build_analyze_fingerprint
from utils.retry import (
    IMAGE_RETRY_SCHEDULE,
    TEXT_RETRY_SCHEDULE,
    RetrySchedule,
    call_with_fallback,
)

logger = logging.getLogger(__name__)

# Lighter models first
DEFAULT_MODEL_FALLBACKS = ("gemini-2.5-flash-lite", "gemini-2.5-flash", "gemini-2.0-flash")


class MissingCredentialError(Exception):
    """No Gemini API key is configured."""

    pass


class NonJSONOutputError(Exception):
    """The model answered with text that does not parse as JSON."""

    def __init__(self, raw_text: str):
        super().__init__("Model returned non-JSON output")
        self.raw_text = raw_text


def response_text(response: Any) -> str:
    """Extract the text of a generate_content response.

    Falls back to joining the parts of the first candidate when the
    ``text`` accessor yields nothing.
    """
    if response is None:
        return ""

    text = getattr(response, "text", None)
    if isinstance(text, str) and text:
        return text

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(part, "text", None) or "" for part in parts)


def parse_model_json(text: str) -> Any:
    """Decode the model's JSON answer.

    Raises:
        NonJSONOutputError: If the text is not valid JSON
    """
    cleaned = strip_markdown_code_blocks(text or "")
    try:
        return json.loads(cleaned or "{}")
    except json.JSONDecodeError:
        raise NonJSONOutputError(text or "")


class PromptEnhancerService:
    """Service for enhancing image-generation prompts using Gemini."""

    def __init__(
        self,
        api_key: Optional[str],
        models: Sequence[str] = DEFAULT_MODEL_FALLBACKS,
        cache: Optional[ResponseCache] = None,
        client: Optional[Any] = None,
        sleep: Optional[Any] = None,
    ):
        """Initialize the enhancer service.

        The Gemini client is created on first use so that a missing key
        fails individual requests instead of startup.

        Args:
            api_key: Google GenAI API key
            models: Model names to try in order, cheapest first
            cache: Optional ResponseCache for reference-image results
            client: Pre-built client (tests pass a fake here)
            sleep: Awaitable sleep used between retries (defaults to asyncio.sleep)
        """
        self.api_key = api_key
        self.models = tuple(models) or DEFAULT_MODEL_FALLBACKS
        self.cache = cache
        self._client = client
        self._retry_kwargs = {"sleep": sleep} if sleep is not None else {}

        logger.info(
            f"Initialized prompt enhancer with models: {', '.join(self.models)}"
            + (" (caching enabled)" if cache is not None else "")
        )

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise MissingCredentialError("Missing GEMINI_API_KEY")
            self._client = Client(api_key=self.api_key)
        return self._client

    async def _generate(
        self,
        contents: list,
        schedule: RetrySchedule,
    ) -> Any:
        """Call Gemini across the model fallback list."""
        client = self.client
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_json_schema=ENHANCE_RESPONSE_SCHEMA,
        )

        async def generate_once(model: str) -> Any:
            logger.debug(f"Calling {model}")
            return await client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )

        return await call_with_fallback(
            generate_once,
            self.models,
            classify=classify_provider_error,
            retry_after=extract_retry_after_seconds,
            schedule=schedule,
            **self._retry_kwargs,
        )

    async def enhance(self, request: EnhanceRequest) -> EnhanceResult:
        """Enhance a free-text idea into prompt variants.

        Args:
            request: Validated text-flow request

        Returns:
            Normalized EnhanceResult

        Raises:
            MissingCredentialError: No API key configured
            QuotaExceededError: Every model is out of quota
            ModelOverloadedError: Every model stayed overloaded
            NonJSONOutputError: The model answered with non-JSON text
        """
        prompt = build_enhance_prompt(request.idea, request.target, request.art_style)
        contents = [types.Content(role="user", parts=[types.Part.from_text(text=prompt)])]

        response = await self._generate(contents, TEXT_RETRY_SCHEDULE)
        parsed = parse_model_json(response_text(response))

        result = normalize_output(parsed, request.art_style, fallback_prompt=FALLBACK_PROMPT_TEXT)
        logger.info(
            f"Enhanced idea (target={request.target}, style={request.art_style}, "
            f"aspect={result.params.aspect_ratio})"
        )
        return result

    async def analyze(self, request: AnalyzeRequest) -> EnhanceResult:
        """Derive prompt variants from a reference image.

        Results are cached by request fingerprint when a cache is set.

        Args:
            request: Validated image-flow request

        Returns:
            Normalized EnhanceResult (possibly from cache)
        """
        if not self.api_key and self._client is None:
            raise MissingCredentialError("Missing GEMINI_API_KEY")

        fingerprint = build_analyze_fingerprint(request)
        if self.cache is not None:
            cached = self.cache.get(fingerprint)
            if cached is not None:
                logger.info("Returning cached analysis")
                return cached

        prompt = build_analyze_prompt(request.idea, request.target, request.art_style, request.mode)
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=prompt),
                    types.Part.from_bytes(data=request.image, mime_type=request.mime_type),
                ],
            )
        ]

        response = await self._generate(contents, IMAGE_RETRY_SCHEDULE)
        parsed = parse_model_json(response_text(response))

        result = normalize_output(parsed, request.art_style, fallback_prompt=FALLBACK_PROMPT_IMAGE)
        if self.cache is not None:
            self.cache.put(fingerprint, result)

        logger.info(
            f"Analyzed reference image (mode={request.mode}, target={request.target}, "
            f"style={request.art_style}, {len(request.image)} bytes)"
        )
        return result
