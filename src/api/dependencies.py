"""Service singletons and dependency injection for the Prompt Enhancer API."""

from services.ai_service import PromptEnhancerService
from utils.cache import ResponseCache, load_cache_from_config
from utils.config import load_config

# Service singletons
_response_cache: ResponseCache | None = None
_enhancer_service: PromptEnhancerService | None = None


def get_response_cache() -> ResponseCache:
    """Get or create the process-wide response cache."""
    global _response_cache
    if _response_cache is None:
        _response_cache = load_cache_from_config(load_config())
    return _response_cache


def get_enhancer_service() -> PromptEnhancerService:
    """Get or create the prompt enhancer service instance."""
    global _enhancer_service
    if _enhancer_service is None:
        config = load_config()
        _enhancer_service = PromptEnhancerService(
            api_key=config.get("gemini_api_key"),
            models=config.get("gemini_models", ()),
            cache=get_response_cache(),
        )
    return _enhancer_service
