# Data models for the prompt enhancer
from .enhance import (
    TargetTool,
    ArtStyle,
    AnalyzeMode,
    EnhanceRequest,
    AnalyzeRequest,
    EnhanceParams,
    EnhanceResult,
    ValidShape,
    Opaque,
    RawModelOutput,
    wrap_raw_output,
)

__all__ = [
    # Enum-like request keys
    "TargetTool",
    "ArtStyle",
    "AnalyzeMode",
    # Requests
    "EnhanceRequest",
    "AnalyzeRequest",
    # Results
    "EnhanceParams",
    "EnhanceResult",
    # Raw model output
    "ValidShape",
    "Opaque",
    "RawModelOutput",
    "wrap_raw_output",
]
