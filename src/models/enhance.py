"""Models for prompt enhancement requests and results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class TargetTool(str, Enum):
    """Image generation tools a prompt can be tuned for."""

    NANO_BANANA = "nano-banana"
    CHATGPT = "chatgpt"
    MIDJOURNEY = "midjourney"
    STABLE_DIFFUSION = "stable-diffusion"
    DALLE = "dalle"
    GENERIC = "generic"

    @classmethod
    def from_key(cls, key: str) -> "TargetTool":
        """Resolve a user-supplied key, falling back to GENERIC."""
        try:
            return cls(key)
        except ValueError:
            return cls.GENERIC


class ArtStyle(str, Enum):
    """Art styles with canned style and negative phrasing."""

    NONE = "none"
    GAME_2D_TOON = "game-2d-toon"
    ANIME_CEL = "anime-cel"
    CHIBI = "chibi"
    VECTOR_LOGO = "vector-logo"
    PIXEL_ART = "pixel-art"
    HANDPAINTED_FANTASY = "handpainted-fantasy"
    STYLIZED_3D_PBR = "3d-stylized-pbr"
    CLAY_VINYL_3D = "3d-clay-vinyl"
    UI_ICON = "ui-icon"

    @classmethod
    def from_key(cls, key: str) -> "ArtStyle":
        """Resolve a user-supplied key, falling back to NONE."""
        try:
            return cls(key)
        except ValueError:
            return cls.NONE


class AnalyzeMode(str, Enum):
    """How closely an image-based prompt should follow the reference."""

    RECREATE = "recreate"
    STYLE_ONLY = "style-only"


@dataclass
class EnhanceRequest:
    """Text-only enhancement request."""

    idea: str
    target: str = TargetTool.NANO_BANANA.value
    art_style: str = ArtStyle.NONE.value


@dataclass
class AnalyzeRequest:
    """Reference-image enhancement request."""

    image: bytes
    mime_type: str = "image/png"
    idea: str = ""
    target: str = TargetTool.GENERIC.value
    art_style: str = ArtStyle.NONE.value
    mode: str = AnalyzeMode.RECREATE.value


@dataclass
class EnhanceParams:
    """Generation parameters suggested alongside the prompts."""

    aspect_ratio: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the camelCase wire format, omitting unset keys."""
        result = {}
        if self.aspect_ratio:
            result["aspectRatio"] = self.aspect_ratio
        if self.notes:
            result["notes"] = self.notes
        return result


@dataclass
class EnhanceResult:
    """Normalized set of enhanced prompts.

    Attributes:
        clean: Short, readable prompt
        detailed: Prompt with composition, lighting and material detail
        extreme: Most elaborate variant
        negative: Comma-separated negative prompt
        params: Suggested generation parameters
    """

    clean: str
    detailed: str
    extreme: str
    negative: str
    params: EnhanceParams = field(default_factory=EnhanceParams)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "clean": self.clean,
            "detailed": self.detailed,
            "extreme": self.extreme,
            "negative": self.negative,
            "params": self.params.to_dict(),
        }


@dataclass(frozen=True)
class ValidShape:
    """Raw model output that decoded to a JSON object."""

    fields: dict


@dataclass(frozen=True)
class Opaque:
    """Raw model output of any other shape (list, scalar, null)."""

    value: Any = None


RawModelOutput = Union[ValidShape, Opaque]


def wrap_raw_output(raw: Any) -> RawModelOutput:
    """Tag a decoded model response by whether it has an object shape."""
    if isinstance(raw, dict):
        return ValidShape(fields=raw)
    return Opaque(value=raw)
