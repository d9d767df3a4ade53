"""Request validation for the enhancement endpoints.

Only checks what the pipeline needs: a non-empty idea for the text flow and
an uploaded file for the image flow. Enum-like fields are passed through as
strings and resolved permissively further down.
"""

from typing import Any

from starlette.datastructures import UploadFile

from models.enhance import AnalyzeMode, AnalyzeRequest, ArtStyle, EnhanceRequest, TargetTool


class InvalidRequestError(ValueError):
    """Client supplied a request the pipeline cannot run."""

    pass


def _as_field(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


def validate_enhance_request(body: Any) -> EnhanceRequest:
    """Validate a text-flow JSON body.

    Args:
        body: Decoded JSON body

    Returns:
        EnhanceRequest

    Raises:
        InvalidRequestError: If ``idea`` is missing, not a string, or blank
    """
    if not isinstance(body, dict):
        raise InvalidRequestError("Missing 'idea' string")

    idea = body.get("idea")
    if not isinstance(idea, str) or not idea.strip():
        raise InvalidRequestError("Missing 'idea' string")

    return EnhanceRequest(
        idea=idea,
        target=_as_field(body.get("target"), TargetTool.NANO_BANANA.value),
        art_style=_as_field(body.get("artStyle"), ArtStyle.NONE.value),
    )


async def validate_analyze_request(
    image: Any,
    idea: Any = None,
    target: Any = None,
    art_style: Any = None,
    mode: Any = None,
) -> AnalyzeRequest:
    """Validate image-flow form fields and read the upload.

    Args:
        image: Value of the ``image`` form field
        idea: Optional idea text
        target: Target tool key
        art_style: Art style key
        mode: 'recreate' or 'style-only'

    Returns:
        AnalyzeRequest with the image bytes loaded

    Raises:
        InvalidRequestError: If ``image`` is missing or not a file
    """
    if not isinstance(image, UploadFile):
        raise InvalidRequestError("Missing 'image' file")

    data = await image.read()
    return AnalyzeRequest(
        image=data,
        mime_type=image.content_type or "image/png",
        idea=_as_field(idea, "").strip(),
        target=_as_field(target, TargetTool.GENERIC.value),
        art_style=_as_field(art_style, ArtStyle.NONE.value),
        mode=_as_field(mode, AnalyzeMode.RECREATE.value),
    )
