"""Tests for request validation."""

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from api.validation import InvalidRequestError, validate_analyze_request, validate_enhance_request


def _upload(data: bytes, content_type=None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(data), filename="ref.png", headers=headers)


class TestValidateEnhanceRequest:
    """Tests for validate_enhance_request()."""

    def test_defaults(self):
        request = validate_enhance_request({"idea": "a castle"})

        assert request.idea == "a castle"
        assert request.target == "nano-banana"
        assert request.art_style == "none"

    def test_reads_camel_case_art_style(self):
        request = validate_enhance_request(
            {"idea": "a castle", "target": "midjourney", "artStyle": "pixel-art"}
        )

        assert request.target == "midjourney"
        assert request.art_style == "pixel-art"

    def test_unknown_keys_pass_through(self):
        request = validate_enhance_request({"idea": "a castle", "target": "photoshop"})
        assert request.target == "photoshop"

    @pytest.mark.parametrize(
        "body",
        [None, [], "a castle", {}, {"idea": ""}, {"idea": "   "}, {"idea": 42}, {"idea": ["a"]}],
    )
    def test_rejects_missing_idea(self, body):
        with pytest.raises(InvalidRequestError, match="Missing 'idea' string"):
            validate_enhance_request(body)


class TestValidateAnalyzeRequest:
    """Tests for validate_analyze_request()."""

    @pytest.mark.asyncio
    async def test_defaults(self, png_bytes):
        request = await validate_analyze_request(_upload(png_bytes))

        assert request.image == png_bytes
        assert request.mime_type == "image/png"
        assert request.idea == ""
        assert request.target == "generic"
        assert request.art_style == "none"
        assert request.mode == "recreate"

    @pytest.mark.asyncio
    async def test_fields_read(self, png_bytes):
        request = await validate_analyze_request(
            _upload(png_bytes, "image/jpeg"),
            idea="  a knight  ",
            target="dalle",
            art_style="chibi",
            mode="style-only",
        )

        assert request.mime_type == "image/jpeg"
        assert request.idea == "a knight"
        assert request.target == "dalle"
        assert request.art_style == "chibi"
        assert request.mode == "style-only"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("image", [None, "not-a-file", b"raw-bytes"])
    async def test_rejects_missing_image(self, image):
        with pytest.raises(InvalidRequestError, match="Missing 'image' file"):
            await validate_analyze_request(image)
