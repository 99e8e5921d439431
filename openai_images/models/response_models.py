"""Pydantic models for image generation responses and API errors"""
import base64
import binascii
import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from openai_images.exceptions.images_exceptions import DecodingError


class InputTokensDetails(BaseModel):
    """Breakdown of the input tokens of a request"""
    model_config = ConfigDict(frozen=True)

    image_tokens: int
    text_tokens: int


class Usage(BaseModel):
    """Token usage of an image generation"""
    model_config = ConfigDict(frozen=True)

    input_tokens: int
    input_tokens_details: InputTokensDetails
    output_tokens: int
    total_tokens: int


class ImageGenerationResponse(BaseModel):
    """Decoded result of a create or edit call

    `images` holds the raw image bytes in the order the API returned them.
    """
    model_config = ConfigDict(frozen=True)

    usage: Usage
    created_at: datetime
    images: Tuple[bytes, ...]


class ErrorDetail(BaseModel):
    type: str
    message: str
    code: Optional[str] = None
    param: Optional[str] = None


class ErrorResponse(BaseModel):
    """The {"error": {...}} envelope of a failed request"""
    error: ErrorDetail


def _load_json(payload: Union[bytes, str, Mapping[str, Any]]) -> Any:
    if isinstance(payload, Mapping):
        return payload
    try:
        return json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DecodingError(f"body is not valid JSON: {e}", field="body") from e


def _decode_image(entry: Any, index: int) -> bytes:
    if not isinstance(entry, Mapping):
        raise DecodingError("expected an object", field="data", index=index)
    b64_json = entry.get("b64_json")
    if not isinstance(b64_json, str):
        raise DecodingError("missing b64_json string", field="data", index=index)
    try:
        return base64.b64decode(b64_json, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodingError(f"invalid base64-encoded image data: {e}", field="data", index=index) from e


def decode_image_response(payload: Union[bytes, str, Mapping[str, Any]]) -> ImageGenerationResponse:
    """
    Decode a success body into an ImageGenerationResponse.

    All images are decoded before anything is returned; one bad entry fails
    the whole response.

    Args:
        payload: Raw response body, or the already parsed JSON object

    Raises:
        DecodingError: naming the field (and index for images) that is malformed
    """
    document = _load_json(payload)
    if not isinstance(document, Mapping):
        raise DecodingError("expected a JSON object", field="body")

    try:
        usage = Usage.model_validate(document.get("usage"))
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in ("usage",) + tuple(first["loc"]))
        raise DecodingError(first["msg"], field=location) from e

    created = document.get("created")
    if isinstance(created, bool) or not isinstance(created, (int, float)):
        raise DecodingError("expected epoch seconds", field="created")
    try:
        created_at = datetime.fromtimestamp(created, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise DecodingError(f"timestamp out of range: {created}", field="created") from e

    data = document.get("data")
    if not isinstance(data, list):
        raise DecodingError("expected a list of images", field="data")
    images = tuple(_decode_image(entry, index) for index, entry in enumerate(data))

    return ImageGenerationResponse(usage=usage, created_at=created_at, images=images)


def parse_error_response(content: Union[bytes, str]) -> Optional[ErrorDetail]:
    """Return the error detail of an error body, or None if it has another shape"""
    try:
        return ErrorResponse.model_validate_json(content).error
    except PydanticValidationError:
        return None
