"""Pydantic models for image generation and image edit requests"""
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import unquote, urlparse

import httpx
from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic import ValidationError as PydanticValidationError

from openai_images.config import IMAGES_API_TIMEOUT
from openai_images.exceptions.images_exceptions import EncodingError, ValidationError
from openai_images.models.form_data import FileField, FormEntry, MultipartBody, StringField, encode_multipart
from openai_images.utils.logging_config import get_logger

logger = get_logger(__name__)

MAX_PROMPT_LENGTH = 32000


class ImageModel(str, Enum):
    """The model used for image generation. Only gpt-image-1 is supported."""
    GPT_IMAGE_1 = "gpt-image-1"


class ImageBackground(str, Enum):
    """Transparency of the background of the generated image(s)"""
    AUTO = "auto"
    OPAQUE = "opaque"
    TRANSPARENT = "transparent"


class ImageOutputFormat(str, Enum):
    """The format in which the generated image(s) are returned"""
    PNG = "png"
    WEBP = "webp"
    JPEG = "jpeg"


class ImageQuality(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    AUTO = "auto"


class ImageSize(str, Enum):
    AUTO = "auto"
    SQUARE = "1024x1024"
    PORTRAIT = "1024x1536"
    LANDSCAPE = "1536x1024"


class ModerationLevel(str, Enum):
    """Content-moderation level of generated images"""
    LOW = "low"
    AUTO = "auto"


class InputFidelity(str, Enum):
    """How closely an edit should match the style and features of the input images"""
    HIGH = "high"
    LOW = "low"


class ImageFormat(str, Enum):
    """Format of an uploaded image"""
    PNG = "png"
    JPG = "jpg"
    WEBP = "webp"

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]

    @classmethod
    def from_suffix(cls, suffix: str) -> Optional["ImageFormat"]:
        """Map a file suffix such as '.jpeg' to a format, or None"""
        return _SUFFIXES.get(suffix.lower().lstrip("."))

    @classmethod
    def from_content_type(cls, content_type: Optional[str]) -> Optional["ImageFormat"]:
        """Map a Content-Type header value to a format, or None"""
        if not content_type:
            return None
        mime = content_type.split(";", 1)[0].strip().lower()
        for image_format, known in _CONTENT_TYPES.items():
            if mime == known:
                return image_format
        return None


_CONTENT_TYPES = {
    ImageFormat.PNG: "image/png",
    ImageFormat.JPG: "image/jpeg",
    ImageFormat.WEBP: "image/webp",
}

_SUFFIXES = {
    "png": ImageFormat.PNG,
    "jpg": ImageFormat.JPG,
    "jpeg": ImageFormat.JPG,
    "webp": ImageFormat.WEBP,
}


class ImageAsset(BaseModel):
    """An image file to upload with an edit request"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    file_name: str
    data: bytes
    format: ImageFormat

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            field, message = _first_error(e, "image")
            raise EncodingError(f"{field}: {message}", field=field) from e

    @property
    def content_type(self) -> str:
        return self.format.content_type

    def to_form_field(self, name: str) -> FileField:
        return FileField(name=name, file_name=self.file_name, data=self.data, content_type=self.content_type)

    @classmethod
    def from_bytes(cls, file_name: str, data: bytes, format: ImageFormat) -> "ImageAsset":
        """Create an image from bytes already in memory"""
        return cls(file_name=file_name, data=data, format=format)

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        file_name: Optional[str] = None,
        format: Optional[ImageFormat] = None,
    ) -> "ImageAsset":
        """
        Create an image from a local file.

        The file is read completely here, so an unreadable file fails now
        rather than while a request body is being encoded.

        Args:
            path: Path of the image file
            file_name: Name sent to the API, defaults to the file's basename
            format: Image format, inferred from the suffix when omitted

        Raises:
            EncodingError: if the file cannot be read or its format is unknown
        """
        path = Path(path)
        image_format = format or ImageFormat.from_suffix(path.suffix)
        if image_format is None:
            raise EncodingError(f"cannot infer image format of {path.name!r}, pass format explicitly", field="format")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise EncodingError(f"cannot read image file {str(path)!r}: {e}", field="data") from e

        return cls(file_name=file_name or path.name, data=data, format=ImageFormat(image_format))

    @classmethod
    async def from_url(
        cls,
        url: str,
        file_name: Optional[str] = None,
        format: Optional[ImageFormat] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = IMAGES_API_TIMEOUT,
    ) -> "ImageAsset":
        """
        Create an image from a file:// or http(s):// URL.

        Remote images are downloaded in full before this returns. The format
        comes from the argument, then the response Content-Type, then the URL
        suffix.

        Raises:
            EncodingError: if the image cannot be fetched or its format is unknown
        """
        parsed = urlparse(url)
        url_path = PurePosixPath(unquote(parsed.path))

        if parsed.scheme == "file":
            return cls.from_path(unquote(parsed.path), file_name=file_name, format=format)
        if parsed.scheme not in ("http", "https"):
            raise EncodingError(f"unsupported image URL scheme {parsed.scheme!r}", field="url")

        owns_client = client is None
        if owns_client:
            client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

        try:
            logger.debug(f"Downloading image from {parsed.scheme}://{parsed.netloc}{parsed.path}")
            response = await client.get(url)
        except httpx.RequestError as e:
            raise EncodingError(f"cannot download image from {url}: {e}", field="url") from e
        finally:
            if owns_client:
                await client.aclose()

        if not response.is_success:
            raise EncodingError(f"cannot download image from {url}: HTTP {response.status_code}", field="url")

        image_format = (
            format
            or ImageFormat.from_content_type(response.headers.get("content-type"))
            or ImageFormat.from_suffix(url_path.suffix)
        )
        if image_format is None:
            raise EncodingError(f"cannot infer image format of {url}, pass format explicitly", field="format")

        return cls(
            file_name=file_name or url_path.name or "unknown_file",
            data=response.content,
            format=ImageFormat(image_format),
        )


def _first_error(error: PydanticValidationError, default: str) -> Tuple[str, str]:
    """Field path and message of the first pydantic error"""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or default
    return field, first["msg"]


def _check_range(field: str, value: Optional[int], low: int, high: int) -> None:
    if value is None:
        return
    if not low <= value <= high:
        raise ValidationError(f"must be an integer between {low} and {high}, got {value!r}", field=field)


def _form_value(value: Any) -> str:
    """Render a scalar parameter as multipart text"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class ImageRequestParameters(BaseModel):
    """Generation parameters shared by create and edit requests

    Construction errors, including unknown parameters, raise ValidationError.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            field, message = _first_error(e, type(self).__name__)
            raise ValidationError(message, field=field) from e

    prompt: str
    model: ImageModel = ImageModel.GPT_IMAGE_1
    background: Optional[ImageBackground] = None
    n: Optional[StrictInt] = None
    output_compression: Optional[StrictInt] = None
    output_format: Optional[ImageOutputFormat] = None
    partial_images: Optional[StrictInt] = None
    quality: Optional[ImageQuality] = None
    size: Optional[ImageSize] = None
    stream: Optional[bool] = None
    user: Optional[str] = None

    def validate_parameters(self) -> None:
        """
        Check value ranges the API enforces.

        Raises:
            ValidationError: naming the first offending field
        """
        if not self.prompt:
            raise ValidationError("must not be empty", field="prompt")
        if len(self.prompt) > MAX_PROMPT_LENGTH:
            raise ValidationError(f"must be at most {MAX_PROMPT_LENGTH} characters", field="prompt")
        _check_range("n", self.n, 1, 10)
        _check_range("partial_images", self.partial_images, 0, 3)
        _check_range("output_compression", self.output_compression, 0, 100)


class CreateImageRequest(ImageRequestParameters):
    """Request model for image generation, always sent as JSON"""
    moderation: Optional[ModerationLevel] = None

    def to_wire_form(self) -> Dict[str, Any]:
        """Validate and return the JSON body, leaving out unset parameters"""
        self.validate_parameters()
        return self.model_dump(mode="json", exclude_none=True)


# Scalar fields of an edit request, in the order they are sent
EDIT_FIELD_ORDER = (
    "n",
    "model",
    "user",
    "stream",
    "size",
    "quality",
    "background",
    "partial_images",
    "output_format",
    "input_fidelity",
    "output_compression",
)


class EditImageRequest(ImageRequestParameters):
    """Request model for editing one or more images, always sent as multipart

    When several images are given the mask applies to the first one.
    """
    images: Tuple[ImageAsset, ...]
    mask: Optional[ImageAsset] = None
    input_fidelity: Optional[InputFidelity] = None

    @classmethod
    def for_image(cls, image: ImageAsset, prompt: str, **params) -> "EditImageRequest":
        """Create an edit request for a single image"""
        return cls(images=(image,), prompt=prompt, **params)

    def validate_parameters(self) -> None:
        if not self.images:
            raise ValidationError("at least one image is required", field="images")
        super().validate_parameters()

    def to_wire_form(self) -> List[FormEntry]:
        """
        Validate and return the multipart entries.

        Order: every image as `image[]`, the prompt, the set scalar
        parameters in EDIT_FIELD_ORDER, then the mask.
        """
        self.validate_parameters()

        entries: List[FormEntry] = [image.to_form_field("image[]") for image in self.images]
        entries.append(StringField(name="prompt", value=self.prompt))

        for name in EDIT_FIELD_ORDER:
            value = getattr(self, name)
            if value is not None:
                entries.append(StringField(name=name, value=_form_value(value)))

        if self.mask is not None:
            entries.append(self.mask.to_form_field("mask"))

        return entries

    def to_multipart(self) -> MultipartBody:
        return encode_multipart(self.to_wire_form())
