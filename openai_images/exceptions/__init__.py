from .images_exceptions import (
    APIError,
    DecodingError,
    EncodingError,
    ImagesError,
    TransportError,
    ValidationError,
)

__all__ = [
    "APIError",
    "DecodingError",
    "EncodingError",
    "ImagesError",
    "TransportError",
    "ValidationError",
]
