"""Typed client for the OpenAI Images API (create and edit image)"""
from .clients import AsyncImagesClient, ClientConfig, ImagesClient
from .exceptions import APIError, DecodingError, EncodingError, ImagesError, TransportError, ValidationError
from .images_api import ImagesAPI
from .models import (
    CreateImageRequest,
    EditImageRequest,
    FileField,
    FormEntry,
    ImageAsset,
    ImageBackground,
    ImageFormat,
    ImageGenerationResponse,
    ImageModel,
    ImageOutputFormat,
    ImageQuality,
    ImageSize,
    InputFidelity,
    ModerationLevel,
    MultipartBody,
    StringField,
    Usage,
    decode_image_response,
    encode_multipart,
)

__version__ = "0.1.0"

__all__ = [
    'AsyncImagesClient', 'ClientConfig', 'ImagesClient', 'ImagesAPI',
    'APIError', 'DecodingError', 'EncodingError', 'ImagesError', 'TransportError', 'ValidationError',
    'CreateImageRequest', 'EditImageRequest', 'FileField', 'FormEntry', 'ImageAsset', 'ImageBackground',
    'ImageFormat', 'ImageGenerationResponse', 'ImageModel', 'ImageOutputFormat', 'ImageQuality', 'ImageSize',
    'InputFidelity', 'ModerationLevel', 'MultipartBody', 'StringField', 'Usage',
    'decode_image_response', 'encode_multipart',
]
