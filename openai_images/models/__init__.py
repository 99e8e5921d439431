from .form_data import FileField, FormEntry, MultipartBody, StringField, encode_multipart
from .image_models import (
    CreateImageRequest,
    EditImageRequest,
    ImageAsset,
    ImageBackground,
    ImageFormat,
    ImageModel,
    ImageOutputFormat,
    ImageQuality,
    ImageSize,
    InputFidelity,
    ModerationLevel,
)
from .response_models import (
    ErrorDetail,
    ImageGenerationResponse,
    InputTokensDetails,
    Usage,
    decode_image_response,
    parse_error_response,
)

__all__ = [
    'FileField', 'FormEntry', 'MultipartBody', 'StringField', 'encode_multipart',
    'CreateImageRequest', 'EditImageRequest', 'ImageAsset', 'ImageBackground', 'ImageFormat',
    'ImageModel', 'ImageOutputFormat', 'ImageQuality', 'ImageSize', 'InputFidelity', 'ModerationLevel',
    'ErrorDetail', 'ImageGenerationResponse', 'InputTokensDetails', 'Usage',
    'decode_image_response', 'parse_error_response',
]
