"""Keyword-argument wrapper over AsyncImagesClient"""
from typing import Optional, Sequence

from openai_images.clients.async_client import AsyncImagesClient
from openai_images.models.image_models import (
    CreateImageRequest,
    EditImageRequest,
    ImageAsset,
    ImageBackground,
    ImageOutputFormat,
    ImageQuality,
    ImageSize,
    InputFidelity,
    ModerationLevel,
)
from openai_images.models.response_models import ImageGenerationResponse


def _build(model_cls, **fields):
    """Construct a request model from the keyword arguments that were given"""
    # Unset keyword arguments are not passed on, so pydantic defaults apply
    return model_cls(**{name: value for name, value in fields.items() if value is not None})


class ImagesAPI:
    def __init__(self, client: AsyncImagesClient):
        self.client = client

    async def create(
        self,
        prompt: str,
        background: Optional[ImageBackground] = None,
        moderation: Optional[ModerationLevel] = None,
        n: Optional[int] = None,
        output_compression: Optional[int] = None,
        output_format: Optional[ImageOutputFormat] = None,
        partial_images: Optional[int] = None,
        quality: Optional[ImageQuality] = None,
        size: Optional[ImageSize] = None,
        stream: Optional[bool] = None,
        user: Optional[str] = None,
    ) -> ImageGenerationResponse:
        """
        Create image(s) from a prompt.

        Args:
            prompt: A text description of the desired image(s)
            background: Transparency of the background
            moderation: Content-moderation level
            n: Number of images to generate, 1 to 10
            output_compression: Compression level (0-100) for webp/jpeg output
            output_format: Format of the returned images
            partial_images: Number of partial images for streaming, 0 to 3
            quality: Quality of the generated images
            size: Dimensions of the generated images
            stream: Generate the image in streaming mode
            user: Identifier of the end-user
        """
        request = _build(
            CreateImageRequest,
            prompt=prompt,
            background=background,
            moderation=moderation,
            n=n,
            output_compression=output_compression,
            output_format=output_format,
            partial_images=partial_images,
            quality=quality,
            size=size,
            stream=stream,
            user=user,
        )
        return await self.client.create(request)

    async def edit(
        self,
        images: Sequence[ImageAsset],
        prompt: str,
        mask: Optional[ImageAsset] = None,
        background: Optional[ImageBackground] = None,
        input_fidelity: Optional[InputFidelity] = None,
        n: Optional[int] = None,
        output_compression: Optional[int] = None,
        output_format: Optional[ImageOutputFormat] = None,
        partial_images: Optional[int] = None,
        quality: Optional[ImageQuality] = None,
        size: Optional[ImageSize] = None,
        stream: Optional[bool] = None,
        user: Optional[str] = None,
    ) -> ImageGenerationResponse:
        """
        Edit or extend image(s) from a prompt.

        The mask's fully transparent areas mark where the first image is edited.
        """
        request = _build(
            EditImageRequest,
            images=tuple(images),
            prompt=prompt,
            mask=mask,
            background=background,
            input_fidelity=input_fidelity,
            n=n,
            output_compression=output_compression,
            output_format=output_format,
            partial_images=partial_images,
            quality=quality,
            size=size,
            stream=stream,
            user=user,
        )
        return await self.client.edit(request)

    async def edit_image(self, image: ImageAsset, prompt: str, **params) -> ImageGenerationResponse:
        """Edit a single image, see edit() for the parameters"""
        return await self.edit([image], prompt, **params)
