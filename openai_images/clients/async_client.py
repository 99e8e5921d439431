"""Async client for the OpenAI Images API"""
from typing import Mapping, Optional

import httpx

from openai_images.clients.base import (
    DEFAULT_BASE_URL,
    EDITS_PATH,
    GENERATIONS_PATH,
    ClientConfig,
    check_response,
    encode_create_request,
    encode_edit_request,
)
from openai_images.config import IMAGES_API_TIMEOUT, load_settings
from openai_images.exceptions.images_exceptions import TransportError
from openai_images.models.image_models import CreateImageRequest, EditImageRequest
from openai_images.models.response_models import ImageGenerationResponse, decode_image_response
from openai_images.utils.logging_config import get_logger

logger = get_logger(__name__)


class AsyncImagesClient:
    """
    Async client for the images endpoints.

    The configuration never changes after construction, so one instance can
    serve concurrent create/edit calls. Each call makes exactly one request
    and is cancelled like any other awaitable.
    """

    def __init__(
        self,
        config: ClientConfig,
        timeout: float = IMAGES_API_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.timeout = timeout

        # HTTP client
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def with_token(
        cls,
        auth_token: str,
        organization_id: Optional[str] = None,
        project_id: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        **kwargs,
    ) -> "AsyncImagesClient":
        """Create a client that authenticates with an API key"""
        return cls(ClientConfig.for_token(auth_token, organization_id, project_id, base_url), **kwargs)

    @classmethod
    def connecting_to(cls, base_url: str, headers: Optional[Mapping[str, str]] = None, **kwargs) -> "AsyncImagesClient":
        """Create a client for a custom base URL and headers"""
        return cls(ClientConfig.connecting_to(base_url, headers), **kwargs)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **kwargs) -> "AsyncImagesClient":
        """Create a client from OPENAI_* environment variables (and .env)"""
        settings = load_settings(dotenv_path)
        kwargs.setdefault("timeout", settings["timeout"])
        return cls.with_token(
            settings["api_key"],
            organization_id=settings["organization_id"],
            project_id=settings["project_id"],
            base_url=settings["base_url"],
            **kwargs,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def send(self, method: str, path: str, content: bytes, content_type: str) -> httpx.Response:
        """
        Send one request and return the response if it was successful.

        Raises:
            TransportError: on connection failures and unrecognised error responses
            APIError: when the API answers with its error envelope
        """
        url = self.config.url_for(path)
        headers = self.config.request_headers(content_type)

        logger.debug(f"📤 {method} {url} ({content_type.split(';')[0]}, {len(content)} bytes)")
        try:
            response = await self._client.request(method, url, content=content, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise TransportError(f"request to {url} failed: {e}") from e

        logger.debug(f"📥 HTTP {response.status_code} from {url}")
        check_response(response.status_code, response.content, response)
        return response

    async def create(self, request: CreateImageRequest) -> ImageGenerationResponse:
        """Create image(s) from a prompt"""
        content, content_type = encode_create_request(request)
        response = await self.send("POST", GENERATIONS_PATH, content, content_type)
        return decode_image_response(response.content)

    async def edit(self, request: EditImageRequest) -> ImageGenerationResponse:
        """Edit or extend one or more images from a prompt"""
        content, content_type = encode_edit_request(request)
        response = await self.send("POST", EDITS_PATH, content, content_type)
        return decode_image_response(response.content)
