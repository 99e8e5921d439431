"""Blocking client for the OpenAI Images API"""
from typing import Mapping, Optional

import requests

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


class ImagesClient:
    """Same surface as AsyncImagesClient, for code without an event loop"""

    def __init__(
        self,
        config: ClientConfig,
        timeout: float = IMAGES_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def with_token(
        cls,
        auth_token: str,
        organization_id: Optional[str] = None,
        project_id: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        **kwargs,
    ) -> "ImagesClient":
        return cls(ClientConfig.for_token(auth_token, organization_id, project_id, base_url), **kwargs)

    @classmethod
    def connecting_to(cls, base_url: str, headers: Optional[Mapping[str, str]] = None, **kwargs) -> "ImagesClient":
        return cls(ClientConfig.connecting_to(base_url, headers), **kwargs)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **kwargs) -> "ImagesClient":
        settings = load_settings(dotenv_path)
        kwargs.setdefault("timeout", settings["timeout"])
        return cls.with_token(
            settings["api_key"],
            organization_id=settings["organization_id"],
            project_id=settings["project_id"],
            base_url=settings["base_url"],
            **kwargs,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._session.close()

    def send(self, method: str, path: str, content: bytes, content_type: str) -> requests.Response:
        """Send one request and return the response if it was successful"""
        url = self.config.url_for(path)
        headers = self.config.request_headers(content_type)

        logger.debug(f"📤 {method} {url} ({content_type.split(';')[0]}, {len(content)} bytes)")
        try:
            response = self._session.request(method, url, data=content, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise TransportError(f"request to {url} failed: {e}") from e

        logger.debug(f"📥 HTTP {response.status_code} from {url}")
        check_response(response.status_code, response.content, response)
        return response

    def create(self, request: CreateImageRequest) -> ImageGenerationResponse:
        content, content_type = encode_create_request(request)
        response = self.send("POST", GENERATIONS_PATH, content, content_type)
        return decode_image_response(response.content)

    def edit(self, request: EditImageRequest) -> ImageGenerationResponse:
        content, content_type = encode_edit_request(request)
        response = self.send("POST", EDITS_PATH, content, content_type)
        return decode_image_response(response.content)
