"""Request building and response classification shared by both clients"""
import json
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlparse, urlunparse

from pydantic import BaseModel, ConfigDict

from openai_images.exceptions.images_exceptions import APIError, TransportError, ValidationError
from openai_images.models.image_models import CreateImageRequest, EditImageRequest
from openai_images.models.response_models import parse_error_response
from openai_images.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/"
GENERATIONS_PATH = "v1/images/generations"
EDITS_PATH = "v1/images/edits"
JSON_CONTENT_TYPE = "application/json"


class ClientConfig(BaseModel):
    """Base URL and default headers of a client, fixed at construction"""
    model_config = ConfigDict(frozen=True)

    base_url: str
    headers: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def for_token(
        cls,
        auth_token: str,
        organization_id: Optional[str] = None,
        project_id: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> "ClientConfig":
        """
        Build a config that authenticates with a bearer token.

        Args:
            auth_token: The OpenAI API key
            organization_id: Optional organization sent as OpenAI-Organization
            project_id: Optional project sent as OpenAI-Project
            base_url: API root, the public endpoint by default
        """
        if not auth_token:
            raise ValidationError("an API key is required", field="auth_token")

        headers = {"Authorization": f"Bearer {auth_token}"}
        if project_id:
            headers["OpenAI-Project"] = project_id
        if organization_id:
            headers["OpenAI-Organization"] = organization_id

        return cls.connecting_to(base_url, headers)

    @classmethod
    def connecting_to(cls, base_url: str, headers: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config for a custom base URL and headers, e.g. a proxy"""
        parsed = urlparse(base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(f"must be an absolute http(s) URL, got {base_url!r}", field="base_url")

        if parsed.params or parsed.query or parsed.fragment:
            raise ValidationError(f"must not carry parameters, a query or a fragment, got {base_url!r}", field="base_url")

        # Endpoint paths are appended to the base path
        path = parsed.path if parsed.path.endswith("/") else parsed.path + "/"
        return cls(base_url=urlunparse(parsed._replace(path=path)), headers=tuple((headers or {}).items()))

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def request_headers(self, content_type: str) -> Dict[str, str]:
        """Fresh header dict for one request"""
        headers = dict(self.headers)
        headers["Content-Type"] = content_type
        return headers


def encode_create_request(request: CreateImageRequest) -> Tuple[bytes, str]:
    """Validate a create request and return its JSON body and content type"""
    payload = request.to_wire_form()
    return json.dumps(payload).encode("utf-8"), JSON_CONTENT_TYPE


def encode_edit_request(request: EditImageRequest) -> Tuple[bytes, str]:
    """Validate an edit request and return its multipart body and content type"""
    multipart = request.to_multipart()
    return multipart.body, multipart.content_type


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def check_response(status_code: int, content: bytes, response: Any = None) -> None:
    """
    Raise for any non-2xx response.

    Raises:
        APIError: if the body is the API's error envelope
        TransportError: for any other non-2xx body
    """
    if is_success(status_code):
        return

    detail = parse_error_response(content)
    if detail is not None:
        logger.warning(f"Images API error {status_code}: {detail.type}")
        raise APIError(
            detail.message,
            type=detail.type,
            code=detail.code,
            param=detail.param,
            status_code=status_code,
        )

    logger.error(f"Unexpected HTTP {status_code} response without an error body")
    raise TransportError(f"unexpected HTTP {status_code} response", status_code=status_code, response=response)
