"""Custom exceptions for the Images API client"""
from typing import Any, Optional


class ImagesError(Exception):
    """Base exception for Images API errors"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ImagesError, ValueError):
    """Exception for request parameters rejected before anything is sent"""
    def __init__(self, message: str, field: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class EncodingError(ImagesError, ValueError):
    """Exception for multipart entries or image sources that cannot be built"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class TransportError(ImagesError):
    """Exception for network failures and unparseable error responses

    `response` is the raw transport response (httpx or requests), or None
    when no response was received at all.
    """
    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        self.response = response
        super().__init__(message, status_code)


class APIError(ImagesError):
    """Exception for structured errors returned by the API"""
    def __init__(
        self,
        message: str,
        type: str,
        code: Optional[str] = None,
        param: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.type = type
        self.code = code
        self.param = param
        super().__init__(message, status_code)

    def __str__(self) -> str:
        return f"{self.type}: {self.message}"


class DecodingError(ImagesError, ValueError):
    """Exception for success bodies that do not match the expected shape"""
    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        self.field = field
        self.index = index
        location = field or "response"
        if index is not None:
            location = f"{location}[{index}]"
        super().__init__(f"{location}: {message}")
