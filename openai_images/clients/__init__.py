from .async_client import AsyncImagesClient
from .base import DEFAULT_BASE_URL, EDITS_PATH, GENERATIONS_PATH, ClientConfig
from .sync_client import ImagesClient

__all__ = ['AsyncImagesClient', 'ImagesClient', 'ClientConfig', 'DEFAULT_BASE_URL', 'EDITS_PATH', 'GENERATIONS_PATH']
