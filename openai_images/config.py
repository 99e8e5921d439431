import os
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

# Values from the process environment at import time. A .env file is only
# read by load_settings(), so importing the library leaves os.environ alone.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_ORGANIZATION = os.getenv("OPENAI_ORGANIZATION")
OPENAI_PROJECT = os.getenv("OPENAI_PROJECT")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/")
IMAGES_API_TIMEOUT = float(os.getenv("IMAGES_API_TIMEOUT", "120"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def load_settings(dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load .env into the environment and read the client settings.

    Variables already set in the environment win over the .env file.

    Args:
        dotenv_path: .env file to load, searched for from the working directory when omitted
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    return {
        "api_key": os.getenv("OPENAI_API_KEY"),
        "organization_id": os.getenv("OPENAI_ORGANIZATION"),
        "project_id": os.getenv("OPENAI_PROJECT"),
        "base_url": os.getenv("OPENAI_BASE_URL", "https://api.openai.com/"),
        "timeout": float(os.getenv("IMAGES_API_TIMEOUT", "120")),
    }
