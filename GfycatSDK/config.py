from pydantic import BaseModel, Field, StrictInt
from typing import Optional

API_HOSTNAME = "https://api.gfycat.com"
API_BASE_PATH = "/v1"
API_TEST_BASE_PATH = "/v1test"

DEFAULT_TIMEOUT = 30000
DEFAULT_RETRY_LIMIT = 2


class APIConfig(BaseModel):
    """Configuration model for the Gfycat client"""
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    # Milliseconds; a missing or zero value falls back to the default
    timeout: Optional[StrictInt] = Field(default=DEFAULT_TIMEOUT, ge=0)
    retry_limit: StrictInt = Field(default=DEFAULT_RETRY_LIMIT, ge=0)
    base_url: str = API_HOSTNAME + API_BASE_PATH
    anonymous: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id or self.client_secret)

    @classmethod
    def anonymous_config(cls) -> "APIConfig":
        return cls(base_url=API_HOSTNAME + API_TEST_BASE_PATH, anonymous=True)
