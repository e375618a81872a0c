from .auth import AuthStrategy, ClientCredentialsAuth, HeaderAuth, SessionToken, TokenAuth
from .client import APIClient
from .config import APIConfig
from .exceptions import (
    AuthenticationFailure,
    BaseClientException,
    ConfigurationError,
    InvalidOptionsError,
    MissingCredentialsError,
    RetryLimitExceededError,
    UpstreamError,
)
from .gfycat import GfycatClient
from .logging_config import configure_structlog
from .request import RequestDescriptor
