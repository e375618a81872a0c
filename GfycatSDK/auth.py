from abc import ABC, abstractmethod
from typing import Optional

from httpx import Request
from pydantic import BaseModel, ConfigDict


class AuthStrategy(ABC):
    """Abstract base class for authentication strategies"""

    @abstractmethod
    def authenticate(self, request: Request):
        """Apply authentication to the request"""
        pass


class HeaderAuth(AuthStrategy):
    """Generic header authentication strategy"""
    header_name: str = "Authorization"
    header_prefix: Optional[str] = None

    def __init__(self, secret: Optional[str] = None):
        self._secret = secret

    def authenticate(self, request: Request):
        if not self._secret:
            return
        if self.header_prefix:
            request.headers[self.header_name] = f"{self.header_prefix} {self._secret}"
        else:
            request.headers[self.header_name] = self._secret


class TokenAuth(HeaderAuth):
    """Generic token authentication strategy"""
    header_prefix: Optional[str] = "Bearer"

    def __init__(self, token: Optional[str] = None, header_name: str = None, header_prefix: str = None):
        if header_name is not None:
            self.header_name = header_name
        if header_prefix is not None:
            self.header_prefix = header_prefix
        super().__init__(secret=token)


class SessionToken(BaseModel):
    """Token payload returned by the OAuth token endpoint"""
    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None


class ClientCredentialsAuth(TokenAuth):
    """
    Bearer token obtained through the OAuth client credentials grant.

    Starts empty, in which case requests go out without an Authorization header. The client
    replaces the token whenever the token endpoint issues a new one.
    """

    def __init__(self, token: Optional[SessionToken] = None):
        self._token = None
        super().__init__()
        if token is not None:
            self.update(token)

    @property
    def token(self) -> Optional[SessionToken]:
        return self._token

    @property
    def access_token(self) -> Optional[str]:
        return self._token.access_token if self._token else None

    def update(self, token: SessionToken):
        self._token = token
        self._secret = token.access_token
