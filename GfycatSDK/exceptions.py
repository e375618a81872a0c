from typing import Any, Optional

from httpx import Request, Response


class BaseClientException(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class ConfigurationError(BaseClientException, ValueError): ...


class MissingCredentialsError(BaseClientException): ...


class InvalidOptionsError(BaseClientException, ValueError): ...


class UpstreamError(BaseClientException):
    """Failure reported by the transport, either an HTTP error status or a connection problem"""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: Any = None,
                 request: Optional[Request] = None, response: Optional[Response] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.request = request
        self.response = response

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class AuthenticationFailure(UpstreamError): ...


class RetryLimitExceededError(UpstreamError):
    """Raised once an operation has used up its retries; keeps the last underlying error"""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        if isinstance(last_error, UpstreamError):
            super().__init__(message, status_code=last_error.status_code, body=last_error.body,
                             request=last_error.request, response=last_error.response)
        else:
            super().__init__(message)
        self.last_error = last_error
