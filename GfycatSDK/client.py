from typing import Optional, Any, Type, Union, Dict, Mapping
import asyncio
import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, RetryError, retry_if_exception, stop_after_attempt

from .auth import ClientCredentialsAuth, SessionToken
from .config import APIConfig, DEFAULT_TIMEOUT
from .exceptions import (
    AuthenticationFailure,
    BaseClientException,
    ConfigurationError,
    InvalidOptionsError,
    MissingCredentialsError,
    RetryLimitExceededError,
    UpstreamError,
)
from .request import OAUTH_API, RequestDescriptor
from .response import APIResponse
from .utils import with_callback

import logging
import structlog

# Configure logging
_logger = logging.getLogger(__name__)
log = structlog.wrap_logger(_logger)

ANONYMOUS_WARNING = (
    "Although some API endpoints can be used without an API key, the best experience requires one. "
    "Obtain an API key at https://developers.gfycat.com/signup and initialize the client with the "
    "provided client_id and client_secret."
)


def _is_reauth_trigger(error: BaseException) -> bool:
    return isinstance(error, UpstreamError) and error.is_unauthorized and not isinstance(error, AuthenticationFailure)


class APIClient:
    """Request orchestration and OAuth token lifecycle shared by the endpoint methods"""

    def __init__(self,
                 options: Optional[Union[Mapping[str, Any], APIConfig]] = None,
                 *,  # Force key-value pairs for the rest
                 retry_limit: Optional[int] = None,
                 verify_ssl: bool = True,
                 default_headers: Optional[Dict[str, str]] = None,
                 verbose: bool = False,
                 httpx_kwargs: Optional[Dict] = None,
                 ):
        self.config = self._build_config(options)
        self.timeout: int = self.config.timeout or DEFAULT_TIMEOUT
        self.retry_limit: int = self.config.retry_limit if retry_limit is None else retry_limit
        if self.retry_limit < 0:
            raise ConfigurationError("retry_limit must be zero or greater")
        self.verbose = verbose
        self.auth_strategy = ClientCredentialsAuth()
        self._client_params = {"verify": verify_ssl, "headers": default_headers, **(httpx_kwargs or {})}
        self._client_params = {k: v for k, v in self._client_params.items() if v is not None}
        self.http_client = httpx.AsyncClient(**self._client_params)
        self._auth_lock = asyncio.Lock()
        self._total_requests = 0
        self._total_retried_requests = 0

    @staticmethod
    def _build_config(options) -> APIConfig:
        if options is None:
            log.warning(ANONYMOUS_WARNING)
            return APIConfig.anonymous_config()
        if isinstance(options, APIConfig):
            config = options
        elif isinstance(options, Mapping):
            if "client_id" not in options or "client_secret" not in options:
                raise ConfigurationError("Please provide a valid options object with client_id and client_secret.")
            try:
                config = APIConfig.model_validate(dict(options))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid client options: {e}") from e
        else:
            raise ConfigurationError("Please provide a valid options object with client_id and client_secret.")
        if not config.anonymous and (config.client_id is None) != (config.client_secret is None):
            raise ConfigurationError("client_id and client_secret must be provided together")
        return config

    async def __aenter__(self) -> 'APIClient':
        return self

    async def __aexit__(self, exc_type: Optional[Type[BaseException]], exc_value: Optional[BaseException], traceback: Optional[Any]):
        await self.aclose()

    async def aclose(self):
        if self.http_client is not None:
            await self.http_client.aclose()

    async def reinit_web_client(self):
        if self.http_client is not None:
            try:
                await self.http_client.aclose()
            except RuntimeError:
                pass
        self.http_client = httpx.AsyncClient(**self._client_params)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def is_anonymous(self) -> bool:
        return self.config.anonymous

    @property
    def session_token(self) -> Optional[SessionToken]:
        return self.auth_strategy.token

    @property
    def total_requests(self) -> int:
        """Number of requests handed to the transport"""
        return self._total_requests

    @property
    def total_retried_requests(self) -> int:
        """Number of requests retried after the access token was rejected"""
        return self._total_retried_requests

    def log_verbose(self, msg, logger=None, **kwargs):
        if not logger:
            logger = log
        if self.verbose:
            logger.debug(msg, **kwargs)

    def _set_token(self, body: Any) -> SessionToken:
        try:
            token = SessionToken.model_validate(body)
        except ValidationError as e:
            raise UpstreamError("Token response did not contain an access token", body=body) from e
        self.auth_strategy.update(token)
        return token

    async def _send(self, request: httpx.Request) -> httpx.Response:
        try:
            return await self.http_client.send(request)
        except RuntimeError as e:
            if 'Event loop is closed' in str(e):
                log.warning("Event loop is closed; reinitializing the web client")
                await self.reinit_web_client()
                return await self.http_client.send(request)
            raise

    async def _dispatch(self, descriptor: RequestDescriptor) -> Any:
        """Send a single attempt of the descriptor and return the parsed body"""
        url = descriptor.url(self.base_url)
        timeout_ms = descriptor.timeout or self.timeout
        __logger = log.new(method=descriptor.method, url=url, attempt=descriptor.retry_counter)

        request = self.http_client.build_request(
            method=descriptor.method,
            url=url,
            headers=dict(descriptor.headers) if descriptor.headers else None,
            timeout=timeout_ms / 1000,
            **descriptor.request_kwargs(),
        )
        self.auth_strategy.authenticate(request)
        self._total_requests += 1
        self.log_verbose("Sending request", logger=__logger)
        try:
            response = await self._send(request)
        except httpx.RequestError as e:
            __logger.error("Request error", error=str(e))
            raise UpstreamError(f"Request error: {e}", request=request) from e

        response_obj = APIResponse(response)
        self.log_verbose("Received response", status_code=response_obj.status_code, logger=__logger)
        if not response_obj.is_success:
            raise UpstreamError(
                f"{descriptor.method} {descriptor.path} failed with status {response_obj.status_code}",
                status_code=response_obj.status_code, body=await response_obj.async_parse_error_content(),
                request=request, response=response)
        try:
            return await response_obj.async_parse_content()
        except ValueError as e:
            __logger.error("Malformed response body", status_code=response_obj.status_code, error=str(e))
            raise UpstreamError(
                f"{descriptor.method} {descriptor.path} returned a malformed body",
                status_code=response_obj.status_code, body=response.text, request=request, response=response) from e

    async def _reauthenticate(self, rejected_token: Optional[str]):
        """Fetch a new token unless a concurrent request already replaced the rejected one"""
        async with self._auth_lock:
            current = self.auth_strategy.access_token
            if current is not None and current != rejected_token:
                log.debug("Access token already refreshed by a concurrent request")
                return
            log.warning("Access token rejected; re-authenticating")
            try:
                await self._authenticate()
            except BaseClientException as e:
                raise AuthenticationFailure(
                    f"Re-authentication failed: {e}",
                    status_code=getattr(e, "status_code", None),
                    body=getattr(e, "body", None),
                    request=getattr(e, "request", None),
                    response=getattr(e, "response", None),
                ) from e

    async def request(self, descriptor: Optional[RequestDescriptor]) -> Any:
        """
        Send a request described by a descriptor, re-authenticating on 401.

        Args:
            descriptor (RequestDescriptor): The logical call to perform.

        Returns:
            The parsed response body (dict or list for JSON, str for text, bytes otherwise).

        Raises:
            InvalidOptionsError: If no descriptor is given.
            RetryLimitExceededError: If the retry limit is reached; chained to the last underlying error.
            AuthenticationFailure: If the token could not be renewed after a 401.
            UpstreamError: For any other failed response or transport error.
        """
        if descriptor is None:
            raise InvalidOptionsError("Please provide a valid request descriptor")
        if descriptor.retry_counter >= self.retry_limit:
            log.error("Retry limit reached", path=descriptor.path, retry_limit=self.retry_limit)
            raise RetryLimitExceededError("Retry limit reached", last_error=descriptor.last_error) from descriptor.last_error

        # A rejected token request is never retried
        if descriptor.is_authentication:
            return await self._dispatch(descriptor)

        last_error: Optional[UpstreamError] = None
        used_token: Optional[str] = None
        result = None
        try:
            async for attempt in AsyncRetrying(
                    stop=stop_after_attempt(self.retry_limit - descriptor.retry_counter),
                    retry=retry_if_exception(_is_reauth_trigger)):
                with attempt:
                    if last_error is not None:
                        await self._reauthenticate(used_token)
                        descriptor = descriptor.next_attempt(last_error)
                        self._total_retried_requests += 1
                    used_token = self.auth_strategy.access_token
                    try:
                        result = await self._dispatch(descriptor)
                    except UpstreamError as e:
                        last_error = e
                        raise
        except RetryError as e:
            last = e.last_attempt.exception()
            log.error("Retry limit reached", path=descriptor.path, retry_limit=self.retry_limit,
                      status_code=getattr(last, "status_code", None))
            raise RetryLimitExceededError("Retry limit reached", last_error=last) from last
        return result

    async def _authenticate(self, client_id: Optional[str] = None, client_secret: Optional[str] = None,
                            grant_type: Optional[str] = None) -> Any:
        if not self.config.has_credentials and not (client_id or client_secret):
            raise MissingCredentialsError("Please provide client_id and client_secret")
        descriptor = RequestDescriptor(
            api=OAUTH_API,
            endpoint="/token",
            method="POST",
            payload={
                "client_id": client_id or self.config.client_id,
                "client_secret": client_secret or self.config.client_secret,
                "grant_type": grant_type or "client_credentials",
            },
        )
        body = await self.request(descriptor)
        self._set_token(body)
        return body

    @with_callback
    async def authenticate(self, client_id: Optional[str] = None, client_secret: Optional[str] = None,
                           grant_type: Optional[str] = None) -> Any:
        """
        Retrieve an OAuth token and use it for subsequent requests.

        Credentials given here take precedence over the ones the client was created with.

        Args:
            client_id (str, optional): Gfycat client id.
            client_secret (str, optional): Gfycat client secret.
            grant_type (str, optional): OAuth grant type, 'client_credentials' by default.
            callback (callable, optional): Called with (error, result) instead of returning an awaitable.
        """
        return await self._authenticate(client_id=client_id, client_secret=client_secret, grant_type=grant_type)
