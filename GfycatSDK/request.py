from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from .utils import build_query_string

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
OAUTH_API = "/oauth"


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical API call, before it becomes an httpx request"""
    api: str
    endpoint: str = ""
    method: str = "GET"
    query: Mapping[str, Any] = field(default_factory=dict)
    payload: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, str]] = None
    timeout: Optional[int] = None
    retry_counter: int = 0
    last_error: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @property
    def path(self) -> str:
        return self.api + self.endpoint

    @property
    def query_string(self) -> str:
        return build_query_string(self.query)

    @property
    def is_authentication(self) -> bool:
        return self.api == OAUTH_API

    @property
    def is_form(self) -> bool:
        for key, value in (self.headers or {}).items():
            if key.lower() == "content-type" and value.split(";")[0].strip() == FORM_CONTENT_TYPE:
                return True
        return False

    def url(self, base_url: str) -> str:
        query = self.query_string
        url = base_url + self.path
        return f"{url}?{query}" if query else url

    def request_kwargs(self) -> Dict[str, Any]:
        """Body arguments for httpx; form-encoded when the descriptor asks for it, JSON otherwise"""
        if self.payload is None:
            return {}
        if self.is_form:
            return {"data": dict(self.payload)}
        return {"json": dict(self.payload)}

    def next_attempt(self, error: Optional[BaseException] = None) -> "RequestDescriptor":
        """Return a copy for the next retry; the current descriptor is never modified"""
        return replace(self, retry_counter=self.retry_counter + 1, last_error=error)
