import httpx
import pytest

from GfycatSDK import GfycatClient


class FakeGfycat:
    """
    Stand-in for the Gfycat API, used as side_effect for httpx.AsyncClient.send.

    The token endpoint hands out token1, token2, ... (or fails with token_status). Every other
    request answers with the next status in the script, then 200 once the script runs out.
    """

    def __init__(self, statuses=None, token_status=200):
        self.statuses = list(statuses or [])
        self.token_status = token_status
        self.requests = []
        self.token_requests = 0

    @property
    def api_requests(self):
        return [r for r in self.requests if not r.url.path.endswith("/oauth/token")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/oauth/token"):
            self.token_requests += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"errorMessage": "invalid client"})
            return httpx.Response(200, json={
                "token_type": "bearer",
                "access_token": f"token{self.token_requests}",
                "expires_in": 3600,
            })
        status = self.statuses.pop(0) if self.statuses else 200
        return httpx.Response(status, json={"status": status, "path": request.url.path})


@pytest.fixture
def credentials():
    return {"client_id": "dummy_id", "client_secret": "dummy_secret"}


@pytest.fixture
def api_client(credentials):
    return GfycatClient(credentials)


@pytest.fixture
def fake_api():
    """Factory for FakeGfycat, so tests can script their own responses"""
    return FakeGfycat
