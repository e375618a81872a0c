import logging

import pytest
import structlog

from GfycatSDK import GfycatClient
from GfycatSDK.config import APIConfig
from GfycatSDK.exceptions import ConfigurationError
from GfycatSDK.logging_config import configure_structlog


def test_api_config_defaults():
    config = APIConfig()
    assert config.base_url == "https://api.gfycat.com/v1"
    assert config.timeout == 30000
    assert config.retry_limit == 2
    assert config.anonymous is False


def test_api_config_anonymous():
    config = APIConfig.anonymous_config()
    assert config.base_url == "https://api.gfycat.com/v1test"
    assert config.anonymous is True
    assert not config.has_credentials


def test_client_with_credentials(credentials):
    client = GfycatClient(credentials)
    assert client.config.client_id == "dummy_id"
    assert client.config.client_secret == "dummy_secret"
    assert client.timeout == 30000
    assert client.retry_limit == 2
    assert client.base_url == "https://api.gfycat.com/v1"
    assert not client.is_anonymous


@pytest.mark.parametrize("timeout, expected", [
    (5000, 5000),
    (0, 30000),
    (None, 30000),
])
def test_client_timeout(credentials, timeout, expected):
    client = GfycatClient({**credentials, "timeout": timeout})
    assert client.timeout == expected


def test_client_accepts_api_config():
    config = APIConfig(client_id="id", client_secret="secret", retry_limit=5, base_url="https://example.com/v1")
    client = GfycatClient(config)
    assert client.retry_limit == 5
    assert client.base_url == "https://example.com/v1"


def test_client_retry_limit_override(credentials):
    client = GfycatClient(credentials, retry_limit=4)
    assert client.retry_limit == 4


def test_anonymous_client(caplog):
    with caplog.at_level(logging.WARNING):
        client = GfycatClient()
    assert client.is_anonymous
    assert client.base_url.endswith("/v1test")
    assert "API key" in caplog.text


@pytest.mark.parametrize("options", [
    {"client_id": "only_id"},
    {"client_secret": "only_secret"},
    {"client_id": 123, "client_secret": "secret"},
    {"client_id": "id", "client_secret": "secret", "retry_limit": -1},
    {"client_id": "id", "client_secret": "secret", "timeout": "soon"},
    {"client_id": "id", "client_secret": "secret", "timeout": "5000"},
    {"client_id": "id", "client_secret": "secret", "timeout": True},
    {"client_id": "id", "client_secret": "secret", "retry_limit": "3"},
    "client_id=id",
    ["id", "secret"],
])
def test_client_invalid_options(options):
    with pytest.raises(ConfigurationError):
        GfycatClient(options)


def test_client_partial_api_config():
    with pytest.raises(ConfigurationError):
        GfycatClient(APIConfig(client_id="id"))


def test_client_negative_retry_limit(credentials):
    with pytest.raises(ConfigurationError):
        GfycatClient(credentials, retry_limit=-1)


def test_configure_structlog():
    structlog.reset_defaults()
    try:
        configure_structlog("DEBUG")
        assert structlog.is_configured()
    finally:
        structlog.reset_defaults()


def test_configure_structlog_respects_existing_config():
    structlog.reset_defaults()
    try:
        structlog.configure(processors=[structlog.processors.KeyValueRenderer()])
        configure_structlog("debug", json_logs=False)
        assert isinstance(structlog.get_config()["processors"][0], structlog.processors.KeyValueRenderer)
    finally:
        structlog.reset_defaults()
