"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Infrastructure: respx_mock, mock_settings, mock_logfire, logfire_capture
2. Messaging events: one sample event per kind the classifier knows
3. Webhook: webhook payloads, signed request helpers, test_client
"""

import os
import pytest
from unittest.mock import MagicMock, Mock, patch

import logfire
import respx

from messenger_sdk.api.webhook import compute_signature

# Suppress "not configured" warnings; tests never send to Logfire
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def mock_settings(monkeypatch):
    """Settings with every Facebook credential set."""
    from messenger_sdk.config import Settings

    settings = Settings(
        facebook_page_access_token="test-page-token",
        facebook_verify_token="test-verify-token",
        facebook_app_secret="test-app-secret",
        facebook_graph_api_version="v2.8",
        env="local",
        logfire_token=None,
        sentry_dsn=None,
    )

    monkeypatch.setattr("messenger_sdk.config.get_settings", lambda: settings)
    # Patch where get_settings is used so the SDK sees the mock
    monkeypatch.setattr(
        "messenger_sdk.services.messenger_api.get_settings", lambda: settings
    )
    monkeypatch.setattr("messenger_sdk.api.webhook.get_settings", lambda: settings)
    monkeypatch.setattr("messenger_sdk.logging_config.get_settings", lambda: settings)
    monkeypatch.setattr("messenger_sdk.main.get_settings", lambda: settings)
    return settings


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging.

    Useful for tests that don't need to verify logging behavior.
    """
    from contextlib import contextmanager

    @contextmanager
    def mock_span(*args, **kwargs):
        yield MagicMock()

    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warn = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.span = mock_span
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_pydantic = Mock()

    monkeypatch.setattr(
        "messenger_sdk.services.messenger_api.logfire", mock_logfire_module
    )
    monkeypatch.setattr(
        "messenger_sdk.middleware.correlation_id.logfire", mock_logfire_module
    )
    monkeypatch.setattr("messenger_sdk.logging_config.logfire", mock_logfire_module)
    monkeypatch.setattr("messenger_sdk.main.logfire", mock_logfire_module)

    return mock_logfire_module


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    Yields a list of (level, args, kwargs) tuples, one per log call.
    """
    captured_logs = []

    original_info = logfire.info
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs


# =============================================================================
# Messaging Event Fixtures
# =============================================================================


@pytest.fixture
def text_event():
    return {
        "sender": {"id": "user-123"},
        "recipient": {"id": "page-123"},
        "timestamp": 1458692752478,
        "message": {"mid": "mid.1", "text": "hi"},
    }


@pytest.fixture
def quick_reply_event():
    return {
        "sender": {"id": "user-123"},
        "message": {
            "mid": "mid.2",
            "text": "Red",
            "quick_reply": {"payload": "PICK_RED"},
        },
    }


@pytest.fixture
def attachment_event():
    return {
        "sender": {"id": "user-123"},
        "message": {
            "mid": "mid.3",
            "attachments": [
                {"type": "image", "payload": {"url": "https://example.com/cat.png"}}
            ],
        },
    }


@pytest.fixture
def echo_event():
    return {
        "sender": {"id": "page-123"},
        "recipient": {"id": "user-123"},
        "message": {"mid": "mid.4", "is_echo": True, "app_id": 1517776481860111, "text": "hi"},
    }


@pytest.fixture
def postback_event():
    return {
        "sender": {"id": "user-123"},
        "postback": {"title": "Get Started", "payload": "GET_STARTED"},
    }


# =============================================================================
# Webhook Fixtures
# =============================================================================


@pytest.fixture
def webhook_payload(text_event, postback_event):
    """Webhook body with two entries, one of which has no messaging list."""
    return {
        "object": "page",
        "entry": [
            {"id": "page-123", "time": 1458692752478, "messaging": [text_event, postback_event]},
            {"id": "page-123", "time": 1458692752479, "changes": []},
        ],
    }


@pytest.fixture
def sign():
    """Build an X-Hub-Signature header value for a raw body."""

    def _sign(body: bytes, app_secret: str = "test-app-secret") -> str:
        return "sha1=" + compute_signature(app_secret, body)

    return _sign


@pytest.fixture
def received_events():
    """List collecting every event passed to the recording handler."""
    return []


@pytest.fixture
def recording_handler(received_events):
    def handler(messaging_event):
        received_events.append(messaging_event)

    return handler


@pytest.fixture
def test_client(mock_settings, mock_logfire, recording_handler):
    """FastAPI TestClient for E2E tests, wired to recording_handler."""
    from fastapi.testclient import TestClient

    from messenger_sdk.main import create_app

    return TestClient(create_app(recording_handler))


@pytest.fixture
def invalid_env(monkeypatch):
    """Environment in which get_settings() fails validation."""
    from messenger_sdk.config import get_settings

    monkeypatch.setenv("ENV", "production")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
