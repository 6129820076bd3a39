"""Exceptions raised by the Messenger SDK."""

from typing import Any

from messenger_sdk.constants import MISSING_ACCESS_TOKEN_ERROR


class MessengerSdkError(Exception):
    """Base error for the Messenger SDK."""


class MessengerApiError(MessengerSdkError):
    """Raised when the Graph API reports an error.

    ``error`` holds the response's ``error`` value exactly as received.
    """

    def __init__(self, error: Any):
        self.error = error
        message = error.get("message", error) if isinstance(error, dict) else error
        super().__init__(str(message))


class MissingAccessTokenError(MessengerSdkError):
    """Raised before any request when no page access token is available."""

    def __init__(self) -> None:
        self.error = MISSING_ACCESS_TOKEN_ERROR
        super().__init__(MISSING_ACCESS_TOKEN_ERROR)


class WebhookSignatureError(MessengerSdkError):
    """Raised when an X-Hub-Signature header does not match the request body."""
