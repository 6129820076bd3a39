"""Facebook Messenger Platform SDK.

Event classification, message builders, a Graph API client and FastAPI
webhook helpers.
"""

from messenger_sdk.api.webhook import (
    WebhookHelper,
    compute_signature,
    create_webhook_router,
    dispatch_messaging_events,
)
from messenger_sdk.exceptions import (
    MessengerApiError,
    MessengerSdkError,
    MissingAccessTokenError,
    WebhookSignatureError,
)
from messenger_sdk.services import incoming_events, message_templates
from messenger_sdk.services.messenger_api import MessengerApi

__all__ = [
    "MessengerApi",
    "MessengerApiError",
    "MessengerSdkError",
    "MissingAccessTokenError",
    "WebhookHelper",
    "WebhookSignatureError",
    "compute_signature",
    "create_webhook_router",
    "dispatch_messaging_events",
    "incoming_events",
    "message_templates",
]
