"""Facebook Messenger webhook helpers for FastAPI.

WebhookHelper covers the three things a webhook endpoint has to do:

1. Setup verification - echo hub.challenge when hub.verify_token matches
2. Request verification - check the X-Hub-Signature HMAC-SHA1 of the raw body
3. Event dispatch - acknowledge with 200, then hand every messaging event
   to an application callback

create_webhook_router() wires all three into an APIRouter; applications
with their own routes can call the helper methods directly.
"""

import hashlib
import hmac
import inspect
import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Request, Response
from fastapi.responses import PlainTextResponse

from messenger_sdk.config import get_settings
from messenger_sdk.constants import (
    SIGNATURE_HEADER,
    SIGNATURE_PREFIX,
    WEBHOOK_SUBSCRIBE_MODE,
)
from messenger_sdk.exceptions import WebhookSignatureError
from messenger_sdk.models.messenger import MessagingEvent

logger = logging.getLogger(__name__)

# May be sync or async
MessagingEventHandler = Callable[[MessagingEvent], Any]


def compute_signature(app_secret: str, body: bytes) -> str:
    """Hex HMAC-SHA1 of a raw request body keyed by the app secret."""
    return hmac.new(app_secret.encode("utf-8"), body, hashlib.sha1).hexdigest()


async def dispatch_messaging_events(
    payload: Any,
    event_handler: MessagingEventHandler,
) -> int:
    """
    Call event_handler once per messaging event, in delivery order.

    Entries without a messaging list are skipped. Awaitable results are
    awaited before the next event is dispatched. Handler errors propagate.

    Returns:
        Number of events dispatched
    """
    entries = payload.get("entry") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return 0

    dispatched = 0
    for entry in entries:
        messaging = entry.get("messaging") if isinstance(entry, dict) else None
        if not isinstance(messaging, list):
            continue
        for messaging_event in messaging:
            result = event_handler(messaging_event)
            if inspect.isawaitable(result):
                await result
            dispatched += 1

    logger.debug("Dispatched %d messaging events", dispatched)
    return dispatched


class WebhookHelper:
    """Verify and dispatch incoming Messenger webhook requests.

    Args:
        app_secret: Facebook App secret. Without it, signature verification
            is skipped and every request is accepted.
        verify_token: Token expected in hub.verify_token during setup
    """

    def __init__(self, app_secret: str | None = None, verify_token: str | None = None):
        self._app_secret = app_secret
        self._verify_token = verify_token

    @classmethod
    def from_settings(cls) -> "WebhookHelper":
        settings = get_settings()
        return cls(
            app_secret=settings.facebook_app_secret,
            verify_token=settings.facebook_verify_token,
        )

    def verify_webhook_setup(
        self,
        request: Request,
        verify_token: str | None = None,
    ) -> Response:
        """Answer the GET subscription handshake.

        Returns hub.challenge as plain text when the token and mode match,
        otherwise an empty 403.
        """
        expected_token = verify_token or self._verify_token
        mode = request.query_params.get("hub.mode")
        token = request.query_params.get("hub.verify_token")
        challenge = request.query_params.get("hub.challenge")

        if (
            expected_token
            and token == expected_token
            and mode == WEBHOOK_SUBSCRIBE_MODE
        ):
            logger.info("Webhook verified successfully")
            return PlainTextResponse(challenge or "")

        logger.warning("Webhook verification failed (mode=%s)", mode)
        return Response(status_code=403)

    def verify_signature(self, body: bytes, signature: str | None) -> None:
        """
        Check an X-Hub-Signature header value against the raw body.

        Raises:
            WebhookSignatureError: header missing, malformed, or not matching
        """
        if not self._app_secret:
            return

        if not signature or not signature.startswith(SIGNATURE_PREFIX):
            raise WebhookSignatureError("Missing or malformed X-Hub-Signature header")

        received = signature[len(SIGNATURE_PREFIX):]
        expected = compute_signature(self._app_secret, body)
        if not hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8")):
            raise WebhookSignatureError("Failed verifying webhook request")

    async def verify_webhook_request(self, request: Request) -> None:
        """Verify that a POST request really comes from Facebook."""
        body = await request.body()
        self.verify_signature(body, request.headers.get(SIGNATURE_HEADER))

    def handle_webhook_event(
        self,
        payload: Any,
        background_tasks: BackgroundTasks,
        event_handler: MessagingEventHandler,
    ) -> Response:
        """
        Acknowledge a webhook delivery and schedule its events.

        The 200 response is returned right away; event_handler runs for each
        messaging event after the response has been sent, so a slow or
        failing handler never changes what Facebook receives.
        """
        background_tasks.add_task(dispatch_messaging_events, payload, event_handler)
        return Response(status_code=200, background=background_tasks)


def create_webhook_router(
    helper: WebhookHelper,
    event_handler: MessagingEventHandler,
) -> APIRouter:
    """Build GET/POST webhook routes; mount with a prefix, e.g. "/webhook"."""
    router = APIRouter()

    @router.get("")
    async def verify_webhook(request: Request):
        """Facebook webhook verification endpoint."""
        return helper.verify_webhook_setup(request)

    @router.post("")
    async def handle_webhook(request: Request, background_tasks: BackgroundTasks):
        """Handle incoming Facebook Messenger webhook events."""
        try:
            await helper.verify_webhook_request(request)
        except WebhookSignatureError as e:
            logger.warning("Rejected webhook request: %s", e)
            return Response(status_code=403)

        try:
            payload = await request.json()
        except ValueError:
            logger.warning("Webhook request body is not valid JSON")
            return Response(status_code=400)

        return helper.handle_webhook_event(payload, background_tasks, event_handler)

    return router
