"""Reference FastAPI host application.

Shows how the SDK modules compose in a consuming application: the webhook
router receives events, the classifier names them, and replies are built with
message_templates and sent through MessengerApi.

Run locally with:
    uvicorn messenger_sdk.main:app --reload
"""

import os
from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from sentry_sdk.integrations.fastapi import FastApiIntegration

from messenger_sdk.api.webhook import (
    MessagingEventHandler,
    WebhookHelper,
    create_webhook_router,
)
from messenger_sdk.config import get_settings
from messenger_sdk.logging_config import setup_logfire
from messenger_sdk.middleware.correlation_id import CorrelationIDMiddleware
from messenger_sdk.models.messenger import MessagingEvent
from messenger_sdk.services.incoming_events import event_type, is_text_message
from messenger_sdk.services.message_templates import text_message
from messenger_sdk.services.messenger_api import MessengerApi

__version__ = "0.1.0"


def build_echo_handler(api: MessengerApi) -> MessagingEventHandler:
    """Event handler that logs every event and echoes text messages back."""

    async def handle_event(messaging_event: MessagingEvent) -> None:
        sender_id = (messaging_event.get("sender") or {}).get("id")
        logfire.info(
            "Messaging event received",
            event_type=event_type(messaging_event),
            sender_id=sender_id,
        )
        if sender_id and is_text_message(messaging_event):
            await api.send_message(
                sender_id,
                text_message(messaging_event["message"]["text"]),
            )

    return handle_event


def create_app(
    event_handler: MessagingEventHandler | None = None,
    *,
    helper: WebhookHelper | None = None,
) -> FastAPI:
    """
    Create the host application.

    Args:
        event_handler: Callback for each messaging event; defaults to an echo
            handler using the page token from Settings
        helper: Webhook helper; defaults to one built from Settings
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logfire(app)

        if settings.sentry_dsn:
            sentry_sdk.init(
                dsn=settings.sentry_dsn,
                traces_sample_rate=settings.sentry_traces_sample_rate,
                integrations=[FastApiIntegration()],
            )

        logfire.info(
            "Application startup complete",
            environment=settings.env,
            api_version=settings.facebook_graph_api_version,
            signature_verification=bool(settings.facebook_app_secret),
        )
        yield
        logfire.info("Application shutdown complete")

    app = FastAPI(
        title="Messenger SDK reference app",
        description="Facebook Messenger webhook host built on messenger_sdk",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(CorrelationIDMiddleware)

    handler = event_handler or build_echo_handler(MessengerApi.from_settings())
    app.include_router(
        create_webhook_router(helper or WebhookHelper.from_settings(), handler),
        prefix="/webhook",
        tags=["webhook"],
    )

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "messenger_sdk.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENV") == "local",
    )
