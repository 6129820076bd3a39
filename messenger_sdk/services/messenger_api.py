"""Facebook Messenger Platform Graph API client.

Wraps the Send API, User Profile API, Messenger Profile API and Attachment
Upload API. Each method issues exactly one HTTP request and either returns
the parsed JSON response or raises:

- MissingAccessTokenError: no page access token, nothing was sent
- MessengerApiError: the Graph API answered with an ``error`` object
- httpx.RequestError (and subclasses): transport failures, untranslated
"""

import time
from typing import Any

import httpx
import logfire

from messenger_sdk.config import get_settings
from messenger_sdk.constants import (
    DEFAULT_NOTIFICATION_TYPE,
    FACEBOOK_API_TIMEOUT_SECONDS,
    FACEBOOK_GRAPH_API_BASE_URL,
    FACEBOOK_GRAPH_API_VERSION,
    MESSAGE_ATTACHMENTS_ENDPOINT,
    MESSAGES_ENDPOINT,
    MESSENGER_PROFILE_ENDPOINT,
    MESSENGER_PROFILE_FIELDS,
    USER_PROFILE_FIELDS,
)
from messenger_sdk.exceptions import MessengerApiError, MissingAccessTokenError
from messenger_sdk.logging_config import redact_tokens
from messenger_sdk.models.messenger import (
    AttachmentType,
    NotificationType,
    SenderAction,
)


class MessengerApi:
    """Wrapper around the Facebook Messenger Platform API.

    Bind an instance to a page by passing its access token, or pass
    ``access_token=`` on every call. The per-call token always wins.

    Example:
        >>> api = MessengerApi(page_access_token)
        >>> await api.send_message("psid-123", text_message("Hello!"))
        {'recipient_id': 'psid-123', 'message_id': 'mid.1'}
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        api_version: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            access_token: Default Facebook Page access token
            api_version: Graph API version, defaults to FACEBOOK_GRAPH_API_VERSION
            timeout: Request timeout in seconds, defaults to FACEBOOK_API_TIMEOUT_SECONDS
            http_client: Shared client to reuse; one is opened per call otherwise
        """
        self._access_token = access_token
        self._api_version = api_version or FACEBOOK_GRAPH_API_VERSION
        self._timeout = timeout if timeout is not None else FACEBOOK_API_TIMEOUT_SECONDS
        self._http_client = http_client

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient | None = None) -> "MessengerApi":
        """Build a client bound to the page token from Settings."""
        settings = get_settings()
        return cls(
            settings.facebook_page_access_token,
            api_version=settings.facebook_graph_api_version,
            timeout=settings.facebook_api_timeout_seconds,
            http_client=http_client,
        )

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def api_version(self) -> str:
        return self._api_version

    def _url(self, endpoint: str) -> str:
        return f"{FACEBOOK_GRAPH_API_BASE_URL}/{self._api_version}/{endpoint}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        access_token: str | None,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Issue one Graph API request and normalize the error convention."""
        token = access_token or self._access_token
        if not token:
            logfire.error(
                "Graph API call without page access token",
                method=method,
                endpoint=endpoint,
            )
            raise MissingAccessTokenError()

        query = {"access_token": token, **(params or {})}
        request_kwargs: dict[str, Any] = {
            "params": query,
            "headers": {"Content-Type": "application/json"},
        }
        if body is not None:
            request_kwargs["json"] = body

        start_time = time.time()
        logfire.info(
            "Calling Graph API",
            method=method,
            endpoint=endpoint,
            api_version=self._api_version,
            params=redact_tokens(query),
        )

        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, self._url(endpoint), **request_kwargs
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(
                        method, self._url(endpoint), **request_kwargs
                    )
        except httpx.RequestError as e:
            logfire.error(
                "Graph API request error",
                method=method,
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
                response_time_ms=(time.time() - start_time) * 1000,
            )
            raise

        elapsed = time.time() - start_time
        data = response.json()

        if isinstance(data, dict) and data.get("error"):
            logfire.error(
                "Graph API returned an error",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                error=data["error"],
                response_time_ms=elapsed * 1000,
            )
            raise MessengerApiError(data["error"])

        logfire.info(
            "Graph API call succeeded",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            response_time_ms=elapsed * 1000,
        )
        return data

    # =========================================================================
    # Send API
    # =========================================================================

    async def send_message(
        self,
        recipient_id: str,
        message: dict[str, Any],
        *,
        notification_type: NotificationType | None = None,
        tag: str | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Send a message to a user.

        See https://developers.facebook.com/docs/messenger-platform/send-api-reference

        Args:
            recipient_id: Page-scoped user ID
            message: Message payload, e.g. from message_templates
            notification_type: REGULAR (default), SILENT_PUSH or NO_PUSH
            tag: Message tag for sends outside the standard messaging window
            access_token: Page access token overriding the instance default

        Returns:
            Dict with recipient_id, message_id and optionally attachment_id
        """
        body = {
            "recipient": {"id": recipient_id},
            "message": message,
            "notification_type": notification_type or DEFAULT_NOTIFICATION_TYPE,
        }
        if tag is not None:
            body["tag"] = tag
        return await self._request("POST", MESSAGES_ENDPOINT, access_token, body=body)

    async def send_sender_action(
        self,
        recipient_id: str,
        sender_action: SenderAction,
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Send a sender action (typing_on, typing_off, mark_seen) to a user.

        Returns:
            Dict with recipient_id
        """
        return await self._request(
            "POST",
            MESSAGES_ENDPOINT,
            access_token,
            body={
                "recipient": {"id": recipient_id},
                "sender_action": sender_action,
            },
        )

    # =========================================================================
    # User Profile API
    # =========================================================================

    async def get_user_profile(
        self,
        user_id: str,
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Fetch a user's profile (name, picture, locale, timezone, ...)."""
        return await self._request(
            "GET",
            user_id,
            access_token,
            params={"fields": ",".join(USER_PROFILE_FIELDS)},
        )

    # =========================================================================
    # Messenger Profile API
    # =========================================================================

    async def set_messenger_profile(
        self,
        profile: dict[str, Any],
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Set page-level Messenger Profile properties.

        Args:
            profile: Properties to set, e.g. {"greeting": [...], "get_started": {...}}

        Returns:
            Platform acknowledgement, e.g. {"result": "success"}
        """
        return await self._request(
            "POST",
            MESSENGER_PROFILE_ENDPOINT,
            access_token,
            body=profile,
        )

    async def get_messenger_profile(
        self,
        *,
        fields: str | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Fetch the Messenger Profile.

        Args:
            fields: Comma-separated fields to fetch, defaults to all known fields
        """
        return await self._request(
            "GET",
            MESSENGER_PROFILE_ENDPOINT,
            access_token,
            params={"fields": fields or ",".join(MESSENGER_PROFILE_FIELDS)},
        )

    async def delete_messenger_profile(
        self,
        *,
        fields: list[str] | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Delete Messenger Profile properties.

        Args:
            fields: Fields to delete, defaults to all known fields
        """
        return await self._request(
            "DELETE",
            MESSENGER_PROFILE_ENDPOINT,
            access_token,
            body={
                "fields": fields if fields is not None else list(MESSENGER_PROFILE_FIELDS)
            },
        )

    # =========================================================================
    # Attachment Upload API
    # =========================================================================

    async def upload_attachment(
        self,
        attachment_type: AttachmentType,
        url: str,
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Upload a reusable attachment from a URL.

        Returns:
            Dict with attachment_id, usable in later attachment payloads
        """
        return await self._request(
            "POST",
            MESSAGE_ATTACHMENTS_ENDPOINT,
            access_token,
            body={
                "message": {
                    "attachment": {
                        "type": attachment_type,
                        "payload": {"url": url, "is_reusable": True},
                    }
                }
            },
        )
