"""Build outbound Messenger message payloads.

Every builder returns a fresh dict ready to be passed as the ``message``
argument of ``MessengerApi.send_message()``. Element and button shapes are
not validated; the Send API is the judge of what it accepts.

Example:
    >>> text_message("Pick one", quick_replies=[{"content_type": "text",
    ...     "title": "Yes", "payload": "YES"}])
    {'text': 'Pick one', 'quick_replies': [{'content_type': 'text', 'title': 'Yes', 'payload': 'YES'}]}
"""

from typing import Any

from messenger_sdk.constants import DEFAULT_LIST_TOP_ELEMENT_STYLE
from messenger_sdk.models.messenger import AttachmentType


def _message_template(
    message: dict[str, Any],
    quick_replies: list[dict[str, Any]] | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    """Attach the optional quick_replies and metadata fields to a message."""
    if quick_replies is not None:
        message["quick_replies"] = quick_replies
    if metadata is not None:
        message["metadata"] = metadata
    return message


def attachment_message(
    attachment_type: AttachmentType,
    payload: dict[str, Any],
    *,
    quick_replies: list[dict[str, Any]] | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    """
    Wrap a payload into an attachment message.

    Args:
        attachment_type: image, video, audio, file or template
        payload: Type-specific attachment payload
        quick_replies: Optional quick reply options
        metadata: Optional developer-defined metadata echoed back by the webhook

    Returns:
        ``{"attachment": {"type": ..., "payload": ...}}`` plus the options given
    """
    return _message_template(
        {"attachment": {"type": attachment_type, "payload": payload}},
        quick_replies,
        metadata,
    )


def text_message(
    text: str,
    *,
    quick_replies: list[dict[str, Any]] | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    return _message_template({"text": text}, quick_replies, metadata)


def button_message(
    text: str,
    buttons: list[dict[str, Any]],
    *,
    quick_replies: list[dict[str, Any]] | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    """Button template: a line of text followed by up to three buttons."""
    return attachment_message(
        "template",
        {"template_type": "button", "text": text, "buttons": buttons},
        quick_replies=quick_replies,
        metadata=metadata,
    )


def generic_template(
    elements: list[dict[str, Any]],
    *,
    quick_replies: list[dict[str, Any]] | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    """Generic template: a horizontally scrollable carousel of elements."""
    return attachment_message(
        "template",
        {"template_type": "generic", "elements": elements},
        quick_replies=quick_replies,
        metadata=metadata,
    )


def list_template(
    elements: list[dict[str, Any]],
    *,
    top_element_style: str | None = None,
    buttons: list[dict[str, Any]] | None = None,
    quick_replies: list[dict[str, Any]] | None = None,
    metadata: str | None = None,
) -> dict[str, Any]:
    """
    List template: a vertical list of elements.

    Args:
        elements: List elements in display order
        top_element_style: "large" (default) or "compact"
        buttons: Buttons shown below the list (default none)
    """
    return attachment_message(
        "template",
        {
            "template_type": "list",
            "top_element_style": top_element_style or DEFAULT_LIST_TOP_ELEMENT_STYLE,
            "elements": elements,
            "buttons": buttons or [],
        },
        quick_replies=quick_replies,
        metadata=metadata,
    )


def image_message(url: str, **options: Any) -> dict[str, Any]:
    return attachment_message("image", {"url": url}, **options)


def video_message(url: str, **options: Any) -> dict[str, Any]:
    return attachment_message("video", {"url": url}, **options)


def audio_message(url: str, **options: Any) -> dict[str, Any]:
    return attachment_message("audio", {"url": url}, **options)


def file_message(url: str, **options: Any) -> dict[str, Any]:
    return attachment_message("file", {"url": url}, **options)
