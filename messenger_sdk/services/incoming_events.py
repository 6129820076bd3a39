"""Classify incoming Messenger webhook messaging events.

Each predicate takes one messaging event (an element of an entry's
``messaging`` list) and reports whether it is of a given kind. Predicates
never raise: anything that is not shaped like an event is simply not a match.
"""

from collections.abc import Mapping
from typing import Any


def _message(messaging_event: Any) -> Mapping[str, Any] | None:
    """Return the ``message`` object of an event, or None when absent."""
    if not isinstance(messaging_event, Mapping):
        return None
    message = messaging_event.get("message")
    return message if isinstance(message, Mapping) else None


def _has_field(messaging_event: Any, field: str) -> bool:
    # Presence, not truthiness: a JSON null still counts as present
    return isinstance(messaging_event, Mapping) and field in messaging_event


def is_text_message(messaging_event: Any) -> bool:
    """Plain text typed by the user (not an echo, quick reply or attachment)."""
    message = _message(messaging_event)
    if message is None:
        return False
    return bool(
        not message.get("is_echo")
        and not message.get("quick_reply")
        and not message.get("attachments")
        and message.get("text")
    )


def is_quick_reply(messaging_event: Any) -> bool:
    message = _message(messaging_event)
    return message is not None and bool(message.get("quick_reply"))


def is_attachment(messaging_event: Any) -> bool:
    message = _message(messaging_event)
    return message is not None and bool(message.get("attachments"))


def is_echo(messaging_event: Any) -> bool:
    """Message sent by the page itself and echoed back to the webhook."""
    message = _message(messaging_event)
    return message is not None and bool(message.get("is_echo"))


def is_referral(messaging_event: Any) -> bool:
    return _has_field(messaging_event, "referral")


def is_postback(messaging_event: Any) -> bool:
    return _has_field(messaging_event, "postback")


def is_optin(messaging_event: Any) -> bool:
    return _has_field(messaging_event, "optin")


def is_account_linking(messaging_event: Any) -> bool:
    return _has_field(messaging_event, "account_linking")


def is_read_confirmation(messaging_event: Any) -> bool:
    return _has_field(messaging_event, "read")


def is_delivery_confirmation(messaging_event: Any) -> bool:
    return _has_field(messaging_event, "delivery")


# Checked in order; echo and quick_reply come first since they also carry
# a message body
EVENT_TYPES = (
    ("echo", is_echo),
    ("quick_reply", is_quick_reply),
    ("attachment", is_attachment),
    ("text", is_text_message),
    ("postback", is_postback),
    ("referral", is_referral),
    ("optin", is_optin),
    ("account_linking", is_account_linking),
    ("read", is_read_confirmation),
    ("delivery", is_delivery_confirmation),
)


def event_type(messaging_event: Any) -> str | None:
    """
    Name the kind of a messaging event.

    Returns:
        The first matching name from EVENT_TYPES, or None for unknown events
    """
    for name, predicate in EVENT_TYPES:
        if predicate(messaging_event):
            return name
    return None
