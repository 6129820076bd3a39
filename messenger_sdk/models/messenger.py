"""Facebook Messenger wire-contract value types."""

from typing import Any, Literal

NotificationType = Literal["REGULAR", "SILENT_PUSH", "NO_PUSH"]

SenderAction = Literal["typing_on", "typing_off", "mark_seen"]

AttachmentType = Literal["image", "video", "audio", "file", "template"]

# One element of an entry's "messaging" list
MessagingEvent = dict[str, Any]
