"""SDK-wide constants.

This module centralizes the Graph API wire contract (URLs, default field
lists) and default timeouts so there is a single source of truth.
"""

# =============================================================================
# Facebook Graph API
# =============================================================================

FACEBOOK_GRAPH_API_BASE_URL = "https://graph.facebook.com"

# Facebook Graph API version (path segment after the base URL)
FACEBOOK_GRAPH_API_VERSION = "v2.8"

# Timeout for Facebook Graph API calls (seconds)
FACEBOOK_API_TIMEOUT_SECONDS = 10.0

# Error value surfaced when no page access token is available for a call
MISSING_ACCESS_TOKEN_ERROR = "Missing page access token"

# =============================================================================
# Graph API endpoints
# =============================================================================

MESSAGES_ENDPOINT = "me/messages"
MESSENGER_PROFILE_ENDPOINT = "me/messenger_profile"
MESSAGE_ATTACHMENTS_ENDPOINT = "me/message_attachments"

# =============================================================================
# Default field lists
# =============================================================================

# Fields requested by get_user_profile()
USER_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "profile_pic",
    "locale",
    "timezone",
    "gender",
    "is_payment_enabled",
    "last_ad_referral",
)

# Fields read by get_messenger_profile() and cleared by delete_messenger_profile()
MESSENGER_PROFILE_FIELDS = (
    "persistent_menu",
    "get_started",
    "greeting",
    "whitelisted_domains",
    "account_linking_url",
    "payment_settings",
    "target_audience",
)

# =============================================================================
# Send API defaults
# =============================================================================

DEFAULT_NOTIFICATION_TYPE = "REGULAR"

# top_element_style used by list templates when none is given
DEFAULT_LIST_TOP_ELEMENT_STYLE = "large"

# =============================================================================
# Webhook
# =============================================================================

WEBHOOK_SUBSCRIBE_MODE = "subscribe"
SIGNATURE_HEADER = "x-hub-signature"
SIGNATURE_PREFIX = "sha1="
