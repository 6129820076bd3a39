"""Tests for outbound message builders."""

import pytest
from hypothesis import given, strategies as st

from messenger_sdk.services.message_templates import (
    attachment_message,
    audio_message,
    button_message,
    file_message,
    generic_template,
    image_message,
    list_template,
    text_message,
    video_message,
)

QUICK_REPLIES = [
    {"content_type": "text", "title": "Red", "payload": "PICK_RED"},
    {"content_type": "text", "title": "Green", "payload": "PICK_GREEN"},
]

BUTTONS = [
    {"type": "web_url", "url": "https://example.com", "title": "Visit"},
    {"type": "postback", "title": "Start", "payload": "START"},
]

ELEMENTS = [
    {"title": "First", "subtitle": "One", "image_url": "https://example.com/1.png"},
    {"title": "Second", "subtitle": "Two"},
]


class TestTextMessage:
    def test_with_quick_replies(self):
        assert text_message("hi", quick_replies=QUICK_REPLIES) == {
            "text": "hi",
            "quick_replies": QUICK_REPLIES,
        }

    def test_without_options(self):
        assert text_message("hi") == {"text": "hi"}

    def test_with_metadata(self):
        assert text_message("hi", metadata="DEV_META") == {
            "text": "hi",
            "metadata": "DEV_META",
        }

    def test_options_passed_through_unchanged(self):
        message = text_message("hi", quick_replies=QUICK_REPLIES)
        assert message["quick_replies"] is QUICK_REPLIES

    @given(text=st.text(max_size=2000))
    def test_text_properties(self, text: str):
        """Property: text is wrapped as-is."""
        assert text_message(text) == {"text": text}


class TestTemplates:
    def test_button_message(self):
        assert button_message("Choose", BUTTONS) == {
            "attachment": {
                "type": "template",
                "payload": {
                    "template_type": "button",
                    "text": "Choose",
                    "buttons": BUTTONS,
                },
            }
        }

    def test_generic_template(self):
        message = generic_template(ELEMENTS, metadata="m")
        assert message["attachment"]["type"] == "template"
        assert message["attachment"]["payload"] == {
            "template_type": "generic",
            "elements": ELEMENTS,
        }
        assert message["metadata"] == "m"

    def test_list_template_defaults(self):
        payload = list_template(ELEMENTS)["attachment"]["payload"]
        assert payload == {
            "template_type": "list",
            "top_element_style": "large",
            "elements": ELEMENTS,
            "buttons": [],
        }

    def test_list_template_options(self):
        message = list_template(
            ELEMENTS,
            top_element_style="compact",
            buttons=BUTTONS[:1],
            quick_replies=QUICK_REPLIES,
        )
        payload = message["attachment"]["payload"]
        assert payload["top_element_style"] == "compact"
        assert payload["buttons"] == BUTTONS[:1]
        assert message["quick_replies"] == QUICK_REPLIES

    def test_list_template_empty_options(self):
        payload = list_template(ELEMENTS, top_element_style="", buttons=[])["attachment"][
            "payload"
        ]
        assert payload["top_element_style"] == "large"
        assert payload["buttons"] == []

    def test_elements_order_preserved(self):
        payload = generic_template(list(reversed(ELEMENTS)))["attachment"]["payload"]
        assert [e["title"] for e in payload["elements"]] == ["Second", "First"]

    def test_malformed_elements_passed_through(self):
        payload = generic_template([{"bogus": True}])["attachment"]["payload"]
        assert payload["elements"] == [{"bogus": True}]


class TestMediaMessages:
    @pytest.mark.parametrize(
        "builder,attachment_type",
        [
            (image_message, "image"),
            (video_message, "video"),
            (audio_message, "audio"),
            (file_message, "file"),
        ],
    )
    def test_media_message(self, builder, attachment_type):
        assert builder("https://example.com/media") == {
            "attachment": {
                "type": attachment_type,
                "payload": {"url": "https://example.com/media"},
            }
        }

    def test_media_message_with_options(self):
        message = image_message(
            "https://example.com/cat.png", quick_replies=QUICK_REPLIES, metadata="m"
        )
        assert message["quick_replies"] == QUICK_REPLIES
        assert message["metadata"] == "m"

    def test_attachment_message_generic(self):
        payload = {"attachment_id": "1857777774821032"}
        assert attachment_message("image", payload) == {
            "attachment": {"type": "image", "payload": payload}
        }

    def test_builders_return_fresh_dicts(self):
        assert image_message("u") is not image_message("u")
