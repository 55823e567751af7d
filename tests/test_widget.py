import pytest

from hayagriva.core.protocol import ChatMessage
from hayagriva.core.sandbox import Sandbox
from hayagriva.core.widget import (
    FALLBACK_RESPONSE,
    lookup_response,
    synthesize_embeddable_widget,
    widget_class_name,
)


def test_same_transcript_gives_identical_widget(transcript):
    assert synthesize_embeddable_widget(transcript) == synthesize_embeddable_widget(transcript)


def test_widget_has_no_timestamp_unless_injected(transcript, fixed_time):
    assert "Generated on" not in synthesize_embeddable_widget(transcript)
    stamped = synthesize_embeddable_widget(transcript, generated_at=fixed_time)
    assert f"Generated on: {fixed_time.isoformat()}" in stamped


def test_widget_exposes_its_interface(transcript):
    source = synthesize_embeddable_widget(transcript)
    assert "class HayagrivaBot {" in source
    for member in (
        "constructor(options = {}) {",
        "mount(container) {",
        "sendMessage(message) {",
        "startVoiceRecognition() {",
        "setVoiceEnabled(enabled) {",
    ):
        assert member in source
    for option in ("options.name", "options.voiceEnabled", "options.onReady", "options.onMessageSent", "options.onMessageReceived"):
        assert option in source
    assert "module.exports = HayagrivaBot;" in source
    assert "Promise.reject(new Error('Speech recognition not supported'))" in source


def test_widget_embeds_the_transcript(transcript):
    source = synthesize_embeddable_widget(transcript)
    assert '"content": "What is yoga?"' in source


def test_widget_is_balanced(transcript):
    for log in (transcript, []):
        assert Sandbox().run_check(synthesize_embeddable_widget(log), tags=False) is None


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x85"])
def test_unicode_line_separators_stay_inside_strings(separator):
    log = [
        ChatMessage(role="user", content="hi"),
        ChatMessage(role="assistant", content=f"line one{separator}line two"),
    ]
    source = synthesize_embeddable_widget(log)
    assert separator not in source
    assert Sandbox().run_check(source, tags=False) is None
    assert lookup_response(log, "hi") == f"line one{separator}line two"


def test_widget_name_sets_class_name(transcript):
    source = synthesize_embeddable_widget(transcript, name="support desk")
    assert "class SupportDeskBot {" in source
    assert "const DEFAULT_NAME = 'support desk';" in source


@pytest.mark.parametrize(
    "name, class_name",
    [("Hayagriva", "HayagrivaBot"), ("help-center", "HelpCenterBot"), ("42", "HayagrivaBot"), ("", "HayagrivaBot")],
)
def test_widget_class_name(name, class_name):
    assert widget_class_name(name) == class_name


def test_lookup_answers_from_the_transcript(transcript):
    reply = lookup_response(transcript, "YOGA")
    assert reply == "Yoga is a practice joining breath, movement and attention."


def test_lookup_skips_user_messages_without_a_reply(transcript):
    assert lookup_response(transcript, "tea") == "Masala tea is black tea brewed with milk and spices."


@pytest.mark.parametrize(
    "message, expected",
    [
        ("hello there", "Namaste! How can I assist you today?"),
        ("thanks a lot", "You're very welcome! Is there anything else I can help you with?"),
        ("what is your name", "I am Hayagriva, your AI assistant with an Indian perspective!"),
        ("how are you", "I'm functioning well, thank you for asking! How may I help you?"),
        ("ok bye", "Namaste! It was a pleasure helping you. Have a wonderful day!"),
        ("explain this physics", FALLBACK_RESPONSE),
        ("   ", FALLBACK_RESPONSE),
    ],
)
def test_canned_responses(message, expected):
    assert lookup_response([], message) == expected


def test_identity_reply_uses_bot_name():
    assert lookup_response([], "who are you?", name="Vidya").startswith("I am Vidya,")


def test_lookup_accepts_models_and_dicts():
    log = [ChatMessage(role="user", content="ping"), {"role": "assistant", "content": "pong"}]
    assert lookup_response(log, "ping") == "pong"
