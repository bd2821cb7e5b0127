"""Tests for ChatGuard - crisis banner and redaction around replies."""
from typing import List, Sequence

import pytest

from mannmitra.services.chat_service.guard import (
    FALLBACK_REPLY,
    ChatGuard,
    ChatMessage,
    ReplyProvider,
)


class RecordingProvider(ReplyProvider):
    """Echo provider that remembers what it was sent."""

    def __init__(self, reply="I hear you."):
        self.reply = reply
        self.calls: List[List[ChatMessage]] = []

    def generate_reply(self, messages: Sequence[ChatMessage]) -> str:
        self.calls.append(list(messages))
        return self.reply


class FailingProvider(ReplyProvider):

    def generate_reply(self, messages: Sequence[ChatMessage]) -> str:
        raise ConnectionError("model unavailable")


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def guard(provider):
    return ChatGuard(provider=provider)


class TestCrisisBanner:

    def test_banner_on_crisis_message(self, guard):
        turn = guard.handle_message("I can't take it anymore")

        assert turn.show_crisis_banner is True
        assert turn.crisis_resources["title"] == "Crisis Support Resources"

    def test_no_banner_for_ordinary_message(self, guard):
        turn = guard.handle_message("I'm stressed about exams")

        assert turn.show_crisis_banner is False
        assert turn.crisis_resources is None
        assert turn.assistant_message.content == "I hear you."

    def test_banner_does_not_block_reply(self, guard, provider):
        """The banner is shown alongside the reply, not instead of it."""
        turn = guard.handle_message("I want to die")

        assert turn.show_crisis_banner is True
        assert len(provider.calls) == 1
        assert turn.assistant_message.role == "assistant"


class TestRedaction:

    def test_provider_sees_redacted_text(self, guard, provider):
        turn = guard.handle_message("I can't take it anymore, call me on 9876543210")

        assert turn.user_message.content == "I can't take it anymore, call me on [phone]"
        assert provider.calls[0][-1].content == "I can't take it anymore, call me on [phone]"
        assert turn.show_crisis_banner is True

    def test_history_passed_through(self, guard, provider):
        history = [
            ChatMessage(role="user", content="hi"),
            ChatMessage(role="assistant", content="Hello! How are you feeling?"),
        ]
        guard.handle_message("a bit low", history=history)

        sent = provider.calls[0]
        assert [m.content for m in sent] == ["hi", "Hello! How are you feeling?", "a bit low"]


class TestFallback:

    def test_provider_failure_uses_fallback(self):
        guard = ChatGuard(provider=FailingProvider())
        turn = guard.handle_message("I had a long day")

        assert turn.used_fallback is True
        assert turn.assistant_message.content == FALLBACK_REPLY

    def test_provider_failure_still_shows_banner(self):
        turn = ChatGuard(provider=FailingProvider()).handle_message("I want to end my life")

        assert turn.show_crisis_banner is True
        assert turn.used_fallback is True


class TestValidation:

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_message_rejected(self, guard, text):
        with pytest.raises(ValueError):
            guard.handle_message(text)

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            ChatMessage(role="system", content="hi")
