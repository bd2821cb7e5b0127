"""Chat Service: safety wrapper around the companion's reply provider."""

from .guard import ChatGuard, ChatMessage, ChatTurn, ReplyProvider, FALLBACK_REPLY

__all__ = ["ChatGuard", "ChatMessage", "ChatTurn", "ReplyProvider", "FALLBACK_REPLY"]
