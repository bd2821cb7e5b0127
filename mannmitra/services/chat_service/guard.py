"""Chat guard: crisis banner and redaction around the reply provider.

For every user message:
1. Check the raw text with the crisis banner detector
2. Redact the text before it is stored or echoed back
3. Ask the reply provider for an answer to the redacted conversation

The reply provider is external. If it fails, the user still gets a fixed
supportive reply rather than an error.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from mannmitra.shared.utils import hash_text_for_audit
from mannmitra.services.safety_service.crisis_resources import get_crisis_resources
from mannmitra.services.safety_service.redactor import PIIRedactor, get_redactor
from mannmitra.services.safety_service.self_harm import CrisisDetector, get_crisis_detector

logger = logging.getLogger(__name__)


FALLBACK_REPLY = (
    "Thank you for sharing that with me. I'm here to listen and support you."
)


@dataclass(frozen=True)
class ChatMessage:
    role: str       # "user" | "assistant"
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.role not in ("user", "assistant"):
            raise ValueError(f"Unknown chat role: {self.role}")

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content, "timestamp": self.timestamp.isoformat()}


class ReplyProvider(ABC):
    """External reply generator (on-device model, edge fallback, ...)."""

    @abstractmethod
    def generate_reply(self, messages: Sequence[ChatMessage]) -> str:
        """Reply to the conversation; messages contain redacted text only."""
        pass


@dataclass(frozen=True)
class ChatTurn:
    """One exchange as shown in the transcript."""
    user_message: ChatMessage
    assistant_message: ChatMessage
    show_crisis_banner: bool
    crisis_resources: Optional[Dict[str, Any]] = None
    used_fallback: bool = False


class ChatGuard:
    """Wraps a ReplyProvider with crisis detection and redaction."""

    def __init__(
        self,
        provider: ReplyProvider,
        detector: Optional[CrisisDetector] = None,
        redactor: Optional[PIIRedactor] = None,
    ):
        self.provider = provider
        self.detector = detector if detector is not None else get_crisis_detector()
        self.redactor = redactor if redactor is not None else get_redactor()

    def handle_message(
        self,
        text: str,
        history: Optional[List[ChatMessage]] = None,
    ) -> ChatTurn:
        """Process one user message.

        Raises:
            ValueError: If text is blank
        """
        if not text or not text.strip():
            raise ValueError("Message text is required")

        show_banner = self.detector.detect(text)
        user_message = ChatMessage(role="user", content=self.redactor.redact(text))
        conversation = list(history or []) + [user_message]

        used_fallback = False
        try:
            reply = self.provider.generate_reply(conversation)
        except Exception as e:
            logger.error(
                "CHAT_REPLY_FAILED",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "action": "USING_FALLBACK_REPLY",
                }
            )
            reply = FALLBACK_REPLY
            used_fallback = True

        logger.info(
            "CHAT_TURN_COMPLETED",
            extra={
                "text_hash": hash_text_for_audit(text),
                "crisis_banner": show_banner,
                "used_fallback": used_fallback,
                "history_length": len(conversation),
            }
        )
        return ChatTurn(
            user_message=user_message,
            assistant_message=ChatMessage(role="assistant", content=reply),
            show_crisis_banner=show_banner,
            crisis_resources=get_crisis_resources() if show_banner else None,
            used_fallback=used_fallback,
        )
