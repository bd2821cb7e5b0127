"""Community post composition: moderate, suggest, then publish or hold.

Flow for one post:

    review(text)   -> verdict, plus a kinder-phrasing suggestion when the
                      verdict is not "allow"
    submit(...)    -> redact, moderate the redacted text, pseudonymize the
                      author, then:
                        allow  -> stored as published
                        hold   -> stored as held (not shown publicly)
                        crisis -> not stored; crisis resources returned

A suggestion the author accepts is simply submitted again, so it is
moderated like any other text.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional

from mannmitra.shared.models import ModerationVerdict, PostStatus, Suggestion
from mannmitra.shared.utils import hash_pii
from mannmitra.services.safety_service.crisis_resources import get_crisis_resources
from mannmitra.services.safety_service.moderator import ModerationPolicy, get_policy
from mannmitra.services.safety_service.redactor import PIIRedactor, get_redactor
from .pseudonym import pseudonymize
from .suggester import suggest_kinder_phrasing

logger = logging.getLogger(__name__)


TOPICS: FrozenSet[str] = frozenset({
    "general",
    "exam_stress",
    "relationships",
    "anxiety",
    "depression",
    "self_care",
})


@dataclass(frozen=True)
class CommunityPost:
    """A stored community post. Only redacted text is ever kept."""
    post_id: str
    topic_id: str
    uid_pseudo: str
    text_redacted: str
    toxicity: float
    status: PostStatus
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.topic_id not in TOPICS:
            raise ValueError(f"Unknown topic: {self.topic_id}")
        if not 0.0 <= self.toxicity <= 1.0:
            raise ValueError(f"Toxicity must be 0.0-1.0, got {self.toxicity}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.post_id,
            "topicId": self.topic_id,
            "uidPseudo": self.uid_pseudo,
            "text_redacted": self.text_redacted,
            "toxicity": round(self.toxicity, 3),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class PostReview:
    """Pre-submission check shown to the author."""
    verdict: ModerationVerdict
    suggestion: Optional[Suggestion] = None

    def to_dict(self) -> Dict[str, Any]:
        result = self.verdict.to_dict()
        if self.suggestion is not None:
            result["suggestion"] = self.suggestion.to_dict()
        return result


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of submit(): the stored post, or a crisis block."""
    verdict: ModerationVerdict
    post: Optional[CommunityPost] = None
    crisis_resources: Optional[Dict[str, Any]] = None

    @property
    def blocked(self) -> bool:
        return self.post is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "action": self.verdict.action.value,
            "toxicity": round(self.verdict.toxicity, 3),
            "self_harm": round(self.verdict.self_harm, 3),
        }
        if self.post is not None:
            result["post"] = self.post.to_dict()
            result["status"] = self.post.status.value
        if self.crisis_resources is not None:
            result["crisis_ui"] = self.crisis_resources
        return result


class PostStore(ABC):
    """Key-value store for community posts."""

    @abstractmethod
    def save(self, post: CommunityPost) -> None:
        pass

    @abstractmethod
    def get(self, post_id: str) -> Optional[CommunityPost]:
        pass

    @abstractmethod
    def list_posts(self, status: Optional[PostStatus] = None) -> List[CommunityPost]:
        """Posts newest first, optionally filtered by status."""
        pass

    def list_published(self) -> List[CommunityPost]:
        return self.list_posts(PostStatus.PUBLISHED)

    def list_held(self) -> List[CommunityPost]:
        return self.list_posts(PostStatus.HELD)


class InMemoryPostStore(PostStore):
    """Dict-backed PostStore for tests and single-process demos."""

    def __init__(self):
        self._posts: Dict[str, CommunityPost] = {}

    def save(self, post: CommunityPost) -> None:
        self._posts[post.post_id] = post

    def get(self, post_id: str) -> Optional[CommunityPost]:
        return self._posts.get(post_id)

    def list_posts(self, status: Optional[PostStatus] = None) -> List[CommunityPost]:
        posts = [p for p in self._posts.values() if status is None or p.status == status]
        return sorted(posts, key=lambda p: p.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._posts)


class PostComposer:
    """Runs the community-post moderation flow against a PostStore."""

    def __init__(
        self,
        store: PostStore,
        policy: Optional[ModerationPolicy] = None,
        redactor: Optional[PIIRedactor] = None,
    ):
        self.store = store
        self.policy = policy if policy is not None else get_policy()
        self.redactor = redactor if redactor is not None else get_redactor()

    def review(self, text: str) -> PostReview:
        """Check text before posting; attach a suggestion if not allowed."""
        verdict = self.policy.moderate(text)
        if verdict.is_allowed:
            return PostReview(verdict=verdict)
        return PostReview(verdict=verdict, suggestion=suggest_kinder_phrasing(text))

    def submit(self, uid: str, topic_id: str, text: str) -> SubmissionResult:
        """Redact, moderate and store a post.

        Args:
            uid: Stable author identifier (never stored; pseudonymized)
            topic_id: One of TOPICS
            text: Raw post text

        Returns:
            SubmissionResult with the stored post, or crisis resources if
            the post was blocked

        Raises:
            ValueError: If the topic is unknown or the text is blank
        """
        if topic_id not in TOPICS:
            raise ValueError(f"Unknown topic: {topic_id}")
        if not text or not text.strip():
            raise ValueError("Post text is required")

        uid_hash = hash_pii(uid)
        redacted = self.redactor.redact(text)
        verdict = self.policy.moderate(redacted)

        if verdict.is_crisis:
            logger.critical(
                "POST_BLOCKED_CRISIS",
                extra={"uid_hash": uid_hash, "topic_id": topic_id, "self_harm": verdict.self_harm}
            )
            return SubmissionResult(verdict=verdict, crisis_resources=get_crisis_resources())

        post = CommunityPost(
            post_id=f"p_{uuid.uuid4().hex[:12]}",
            topic_id=topic_id,
            uid_pseudo=pseudonymize(uid),
            text_redacted=redacted,
            toxicity=verdict.toxicity,
            status=PostStatus.for_action(verdict.action),
        )
        self.store.save(post)

        logger.info(
            "POST_HELD" if post.status == PostStatus.HELD else "POST_PUBLISHED",
            extra={
                "post_id": post.post_id,
                "uid_hash": uid_hash,
                "topic_id": topic_id,
                "toxicity": verdict.toxicity,
            }
        )
        return SubmissionResult(verdict=verdict, post=post)
