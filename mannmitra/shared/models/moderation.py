"""Moderation verdict and suggestion domain models.

These are the value objects handed from the text-safety core to the
journal, chat, and community flows. All of them are computed fresh per
input string and carry no identity beyond the text that produced them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Action(Enum):
    """Discrete moderation decision for a piece of user text."""
    ALLOW = "allow"     # Publish/store normally
    HOLD = "hold"       # Store but keep out of public view pending review
    CRISIS = "crisis"   # Block normal submission, surface crisis resources


class PostStatus(Enum):
    """Visibility status of a stored community post."""
    PUBLISHED = "published"
    HELD = "held"

    @classmethod
    def for_action(cls, action: Action) -> "PostStatus":
        """Map a verdict action to the status a stored post receives."""
        return cls.PUBLISHED if action == Action.ALLOW else cls.HELD


@dataclass(frozen=True)
class ModerationVerdict:
    """Scores plus the publish/hold/escalate decision for one text.

    Immutable - verdicts cannot be modified after creation.
    """
    toxicity: float
    self_harm: float
    action: Action
    flagged_terms: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not 0.0 <= self.toxicity <= 1.0:
            raise ValueError(f"Toxicity must be 0.0-1.0, got {self.toxicity}")
        if not 0.0 <= self.self_harm <= 1.0:
            raise ValueError(f"Self-harm score must be 0.0-1.0, got {self.self_harm}")

    @property
    def is_allowed(self) -> bool:
        return self.action == Action.ALLOW

    @property
    def is_crisis(self) -> bool:
        return self.action == Action.CRISIS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "toxicity": round(self.toxicity, 3),
            "self_harm": round(self.self_harm, 3),
            "action": self.action.value,
            "flagged_terms": list(self.flagged_terms),
        }

    def to_edge_payload(self) -> Dict[str, Any]:
        """Shape returned by the /api/moderate edge endpoint."""
        return {
            "toxicity": round(self.toxicity, 3),
            "self_harm": round(self.self_harm, 3),
            "action": self.action.value,
        }


@dataclass(frozen=True)
class Suggestion:
    """A single best-effort gentler rewrite of a flagged message.

    Not guaranteed to clear moderation; callers re-moderate accepted text.
    """
    original: str
    suggested: str
    reason: str

    @property
    def changed(self) -> bool:
        return self.original != self.suggested

    def to_dict(self) -> Dict[str, str]:
        return {
            "original": self.original,
            "suggested": self.suggested,
            "reason": self.reason,
        }
