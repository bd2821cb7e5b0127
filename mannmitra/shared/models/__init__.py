"""Shared domain models for the MannMitra safety core."""
from .moderation import (
    Action,
    PostStatus,
    ModerationVerdict,
    Suggestion,
)

__all__ = [
    "Action",
    "PostStatus",
    "ModerationVerdict",
    "Suggestion",
]
