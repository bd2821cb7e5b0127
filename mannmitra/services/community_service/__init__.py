"""Community Service: anonymous peer-support posts.

Components:
- pseudonym.py: stable anonymous display names
- suggester.py: single-substitution kinder-phrasing suggestions
- composer.py: review/submit flow and post storage
- handler.py: Flask HTTP endpoints (/api/posts)
"""

from .composer import (
    TOPICS,
    CommunityPost,
    InMemoryPostStore,
    PostComposer,
    PostReview,
    PostStore,
    SubmissionResult,
)
from .pseudonym import pseudonymize
from .suggester import suggest_kinder_phrasing

__all__ = [
    "TOPICS",
    "CommunityPost",
    "InMemoryPostStore",
    "PostComposer",
    "PostReview",
    "PostStore",
    "SubmissionResult",
    "pseudonymize",
    "suggest_kinder_phrasing",
]
