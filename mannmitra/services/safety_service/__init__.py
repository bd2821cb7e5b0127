"""Safety Service: deterministic PII redaction and text moderation.

Every piece of free user text passes through here before it is stored,
displayed, or published. Nothing in this package performs I/O; all
tables are immutable module constants.

Components:
- redactor.py: ordered PII redaction rules
- lexicon.py: severe/moderate/crisis/profanity word lists
- toxicity.py: weighted lexicon toxicity score
- self_harm.py: crisis-lexicon score and chat crisis-banner detector
- moderator.py: allow/hold/crisis decision policy
- handler.py: Flask HTTP endpoints (/health, /api/moderate, ...)

Usage:
    from mannmitra.services.safety_service import moderate, redact

    verdict = moderate("Everyone here is so stupid and pathetic")
    verdict.action  # Action.HOLD
"""

from .config import SafetyConfig, ScoringWeights, ModerationThresholds
from .crisis_resources import get_crisis_resources
from .lexicon import Lexicon, DEFAULT_LEXICON, CRISIS_BANNER_PHRASES
from .moderator import ModerationPolicy, moderate
from .redactor import PIIRedactor, RedactionRule, RedactionReport, REDACTION_RULES, redact
from .self_harm import CrisisDetector, SelfHarmScorer, detect_crisis
from .toxicity import ToxicityScorer

__all__ = [
    "SafetyConfig",
    "ScoringWeights",
    "ModerationThresholds",
    "get_crisis_resources",
    "Lexicon",
    "DEFAULT_LEXICON",
    "CRISIS_BANNER_PHRASES",
    "ModerationPolicy",
    "moderate",
    "PIIRedactor",
    "RedactionRule",
    "RedactionReport",
    "REDACTION_RULES",
    "redact",
    "CrisisDetector",
    "SelfHarmScorer",
    "detect_crisis",
    "ToxicityScorer",
]
