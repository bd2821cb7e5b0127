"""Safety Service configuration: scoring weights and moderation thresholds.

Weights and thresholds are the reference (client-side) policy of the
community moderation flow. They are frozen; a build that needs different
numbers constructs new instances rather than mutating these.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringWeights:
    """Per-match weights for the lexicon scorers.

    Each lexicon entry contributes its category weight at most once per
    text, so repeating a word does not raise the score further.
    """
    SEVERE: float = 0.8
    MODERATE: float = 0.4
    PROFANITY: float = 0.2
    CRISIS: float = 0.7


@dataclass(frozen=True)
class ModerationThresholds:
    """Decision boundaries for the moderation policy.

    All comparisons are strict (score > threshold).
    """
    CRISIS_SELF_HARM: float = 0.3   # Above this: crisis, regardless of toxicity
    HOLD_SELF_HARM: float = 0.1     # Above this: hold for review
    HOLD_TOXICITY: float = 0.5      # Above this: hold for review

    def __post_init__(self):
        if self.HOLD_SELF_HARM > self.CRISIS_SELF_HARM:
            raise ValueError(
                "HOLD_SELF_HARM must not exceed CRISIS_SELF_HARM, got "
                f"{self.HOLD_SELF_HARM} > {self.CRISIS_SELF_HARM}"
            )


@dataclass(frozen=True)
class SafetyConfig:
    """Configuration for moderation and crisis detection behavior."""

    # Run the crisis banner detector a second time on evasion-normalized text
    crisis_normalization_enabled: bool = True

    # Caller-enforced input bound, checked by the HTTP glue, not the core
    max_text_length: int = 1000

    # Version tracking for audit trail
    lexicon_version: str = "2025.09.01"

    def __post_init__(self):
        if self.max_text_length <= 0:
            raise ValueError(f"max_text_length must be positive, got {self.max_text_length}")
