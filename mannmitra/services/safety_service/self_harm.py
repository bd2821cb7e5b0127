"""Self-Harm / Crisis Scorer.

Two independent checks live here:

- SelfHarmScorer: 0.7 per distinct crisis-lexicon entry found as a
  substring of the lowercased text, clamped to 1. Feeds the moderation
  policy.
- CrisisDetector: boolean, whole-phrase match against
  CRISIS_BANNER_PHRASES. Only decides whether the chat shows the crisis
  resources banner; it never gates storage.
"""
import logging
import re
from typing import List, Optional, Sequence

from mannmitra.shared.utils import hash_text_for_audit
from .config import ScoringWeights, SafetyConfig
from .lexicon import CRISIS_BANNER_PHRASES, DEFAULT_LEXICON, Lexicon
from .redactor import check_text_type
from .text_normalizer import TextNormalizer, get_normalizer

logger = logging.getLogger(__name__)


class SelfHarmScorer:
    """Scores crisis and suicidal-ideation language."""

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        weights: Optional[ScoringWeights] = None,
    ):
        self.lexicon = lexicon if lexicon is not None else DEFAULT_LEXICON
        self.weights = weights if weights is not None else ScoringWeights()

    def matches(self, text: Optional[str]) -> List[str]:
        """Crisis-lexicon entries present in text, in declaration order."""
        check_text_type(text)
        lowered = (text or "").lower()
        return [phrase for phrase in self.lexicon.crisis if phrase in lowered]

    def score(self, text: Optional[str]) -> float:
        """Self-harm score in [0, 1]; 0.0 for empty input."""
        if not text:
            check_text_type(text)
            return 0.0
        return min(len(self.matches(text)) * self.weights.CRISIS, 1.0)


class CrisisDetector:
    """Whole-phrase crisis detector for the chat banner.

    Checks the text as typed, then (if enabled) its evasion-folded form.
    """

    def __init__(
        self,
        phrases: Sequence[str] = CRISIS_BANNER_PHRASES,
        config: Optional[SafetyConfig] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        self.config = config if config is not None else SafetyConfig()
        self.phrases = tuple(phrases)
        self._pattern = re.compile(
            r"\b(?:{})\b".format("|".join(re.escape(p) for p in self.phrases)),
            re.IGNORECASE,
        )
        self._normalizer = normalizer if normalizer is not None else get_normalizer()

        logger.info(
            "CRISIS_DETECTOR_INITIALIZED",
            extra={
                "phrase_count": len(self.phrases),
                "normalization_enabled": self.config.crisis_normalization_enabled,
            }
        )

    def find(self, text: Optional[str]) -> Optional[str]:
        """Return the first banner phrase found, lowercased, or None."""
        check_text_type(text)
        if not text:
            return None

        match = self._pattern.search(text)
        if match is None and self.config.crisis_normalization_enabled:
            match = self._pattern.search(self._normalizer.normalize(text))
        return match.group().lower() if match else None

    def detect(self, text: Optional[str]) -> bool:
        phrase = self.find(text)
        if phrase is None:
            return False

        logger.warning(
            "CRISIS_BANNER_TRIGGERED",
            extra={"text_hash": hash_text_for_audit(text), "phrase": phrase}
        )
        return True


_detector: Optional[CrisisDetector] = None


def get_crisis_detector() -> CrisisDetector:
    """Shared CrisisDetector with the default phrase set."""
    global _detector
    if _detector is None:
        _detector = CrisisDetector()
    return _detector


def detect_crisis(text: Optional[str]) -> bool:
    """True if text contains a crisis-banner phrase."""
    return get_crisis_detector().detect(text)
