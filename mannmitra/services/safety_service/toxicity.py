"""Toxicity Scorer: weighted lexicon containment over lowercased text.

Every severe/moderate/profanity entry is checked once against the whole
text and contributes its category weight if present (0 or 1 times, no
matter how often it repeats). The sum is clamped to [0, 1]. The result
is a monotonic severity proxy, not a probability.
"""
from typing import Dict, List, Optional

from .config import ScoringWeights
from .lexicon import DEFAULT_LEXICON, Lexicon
from .redactor import check_text_type


class ToxicityScorer:
    """Scores unkind or aggressive language."""

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        weights: Optional[ScoringWeights] = None,
    ):
        self.lexicon = lexicon if lexicon is not None else DEFAULT_LEXICON
        self.weights = weights if weights is not None else ScoringWeights()
        self._weighted = (
            ("severe", self.lexicon.severe, self.weights.SEVERE),
            ("moderate", self.lexicon.moderate, self.weights.MODERATE),
            ("profanity", self.lexicon.profanity, self.weights.PROFANITY),
        )

    def matches(self, text: Optional[str]) -> Dict[str, List[str]]:
        """Return the entries found in text, keyed by category."""
        check_text_type(text)
        lowered = (text or "").lower()
        return {
            category: [entry for entry in entries if entry in lowered]
            for category, entries, _ in self._weighted
        }

    def score(self, text: Optional[str]) -> float:
        """Toxicity in [0, 1]; 0.0 for empty input."""
        check_text_type(text)
        if not text:
            return 0.0

        lowered = text.lower()
        total = 0.0
        for _, entries, weight in self._weighted:
            total += weight * sum(1 for entry in entries if entry in lowered)
        return min(total, 1.0)
