"""Moderation Policy: redact, score, decide.

Pipeline order is fixed: the text is redacted first and both scorers run
on the redacted copy. Redaction only targets PII shapes (numbers, emails,
capitalized name pairs, street addresses), never emotional language, so
crisis phrases survive it.

Decision table (reference policy):

    self_harm > 0.3                      -> crisis
    self_harm > 0.1                      -> hold
    self_harm <= 0.1 and toxicity > 0.5  -> hold
    otherwise                            -> allow

The action depends on the two scores only. Flagged terms are reported
from the lowercased input across all four lexicon categories.
"""
import logging
from typing import List, Optional

from mannmitra.shared.models import Action, ModerationVerdict
from mannmitra.shared.utils import hash_text_for_audit
from .config import ModerationThresholds
from .lexicon import DEFAULT_LEXICON, Lexicon
from .redactor import PIIRedactor, check_text_type, get_redactor
from .self_harm import SelfHarmScorer
from .toxicity import ToxicityScorer

logger = logging.getLogger(__name__)


class ModerationPolicy:
    """Combines toxicity and self-harm scores into a ModerationVerdict.

    Holds only immutable tables after construction, so a single instance
    can be shared by concurrent callers.
    """

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        thresholds: Optional[ModerationThresholds] = None,
        redactor: Optional[PIIRedactor] = None,
        toxicity_scorer: Optional[ToxicityScorer] = None,
        self_harm_scorer: Optional[SelfHarmScorer] = None,
    ):
        self.lexicon = lexicon if lexicon is not None else DEFAULT_LEXICON
        self.thresholds = thresholds if thresholds is not None else ModerationThresholds()
        self.redactor = redactor if redactor is not None else get_redactor()
        if toxicity_scorer is None:
            toxicity_scorer = ToxicityScorer(self.lexicon)
        if self_harm_scorer is None:
            self_harm_scorer = SelfHarmScorer(self.lexicon)
        self.toxicity_scorer = toxicity_scorer
        self.self_harm_scorer = self_harm_scorer

    def decide(self, toxicity: float, self_harm: float) -> Action:
        """Map a (toxicity, self_harm) pair to an Action."""
        if self_harm > self.thresholds.CRISIS_SELF_HARM:
            return Action.CRISIS
        if self_harm > self.thresholds.HOLD_SELF_HARM:
            return Action.HOLD
        if toxicity > self.thresholds.HOLD_TOXICITY:
            return Action.HOLD
        return Action.ALLOW

    def flagged_terms(self, text: Optional[str]) -> List[str]:
        """Every lexicon entry present in text, deduplicated, in order."""
        lowered = (text or "").lower()
        flagged: List[str] = []
        for entry in self.lexicon.all_terms():
            if entry in lowered and entry not in flagged:
                flagged.append(entry)
        return flagged

    def moderate(self, text: Optional[str]) -> ModerationVerdict:
        """Moderate one piece of user text.

        Args:
            text: Raw user text; None or "" is treated as empty

        Returns:
            ModerationVerdict; empty input yields allow with zero scores

        Raises:
            TypeError: If text is neither None nor a string
        """
        check_text_type(text)
        if not text:
            return ModerationVerdict(toxicity=0.0, self_harm=0.0, action=Action.ALLOW)

        redacted = self.redactor.redact(text)
        toxicity = self.toxicity_scorer.score(redacted)
        self_harm = self.self_harm_scorer.score(redacted)
        action = self.decide(toxicity, self_harm)
        verdict = ModerationVerdict(
            toxicity=toxicity,
            self_harm=self_harm,
            action=action,
            flagged_terms=self.flagged_terms(text),
        )

        log_fields = {
            "text_hash": hash_text_for_audit(text),
            "action": action.value,
            "toxicity": toxicity,
            "self_harm": self_harm,
            "flagged_count": len(verdict.flagged_terms),
        }
        if action == Action.CRISIS:
            logger.critical("MODERATION_CRISIS", extra=log_fields)
        elif action == Action.HOLD:
            logger.warning("MODERATION_HOLD", extra=log_fields)
        else:
            logger.info("MODERATION_COMPLETED", extra=log_fields)

        return verdict


_policy: Optional[ModerationPolicy] = None


def get_policy() -> ModerationPolicy:
    """Shared ModerationPolicy built from the default lexicon and thresholds."""
    global _policy
    if _policy is None:
        _policy = ModerationPolicy()
    return _policy


def moderate(text: Optional[str]) -> ModerationVerdict:
    """Moderate text with the default policy."""
    return get_policy().moderate(text)
