"""PII Redactor: pattern-based scrubbing of free text before storage.

Rules run in a fixed order, each one over the output of the previous
rule. Narrow shapes (a 10-digit mobile number) are replaced before broad
ones ("any 6+ digit run") so the broad rules never pre-empt them, and
replacement tokens contain no digits, '@' or capitalized words, so no
later rule can match inside a token. This makes redaction idempotent.

The name rule (two consecutive capitalized words) is a heuristic, not
entity recognition: "Good Morning" is redacted as a name.

Usage:
    from mannmitra.services.safety_service.redactor import redact

    redact("Call 9876543210 or email a@b.com, I'm John Smith")
    # "Call [phone] or email [email], I'm [name]"
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedactionRule:
    """One pattern -> placeholder token mapping."""
    name: str
    matcher: "re.Pattern[str]"
    replacement_token: str

    def apply(self, text: str) -> Tuple[str, int]:
        """Replace every match, returning (new_text, match_count)."""
        return self.matcher.subn(self.replacement_token, text)


# re.ASCII narrows \s too; these are the extra spaces a JavaScript \s accepts
_UNICODE_SPACES = r"\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_SPACE_OR_DASH = r"[\s" + _UNICODE_SPACES + "-]"


def _rule(name: str, pattern: str, token: str, flags: int = 0) -> RedactionRule:
    # \d and \b match ASCII only
    return RedactionRule(name, re.compile(pattern, re.ASCII | flags), token)


# Order is part of the contract - see module docstring.
REDACTION_RULES: Tuple[RedactionRule, ...] = (
    # Indian mobile numbers (leading 6-9), then any bare 10-digit number
    _rule("mobile_in", r"\b[6-9]\d{9}\b", "[phone]"),
    _rule("phone_10_digit", r"\b\d{10}\b", "[phone]"),
    _rule("phone_in_prefixed", r"\+91" + _SPACE_OR_DASH + r"?\d{10}", "[phone]"),
    _rule("email", r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b", "[email]"),
    _rule("name", r"\b[A-Z][a-z]+ [A-Z][a-z]+\b", "[name]"),
    _rule(
        "address",
        r"\b\d{1,4}" + _SPACE_OR_DASH + r"?[A-Za-z\s" + _UNICODE_SPACES + "]+"
        r"(?:Street|St|Road|Rd|Avenue|Ave|Lane|Ln|Drive|Dr|Block|Sector)\b",
        "[address]",
        re.IGNORECASE,
    ),
    _rule(
        "card",
        r"\b\d{4}" + _SPACE_OR_DASH + r"?\d{4}" + _SPACE_OR_DASH + r"?\d{4}"
        + _SPACE_OR_DASH + r"?\d{4}\b",
        "[card]",
    ),
    # 12-digit national ID (Aadhaar) shape
    _rule("national_id", r"\b\d{4}" + _SPACE_OR_DASH + r"?\d{4}" + _SPACE_OR_DASH + r"?\d{4}\b", "[id]"),
    _rule("long_number", r"\b\d{6,}\b", "[number]"),
)


@dataclass(frozen=True)
class RedactionReport:
    """Redacted text plus how many substitutions each rule made."""
    text: str
    rule_hits: Dict[str, int] = field(default_factory=dict)

    @property
    def total_hits(self) -> int:
        return sum(self.rule_hits.values())

    @property
    def redacted(self) -> bool:
        return self.total_hits > 0


class PIIRedactor:
    """Applies an ordered list of RedactionRules.

    Stateless after construction; one instance can serve concurrent
    callers.
    """

    def __init__(self, rules: Optional[Sequence[RedactionRule]] = None):
        self.rules: Tuple[RedactionRule, ...] = tuple(
            REDACTION_RULES if rules is None else rules
        )

    def redact(self, text: Optional[str]) -> Optional[str]:
        """Return text with PII-shaped substrings replaced by tokens.

        Empty or None input is returned unchanged.

        Raises:
            TypeError: If text is neither None nor a string
        """
        if not text:
            check_text_type(text)
            return text
        return self.redact_with_report(text).text

    def redact_with_report(self, text: str) -> RedactionReport:
        """Redact and report per-rule substitution counts."""
        check_text_type(text)
        if not text:
            return RedactionReport(text=text)

        result = text
        hits: Dict[str, int] = {}
        for rule in self.rules:
            result, count = rule.apply(result)
            if count:
                hits[rule.name] = count

        if hits:
            logger.debug(
                "PII_REDACTED",
                extra={"rule_hits": hits, "text_length": len(text)}
            )
        return RedactionReport(text=result, rule_hits=hits)


def check_text_type(text: object) -> None:
    """Reject non-string input; None is allowed and treated as empty."""
    if text is not None and not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")


_default_redactor = PIIRedactor()


def get_redactor() -> PIIRedactor:
    """Process-wide redactor built from REDACTION_RULES."""
    return _default_redactor


def redact(text: Optional[str]) -> Optional[str]:
    """Redact PII from text using the default rule order."""
    return _default_redactor.redact(text)
