"""Kinder-Phrasing Suggester.

Offers one gentler rewrite before a flagged post is resubmitted. Only
the first harsh term found (in table order) is replaced, everywhere it
occurs; other harsh terms are left alone. The suggestion is a nudge, not
sanitization - accepted text goes through moderation again.
"""
import logging
from typing import Optional, Tuple

from mannmitra.shared.models import Suggestion
from mannmitra.services.safety_service.redactor import check_text_type

logger = logging.getLogger(__name__)


# (harsh, kind) in lookup order
KINDER_SUBSTITUTIONS: Tuple[Tuple[str, str], ...] = (
    ("stupid", "challenging"),
    ("idiot", "person who disagrees"),
    ("hate", "really dislike"),
    ("kill", "stop"),
    ("die", "end"),
    ("dumb", "confusing"),
    ("worthless", "struggling"),
)

SUGGESTION_REASON = (
    "Your message might come across as harsh. "
    "Here's a gentler way to express the same feeling:"
)


def find_harsh_term(text: str) -> Optional[Tuple[str, str]]:
    """First (harsh, kind) pair whose harsh term occurs in text."""
    lowered = text.lower()
    for harsh, kind in KINDER_SUBSTITUTIONS:
        if harsh in lowered:
            return harsh, kind
    return None


def suggest_kinder_phrasing(text: str) -> Suggestion:
    """Rewrite the first harsh term in text into a gentler synonym.

    The suggested text is the lowercased input with every occurrence of
    one harsh term substituted and the first character capitalized.

    Raises:
        TypeError: If text is not a string
    """
    check_text_type(text)
    text = text or ""

    suggested = text.lower()
    pair = find_harsh_term(suggested)
    if pair is not None:
        harsh, kind = pair
        suggested = suggested.replace(harsh, kind)
        logger.debug("KINDER_SUGGESTION_CREATED", extra={"harsh_term": harsh})

    suggested = suggested[:1].upper() + suggested[1:]
    return Suggestion(original=text, suggested=suggested, reason=SUGGESTION_REASON)
