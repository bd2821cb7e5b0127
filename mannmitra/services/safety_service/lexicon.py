"""Lexicon Store: curated word and phrase lists consumed by the scorers.

Entries are lowercase literals matched as case-insensitive substrings,
not on word boundaries: "hell" also hits "hello". Lists are static for a
given build and reviewed by hand; declaration order is significant for
the order of flagged terms reported back to callers.
"""
from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Lexicon:
    """Four named word/phrase lists used for scoring.

    Immutable and shared process-wide; safe for unsynchronized reads.
    """
    severe: Tuple[str, ...]
    moderate: Tuple[str, ...]
    crisis: Tuple[str, ...]
    profanity: Tuple[str, ...]

    def __post_init__(self):
        for category, entries in self.categories():
            for entry in entries:
                if not entry or entry != entry.lower():
                    raise ValueError(
                        f"Lexicon entries must be non-empty lowercase, got {entry!r} in {category}"
                    )

    def categories(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """Yield (category, entries) in scoring/reporting order."""
        yield "severe", self.severe
        yield "moderate", self.moderate
        yield "crisis", self.crisis
        yield "profanity", self.profanity

    def all_terms(self) -> Tuple[str, ...]:
        return tuple(entry for _, entries in self.categories() for entry in entries)

    def __len__(self) -> int:
        return len(self.all_terms())


DEFAULT_LEXICON = Lexicon(
    # High toxicity - immediate hold for review
    severe=(
        "stupid", "idiot", "moron", "dumb", "retard", "loser", "worthless", "pathetic", "disgusting",
        "hate", "kill", "die", "murder", "violence", "abuse", "attack", "destroy", "ruin",
        "ugly", "fat", "hideous", "gross", "repulsive", "awful", "terrible", "horrible",
        "shut up", "go away", "get lost", "nobody cares", "waste of space", "useless",
    ),
    # Medium toxicity - flag for review
    moderate=(
        "annoying", "weird", "strange", "crazy", "insane", "mental", "nuts", "psycho",
        "failure", "hopeless", "helpless", "disaster", "mess", "problem", "burden",
        "weak", "coward", "baby", "childish", "immature", "naive", "clueless",
        "wrong", "bad", "worse", "worst", "negative", "toxic", "harmful",
    ),
    # Crisis language - scored separately as self-harm
    crisis=(
        "suicide", "kill myself", "end my life", "want to die", "better off dead",
        "hurt myself", "harm myself", "cut myself", "overdose", "pills",
        "can't go on", "give up", "done with life", "end it all", "no point",
        "everyone would be better", "world without me", "tired of living",
    ),
    # Profanity - light filtering
    profanity=(
        "fuck", "shit", "damn", "hell", "ass", "bitch", "bastard", "crap",
        "piss", "bloody", "suck", "screw",
    ),
)


# Phrases that raise the chat crisis-resources banner. Matched as whole
# phrases, case-insensitive. Differs from DEFAULT_LEXICON.crisis: "pills"
# and "better off dead" do not raise the banner, "can't take it" does.
CRISIS_BANNER_PHRASES: Tuple[str, ...] = (
    "kill myself",
    "end my life",
    "want to die",
    "suicide",
    "can't take it",
    "no point living",
    "hurt myself",
    "harm myself",
    "cut myself",
    "overdose",
    "everyone would be better",
    "world without me",
    "tired of living",
    "can't go on",
    "give up",
    "done with life",
    "end it all",
)
