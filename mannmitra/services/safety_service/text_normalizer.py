"""Evasion folding for the crisis banner detector.

People in distress sometimes type around filters: "k1ll mys3lf",
"ⓔⓝⓓ ⓘⓣ ⓐⓛⓛ", "s.u.i.c.i.d.e", or a phone keyboard's curly apostrophe
in "can’t go on". The banner detector checks the plain text first and
then a folded copy produced here, so folding can only add detections.

The moderation scorers do NOT use this module: their substring
semantics are defined on the lowercased raw text.
"""
import logging
import re
import unicodedata
from typing import Dict, FrozenSet, Optional, Tuple

logger = logging.getLogger(__name__)


# Digits/symbols commonly used as letters
LEETSPEAK_MAP: Dict[str, str] = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "7": "t",
    "8": "b",
    "@": "a",
    "$": "s",
    "!": "i",
    "+": "t",
    "|": "l",
}

# Apostrophe look-alikes folded to "'" so "can’t" matches "can't"
APOSTROPHES: FrozenSet[str] = frozenset({
    "\u2018",  # Left single quotation mark
    "\u2019",  # Right single quotation mark
    "\u02bc",  # Modifier letter apostrophe
    "\u2032",  # Prime
    "\uff07",  # Fullwidth apostrophe
    "`",
    "\u00b4",  # Acute accent
})

# Styled letter blocks: (first code point, last code point, ASCII base)
STYLED_LETTER_RANGES: Tuple[Tuple[int, int, int], ...] = (
    (0x1D400, 0x1D419, ord("A")),  # Mathematical bold
    (0x1D41A, 0x1D433, ord("a")),
    (0x1D434, 0x1D44D, ord("A")),  # Mathematical italic
    (0x1D44E, 0x1D467, ord("a")),
    (0x1D538, 0x1D551, ord("A")),  # Double-struck
    (0x1D552, 0x1D56B, ord("a")),
    (0x24B6, 0x24CF, ord("A")),    # Circled
    (0x24D0, 0x24E9, ord("a")),
)

# Zero-width and invisible characters
INVISIBLE_CHARS: FrozenSet[str] = frozenset({
    "\u200b",  # Zero-width space
    "\u200c",  # Zero-width non-joiner
    "\u200d",  # Zero-width joiner
    "\ufeff",  # Byte order mark
    "\u00ad",  # Soft hyphen
    "\u2060",  # Word joiner
})


class TextNormalizer:
    """Folds obfuscated text to plain lowercase ASCII-ish words.

    Steps, in order:
    1. Drop invisible characters
    2. Fold apostrophe look-alikes to "'"
    3. Fold styled/fullwidth letters to ASCII
    4. Leetspeak to letters (only inside words; standalone digits kept)
    5. Join single letters split by dots, dashes, spaces or newlines
    6. Collapse whitespace and lowercase
    """

    def __init__(self):
        self._leet_in_word = re.compile(
            r"(?<=[A-Za-z])[{0}]|[{0}](?=[A-Za-z])".format(
                re.escape("".join(LEETSPEAK_MAP))
            )
        )
        # A run of two or more single letters split by separators: "k.i.l.l"
        self._split_letters = re.compile(
            r"(?<![A-Za-z])[A-Za-z](?:(?:[.\-_]+|\s+)[A-Za-z](?![A-Za-z]))+"
        )

    def normalize(self, text: Optional[str]) -> str:
        """Return the folded form of text ("" for empty input)."""
        if not text:
            return ""

        result = "".join(c for c in text if c not in INVISIBLE_CHARS)
        result = "".join("'" if c in APOSTROPHES else c for c in result)
        result = self._fold_styled_letters(result)
        result = self._convert_leetspeak(result)
        result = self._join_split_letters(result)
        return " ".join(result.split()).lower()

    def _fold_styled_letters(self, text: str) -> str:
        folded = []
        for char in text:
            code_point = ord(char)
            for start, end, base in STYLED_LETTER_RANGES:
                if start <= code_point <= end:
                    folded.append(chr(base + code_point - start))
                    break
            else:
                if code_point < 128:
                    folded.append(char)
                    continue
                # NFKD covers fullwidth forms and accented letters
                decomposed = unicodedata.normalize("NFKD", char)
                ascii_only = "".join(
                    c for c in decomposed
                    if unicodedata.category(c) != "Mn" and ord(c) < 128
                )
                folded.append(ascii_only or char)
        return "".join(folded)

    def _convert_leetspeak(self, text: str) -> str:
        # Repeat so runs like "k1ll" and "1ll" both resolve
        previous = None
        while previous != text:
            previous = text
            text = self._leet_in_word.sub(lambda m: LEETSPEAK_MAP[m.group()], text)
        return text

    def _join_split_letters(self, text: str) -> str:
        return self._split_letters.sub(
            lambda m: "".join(c for c in m.group() if c.isalpha()), text
        )


_normalizer: Optional[TextNormalizer] = None


def get_normalizer() -> TextNormalizer:
    """Get the shared TextNormalizer instance."""
    global _normalizer
    if _normalizer is None:
        _normalizer = TextNormalizer()
    return _normalizer


def normalize_text(text: Optional[str]) -> str:
    return get_normalizer().normalize(text)
