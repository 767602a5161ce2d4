"""
Static word lists used by the review sentiment classifier
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional


class LexiconError(ValueError):
    """Raised when the word lists are not pairwise disjoint."""


POSITIVE_WORDS = frozenset([
    "amazing", "awesome", "brilliant", "excellent", "fantastic", "great",
    "good", "wonderful", "outstanding", "perfect", "superb", "magnificent",
    "incredible", "marvelous", "spectacular", "phenomenal", "exceptional",
    "remarkable", "beautiful", "lovely", "charming", "delightful",
    "enjoyable", "entertaining", "hilarious", "funny", "touching", "moving",
    "inspiring", "uplifting", "thrilling", "exciting", "captivating",
    "engaging", "compelling", "cool", "stylish",
])

NEGATIVE_WORDS = frozenset([
    "awful", "terrible", "horrible", "bad", "poor", "disappointing",
    "boring", "dull", "stupid", "ridiculous", "pathetic", "waste", "worst",
    "hate", "disgusting", "annoying", "frustrating", "confusing",
    "pointless", "meaningless", "shallow", "predictable", "cliche",
    "overrated", "underwhelming", "mediocre", "forgettable", "uninspiring",
    "tedious", "painful", "cringe", "awkward", "mess", "disaster", "failure",
])

NEUTRAL_WORDS = frozenset([
    "okay", "fine", "average", "decent", "alright", "normal", "standard",
    "typical", "ordinary", "regular", "moderate", "fair", "acceptable",
])

# "no" and "nor" never survive tokenization (length <= 2) but stay listed
NEGATION_MARKERS = frozenset([
    "not", "no", "never", "nothing", "nobody", "nowhere", "neither", "nor",
])


@dataclass(frozen=True)
class Lexicon:
    positive_words: FrozenSet[str]
    negative_words: FrozenSet[str]
    neutral_words: FrozenSet[str]
    negation_markers: FrozenSet[str] = field(default=NEGATION_MARKERS)

    def __post_init__(self):
        overlaps = {
            "positive/negative": self.positive_words & self.negative_words,
            "positive/neutral": self.positive_words & self.neutral_words,
            "negative/neutral": self.negative_words & self.neutral_words,
        }
        clashes = {pair: sorted(words) for pair, words in overlaps.items() if words}
        if clashes:
            raise LexiconError(f"Lexicon word lists overlap: {clashes}")

    @classmethod
    def from_words(
        cls,
        positive: Iterable[str],
        negative: Iterable[str],
        neutral: Iterable[str],
        negation_markers: Optional[Iterable[str]] = None,
    ) -> "Lexicon":
        """Build a lexicon from arbitrary iterables, normalising to lowercase."""

        def _normalise(words: Iterable[str]) -> FrozenSet[str]:
            return frozenset(w.strip().lower() for w in words if w and w.strip())

        return cls(
            positive_words=_normalise(positive),
            negative_words=_normalise(negative),
            neutral_words=_normalise(neutral),
            negation_markers=_normalise(negation_markers) if negation_markers is not None else NEGATION_MARKERS,
        )


_DEFAULT_LEXICON: Optional[Lexicon] = None


def get_default_lexicon() -> Lexicon:
    """Return the shared built-in lexicon."""

    global _DEFAULT_LEXICON
    if _DEFAULT_LEXICON is None:
        _DEFAULT_LEXICON = Lexicon(
            positive_words=POSITIVE_WORDS,
            negative_words=NEGATIVE_WORDS,
            neutral_words=NEUTRAL_WORDS,
        )
    return _DEFAULT_LEXICON


__all__ = [
    "Lexicon",
    "LexiconError",
    "NEGATION_MARKERS",
    "NEGATIVE_WORDS",
    "NEUTRAL_WORDS",
    "POSITIVE_WORDS",
    "get_default_lexicon",
]
