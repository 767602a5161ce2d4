"""
sentiment.py
-------------

Lexicon-based sentiment classification for short free-text reviews.

A review is lowercased, stripped of punctuation and split into tokens
longer than two characters. Each token is looked up in the positive,
negative and neutral word lists; a positive or negative word preceded
(within two tokens) by a negation marker such as "not" or "never" has
its polarity flipped and is recorded as ``"not <word>"``. Neutral words
are never flipped.

The counts are then turned into a label and a confidence by one of two
decision policies:

``neutral_aware`` (default)
    Neutral, positive and negative words all vote. An equal number of
    positive and negative words is a Neutral result with confidence 100;
    otherwise Neutral wins any tie it takes part in. Confidence is the
    winning category's share of all sentiment-bearing words, as a
    percentage rounded to one decimal place.

``simple``
    Only positive and negative words vote; neutral words are still
    counted and reported. Confidence is the winning side's share as a
    ratio in ``[0, 1]`` rounded to three decimal places, and an even
    split is Neutral at 0.5.

Classification is a pure function of the text and the lexicon; the
``SentimentService`` wrapper only adds logging and metrics.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import SENTIMENT_MODES, get_config
from services.lexicon import Lexicon, get_default_lexicon
from services.logging_utils import get_structured_logger, log_performance
from services.observability import record_classification

logger = get_structured_logger(__name__)

# ASCII word characters only; everything else becomes a separator
_NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s]")

NEGATION_WINDOW = 2
MIN_TOKEN_LENGTH = 3


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


@dataclass(frozen=True)
class WordCounts:
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    total: int = 0

    @property
    def sentiment_bearing(self) -> int:
        return self.positive + self.negative + self.neutral


@dataclass
class DetectedWords:
    positive: List[str] = field(default_factory=list)
    negative: List[str] = field(default_factory=list)
    neutral: List[str] = field(default_factory=list)


@dataclass
class ClassificationResult:
    sentiment: Sentiment
    confidence: float
    explanation: str
    word_counts: WordCounts
    detected_words: DetectedWords

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the public camelCase field names."""
        return {
            "sentiment": self.sentiment.value,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "wordCounts": {
                "positive": self.word_counts.positive,
                "negative": self.word_counts.negative,
                "neutral": self.word_counts.neutral,
                "total": self.word_counts.total,
            },
            "detectedWords": {
                "positive": list(self.detected_words.positive),
                "negative": list(self.detected_words.negative),
                "neutral": list(self.detected_words.neutral),
            },
        }


def tokenize(text: str) -> List[str]:
    """Split text into lowercase tokens longer than two characters.

    Order and duplicates are preserved. The empty string yields an
    empty list.
    """
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def is_negated(tokens: Sequence[str], index: int, markers: frozenset) -> bool:
    """True when one of the two tokens before ``index`` is a negation marker."""
    start = max(0, index - NEGATION_WINDOW)
    return any(token in markers for token in tokens[start:index])


def count_categories(tokens: Sequence[str], lexicon: Lexicon) -> Tuple[WordCounts, DetectedWords]:
    """Score every token into at most one category, in order of appearance."""
    detected = DetectedWords()

    for index, token in enumerate(tokens):
        negated = is_negated(tokens, index, lexicon.negation_markers)

        if token in lexicon.positive_words:
            if negated:
                detected.negative.append(f"not {token}")
            else:
                detected.positive.append(token)
        elif token in lexicon.negative_words:
            if negated:
                detected.positive.append(f"not {token}")
            else:
                detected.negative.append(token)
        elif token in lexicon.neutral_words:
            detected.neutral.append(token)

    counts = WordCounts(
        positive=len(detected.positive),
        negative=len(detected.negative),
        neutral=len(detected.neutral),
        total=len(tokens),
    )
    return counts, detected


def _round_half_up(value: float, places: int) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def _decide_neutral_aware(counts: WordCounts) -> Tuple[Sentiment, float, str]:
    pos, neg, neu = counts.positive, counts.negative, counts.neutral
    total = counts.sentiment_bearing

    if total == 0:
        return Sentiment.NEUTRAL, 0.0, "No clear sentiment indicators found in the review."

    if pos == neg and pos > 0:
        return (
            Sentiment.NEUTRAL,
            100.0,
            f"The review contains an equal number of positive ({pos}) and negative ({neg}) words "
            f"alongside {neu} neutral words, resulting in a neutral sentiment with maximum confidence.",
        )

    top = max(pos, neg, neu)

    # Neutral wins every tie it takes part in
    if neu > 0 and neu == top:
        sentiment = Sentiment.NEUTRAL
        explanation = (
            f"The review contains {neu} neutral words, {pos} positive words, and {neg} negative words. "
            "Neutral sentiment takes precedence."
        )
        share = neu
    elif pos > neg and pos > neu:
        sentiment = Sentiment.POSITIVE
        explanation = (
            f"The review contains {pos} positive words, {neg} negative words, and {neu} neutral words, "
            "indicating an overall positive sentiment."
        )
        share = pos
    elif neg > pos and neg > neu:
        sentiment = Sentiment.NEGATIVE
        explanation = (
            f"The review contains {neg} negative words, {pos} positive words, and {neu} neutral words, "
            "indicating an overall negative sentiment."
        )
        share = neg
    else:
        sentiment = Sentiment.NEUTRAL
        explanation = (
            f"No clear sentiment majority found. The review contains {pos} positive, {neg} negative, "
            f"and {neu} neutral words."
        )
        share = top

    return sentiment, _round_half_up(share / total * 100, 1), explanation


def _decide_simple(counts: WordCounts) -> Tuple[Sentiment, float, str]:
    pos, neg, neu = counts.positive, counts.negative, counts.neutral
    total = pos + neg

    if total == 0:
        return Sentiment.NEUTRAL, 0.0, "No clear sentiment indicators found in the review."

    if pos > neg:
        sentiment, share = Sentiment.POSITIVE, pos
    elif neg > pos:
        sentiment, share = Sentiment.NEGATIVE, neg
    else:
        sentiment, share = Sentiment.NEUTRAL, pos

    explanation = (
        f"The review contains {pos} positive words, {neg} negative words, and {neu} neutral words; "
        f"neutral words do not vote, giving an overall {sentiment.value.lower()} sentiment."
    )
    return sentiment, _round_half_up(share / total, 3), explanation


_DECISION_RULES = {
    "neutral_aware": _decide_neutral_aware,
    "simple": _decide_simple,
}


def decide(counts: WordCounts, mode: str = "neutral_aware") -> Tuple[Sentiment, float, str]:
    """Turn category counts into ``(sentiment, confidence, explanation)``."""
    try:
        rule = _DECISION_RULES[mode]
    except KeyError:
        raise ValueError(f"Unknown sentiment mode '{mode}'") from None
    return rule(counts)


def classify(text: str, lexicon: Optional[Lexicon] = None, mode: str = "neutral_aware") -> ClassificationResult:
    """Classify a review. Total over every string input."""
    lexicon = lexicon or get_default_lexicon()
    tokens = tokenize(text)
    counts, detected = count_categories(tokens, lexicon)
    sentiment, confidence, explanation = decide(counts, mode)
    return ClassificationResult(
        sentiment=sentiment,
        confidence=confidence,
        explanation=explanation,
        word_counts=counts,
        detected_words=detected,
    )


class SentimentService:
    """Review classifier bound to a shared lexicon.

    When ``mode`` is omitted the decision policy is read from the
    configuration on every call, so runtime config updates apply
    immediately.
    """

    def __init__(self, lexicon: Optional[Lexicon] = None, mode: Optional[str] = None):
        if mode is not None and mode not in SENTIMENT_MODES:
            raise ValueError(f"Unknown sentiment mode '{mode}'")
        self.lexicon = lexicon or get_default_lexicon()
        self._mode = mode

    @property
    def mode(self) -> str:
        return self._mode or get_config().SENTIMENT_MODE

    @log_performance()
    def analyze(self, text: str) -> ClassificationResult:
        mode = self.mode
        result = classify(text, self.lexicon, mode)

        logger.classification(
            result.sentiment.value,
            result.confidence,
            mode=mode,
            positive=result.word_counts.positive,
            negative=result.word_counts.negative,
            neutral=result.word_counts.neutral,
            total=result.word_counts.total,
        )
        record_classification(result.sentiment.value, mode)
        return result


__all__ = [
    "ClassificationResult",
    "DetectedWords",
    "Sentiment",
    "SentimentService",
    "WordCounts",
    "classify",
    "count_categories",
    "decide",
    "is_negated",
    "tokenize",
]
