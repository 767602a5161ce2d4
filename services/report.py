"""Plain-text rendering of a classification result."""

from services.sentiment import ClassificationResult


def format_confidence(confidence: float, mode: str) -> str:
    """Render confidence as a percentage regardless of the decision mode."""
    percent = confidence * 100 if mode == "simple" else confidence
    return f"{percent:.1f}%"


def _encodable(text: str) -> str:
    # Lone surrogates cannot be encoded as UTF-8; they become "?"
    return text.encode("utf-8", "replace").decode("utf-8")


def format_report(review: str, result: ClassificationResult, mode: str = "neutral_aware") -> str:
    counts = result.word_counts
    lines = [
        f"Movie Review: {_encodable(review)}",
        "",
        f"Sentiment: {result.sentiment.value} ({format_confidence(result.confidence, mode)} confidence)",
        result.explanation,
        "",
        "Word Counts:",
        f"- Positive: {counts.positive}",
        f"- Negative: {counts.negative}",
        f"- Neutral: {counts.neutral}",
    ]
    return "\n".join(lines).strip()
