"""ResponseValidator — turns a parsed candidate into a StructuredAnalysis."""
from dataclasses import dataclass, field
from typing import Any

from photocritic.errors import ValidationError

SCORE_MIN = 1
SCORE_MAX = 10

_TEXT_FIELDS = ("intent", "composition", "lighting", "subject")
_LIST_FIELDS = ("strengths", "suggestions")


@dataclass(frozen=True)
class StructuredAnalysis:
    score: int
    intent: str = ""
    composition: str = ""
    lighting: str = ""
    subject: str = ""
    strengths: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_response(self) -> dict:
        """Wire body of POST /analyze."""
        return {
            "score": self.score,
            "composition": self.composition,
            "lighting": self.lighting,
            "subject": self.subject,
            "strengths": list(self.strengths),
            "suggestions": list(self.suggestions),
        }


def clamp_score(score: int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, score))


def _score(candidate: dict) -> int:
    match candidate.get("score"):
        case None:
            raise ValidationError("score is missing")
        case bool():
            raise ValidationError("score must be a number")
        case int() as value:
            return clamp_score(value)
        case float() as value if value == value and abs(value) != float("inf"):
            return clamp_score(round(value))
        case other:
            raise ValidationError(f"score must be a number, got {other!r}")


def _text(candidate: dict, key: str) -> str:
    match candidate.get(key):
        case None:
            return ""
        case str() as value:
            return value
        case other:
            raise ValidationError(f"{key} must be a string, got {type(other).__name__}")


def _strings(candidate: dict, key: str) -> list[str]:
    match candidate.get(key):
        case None:
            return []
        case list() as values if all(isinstance(v, str) for v in values):
            return list(values)
        case other:
            raise ValidationError(f"{key} must be a list of strings, got {other!r}")


def validate_analysis(candidate: dict[str, Any]) -> StructuredAnalysis:
    """Clamp score into [1, 10]; missing text fields become "" and missing lists []."""
    if not isinstance(candidate, dict):
        raise ValidationError("analysis must be an object")
    return StructuredAnalysis(
        score=_score(candidate),
        **{key: _text(candidate, key) for key in _TEXT_FIELDS},
        **{key: _strings(candidate, key) for key in _LIST_FIELDS},
    )
