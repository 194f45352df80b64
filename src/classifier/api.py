from __future__ import annotations

from .classifier import ValueClassifier
from .model import ClassifiedValue, Scalar


def classify_value(value: Scalar) -> ClassifiedValue:
    """Public API (ValueClassifier)

    Contract:
    - str starting with "=" -> Formula (string unchanged, "=" alone included).
    - ISO str (YYYY-MM-DD[THH:MM:SS[Z|+HH:MM]]) -> Date.
      "Z" -> UTC, "+HH:MM" -> offset kept, no zone -> naive, date only -> midnight.
    - Anything else -> Literal (original value). Non-str values are never coerced.
    - Deterministic, no state.
    """
    return ValueClassifier().classify(value)
