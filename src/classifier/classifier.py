from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional, Tuple

from .model import ClassifiedValue, Date, Formula, Literal, Scalar


# Shapes: 2026-02-03, 2026-02-03T10:30:00, 2026-02-03T10:30:00Z, 2026-02-03T10:30:00+02:00
ISO_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(Z|[+-]\d{2}:\d{2})?)?$")

# Order matters, first match wins
_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_DATE_FORMATS: Tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


class ValueClassifier:
    def classify(self, value: Scalar) -> ClassifiedValue:
        if not isinstance(value, str):
            return Literal(value)
        if self.is_formula(value):
            return Formula(value)
        parsed = self.parse_iso_date(value)
        if parsed is not None:
            return Date(parsed)
        return Literal(value)

    def is_formula(self, value: str) -> bool:
        return len(value) > 0 and value[0] == "="

    def parse_iso_date(self, value: str) -> Optional[datetime]:
        if not ISO_DATE_SHAPE.match(value):
            return None

        try:
            return datetime.strptime(value, _UTC_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            pass

        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        # e.g. 2026-13-45: right shape, not a calendar date
        return None
