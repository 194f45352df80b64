from dataclasses import dataclass
from datetime import datetime
from typing import Union

# One cell of a caller-supplied grid
Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Formula:
    source: str  # including the leading "="


@dataclass(frozen=True)
class Date:
    value: datetime  # aware for "Z" / "+HH:MM" input, naive otherwise


@dataclass(frozen=True)
class Literal:
    value: Scalar


ClassifiedValue = Union[Formula, Date, Literal]
