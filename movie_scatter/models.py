"""
Data models and types.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional


@dataclass(frozen=True)
class Movie:
    movie_id: int
    title: str
    genres: tuple[str, ...] = field(default_factory=tuple)
    rating: Optional[float] = None
    rating_count: Optional[int] = None


class Position(NamedTuple):
    x: float
    y: float


class Dot(NamedTuple):
    movie_id: int
    x: float
    y: float
    fill: str
    r: float
    opacity: float
    title: str
    genres: str
