"""
Genre highlight filter: either every genre is shown, or exactly one is highlighted.
"""

from dataclasses import dataclass
from typing import Collection, Optional, Union

from movie_scatter.models import Movie

ALL_LABEL = "All"

DEFAULT_OPACITY = 0.8
HIGHLIGHT_OPACITY = 1.0
DIMMED_OPACITY = 0.15


@dataclass(frozen=True)
class AllGenres:
    def __str__(self):
        return ALL_LABEL


@dataclass(frozen=True)
class GenreFilter:
    genre: str

    def __str__(self):
        return self.genre


FilterState = Union[AllGenres, GenreFilter]


class UnknownGenre(ValueError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"unknown genre: {label!r}")


ALL = AllGenres()


def toggle(
    state: FilterState, label: str, genres: Optional[Collection[str]] = None
) -> FilterState:
    """Select a genre pill.

    Clicking the already active genre resets to All, clicking the All pill
    always resets. When `genres` is given, labels outside it raise UnknownGenre.
    """
    if label == ALL_LABEL:
        return ALL
    if genres is not None and label not in genres:
        raise UnknownGenre(label)
    if isinstance(state, GenreFilter) and state.genre == label:
        return ALL
    return GenreFilter(label)


def opacity(state: FilterState, movie: Movie) -> float:
    if isinstance(state, AllGenres):
        return DEFAULT_OPACITY
    if state.genre in movie.genres:
        return HIGHLIGHT_OPACITY
    return DIMMED_OPACITY


def active_pill(state: FilterState) -> str:
    return str(state)


def to_session(state: FilterState) -> Optional[str]:
    if isinstance(state, AllGenres):
        return None
    return state.genre


def from_session(value: Optional[str]) -> FilterState:
    if not value or value == ALL_LABEL:
        return ALL
    return GenreFilter(value)
