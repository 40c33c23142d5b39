"""
Per-dot visual attributes for the scatter plot.

Positions are computed once per dataset; fill, radius and opacity are
recomputed from the view state on every control change.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from movie_scatter import filters
from movie_scatter.encoding import (DEFAULT_COLOR_BY, DEFAULT_SIZE_BY,
                                    DatasetStats, Encoder, EncodingKey,
                                    InvalidEncodingKey, parse_color_key,
                                    parse_size_key)
from movie_scatter.filters import FilterState
from movie_scatter.logger import logger
from movie_scatter.models import Dot, Movie, Position
from movie_scatter.rng import Rng

UNKNOWN = "Unknown"


def _stored_key(session: dict, name: str, parse, default: EncodingKey) -> EncodingKey:
    try:
        return parse(session.get(name, default))
    except InvalidEncodingKey as exc:
        logger.warning(f"stored {name} is no longer valid, using {default.value}: {exc}")
        return default


@dataclass(frozen=True)
class ViewState:
    color_by: EncodingKey = DEFAULT_COLOR_BY
    size_by: EncodingKey = DEFAULT_SIZE_BY
    genre_filter: FilterState = filters.ALL

    def to_session(self) -> dict:
        return {
            "color_by": self.color_by.value,
            "size_by": self.size_by.value,
            "genre": filters.to_session(self.genre_filter),
        }

    @classmethod
    def from_session(cls, session: Optional[dict]) -> "ViewState":
        if not session:
            return cls()
        return cls(
            color_by=_stored_key(session, "color_by", parse_color_key, DEFAULT_COLOR_BY),
            size_by=_stored_key(session, "size_by", parse_size_key, DEFAULT_SIZE_BY),
            genre_filter=filters.from_session(session.get("genre")),
        )


def apply_encoding(
    view: ViewState, color_by: Optional[str] = None, size_by: Optional[str] = None
) -> ViewState:
    """Return a new view with the given selections.

    Raises InvalidEncodingKey before touching anything, so callers keep the
    previous view on error.
    """
    changes = {}
    if color_by is not None:
        changes["color_by"] = parse_color_key(color_by)
    if size_by is not None:
        changes["size_by"] = parse_size_key(size_by)
    return replace(view, **changes)


def select_genre(
    view: ViewState, label: str, genres: Optional[Sequence[str]] = None
) -> ViewState:
    return replace(view, genre_filter=filters.toggle(view.genre_filter, label, genres))


def layout(
    movies: Sequence[Movie],
    stats: DatasetStats,
    rng: Rng,
    width: float = 960,
    height: float = 600,
    jitter: float = 4.0,
    margin: float = 20.0,
) -> list[Position]:
    """Rating on x, log rating count on y (upwards), plus a little jitter."""
    inner_w = width - 2 * margin
    inner_h = height - 2 * margin
    positions = []
    for movie in movies:
        tx = stats.normalize(movie, EncodingKey.RATING)
        ty = stats.normalize(movie, EncodingKey.RATING_COUNT)
        tx = 0.5 if tx is None else tx
        ty = 0.5 if ty is None else ty
        x = margin + tx * inner_w + rng.jitter(jitter)
        y = margin + (1 - ty) * inner_h + rng.jitter(jitter)
        positions.append(Position(round(x, 2), round(y, 2)))
    return positions


def tooltip(movie: Movie) -> dict[str, str]:
    return {
        "title": movie.title or UNKNOWN,
        "genres": ", ".join(movie.genres) or UNKNOWN,
    }


def encode_dots(
    movies: Sequence[Movie],
    positions: Sequence[Position],
    view: ViewState,
    encoder: Encoder,
) -> list[Dot]:
    dots = []
    for movie, position in zip(movies, positions):
        tip = tooltip(movie)
        dots.append(
            Dot(
                movie_id=movie.movie_id,
                x=position.x,
                y=position.y,
                fill=encoder.color(movie, view.color_by),
                r=encoder.radius(movie, view.size_by),
                opacity=filters.opacity(view.genre_filter, movie),
                title=tip["title"],
                genres=tip["genres"],
            )
        )
    return dots
