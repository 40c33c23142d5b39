"""
Maps movie fields to dot fill color and radius.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from movie_scatter.logger import logger
from movie_scatter.models import Movie


class InvalidEncodingKey(ValueError):
    def __init__(self, key, axis: str):
        self.key = key
        self.axis = axis
        super().__init__(f"invalid {axis} key: {key!r}")


class EncodingKey(str, Enum):
    GENRE = "genre"
    RATING = "rating"
    RATING_COUNT = "rating_count"
    UNIFORM = "uniform"


COLOR_KEYS = (EncodingKey.GENRE, EncodingKey.RATING, EncodingKey.RATING_COUNT)
SIZE_KEYS = (EncodingKey.UNIFORM, EncodingKey.RATING, EncodingKey.RATING_COUNT)
NUMERIC_KEYS = (EncodingKey.RATING, EncodingKey.RATING_COUNT)
LOG_SCALED_KEYS = (EncodingKey.RATING_COUNT,)

DEFAULT_COLOR_BY = EncodingKey.GENRE
DEFAULT_SIZE_BY = EncodingKey.UNIFORM

DEFAULT_COLOR = "#6c7a89"
DEFAULT_RADIUS = 5.0
MIN_RADIUS = 3.0
MAX_RADIUS = 14.0

# viridis stops, low -> high
GRADIENT = np.array(
    [
        [0x44, 0x01, 0x54],
        [0x3B, 0x52, 0x8B],
        [0x21, 0x91, 0x8C],
        [0x5E, 0xC9, 0x62],
        [0xFD, 0xE7, 0x25],
    ],
    dtype=float,
)

GENRE_PALETTE = (
    "#e6194b", "#3cb44b", "#ffe119", "#4363d8", "#f58231", "#911eb4",
    "#46f0f0", "#f032e6", "#bcf60c", "#fabebe", "#008080", "#e6beff",
    "#9a6324", "#fffac8", "#800000", "#aaffc3", "#808000", "#ffd8b1",
    "#000075", "#808080",
)


def _parse_key(key, allowed: Sequence[EncodingKey], axis: str) -> EncodingKey:
    try:
        parsed = EncodingKey(key)
    except ValueError:
        raise InvalidEncodingKey(key, axis) from None
    if parsed not in allowed:
        raise InvalidEncodingKey(key, axis)
    return parsed


def parse_color_key(key) -> EncodingKey:
    return _parse_key(key, COLOR_KEYS, "colorBy")


def parse_size_key(key) -> EncodingKey:
    return _parse_key(key, SIZE_KEYS, "sizeBy")


def _field_value(movie: Movie, key: EncodingKey) -> Optional[float]:
    value = getattr(movie, key.value)
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    if key in LOG_SCALED_KEYS:
        return math.log1p(max(value, 0.0))
    return value


@dataclass(frozen=True)
class DatasetStats:
    """Per-field value range over the full, unfiltered dataset.

    Ranges are stored in scale space, so log-scaled fields hold log1p values.
    """

    ranges: dict = field(default_factory=dict)
    genres: tuple[str, ...] = ()
    size: int = 0

    @classmethod
    def from_movies(cls, movies: Sequence[Movie]) -> "DatasetStats":
        ranges = {}
        for key in NUMERIC_KEYS:
            values = [_field_value(movie, key) for movie in movies]
            values = np.array([v for v in values if v is not None], dtype=float)
            if values.size == 0:
                ranges[key] = None
            else:
                ranges[key] = (float(values.min()), float(values.max()))
        all_genres = set()
        for movie in movies:
            all_genres.update(movie.genres)
        return cls(ranges=ranges, genres=tuple(sorted(all_genres)), size=len(movies))

    def normalize(self, movie: Movie, key: EncodingKey) -> Optional[float]:
        """Position of the movie's value inside the observed range, in [0, 1].

        Returns None when the range is empty or degenerate.
        """
        value_range = self.ranges.get(key)
        if value_range is None:
            return None
        low, high = value_range
        if high <= low:
            return None
        value = _field_value(movie, key)
        if value is None:
            # missing fields sit at the bottom of the range
            value = low
        return float(np.clip((value - low) / (high - low), 0.0, 1.0))


def _to_hex(rgb: np.ndarray) -> str:
    r, g, b = (int(round(channel)) for channel in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def gradient_color(t: float) -> str:
    position = t * (len(GRADIENT) - 1)
    idx = min(int(position), len(GRADIENT) - 2)
    frac = position - idx
    return _to_hex(GRADIENT[idx] + (GRADIENT[idx + 1] - GRADIENT[idx]) * frac)


def compute_color(movie: Movie, color_by, stats: DatasetStats) -> str:
    key = parse_color_key(color_by)
    if key is EncodingKey.GENRE:
        if not movie.genres or movie.genres[0] not in stats.genres:
            return DEFAULT_COLOR
        genre_idx = stats.genres.index(movie.genres[0])
        return GENRE_PALETTE[genre_idx % len(GENRE_PALETTE)]
    t = stats.normalize(movie, key)
    if t is None:
        return DEFAULT_COLOR
    return gradient_color(t)


def compute_radius(movie: Movie, size_by, stats: DatasetStats) -> float:
    key = parse_size_key(size_by)
    if key is EncodingKey.UNIFORM:
        return DEFAULT_RADIUS
    t = stats.normalize(movie, key)
    if t is None:
        return DEFAULT_RADIUS
    return round(MIN_RADIUS + (MAX_RADIUS - MIN_RADIUS) * t, 2)


class Encoder:
    """Memoised color and radius lookups for one dataset."""

    def __init__(self, stats: DatasetStats):
        self.stats = stats
        self._colors: dict[tuple[int, EncodingKey], str] = {}
        self._radii: dict[tuple[int, EncodingKey], float] = {}

    def color(self, movie: Movie, color_by) -> str:
        key = parse_color_key(color_by)
        cache_key = (movie.movie_id, key)
        if cache_key not in self._colors:
            self._colors[cache_key] = compute_color(movie, key, self.stats)
        return self._colors[cache_key]

    def radius(self, movie: Movie, size_by) -> float:
        key = parse_size_key(size_by)
        cache_key = (movie.movie_id, key)
        if cache_key not in self._radii:
            self._radii[cache_key] = compute_radius(movie, key, self.stats)
        return self._radii[cache_key]

    @property
    def cache_size(self) -> int:
        return len(self._colors) + len(self._radii)


def create_encoder(movies: Sequence[Movie]) -> Encoder:
    stats = DatasetStats.from_movies(movies)
    if stats.size == 0:
        logger.warning("empty movie dataset, falling back to default color and radius")
    logger.info(f"computed encoding stats for {stats.size} movies and {len(stats.genres)} genres")
    return Encoder(stats)
