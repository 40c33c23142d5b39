import pytest

from movie_scatter import filters
from movie_scatter.encoding import EncodingKey, InvalidEncodingKey, create_encoder
from movie_scatter.models import Movie
from movie_scatter.rng import create_rng
from movie_scatter.scatter import (ViewState, apply_encoding, encode_dots,
                                   layout, select_genre, tooltip)


def _dots(movies, view, seed=42):
    encoder = create_encoder(movies)
    positions = layout(movies, encoder.stats, create_rng(seed))
    return encode_dots(movies, positions, view, encoder)


def test_default_view():
    view = ViewState()
    assert view.color_by is EncodingKey.GENRE
    assert view.size_by is EncodingKey.UNIFORM
    assert view.genre_filter is filters.ALL


def test_layout_is_reproducible(movies):
    encoder = create_encoder(movies)
    first = layout(movies, encoder.stats, create_rng(5))
    second = layout(movies, encoder.stats, create_rng(5))
    other = layout(movies, encoder.stats, create_rng(6))
    assert first == second
    assert first != other


def test_layout_stays_inside_plot(movies):
    encoder = create_encoder(movies)
    positions = layout(movies, encoder.stats, create_rng(1), width=400, height=300, jitter=4)
    assert all(0 <= p.x <= 400 and 0 <= p.y <= 300 for p in positions)


def test_encoding_change_keeps_positions(movies):
    before = _dots(movies, ViewState())
    after = _dots(movies, apply_encoding(ViewState(), color_by="rating", size_by="rating_count"))
    assert [(d.x, d.y) for d in before] == [(d.x, d.y) for d in after]
    assert any(a.fill != b.fill for a, b in zip(before, after))
    assert len({d.r for d in after}) > 1


def test_invalid_encoding_keeps_previous_view():
    view = apply_encoding(ViewState(), color_by="rating")
    with pytest.raises(InvalidEncodingKey):
        apply_encoding(view, color_by="rating", size_by="budget")
    assert view.color_by is EncodingKey.RATING
    assert view.size_by is EncodingKey.UNIFORM


def test_genre_selection_drives_opacity(movies):
    view = select_genre(ViewState(), "Action")
    dots = _dots(movies, view)
    for movie, dot in zip(movies, dots):
        assert dot.opacity == (1 if "Action" in movie.genres else 0.15)

    view = select_genre(view, "Action")
    assert all(dot.opacity == 0.8 for dot in _dots(movies, view))


def test_view_session_round_trip():
    view = select_genre(apply_encoding(ViewState(), color_by="rating_count"), "Drama")
    assert ViewState.from_session(view.to_session()) == view
    assert ViewState.from_session(None) == ViewState()


def test_tooltip_text_is_never_empty(movies):
    for movie in movies:
        tip = tooltip(movie)
        assert tip["title"]
        assert tip["genres"]
    assert tooltip(Movie(1, "", ()))["title"] == "Unknown"
    assert tooltip(movies[0])["genres"] == "Action, Crime, Drama"


def test_stale_session_keys_fall_back_to_defaults():
    view = ViewState.from_session({"color_by": "budget", "size_by": "rating", "genre": "Drama"})
    assert view.color_by is EncodingKey.GENRE
    assert view.size_by is EncodingKey.RATING
    assert view.genre_filter == filters.GenreFilter("Drama")

    view = ViewState.from_session({"color_by": "rating", "size_by": "genre"})
    assert view.color_by is EncodingKey.RATING
    assert view.size_by is EncodingKey.UNIFORM


def test_select_unknown_genre_keeps_view(movies):
    genres = create_encoder(movies).stats.genres
    view = select_genre(ViewState(), "Drama", genres)
    with pytest.raises(filters.UnknownGenre):
        select_genre(view, "Nonexistent", genres)
    assert view.genre_filter == filters.GenreFilter("Drama")
