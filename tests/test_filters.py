import pytest

from movie_scatter import filters
from movie_scatter.filters import ALL, GenreFilter, UnknownGenre


def test_initial_state_is_all(movies):
    assert filters.active_pill(ALL) == "All"
    assert all(filters.opacity(ALL, m) == 0.8 for m in movies)


def test_select_genre_highlights_and_dims(movies):
    state = filters.toggle(ALL, "Action")
    assert state == GenreFilter("Action")
    for movie in movies:
        expected = 1 if "Action" in movie.genres else 0.15
        assert filters.opacity(state, movie) == expected
    opacities = {filters.opacity(state, m) for m in movies}
    assert opacities == {1, 0.15}


def test_toggle_twice_resets_to_all(movies):
    state = filters.toggle(ALL, "Drama")
    state = filters.toggle(state, "Drama")
    assert state is ALL
    assert filters.active_pill(state) == "All"
    assert all(filters.opacity(state, m) == 0.8 for m in movies)


def test_switching_genres_keeps_one_active():
    state = filters.toggle(ALL, "Drama")
    state = filters.toggle(state, "Comedy")
    assert state == GenreFilter("Comedy")
    assert filters.active_pill(state) == "Comedy"


def test_all_pill_always_resets():
    assert filters.toggle(GenreFilter("Horror"), "All") is ALL
    assert filters.toggle(ALL, "All") is ALL


def test_session_round_trip():
    for state in [ALL, GenreFilter("Family")]:
        assert filters.from_session(filters.to_session(state)) == state
    assert filters.from_session(None) is ALL


def test_unknown_genre_is_rejected():
    genres = ("Action", "Drama")
    with pytest.raises(UnknownGenre):
        filters.toggle(ALL, "Nonexistent", genres)
    with pytest.raises(UnknownGenre):
        filters.toggle(GenreFilter("Drama"), "Nonexistent", genres)
    assert filters.toggle(ALL, "Action", genres) == GenreFilter("Action")
    assert filters.toggle(GenreFilter("Action"), "All", genres) is ALL
