import pytest

from movie_scatter.models import Movie

MOVIES = [
    Movie(1, "Heat", ("Action", "Crime", "Drama"), rating=7.7, rating_count=1886),
    Movie(2, "Toy Story", ("Animation", "Comedy", "Family"), rating=7.7, rating_count=5415),
    Movie(3, "Jumanji", ("Adventure", "Fantasy", "Family"), rating=6.9, rating_count=2413),
    Movie(4, "Waiting to Exhale", ("Comedy", "Drama", "Romance"), rating=6.1, rating_count=34),
    Movie(5, "Sudden Death", ("Action", "Adventure", "Thriller"), rating=5.5, rating_count=174),
    Movie(6, "Cutthroat Island", ("Action", "Adventure"), rating=5.7, rating_count=137),
    Movie(7, "Dracula: Dead and Loving It", ("Comedy", "Horror"), rating=5.7, rating_count=210),
    Movie(8, "Nixon", ("History", "Drama"), rating=7.1, rating_count=72),
    Movie(9, "Lost Reel", (), rating=None, rating_count=None),
]


@pytest.fixture
def movies():
    return list(MOVIES)
