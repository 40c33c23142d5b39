"""
Functions to interact with PostgreSQL database.
"""

import asyncpg

from movie_scatter.models import Movie

CREATE_MOVIES_TABLE = """
    CREATE TABLE IF NOT EXISTS movies (
        movie_id INTEGER PRIMARY KEY,
        movie_title TEXT NOT NULL,
        genres TEXT[],
        vote_average REAL,
        vote_count INTEGER
    )
"""


async def create_movies_table(pool: asyncpg.Pool) -> None:
    async with pool.acquire() as connection:
        await connection.execute(CREATE_MOVIES_TABLE)


def _movie_to_tuple(movie: Movie):
    return (
        movie.movie_id,
        movie.title,
        list(movie.genres),
        movie.rating,
        movie.rating_count,
    )


async def insert_movies(pool: asyncpg.Pool, movies: list[Movie]) -> None:
    async with pool.acquire() as connection:
        row_gen = (_movie_to_tuple(movie) for movie in movies)
        await connection.executemany(
            """
            INSERT INTO movies (movie_id, movie_title, genres, vote_average, vote_count)
            VALUES ($1, $2, $3, $4, $5)
            ON CONFLICT DO NOTHING
        """,
            row_gen,
        )


async def count_movies(pool: asyncpg.Pool) -> int:
    async with pool.acquire() as connection:
        return await connection.fetchval("SELECT COUNT(*) FROM movies")


def _row_to_movie(row) -> Movie:
    return Movie(
        movie_id=row["movie_id"],
        title=row["movie_title"],
        genres=tuple(row["genres"] or ()),
        rating=row["vote_average"],
        rating_count=row["vote_count"],
    )


async def get_all_movies(pool: asyncpg.Pool, limit: int = 2000) -> list[Movie]:
    """Most voted movies first, ties broken by movie ID."""
    async with pool.acquire() as connection:
        rows = await connection.fetch(
            """
            SELECT movie_id, movie_title, genres, vote_average, vote_count
            FROM movies
            ORDER BY vote_count DESC NULLS LAST, movie_id
            LIMIT $1
        """,
            limit,
        )
    return [_row_to_movie(row) for row in rows]
