import os
from pathlib import Path
from typing import Optional

import asyncpg
from fastapi import FastAPI, Request
from fastapi import Path as PathParam
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse, Response

from movie_scatter import filters
from movie_scatter.db.postgres import get_all_movies
from movie_scatter.encoding import (COLOR_KEYS, SIZE_KEYS, InvalidEncodingKey,
                                    create_encoder)
from movie_scatter.export import export_frame
from movie_scatter.logger import logger
from movie_scatter.models import Movie
from movie_scatter.rng import create_rng
from movie_scatter.scatter import (ViewState, apply_encoding, encode_dots,
                                   layout, select_genre)
from movie_scatter.utils import timed

PLOT_WIDTH = 960
PLOT_HEIGHT = 600

SESSION_SECRET = os.environ.get("SESSION_SECRET", "foobar")

app = FastAPI()
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


class EncodingParams(BaseModel):
    color_by: Optional[str] = None
    size_by: Optional[str] = None


class GenreParams(BaseModel):
    genre: str


def setup_dataset(state, movies: list[Movie], seed: int = 42, jitter: float = 4.0) -> None:
    """Precompute everything that depends only on the dataset."""
    state.movies = list(movies)
    state.encoder = create_encoder(state.movies)
    state.positions = layout(
        state.movies,
        state.encoder.stats,
        create_rng(seed),
        width=PLOT_WIDTH,
        height=PLOT_HEIGHT,
        jitter=jitter,
    )
    logger.info(f"laid out {len(state.movies)} movies with seed {seed}")


@app.on_event("startup")
@timed
async def startup_event():
    app.state.pool = await asyncpg.create_pool(os.environ["POSTGRES_URI"])
    movies = await get_all_movies(app.state.pool)
    setup_dataset(
        app.state,
        movies,
        seed=int(os.environ.get("RNG_SEED", 42)),
        jitter=float(os.environ.get("JITTER", 4.0)),
    )


def _get_view(request: Request) -> ViewState:
    return ViewState.from_session(request.session.get("view"))


def _store_view(request: Request, view: ViewState) -> None:
    request.session["view"] = view.to_session()


def _dots(request: Request, view: ViewState) -> list:
    state = request.app.state
    return encode_dots(state.movies, state.positions, view, state.encoder)


def _view_json(request: Request, view: ViewState) -> dict:
    return {
        "view": {**view.to_session(), "active_pill": filters.active_pill(view.genre_filter)},
        "dots": [dot._asdict() for dot in _dots(request, view)],
    }


@app.get("/movies")
@timed
async def movies_page(request: Request):
    view = _get_view(request)
    return templates.TemplateResponse(
        request,
        "movies.html",
        {
            "dots": _dots(request, view),
            "view": view,
            "color_keys": [key.value for key in COLOR_KEYS],
            "size_keys": [key.value for key in SIZE_KEYS],
            "pills": [filters.ALL_LABEL, *request.app.state.encoder.stats.genres],
            "active_pill": filters.active_pill(view.genre_filter),
            "width": PLOT_WIDTH,
            "height": PLOT_HEIGHT,
        },
    )


@app.get("/dots")
@timed
async def dots(request: Request) -> JSONResponse:
    return JSONResponse(_view_json(request, _get_view(request)))


@app.post("/encoding")
@timed
async def set_encoding(request: Request, body: EncodingParams) -> JSONResponse:
    view = _get_view(request)
    try:
        view = apply_encoding(view, color_by=body.color_by, size_by=body.size_by)
    except InvalidEncodingKey as exc:
        logger.error(f"rejected encoding change, keeping {view.to_session()}: {exc}")
        return JSONResponse(
            {"error": str(exc), **_view_json(request, view)}, status_code=400
        )
    _store_view(request, view)
    logger.debug(f"encoding changed to {view.to_session()}")
    return JSONResponse(_view_json(request, view))


@app.post("/genre")
@timed
async def set_genre(request: Request, body: GenreParams) -> JSONResponse:
    view = _get_view(request)
    try:
        view = select_genre(view, body.genre, request.app.state.encoder.stats.genres)
    except filters.UnknownGenre as exc:
        logger.error(f"rejected genre filter, keeping {filters.active_pill(view.genre_filter)}: {exc}")
        return JSONResponse(
            {"error": str(exc), **_view_json(request, view)}, status_code=400
        )
    _store_view(request, view)
    logger.debug(f"genre filter is now {filters.active_pill(view.genre_filter)}")
    return JSONResponse(_view_json(request, view))


@app.post("/frames/{frame_index}")
@timed
async def download_frame(request: Request, frame_index: int = PathParam(ge=0)) -> Response:
    return export_frame(await request.body(), frame_index)
