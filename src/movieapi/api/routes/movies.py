"""Movies API endpoints.

POST   /movies              - Create a movie
GET    /movies?skip=&take=  - List a page of movies
GET    /movies/{movie_id}   - Get one movie
PUT    /movies/{movie_id}   - Replace all fields of a movie
PATCH  /movies/{movie_id}   - Apply a JSON Patch to a movie
DELETE /movies/{movie_id}   - Delete a movie

Missing movies answer 404 with an empty body.
"""

import logging

from fastapi import APIRouter, Body, Depends, Request, Response
from pydantic import ValidationError

from movieapi.api.app import get_db_session
from movieapi.api.errors import field_errors, handle_api_errors, validation_problem
from movieapi.db import repo
from movieapi.db.repo import DbSession
from movieapi.models.mapping import (
    create_dto_to_entity,
    entity_to_read_dto,
    entity_to_update_dto,
    map_into,
)
from movieapi.models.patch import PatchError, PatchOperation, apply_patch
from movieapi.models.types import (
    CreateMovieDto,
    ReadMovieDto,
    UpdateMovieDto,
    ValidationProblem,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["movies"])

_NOT_FOUND = {404: {"description": "Movie not found"}}
_SERVER_ERROR = {500: {"description": "Internal server error"}}
_BAD_REQUEST = {400: {"model": ValidationProblem, "description": "Validation problem"}}


@router.post(
    "",
    response_model=ReadMovieDto,
    status_code=201,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
)
@handle_api_errors("Error adding the movie")
def create_movie(
    movie: CreateMovieDto,
    request: Request,
    response: Response,
    session: DbSession = Depends(get_db_session),
) -> ReadMovieDto:
    """Add a movie to the catalogue.

    Args:
        movie: Fields for the new movie.
        request: Incoming request, used to build the Location header.
        response: Outgoing response (Location header is set on it).
        session: Database session (injected).

    Returns:
        The stored movie, including its assigned movie_id.
    """
    created = repo.create_movie(session, create_dto_to_entity(movie))
    repo.commit(session)
    logger.info("Created movie %s (%s)", created.movie_id, created.title)

    response.headers["Location"] = str(
        request.url_for("get_movie", movie_id=str(created.movie_id))
    )
    return entity_to_read_dto(created)


@router.get("", response_model=list[ReadMovieDto], responses=_SERVER_ERROR)
@handle_api_errors("Error retrieving movies")
def list_movies(
    skip: int = 0,
    take: int = 50,
    session: DbSession = Depends(get_db_session),
) -> list[ReadMovieDto]:
    """List movies ordered by id.

    Args:
        skip: Number of movies to skip.
        take: Maximum number of movies to return. Not bounded here.
        session: Database session (injected).
    """
    movies = repo.list_movies(session, skip=skip, take=take)
    return [entity_to_read_dto(m) for m in movies]


@router.get(
    "/{movie_id}",
    response_model=ReadMovieDto,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
)
@handle_api_errors("Error retrieving the movie")
def get_movie(
    movie_id: int,
    session: DbSession = Depends(get_db_session),
):
    """Get a movie by id."""
    movie = repo.get_movie(session, movie_id)
    if movie is None:
        return Response(status_code=404)
    return entity_to_read_dto(movie)


@router.put(
    "/{movie_id}",
    status_code=204,
    response_class=Response,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
@handle_api_errors("Error updating the movie")
def update_movie(
    movie_id: int,
    movie: UpdateMovieDto,
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Replace every field of a movie.

    Fields left out of the body fall back to their defaults, so callers
    must send the whole object.
    """
    entity = repo.get_movie(session, movie_id)
    if entity is None:
        return Response(status_code=404)

    repo.update_movie(session, map_into(movie, entity))
    repo.commit(session)
    logger.info("Updated movie %s", movie_id)
    return Response(status_code=204)


@router.patch(
    "/{movie_id}",
    status_code=204,
    response_class=Response,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
@handle_api_errors("Error updating the movie")
def patch_movie(
    movie_id: int,
    operations: list[PatchOperation] = Body(..., media_type="application/json-patch+json"),
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Apply a JSON Patch document to a movie.

    The patch runs against the movie's update shape, which is then
    validated again. Nothing is written unless both steps succeed.
    """
    entity = repo.get_movie(session, movie_id)
    if entity is None:
        return Response(status_code=404)

    try:
        document = apply_patch(entity_to_update_dto(entity), operations)
    except PatchError as e:
        logger.warning("Patch for movie %s not applicable: %s", movie_id, e)
        return validation_problem(e.errors)

    try:
        patched = UpdateMovieDto.model_validate(document)
    except ValidationError as e:
        errors = field_errors(e.errors())
        logger.warning("Patched movie %s failed validation: %s", movie_id, errors)
        return validation_problem(errors)

    repo.update_movie(session, map_into(patched, entity))
    repo.commit(session)
    logger.info("Patched movie %s with %d operations", movie_id, len(operations))
    return Response(status_code=204)


@router.delete(
    "/{movie_id}",
    status_code=204,
    response_class=Response,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
)
@handle_api_errors("Error deleting the movie")
def delete_movie(
    movie_id: int,
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Delete a movie."""
    if not repo.delete_movie(session, movie_id):
        return Response(status_code=404)
    repo.commit(session)
    logger.info("Deleted movie %s", movie_id)
    return Response(status_code=204)
