"""Repository for movie persistence.

Encapsulates all SQLAlchemy queries. Callers get MovieEntity objects,
never ORM rows, and every write is an explicit function call followed
by commit(). Any SQLAlchemy failure surfaces as StoreError.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from movieapi.db.schema import Movie
from movieapi.models.domain import MovieEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession", "StoreError"]

logger = logging.getLogger(__name__)

MIN_MOVIE_ID = -(2**63)
MAX_MOVIE_ID = 2**63 - 1


class StoreError(Exception):
    """The store could not complete a read, write or commit."""


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to {action}") from e


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _movie_to_entity(movie: Movie) -> MovieEntity:
    """Convert SQLAlchemy Movie to domain entity."""
    return MovieEntity(
        movie_id=movie.movie_id,
        title=movie.title,
        genre=movie.genre,
        duration=movie.duration,
        release_year=movie.release_year,
    )


def _get_row(session: DbSession, movie_id: int) -> Movie | None:
    # Ids outside the 64-bit INTEGER range cannot be bound, so they cannot exist.
    if not MIN_MOVIE_ID <= movie_id <= MAX_MOVIE_ID:
        return None
    return session.query(Movie).filter(Movie.movie_id == movie_id).first()


# ============================================================================
# Movie Repository
# ============================================================================


def create_movie(session: DbSession, entity: MovieEntity) -> MovieEntity:
    """Insert a new movie and return it with its assigned id.

    Flushes so the database assigns movie_id; the row is not durable
    until commit().
    """
    movie = Movie(
        title=entity.title,
        genre=entity.genre,
        duration=entity.duration,
        release_year=entity.release_year,
    )
    with _store_errors("insert movie"):
        session.add(movie)
        session.flush()
    return _movie_to_entity(movie)


def list_movies(session: DbSession, skip: int = 0, take: int = 50) -> list[MovieEntity]:
    """Get a page of movies ordered by id.

    skip and take are passed to the database as-is.
    """
    query = session.query(Movie).order_by(Movie.movie_id).offset(skip).limit(take)
    with _store_errors("list movies"):
        movies = query.all()
    return [_movie_to_entity(m) for m in movies]


def get_movie(session: DbSession, movie_id: int) -> MovieEntity | None:
    """Get movie by ID."""
    with _store_errors("get movie"):
        movie = _get_row(session, movie_id)
    return _movie_to_entity(movie) if movie else None


def update_movie(session: DbSession, entity: MovieEntity) -> MovieEntity | None:
    """Overwrite every mutable field of the stored movie.

    Returns:
        The updated entity, or None if no movie has entity.movie_id.
    """
    if entity.movie_id is None:
        return None
    with _store_errors("update movie"):
        movie = _get_row(session, entity.movie_id)
        if movie is None:
            return None
        movie.title = entity.title
        movie.genre = entity.genre
        movie.duration = entity.duration
        movie.release_year = entity.release_year
    return _movie_to_entity(movie)


def delete_movie(session: DbSession, movie_id: int) -> bool:
    """Delete movie by ID. Returns False if it did not exist."""
    with _store_errors("delete movie"):
        movie = _get_row(session, movie_id)
        if movie is None:
            return False
        session.delete(movie)
    return True


def count_movies(session: DbSession) -> int:
    """Total number of stored movies."""
    with _store_errors("count movies"):
        return session.query(Movie).count()


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction.

    Rolls back and raises StoreError if the flush or commit fails.
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        logger.error("Commit failed, rolling back: %s", e)
        session.rollback()
        raise StoreError("Failed to commit changes") from e
