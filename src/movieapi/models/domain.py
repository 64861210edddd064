"""Domain models for the movie catalogue.

Pure Python dataclasses, independent of SQLAlchemy. The repository
converts rows to these before handing them to callers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MovieEntity:
    """Domain model for a movie.

    movie_id is None until the store assigns one on insert.
    """

    title: str
    genre: str
    duration: int
    release_year: int | None = None
    movie_id: int | None = None
