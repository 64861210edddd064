"""Conversions between MovieEntity and the API DTOs.

Every field is copied explicitly. movie_id is never written from a DTO.
"""

from __future__ import annotations

from movieapi.models.domain import MovieEntity
from movieapi.models.types import CreateMovieDto, ReadMovieDto, UpdateMovieDto


def create_dto_to_entity(dto: CreateMovieDto) -> MovieEntity:
    """Build a new, not yet persisted entity from a create request."""
    return MovieEntity(
        title=dto.title,
        genre=dto.genre,
        duration=dto.duration,
        release_year=dto.release_year,
    )


def entity_to_read_dto(entity: MovieEntity) -> ReadMovieDto:
    """Project a stored entity to the client-facing shape.

    Raises:
        ValueError: If the entity has not been persisted yet.
    """
    if entity.movie_id is None:
        raise ValueError("Cannot build ReadMovieDto for an unsaved movie")
    return ReadMovieDto(
        movie_id=entity.movie_id,
        title=entity.title,
        genre=entity.genre,
        duration=entity.duration,
        release_year=entity.release_year,
    )


def entity_to_update_dto(entity: MovieEntity) -> UpdateMovieDto:
    """Build the update shape from an entity (PATCH starting point)."""
    return UpdateMovieDto(
        title=entity.title,
        genre=entity.genre,
        duration=entity.duration,
        release_year=entity.release_year,
    )


def map_into(dto: UpdateMovieDto, entity: MovieEntity) -> MovieEntity:
    """Overwrite every mutable field of entity with the DTO's values.

    Mutates entity in place and returns it.
    """
    entity.title = dto.title
    entity.genre = dto.genre
    entity.duration = dto.duration
    entity.release_year = dto.release_year
    return entity
