"""Pydantic models for the movie API.

Field constraints here are the only request validation the API does.
"""

from pydantic import BaseModel, ConfigDict, Field


class CreateMovieDto(BaseModel):
    """Fields needed to create a movie. The id is always store-assigned."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=100)
    genre: str = Field(min_length=1, max_length=50)
    duration: int = Field(ge=70, le=600, description="Duration in minutes")
    release_year: int | None = Field(default=None, ge=1888, le=2100)


class UpdateMovieDto(BaseModel):
    """Full replacement of a movie's fields.

    Also the intermediate shape that PATCH operations are applied to.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=100)
    genre: str = Field(min_length=1, max_length=50)
    duration: int = Field(ge=70, le=600, description="Duration in minutes")
    release_year: int | None = Field(default=None, ge=1888, le=2100)


class ReadMovieDto(BaseModel):
    """Movie as returned to clients."""

    movie_id: int
    title: str
    genre: str
    duration: int
    release_year: int | None


class ValidationProblem(BaseModel):
    """Problem details body for 400 responses."""

    type: str = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: dict[str, list[str]]
