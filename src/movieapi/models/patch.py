"""JSON Patch support for partial movie updates.

Operations are validated against an allow-list of field pointers before
anything is applied, then applied one at a time with jsonpatch so a
failure can be reported against the field it touched.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

import jsonpatch
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from movieapi.models.types import UpdateMovieDto

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = frozenset(UpdateMovieDto.model_fields)

PatchOp = Literal["add", "remove", "replace", "move", "copy", "test"]


class PatchError(Exception):
    """A patch document could not be applied."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("; ".join(f"{k}: {', '.join(v)}" for k, v in errors.items()))
        self.errors = errors


def _check_pointer(pointer: str) -> str:
    if not pointer.startswith("/") or pointer[1:] not in PATCHABLE_FIELDS:
        allowed = ", ".join(f"/{name}" for name in sorted(PATCHABLE_FIELDS))
        raise ValueError(f"'{pointer}' is not patchable; allowed paths: {allowed}")
    return pointer


class PatchOperation(BaseModel):
    """One RFC 6902 operation restricted to top-level movie fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    op: PatchOp
    path: str
    from_: str | None = Field(default=None, alias="from")
    value: Any = None

    @field_validator("path")
    @classmethod
    def _path_is_patchable(cls, v: str) -> str:
        return _check_pointer(v)

    @model_validator(mode="after")
    def _operands_present(self) -> PatchOperation:
        if self.op in ("add", "replace", "test") and "value" not in self.model_fields_set:
            raise ValueError(f"'{self.op}' requires a value")
        if self.op in ("move", "copy"):
            if self.from_ is None:
                raise ValueError(f"'{self.op}' requires from")
            _check_pointer(self.from_)
        return self

    @property
    def field(self) -> str:
        """Name of the field this operation targets."""
        return self.path[1:]

    def to_jsonpatch(self) -> dict[str, Any]:
        """Render as a plain RFC 6902 operation dict."""
        operation: dict[str, Any] = {"op": self.op, "path": self.path}
        if self.op in ("add", "replace", "test"):
            operation["value"] = self.value
        if self.op in ("move", "copy"):
            operation["from"] = self.from_
        return operation


def apply_patch(dto: UpdateMovieDto, operations: list[PatchOperation]) -> dict[str, Any]:
    """Apply operations in order to the DTO's JSON form.

    The DTO itself is not modified. The returned document is not
    validated; callers re-validate it as an UpdateMovieDto.

    Raises:
        PatchError: If an operation cannot be applied, e.g. a failed
            test or a remove of a member that is already gone.
    """
    document = dto.model_dump(mode="json")
    for operation in operations:
        try:
            document = jsonpatch.apply_patch(document, [operation.to_jsonpatch()])
        except jsonpatch.JsonPatchTestFailed as e:
            raise PatchError({operation.field: [f"test failed: {e}"]}) from e
        except (jsonpatch.JsonPatchException, jsonpatch.JsonPointerException) as e:
            raise PatchError({operation.field: [f"cannot {operation.op}: {e}"]}) from e
    logger.debug("Applied %d patch operations", len(operations))
    return document
