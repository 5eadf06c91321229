# app/core/validators.py
"""
Pydantic-backed input checks shared by the services.

Request bodies are validated with the strict models in `app.schemas`;
`validate_model` turns the first pydantic error into the service's own
ValidationError so the client always gets a 400 with a readable message.
"""

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    NonNegativeInt,
    PositiveInt,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import InvalidIdError, ValidationError

M = TypeVar("M", bound=BaseModel)

DEFAULT_MESSAGE = "Invalid request body!"


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; True must not pass as id 1
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    return value


# Ids and limits also arrive as path segments ("12"), so digit strings
# are accepted here.
PositiveId = Annotated[PositiveInt, BeforeValidator(_reject_bool)]
RowLimit = Annotated[NonNegativeInt, BeforeValidator(_reject_bool)]
FinitePrice = Annotated[float, Field(allow_inf_nan=False), BeforeValidator(_reject_bool)]

_id_adapter = TypeAdapter(PositiveId)
_limit_adapter = TypeAdapter(RowLimit)


def first_error_message(exc: PydanticValidationError, messages: Mapping[str, str]) -> str:
    """
    Pick the message for the first failing field.

    `messages` is keyed by dotted field path, list indexes written as `*`
    (e.g. "images.*.url"). A "path:error_type" key takes precedence over
    the bare path.
    """
    error = exc.errors()[0]
    path = ".".join("*" if isinstance(part, int) else str(part) for part in error["loc"])
    if error["type"] == "extra_forbidden":
        return f"Unknown field: {path}!"
    return (
        messages.get(f"{path}:{error['type']}")
        or messages.get(path)
        or DEFAULT_MESSAGE
    )


def validate_model(model: type[M], data: Any, messages: Mapping[str, str]) -> M:
    """
    Validate `data` against `model`.

    Raises:
        ValidationError: with the message of the first failing field.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(first_error_message(exc, messages)) from exc


def validate_value(adapter: TypeAdapter, value: Any, message: str) -> Any:
    """Validate a single value; any failure becomes ValidationError(message)."""
    try:
        return adapter.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(message) from exc


def parse_id(raw: Any, message: str = "Invalid or missing ID") -> int:
    """
    Coerce a path/body id into a positive int.

    Raises:
        InvalidIdError: if the id is missing, zero, or not numeric.
    """
    try:
        return _id_adapter.validate_python(raw)
    except PydanticValidationError as exc:
        raise InvalidIdError(message) from exc


def parse_limit(raw: Any) -> int:
    """
    Raises:
        ValidationError: if the value is not a non-negative integer.
    """
    return validate_value(_limit_adapter, raw, "Limit must be a non-negative integer!")
