"""Non-raising validation of request payloads against pydantic schemas."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ParseResult(Generic[ModelT]):
    """Outcome of :func:`safe_parse`. ``data`` is set only on success."""

    success: bool
    data: ModelT | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)


def safe_parse(schema: type[ModelT], payload: Any) -> ParseResult[ModelT]:
    """Validate ``payload`` against ``schema`` without raising."""
    if not isinstance(payload, dict):
        return ParseResult(
            success=False,
            errors=[{"type": "dict_type", "loc": (), "msg": "Payload must be a JSON object"}],
        )

    try:
        data = schema.model_validate(payload)
    except ValidationError as e:
        return ParseResult(success=False, errors=e.errors(include_url=False, include_context=False))

    return ParseResult(success=True, data=data)
