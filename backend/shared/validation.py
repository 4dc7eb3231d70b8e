"""
Input validation helpers.

Untrusted payloads are parsed into pydantic models. All problems are
collected (not fail-fast) and reported as FieldIssue entries so clients can
highlight every invalid field at once.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, Iterable, Optional, TypeVar, get_args

from pydantic import BaseModel, Field, create_model, field_validator
from pydantic import ValidationError as PydanticValidationError

from .envelope import FieldIssue

ModelT = TypeVar("ModelT", bound=BaseModel)

# FastAPI prefixes error locations with where the value came from
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


@dataclass
class ValidationResult(Generic[ModelT]):
    """Outcome of validate(): either a typed value or a list of issues."""

    ok: bool
    value: Optional[ModelT] = None
    issues: list[FieldIssue] = field(default_factory=list)


def _format_loc(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


def issues_from_errors(errors: Iterable[dict[str, Any]]) -> list[FieldIssue]:
    """
    Convert pydantic/FastAPI error dicts into FieldIssue entries.

    Args:
        errors: Output of ``ValidationError.errors()`` or
            ``RequestValidationError.errors()``

    Returns:
        One FieldIssue per error, in the order reported
    """
    return [
        FieldIssue(path=_format_loc(error.get("loc", ())), message=error.get("msg", "Invalid value"))
        for error in errors
    ]


def validate(schema: type[ModelT], payload: Any) -> ValidationResult[ModelT]:
    """
    Parse an untrusted payload against a schema.

    Args:
        schema: Pydantic model class declaring bounds, enums and required fields
        payload: Raw decoded JSON (usually a dict)

    Returns:
        ValidationResult with ``ok=True`` and the typed value, or
        ``ok=False`` and every issue found
    """
    try:
        value = schema.model_validate(payload)
    except PydanticValidationError as e:
        return ValidationResult(ok=False, issues=issues_from_errors(e.errors()))
    return ValidationResult(ok=True, value=value)


def partial_model(model: type[ModelT], name: Optional[str] = None) -> type[ModelT]:
    """
    Derive a partial-update schema from a create schema.

    Every field becomes optional with a None default while keeping its
    constraints, so ``{}`` validates as a no-op patch. Use
    ``model_dump(exclude_unset=True)`` to get only the fields the caller sent.
    """
    fields: dict[str, Any] = {}
    non_nullable: list[str] = []
    for field_name, info in model.model_fields.items():
        if not _accepts_none(info.annotation):
            non_nullable.append(field_name)
        annotation: Any = Optional[info.annotation]
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[field_name] = (
            annotation,
            Field(default=None, description=info.description, alias=info.alias),
        )

    # Omitting a field is fine, sending an explicit null for a NOT NULL column is not
    validators = {}
    if non_nullable:
        validators["reject_null"] = field_validator(*non_nullable)(_reject_null)

    return create_model(  # type: ignore[call-overload]
        name or f"Partial{model.__name__}",
        __config__=model.model_config,
        __validators__=validators,
        **fields,
    )


def _accepts_none(annotation: Any) -> bool:
    if annotation is None or annotation is Any:
        return True
    return type(None) in get_args(annotation)


def _reject_null(cls, value: Any) -> Any:
    if value is None:
        raise ValueError("Field cannot be null")
    return value
