"""
Named request schemas and the validator used by the API layer.

Endpoints hand raw, untyped input (JSON body or query string) to
validate_or_raise() with a schema name. Invalid input never reaches the
CRUD layer; it is reported as a 400 with one message per problem.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from app.core.exceptions import BadRequestError
from app.schemas.job import JobCreateRequest, JobSearchFilter, JobUpdateRequest

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "jobNew": JobCreateRequest,
    "jobUpdate": JobUpdateRequest,
    "jobSearch": JobSearchFilter,
}


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    data: Optional[BaseModel] = None


def _format_error(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "instance"
    return f"{location}: {error['msg']}"


def validate(schema_name: str, payload: Any) -> ValidationResult:
    """
    Validate untyped input against a named schema.

    Args:
        schema_name: Key in SCHEMAS (jobNew, jobUpdate, jobSearch)
        payload: Decoded JSON body or query parameter mapping

    Returns:
        ValidationResult with the parsed model when valid

    Raises:
        KeyError: If schema_name is not registered
    """
    schema = SCHEMAS[schema_name]

    try:
        data = schema.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=[_format_error(err) for err in e.errors()])

    return ValidationResult(valid=True, data=data)


def validate_or_raise(schema_name: str, payload: Any) -> BaseModel:
    """Validate input and return the parsed model, or raise BadRequestError with all messages."""
    result = validate(schema_name, payload)
    if not result.valid:
        raise BadRequestError(result.errors)
    return result.data
