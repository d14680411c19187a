"""Turn pydantic failures into portal validation errors."""

from typing import Any, Dict, Type, TypeVar

import pydantic

from staffing_portal.core.error_handling import ValidationError
from staffing_portal.core.logging import error_logger

SchemaType = TypeVar("SchemaType", bound=pydantic.BaseModel)

INVALID_FORM_MESSAGE = "Invalid form data"


def field_errors(error: pydantic.ValidationError) -> list:
    """Flatten pydantic errors into ``{"field", "message"}`` pairs."""
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in error.errors()
    ]


def validate_payload(
    schema: Type[SchemaType],
    data: Dict[str, Any],
    message: str = INVALID_FORM_MESSAGE
) -> SchemaType:
    """Validate ``data`` into ``schema``.

    Raises:
        ValidationError: Carrying ``message`` and the per-field errors
    """
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        errors = field_errors(e)
        for err in errors:
            error_logger.log_validation_error(err["field"], data.get(err["field"]), err["message"])
        raise ValidationError(message, errors=errors)
