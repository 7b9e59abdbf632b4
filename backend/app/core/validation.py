"""
Boundary validation of caller input against request schemas.
"""
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_input(schema: type[SchemaT], data: SchemaT | dict[str, Any]) -> SchemaT:
    """
    Validate caller input against a request schema.

    Already-validated schema instances pass straight through.

    Raises:
        ValidationError: With the first offending field and reason
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        reason = first["msg"]
        raise ValidationError(f"{location}: {reason}" if location else reason) from None
