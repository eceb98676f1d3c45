"""Request Validation Module

Precondition gate run before any layout work. Parses a report payload into
its pydantic model and turns pydantic's errors into the Spanish,
field-naming ValidationError messages returned to API clients.
"""
from typing import Any, List, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError, MissingFieldError, InvalidFieldError
from .schema import PAYLOAD_MODELS, SUPPORTED_SCHEMA_VERSIONS, ReportPayload, SchemaTag

# Reasons for pydantic error types; "value_error" carries its own message
ERROR_REASONS = {
    "int_type": "debe ser numérico",
    "int_parsing": "debe ser numérico",
    "int_from_float": "debe ser un número entero",
    "finite_number": "debe ser un número finito",
    "float_type": "debe ser numérico",
    "float_parsing": "debe ser numérico",
    "bool_type": "debe ser numérico o sí/no",
    "bool_parsing": "debe ser sí/no",
    "string_type": "debe ser texto",
    "model_type": "debe ser un objeto",
    "model_attributes_type": "debe ser un objeto",
    "dict_type": "debe ser un objeto",
    "list_type": "debe ser un arreglo",
    "greater_than_equal": "debe ser un número entre 1 y 12",
    "less_than_equal": "debe ser un número entre 1 y 12",
}

# Union member tags pydantic inserts into error locations
_UNION_TAGS = {"bool", "int", "float", "str"}


def field_path(loc: Sequence[Union[str, int]]) -> str:
    """Render a pydantic error location as "otrosMeses[0].mes"."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif part in _UNION_TAGS or "[" in part:
            continue
        else:
            path = f"{path}.{part}" if path else part
    return path


def _reason(error: dict) -> str:
    if error["type"] == "value_error":
        cause = error.get("ctx", {}).get("error")
        if cause is not None:
            return str(cause)
    return ERROR_REASONS.get(error["type"], error["msg"])


def translate_errors(exc: PydanticValidationError) -> ValidationError:
    """
    Convert a pydantic ValidationError into this package's error types.

    Missing fields win over invalid values, and are reported together when
    they share a parent object. Otherwise the first invalid field is reported.
    """
    errors = exc.errors()
    missing = [error for error in errors if error["type"] == "missing"]
    if missing:
        parent = field_path(missing[0]["loc"][:-1]) or None
        fields: List[str] = [
            str(error["loc"][-1])
            for error in missing
            if (field_path(error["loc"][:-1]) or None) == parent
        ]
        return MissingFieldError(fields, parent=parent)

    first = errors[0]
    return InvalidFieldError(field_path(first["loc"]), _reason(first))


def detect_schema_version(body: dict) -> int:
    """
    Determine the payload schema version.

    Args:
        body: Decoded JSON request body

    Returns:
        1 or 2; inferred from "datosGenerales" when "schemaVersion" is absent

    Raises:
        ValidationError: If "schemaVersion" is present but unsupported
    """
    try:
        tag = SchemaTag.model_validate(body).schemaVersion
    except PydanticValidationError as e:
        raise translate_errors(e) from e

    if tag is None:
        return 2 if "datosGenerales" in body else 1
    if tag not in SUPPORTED_SCHEMA_VERSIONS:
        raise ValidationError(
            f"Versión de esquema no soportada: {tag}. "
            f"Versiones soportadas: {', '.join(str(v) for v in SUPPORTED_SCHEMA_VERSIONS)}"
        )
    return tag


def validate_request_body(body: Any) -> ReportPayload:
    """
    Validate a report payload.

    Args:
        body: Decoded JSON request body

    Returns:
        The parsed payload model (ReportPayloadV1 or ReportPayloadV2)

    Raises:
        ValidationError: If the body is not an object or has an unknown schema version
        MissingFieldError: If required fields are absent
        InvalidFieldError: If a field has the wrong type or value
    """
    if not isinstance(body, dict):
        raise ValidationError("El cuerpo de la solicitud debe ser un objeto JSON")

    model = PAYLOAD_MODELS[detect_schema_version(body)]
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        raise translate_errors(e) from e
