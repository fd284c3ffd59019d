"""
Shared schema building blocks: camelCase response base, email type, and the
translation of pydantic validation errors into `{field, message, code}` issues.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Iterable, List, Sequence

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """Response base: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_string", "Invalid email")
    return value


Email = Annotated[str, AfterValidator(_check_email)]

# bcrypt only looks at the first 72 bytes and rejects longer input outright
MAX_PASSWORD_BYTES = 72


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PydanticCustomError(
            "too_big", "String must contain at most {max_bytes} byte(s)", {"max_bytes": MAX_PASSWORD_BYTES}
        )
    return value


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


# ══════════════════════════════════════════════════════════════════════════
# Validation issue formatting
# ══════════════════════════════════════════════════════════════════════════

# Location prefixes FastAPI adds to request validation errors
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}

_CODE_BY_TYPE = {
    "missing": "invalid_type",
    "string_too_short": "too_small",
    "too_short": "too_small",
    "string_too_long": "too_big",
    "too_long": "too_big",
    "uuid_parsing": "invalid_string",
    "uuid_type": "invalid_string",
    "enum": "invalid_enum_value",
    "literal_error": "invalid_enum_value",
    "json_invalid": "invalid_json",
    "invalid_string": "invalid_string",
}


def _issue_field(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_ROOTS:
        root = parts.pop(0)
        if not parts:
            return root
    return ".".join(str(p) for p in parts)


def _issue_code(error_type: str) -> str:
    if error_type in _CODE_BY_TYPE:
        return _CODE_BY_TYPE[error_type]
    if error_type.endswith("_type"):
        return "invalid_type"
    return error_type


def _issue_message(error: Dict[str, Any]) -> str:
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}
    if error_type == "missing":
        return "Required"
    if error_type == "string_too_short":
        return f"String must contain at least {ctx.get('min_length')} character(s)"
    if error_type == "string_too_long":
        return f"String must contain at most {ctx.get('max_length')} character(s)"
    if error_type in ("uuid_parsing", "uuid_type"):
        return "Invalid uuid"
    return error.get("msg", "Invalid value")


def format_validation_issues(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert pydantic error dicts into the API's validation issue entries.

    Example:
        {"type": "string_too_short", "loc": ("body", "password"), "ctx": {"min_length": 6}}
        → {"field": "password",
           "message": "String must contain at least 6 character(s)",
           "code": "too_small"}
    """
    issues = []
    for error in errors:
        code = _issue_code(error.get("type", ""))
        issues.append(
            {
                "field": "body" if code == "invalid_json" else _issue_field(error.get("loc", ())),
                "message": _issue_message(error),
                "code": code,
            }
        )
    return issues
