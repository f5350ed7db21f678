"""Type and value conversion from Python to SQL fragments."""

import inspect
import json
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import Any, Iterable, Optional

from shared.logger import get_logger

logger = get_logger(__name__)

# Tags that can never be rendered as a column
UNSUPPORTED_KINDS = ("function", "class", "symbol", "undefined", "null")

# Largest integer a JavaScript number holds exactly (Number.MAX_SAFE_INTEGER)
MAX_SAFE_INTEGER = 2**53 - 1


class SchemaError(ValueError):
    """Base class for schema validation errors."""


class MissingTypeError(SchemaError):
    """A column descriptor has no "type" field."""


class UnsupportedTypeError(SchemaError):
    """A type tag exists but cannot be used for a column."""


class InvalidTypeError(SchemaError):
    """A type tag is not recognised at all."""


class SizeNotAllowedError(SchemaError):
    """A size was given for a column that cannot be sized."""


class InvalidSizeError(SchemaError):
    """A size is not a whole number."""


class ColumnConstraintError(SchemaError):
    """Column flags that cannot be combined."""


@dataclass
class SQLOptions:
    """Per-column rendering options."""

    nullable: bool = False
    primary: bool = False
    array: bool = False
    size: Optional[int] = None


def is_object(value: Any) -> bool:
    """Check if value is a plain object (a mapping, never a list)."""
    return isinstance(value, Mapping)


def _utc_string(value: date) -> str:
    """Format a date the way JavaScript's Date.toUTCString() does."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)

    return format_datetime(value, usegmt=True)


def escape(value: Any) -> Any:
    """
    Quote a value for use as a SQL literal.

    Strings, mappings (as JSON) and dates are wrapped in single quotes.
    Embedded quotes are passed through untouched, so callers must not feed
    untrusted text through here. Everything else is returned as-is.

    Args:
        value: Value to escape

    Returns:
        Quoted string, or the original value
    """
    if isinstance(value, str):
        return f"'{value}'"
    elif is_object(value):
        text = json.dumps(_json_safe(value), separators=(",", ":"), ensure_ascii=False, default=str)
        return f"'{text}'"
    elif isinstance(value, date):
        return f"'{_utc_string(value)}'"
    else:
        return value


def _json_safe(value: Any) -> Any:
    # JSON has no NaN or Infinity, those become null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def _join_text(value: Any) -> str:
    """Stringify a value the way a JavaScript array join does."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_join_text(v) for v in value)
    return str(value)


def _literal(value: Any) -> str:
    escaped = escape(value)
    if escaped is None:
        return "NULL"
    return _join_text(escaped)


def convert_array_to_sql(values: Iterable[Any]) -> str:
    """
    Convert a sequence of values to a SQL ARRAY literal.

    Args:
        values: Values to render, each passed through escape()

    Returns:
        ARRAY[...] literal
    """
    return f"ARRAY[{', '.join(_literal(v) for v in values)}]"


def convert_type_to_sql(name: str, type: str, options: Optional[SQLOptions] = None) -> str:
    """
    Render a single column definition.

    Args:
        name: Column name (lowercased in the output)
        type: Type tag (string, date, object, bigint, number, float, boolean)
        options: Column flags and size

    Returns:
        Column definition fragment, e.g. "name VARCHAR(32) NULL"

    Raises:
        UnsupportedTypeError: If the tag can never be a column
        ColumnConstraintError: If the flags conflict
        InvalidTypeError: If the tag is unknown
    """
    options = options or SQLOptions()

    if type in UNSUPPORTED_KINDS:
        raise UnsupportedTypeError(f'Type "{type}" is not supported')
    if type == "boolean" and options.array:
        raise ColumnConstraintError("Array support for booleans will not be supported")
    if options.array and options.primary:
        raise ColumnConstraintError("Primary key cannot be an Array")
    if options.primary and options.nullable:
        raise ColumnConstraintError("Primary key cannot be nullable")

    alloc_size = options.size if options.size is not None and options.size > 1 else None

    column = name.lower()
    is_primary = " PRIMARY KEY" if options.primary else ""
    is_nullable = " NULL" if options.nullable else ""
    size = f"({alloc_size})" if alloc_size else ""
    array = f"[{alloc_size or ''}]" if options.array else ""
    suffix = f"{is_nullable}{is_primary}"

    if type == "boolean":
        fragment = f"{column} BOOL{suffix}"
    elif type in ("date", "string"):
        fragment = f"{column} VARCHAR{size}{array}{suffix}"
    elif type == "object":
        fragment = f"{column} JSONB{size}{array}{suffix}"
    elif type == "bigint":
        fragment = f"{column} BIGINT{array}{suffix}"
    elif type == "number":
        fragment = f"{column} INTEGER{array}{suffix}"
    elif type == "float":
        fragment = f"{column} DOUBLE{array}{suffix}"
    else:
        raise InvalidTypeError(f"Type '{type}' is not a valid type")

    logger.debug(f"Rendered column {name!r} as {fragment!r}")
    return fragment


def get_kind_of(value: Any) -> str:
    """
    Classify a value into a type tag.

    Integral numbers are "number" (or "bigint" past the 53-bit safe range),
    other real numbers are "float".

    Args:
        value: Any Python value

    Returns:
        Type tag such as "number", "string", "date", "array" or "object"
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, numbers.Integral):
        return "bigint" if abs(int(value)) > MAX_SAFE_INTEGER else "number"
    if isinstance(value, numbers.Real):
        return "number" if float(value).is_integer() else "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, date):
        return "date"
    if isinstance(value, (list, tuple)):
        return "array"
    if inspect.isclass(value):
        return "class"
    if callable(value):
        return "function"

    return "object"
