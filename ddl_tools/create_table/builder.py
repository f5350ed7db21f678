"""CREATE TABLE statement builder."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from shared.logger import get_logger

from .converter import (
    InvalidSizeError,
    InvalidTypeError,
    MissingTypeError,
    SizeNotAllowedError,
    SQLOptions,
    UnsupportedTypeError,
    convert_type_to_sql,
    get_kind_of,
)

logger = get_logger(__name__)

SUPPORTED_TYPES = ("string", "float", "number", "boolean", "bigint", "object", "date")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marks a descriptor with no size key, so an explicit null is still validated
UNSET: Any = _Unset()


@dataclass
class ColumnDescriptor:
    """Structured column definition."""

    type: str
    nullable: bool = False
    primary: bool = False
    array: bool = False
    size: Any = UNSET

    @classmethod
    def from_dict(cls, data: Mapping) -> "ColumnDescriptor":
        """
        Build a descriptor from a mapping such as a parsed JSON object.

        Raises:
            MissingTypeError: If the mapping has no "type" key
        """
        if "type" not in data:
            raise MissingTypeError('Missing "type"')

        return cls(
            type=data["type"],
            nullable=bool(data.get("nullable", False)),
            primary=bool(data.get("primary", False)),
            array=bool(data.get("array", False)),
            size=data.get("size", UNSET),
        )


# A column is either a bare type tag or a descriptor
ColumnSchema = Union[str, ColumnDescriptor]


def _check_size(descriptor: ColumnDescriptor) -> int:
    if descriptor.type != "string" and not descriptor.array:
        raise SizeNotAllowedError(
            f'SQL type "{descriptor.type}" cannot have an allocated size, '
            "only strings and arrays are supported"
        )

    size = descriptor.size
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        raise InvalidSizeError("Allocated size must be a whole number")
    if isinstance(size, float) and not size.is_integer():
        raise InvalidSizeError("Allocated size cannot be NaN or a float integer")

    return int(size)


def render_column(name: str, column: Any) -> str:
    """
    Validate one schema entry and render its column definition.

    Args:
        name: Column name
        column: Bare type tag, ColumnDescriptor, or mapping with a "type" key

    Returns:
        Column definition fragment

    Raises:
        SchemaError: If the entry is invalid
    """
    if isinstance(column, Mapping):
        column = ColumnDescriptor.from_dict(column)

    if isinstance(column, ColumnDescriptor):
        if column.type not in SUPPORTED_TYPES:
            raise UnsupportedTypeError(
                f'SQL type "{column.type}" is not a valid type ({", ".join(SUPPORTED_TYPES)})'
            )

        options = SQLOptions(
            nullable=column.nullable,
            primary=column.primary,
            array=column.array,
        )
        if column.size is not UNSET:
            options.size = _check_size(column)

        return convert_type_to_sql(name, column.type, options)

    if not isinstance(column, str) or column not in SUPPORTED_TYPES:
        raise InvalidTypeError(f'Invalid type "{column}" ({", ".join(SUPPORTED_TYPES)})')

    return convert_type_to_sql(name, column, SQLOptions())


class Pipeline(ABC):
    """A unit that produces one SQL statement."""

    id: str = ""

    @abstractmethod
    def get_sql(self) -> str:
        """Generate the statement."""


class CreateTable(Pipeline):
    """
    CREATE TABLE statement for a table schema.

    The statement is rebuilt from the schema on every get_sql() call.

    Attributes:
        table: Table name, emitted verbatim
        schema: Ordered mapping of column name to ColumnSchema
        exists: Emit IF NOT EXISTS
    """

    id = "create_table"

    def __init__(
        self,
        table: str,
        schema: Optional[Mapping] = None,
        exists: bool = True,
    ):
        self.table = table
        self.schema = schema or {}
        self.exists = exists

    @classmethod
    def from_options(cls, table: str, options: Mapping) -> "CreateTable":
        """Build from an options mapping with "schema" and "exists" keys."""
        return cls(
            table,
            schema=options.get("schema"),
            exists=options.get("exists", True),
        )

    def columns(self) -> List[str]:
        """Render every column fragment in schema order."""
        return [render_column(name, column) for name, column in self.schema.items()]

    def get_sql(self) -> str:
        """
        Generate the CREATE TABLE statement.

        Returns:
            SQL statement ending in ";"

        Raises:
            SchemaError: On the first invalid column
        """
        values = self.columns()

        exists = "IF NOT EXISTS  " if self.exists else ""
        columns = f" ({', '.join(values)})" if values else ""
        sql = f"CREATE TABLE {exists}{self.table}{columns};"

        logger.info(f"Generated CREATE TABLE for {self.table} ({len(values)} columns)")
        return sql


def infer_schema(record: Mapping) -> Dict[str, ColumnSchema]:
    """
    Infer a table schema from a sample record.

    Lists become array columns typed by their first element.

    Args:
        record: Mapping of column name to sample value

    Returns:
        Ordered schema usable by CreateTable

    Raises:
        UnsupportedTypeError: If a value has no column type
    """
    schema: Dict[str, ColumnSchema] = {}

    for name, value in record.items():
        kind = get_kind_of(value)

        if kind == "array":
            if not value:
                raise UnsupportedTypeError(f'Cannot infer element type of empty list "{name}"')
            kind = get_kind_of(value[0])
            if kind not in SUPPORTED_TYPES:
                raise UnsupportedTypeError(f'Type "{kind}" of "{name}" elements is not supported')
            schema[name] = ColumnDescriptor(type=kind, array=True)
            continue

        if kind not in SUPPORTED_TYPES:
            raise UnsupportedTypeError(f'Type "{kind}" of "{name}" is not supported')
        schema[name] = kind

    logger.debug(f"Inferred {len(schema)} columns")
    return schema
