"""CREATE TABLE generator - Build SQL DDL from declarative schemas."""

from .builder import ColumnDescriptor, CreateTable, infer_schema
from .converter import (
    SchemaError,
    SQLOptions,
    convert_array_to_sql,
    convert_type_to_sql,
    escape,
    get_kind_of,
)

__all__ = [
    "ColumnDescriptor",
    "CreateTable",
    "SQLOptions",
    "SchemaError",
    "convert_array_to_sql",
    "convert_type_to_sql",
    "escape",
    "get_kind_of",
    "infer_schema",
]
