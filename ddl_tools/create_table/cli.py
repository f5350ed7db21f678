"""CLI interface for the CREATE TABLE generator."""

import sys
from pathlib import Path
from typing import Optional

import click

from shared.cli import create_table, error, handle_errors, info, print_table, success
from shared.logger import setup_logger

from .builder import ColumnDescriptor, CreateTable, infer_schema
from .loader import SchemaFormat, load_schema


def display_schema(schema: dict) -> None:
    """Show an inferred schema as a table."""
    table = create_table(title="Inferred schema")
    table.add_column("Column", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Array")

    for name, column in schema.items():
        if isinstance(column, ColumnDescriptor):
            table.add_row(name, column.type, "yes" if column.array else "")
        else:
            table.add_row(name, column, "")

    print_table(table)


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, path_type=Path))
@click.option("--table", "-t", required=True, help="Table name")
@click.option(
    "--format",
    "-f",
    "schema_format",
    type=click.Choice(["json", "yaml", "toml"], case_sensitive=False),
    help="Schema file format (auto-detect if not specified)",
)
@click.option(
    "--query",
    "-q",
    help="JMESPath query selecting the schema inside the file",
)
@click.option(
    "--infer",
    is_flag=True,
    help="Treat the file as a sample record and infer column types",
)
@click.option(
    "--no-exists",
    is_flag=True,
    help="Omit IF NOT EXISTS",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output SQL file (print to stdout if not specified)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    schema_file: Path,
    table: str,
    schema_format: Optional[str],
    query: Optional[str],
    infer: bool,
    no_exists: bool,
    output: Optional[Path],
    verbose: bool,
):
    """
    CREATE TABLE generator - Build DDL from a declarative schema.

    Examples:

        \b
        # Schema file mapping column names to types
        create-table users.yaml --table users

        \b
        # Schema nested inside a larger config
        create-table app.toml --table users --query 'tables.users'

        \b
        # Infer the schema from a sample record
        create-table record.json --table events --infer

        \b
        # Plain CREATE TABLE written to a file
        create-table users.json -t users --no-exists -o users.sql
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger(__name__, level=log_level)

    fmt = SchemaFormat(schema_format.lower()) if schema_format else None

    try:
        info(f"Loading {schema_file}")
        schema = load_schema(schema_file, format=fmt, query=query)

        if infer:
            schema = infer_schema(schema)
            if verbose:
                display_schema(schema)

        sql = CreateTable(table, schema=schema, exists=not no_exists).get_sql()

        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(sql + "\n")
            success(f"SQL written to: {output}")
        else:
            click.echo(sql)

        sys.exit(0)

    except FileNotFoundError as e:
        error(str(e))
        sys.exit(1)

    except ValueError as e:
        error(str(e))
        sys.exit(1)

    except Exception as e:
        error(f"Unexpected error: {e}")
        if verbose:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
