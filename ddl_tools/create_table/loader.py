"""Schema document loading from JSON, YAML and TOML files."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import jmespath
import toml
import yaml

from shared.logger import get_logger

logger = get_logger(__name__)


class SchemaFormat(str, Enum):
    """Supported schema file formats."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"


def detect_format(filepath: Path) -> SchemaFormat:
    """
    Detect the schema format from a file extension.

    Raises:
        ValueError: If the extension is not recognised
    """
    suffix = filepath.suffix.lower()
    if suffix == ".json":
        return SchemaFormat.JSON
    elif suffix in [".yaml", ".yml"]:
        return SchemaFormat.YAML
    elif suffix == ".toml":
        return SchemaFormat.TOML

    raise ValueError(f"Cannot auto-detect format for: {filepath}")


def parse_schema(data: str, format: SchemaFormat) -> Any:
    """
    Parse a schema document.

    Args:
        data: Document text
        format: Input format

    Returns:
        Parsed data

    Raises:
        ValueError: If parsing fails
    """
    try:
        if format == SchemaFormat.JSON:
            return json.loads(data)
        elif format == SchemaFormat.YAML:
            return yaml.safe_load(data)
        elif format == SchemaFormat.TOML:
            return toml.loads(data)
        else:
            raise ValueError(f"Unsupported format: {format}")

    except Exception as e:
        logger.error(f"Failed to parse {format.value}: {e}")
        raise ValueError(f"Failed to parse {format.value}: {e}")


def load_schema(
    filepath: Path,
    format: Optional[SchemaFormat] = None,
    query: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load a schema mapping from a file.

    Args:
        filepath: Path to the schema file
        format: Format to parse (auto-detect if None)
        query: JMESPath expression selecting the schema inside the document

    Returns:
        Mapping of column name to column entry, in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document cannot be parsed or is not a mapping
    """
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    if format is None:
        format = detect_format(filepath)

    logger.debug(f"Parsing {filepath.name} as {format.value}")

    with open(filepath, "r", encoding="utf-8") as f:
        data = parse_schema(f.read(), format)

    if query:
        try:
            data = jmespath.search(query, data)
        except Exception as e:
            logger.error(f"Query failed: {e}")
            raise ValueError(f"Query failed: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Schema must be a mapping of column names, got {type(data).__name__}")

    return data
