"""
Entry Validation - JSON Schema validation of decoded configuration entries.

Each domain declares the schema of one entry; entries are checked after YAML
decoding and before they are turned into items.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator, SchemaError

logger = logging.getLogger(__name__)


def validate_entry_schema(schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate that an entry schema is itself a valid JSON Schema.

    Args:
        schema: The schema to check

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Draft7Validator.check_schema(schema)
        return True, None
    except SchemaError as e:
        return False, f"Invalid schema: {e.message}"


def validate_entry(
    entry: Any, schema: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate one decoded configuration entry against a schema.

    Args:
        entry: The decoded entry
        schema: The JSON Schema the entry must satisfy

    Returns:
        Tuple of (is_valid, error_message)
    """
    validator = Draft7Validator(schema)
    errors = sorted(
        validator.iter_errors(entry), key=lambda e: [str(p) for p in e.absolute_path]
    )

    if not errors:
        return True, None

    error_messages = []
    for error in errors:
        path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        error_messages.append(f"{path}: {error.message}")

    logger.debug(f"Entry failed validation: {error_messages}")
    return False, "; ".join(error_messages)
