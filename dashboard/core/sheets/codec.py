"""
Cell encoding shared by the spreadsheet and local row stores.

Every stored cell is a string. Lists and dicts are stored as JSON, booleans as
"true"/"false", and None values are never written.
"""
import json
from typing import Any


def encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def encode_row(data: dict[str, Any]) -> dict[str, str]:
    """Encode a row for storage, skipping None values."""
    return {key: encode_value(value) for key, value in data.items() if value is not None}


def decode_value(value: Any) -> Any:
    """Parse JSON array/object cells; anything else is returned unchanged."""
    if isinstance(value, str) and value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def decode_row(cells: dict[str, Any], index: int) -> dict[str, Any]:
    """
    Decode a stored row.

    Args:
        cells: Mapping of header to raw cell value
        index: Zero-based position of the row, used for the fallback id

    Returns:
        Row dict with an "id" key always present
    """
    row: dict[str, Any] = {"id": cells.get("id") or f"row-{index + 1}"}
    for header, value in cells.items():
        if header == "id":
            continue
        row[header] = decode_value(value)
    return row
