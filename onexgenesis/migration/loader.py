# MIT License
# Copyright (c) 2025 Hashborn

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ..protocol.types.common import GenesisIOError, ParseError

logger = logging.getLogger(__name__)

Json = Dict[str, Any]


def load_json(path: Union[str, Path]) -> Json:
    """
    Read a JSON document that must be an object at the top level.

    Raises:
        GenesisIOError: If the file cannot be read
        ParseError: If the content is not a JSON object
    """
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise GenesisIOError(f"cannot read {p}: {e}") from e

    try:
        raw = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"{p} is not valid UTF-8: {e}") from e

    try:
        obj = json.loads(raw)
    except ValueError as e:
        # JSONDecodeError, or a numeric literal past the int conversion limit
        raise ParseError(f"{p} is not valid JSON: {e}") from e

    if not isinstance(obj, dict):
        raise ParseError(f"{p} must contain a JSON object")

    logger.debug(f"Loaded {p} ({len(raw)} bytes)")
    return obj


def get_field(obj: Any, *keys: str) -> Any:
    """Walks nested objects, naming the full path of a missing key."""
    node = obj
    for depth, key in enumerate(keys):
        if not isinstance(node, dict) or key not in node:
            path = ".".join(keys[:depth + 1])
            raise ParseError(f"missing field {path}")
        node = node[key]
    return node


def get_list(obj: Any, *keys: str) -> List[Any]:
    node = get_field(obj, *keys)
    if not isinstance(node, list):
        raise ParseError(f"field {'.'.join(keys)} must be an array")
    return node


def get_str(obj: Any, key: str, where: str) -> str:
    if not isinstance(obj, dict):
        raise ParseError(f"{where} must be an object")
    value = obj.get(key)
    if not isinstance(value, str):
        raise ParseError(f"{where}.{key} is missing or not a string")
    return value
