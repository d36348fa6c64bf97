"""
Helpers for reading JSON out of model responses.

Models sometimes wrap their JSON in a markdown code fence; `load_json_object`
strips that before parsing.  The `require_*` helpers raise ResponseParseError
for structure the caller cannot work without, the `optional_*` helpers return
None so the caller can choose its own default.
"""

import json
import math
from typing import Any, List, Optional


class ResponseParseError(ValueError):
    """A structured model response is missing something it must have."""


def load_json_object(text: str) -> dict:
    content = (text or "").strip()
    if "```json" in content:
        content = content.split("```json", 1)[1].split("```", 1)[0]
    elif content.startswith("```"):
        content = content.split("```", 2)[1]

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseParseError("Response JSON is not an object")
    return data


def require_object(data: dict, key: str) -> dict:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ResponseParseError(f"Missing '{key}' field")
    return value


def require_array(data: dict, key: str, where: str = "") -> List[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        suffix = f" in {where}" if where else ""
        raise ResponseParseError(f"Missing '{key}' field{suffix}")
    return value


def require_str(data: dict, key: str, where: str = "") -> str:
    value = optional_str(data, key)
    if value is None:
        suffix = f" in {where}" if where else ""
        raise ResponseParseError(f"Missing '{key}' field{suffix}")
    return value


def optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def optional_int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None
