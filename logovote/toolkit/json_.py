from __future__ import annotations

from typing import Any

import orjson

__all__ = ["dumps", "loads"]


def dumps(value: Any, *, indent: bool = False) -> bytes:
    """Encodes value as JSON bytes, optionally indented by two spaces."""
    return orjson.dumps(value, option=orjson.OPT_INDENT_2 if indent else None)


def loads(value: str | bytes) -> Any:
    """Decodes a JSON document."""
    return orjson.loads(value)
