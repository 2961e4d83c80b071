"""Tree Response — JSON encoding of the nested forest without recursion.

Invariants:
    - Output is the CategoryForestResponse shape: {"count": n, "data": [node, ...]}
    - Every node is encoded with its scalar fields first, then "children"
    - Nesting depth is bounded by memory only: an explicit stack replaces
      both pydantic validation and json.dumps recursion over the tree

Design Decisions:
    - Scalar fields still go through json.dumps (one flat dict per node), so
      UUID/datetime formatting matches the rest of the API
    - Same compact separators as Starlette's JSONResponse
"""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi.responses import JSONResponse

_SEPARATORS = (",", ":")


def _jsonable(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _open_node(node: dict) -> str:
    """'{...scalar fields...,"children":[' for one tree node."""
    fields = {k: v for k, v in node.items() if k != "children"}
    head = json.dumps(
        fields, default=_jsonable, ensure_ascii=False, separators=_SEPARATORS,
    )
    return head[:-1] + ',"children":['


def encode_forest(forest: list[dict]) -> str:
    parts = ['{"count":', str(len(forest)), ',"data":[']
    stack = [iter(forest)]
    needs_comma = [False]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            needs_comma.pop()
            parts.append("]}" if stack else "]")
            continue
        if needs_comma[-1]:
            parts.append(",")
        needs_comma[-1] = True
        parts.append(_open_node(node))
        stack.append(iter(node["children"]))
        needs_comma.append(False)
    parts.append("}")
    return "".join(parts)


class ForestJSONResponse(JSONResponse):
    """Renders the list returned by CategoryService.list_tree()."""

    def render(self, content: list[dict]) -> bytes:
        return encode_forest(content).encode("utf-8")
