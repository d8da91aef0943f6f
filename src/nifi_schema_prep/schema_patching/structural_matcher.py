"""Generic rewrite of string-valued open-ended maps, wherever they occur."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from .patch_models import NULLABLE_STRING_TYPE

_LOGGER = logging.getLogger(__name__)

NULLABLE_STRING_MAPS_PATCH_NAME = "nullable-string-maps"


@dataclass(frozen=True)
class MatchedNode:
    """A schema node matching the string-map signature and its JSON path."""

    path: str
    node: MutableMapping[str, Any]


def is_string_map(node: Any) -> bool:
    """Return whether a node is an object schema whose additional values are strings."""
    if not isinstance(node, Mapping) or node.get("type") != "object":
        return False
    child = node.get("additionalProperties")
    return isinstance(child, Mapping) and child.get("type") == "string"


def iter_string_maps(tree: Any, *, path: str = "") -> Iterator[MatchedNode]:
    """Yield every matching node depth-first, descending into objects and arrays."""
    if isinstance(tree, MutableMapping):
        if is_string_map(tree):
            yield MatchedNode(path=path, node=tree)
        for key, value in tree.items():
            yield from iter_string_maps(value, path=f"{path}.{key}" if path else str(key))
    elif isinstance(tree, list):
        for index, item in enumerate(tree):
            yield from iter_string_maps(item, path=f"{path}[{index}]")


def rewrite_string_map(node: MutableMapping[str, Any]) -> None:
    """Mark a string map nullable and allow null entry values."""
    node["nullable"] = True
    node["additionalProperties"]["type"] = list(NULLABLE_STRING_TYPE)


class NullableStringMapPatch:
    """Rewrite every `map<string, string>` schema into a nullable map of nullable strings."""

    name = NULLABLE_STRING_MAPS_PATCH_NAME

    def apply(self, schemas: MutableMapping[str, Any]) -> int:
        # Collect first so rewrites never interleave with traversal.
        matches = list(iter_string_maps(schemas))
        for match in matches:
            rewrite_string_map(match.node)
            _LOGGER.debug("Rewrote string map at %s", match.path)
        return len(matches)
