# =============================================================================
# core/schema.py  -  JSON Schema -> pydantic Model Translation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every remote tool describes its input with a JSON Schema document that we
#   only discover at runtime.  This module turns such a document into a
#   pydantic model class, so arguments can be validated locally before they
#   travel to mcp.run.
#
# SUPPORTED FEATURES:
#   - primitives:  string, integer, number, boolean, null
#   - objects:     nested properties, required vs optional, additionalProperties
#   - arrays:      typed items (or untyped lists)
#   - enums/const: Literal[...]
#   - unions:      anyOf, oneOf, type lists like ["string", "null"]
#   - nullable:    "nullable": true, or a null member in a union
#   - $ref:        local references into $defs / definitions
#
# THE "NEVER REJECT A TOOL" RULE:
#   Remote schemas are written by many different people.  If a node uses a
#   feature we don't understand (or is simply malformed), that node becomes
#   `Any` and the rest of the model is still built.  One odd schema must not
#   keep the other tools out of the agent's hands, so translation never
#   raises.
# =============================================================================

import keyword
import logging
import re
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, create_model

logger = logging.getLogger(__name__)

_PRIMITIVES: dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": Union[int, float],           # ints stay ints when forwarded
    "boolean": bool,
    "null": type(None),
}

# Deeply nested (or self-referencing) schemas stop being translated here.
_MAX_DEPTH = 32

_RESERVED_NAMES = set(dir(BaseModel))


def schema_model_name(tool_name: str) -> str:
    """Class name for a tool's input model: "gh-list-issues" -> "GhListIssuesInput"."""
    parts = re.split(r"[^0-9A-Za-z]+", tool_name)
    stem = "".join(part[:1].upper() + part[1:] for part in parts if part)
    return f"{stem or 'Tool'}Input"


def _field_name(prop_name: str, used: set[str]) -> str:
    """A valid, non-clashing Python identifier for a JSON property name.

    The remote name is kept as the field alias, so validation and dumping
    still speak the remote tool's vocabulary.
    """
    candidate = re.sub(r"\W", "_", prop_name)
    if (
        not candidate
        or candidate[0].isdigit()
        or candidate.startswith("_")
        or candidate.startswith("model_")
        or keyword.iskeyword(candidate)
        or candidate in _RESERVED_NAMES
    ):
        candidate = f"field_{candidate.lstrip('_')}"
    while candidate in used:
        candidate += "_"
    used.add(candidate)
    return candidate


def _union_of(annotations: list[Any]) -> Any:
    members: list[Any] = []
    for annotation in annotations:
        if annotation is Any:
            return Any
        if annotation not in members:
            members.append(annotation)
    if not members:
        return Any
    if len(members) == 1:
        return members[0]
    return Union[tuple(members)]


def _literal(values: list[Any]) -> Any:
    """Literal[...] over enum values; None in the enum makes it Optional."""
    present = [value for value in values if value is not None]
    for value in present:
        hash(value)  # unhashable (dict/list) enum members -> TypeError -> Any
    if not present:
        return type(None)
    annotation = Literal[tuple(present)]
    if len(present) != len(values):
        return Optional[annotation]
    return annotation


class _Translator:
    """Walks one tool's schema.  Holds the root so $refs can be resolved."""

    def __init__(self, root: dict[str, Any]):
        self.root = root
        self._resolving: set[str] = set()

    def model(self, node: dict[str, Any], name: str, depth: int = 0) -> type[BaseModel]:
        properties = node.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        required = node.get("required")
        required = set(required) if isinstance(required, list) else set()

        fields: dict[str, Any] = {}
        used: set[str] = set()
        for prop_name, prop_schema in properties.items():
            field_name = _field_name(str(prop_name), used)
            annotation = self.annotation(prop_schema, f"{name}_{field_name}", depth + 1)

            description = None
            default = None
            if isinstance(prop_schema, dict):
                if isinstance(prop_schema.get("description"), str):
                    description = prop_schema["description"]
                default = prop_schema.get("default")

            if prop_name in required:
                fields[field_name] = (
                    annotation,
                    Field(..., alias=prop_name, description=description),
                )
            else:
                fields[field_name] = (
                    Optional[annotation],
                    Field(default=default, alias=prop_name, description=description),
                )

        extra = "forbid" if node.get("additionalProperties") is False else "allow"
        config = ConfigDict(extra=extra, populate_by_name=True, protected_namespaces=())
        return create_model(name, __config__=config, **fields)

    def annotation(self, node: Any, name: str, depth: int = 0) -> Any:
        try:
            return self._annotation(node, name, depth)
        except Exception:
            logger.debug("Schema node %s not understood, accepting any value", name, exc_info=True)
            return Any

    def _annotation(self, node: Any, name: str, depth: int) -> Any:
        if depth > _MAX_DEPTH or not isinstance(node, dict):
            return Any

        annotation = self._base(node, name, depth)
        if node.get("nullable") is True:
            return Optional[annotation]
        return annotation

    def _base(self, node: dict[str, Any], name: str, depth: int) -> Any:
        if "$ref" in node:
            return self._ref(node["$ref"], depth)

        if "const" in node:
            return _literal([node["const"]])

        if isinstance(node.get("enum"), list) and node["enum"]:
            return _literal(node["enum"])

        for key in ("anyOf", "oneOf"):
            if isinstance(node.get(key), list):
                return _union_of([
                    self.annotation(member, f"{name}{index}", depth + 1)
                    for index, member in enumerate(node[key])
                ])

        all_of = node.get("allOf")
        if isinstance(all_of, list) and len(all_of) == 1:
            return self.annotation(all_of[0], name, depth + 1)

        schema_type = node.get("type")
        if isinstance(schema_type, list):
            return _union_of([
                self.annotation({**node, "type": member}, name, depth + 1)
                for member in schema_type
            ])

        return self._typed(node, schema_type, name, depth)

    def _typed(self, node: dict[str, Any], schema_type: Any, name: str, depth: int) -> Any:
        if schema_type in _PRIMITIVES:
            return _PRIMITIVES[schema_type]

        if schema_type == "array" or (schema_type is None and "items" in node):
            items = node.get("items")
            if isinstance(items, dict):
                return list[self.annotation(items, f"{name}Item", depth + 1)]
            return list[Any]

        if schema_type == "object" or (schema_type is None and "properties" in node):
            if isinstance(node.get("properties"), dict) and node["properties"]:
                return self.model(node, name, depth)
            return dict[str, Any]

        return Any

    def _ref(self, ref: Any, depth: int) -> Any:
        if not isinstance(ref, str) or not ref.startswith("#/") or ref in self._resolving:
            return Any

        target: Any = self.root
        for part in ref[2:].split("/"):
            if not isinstance(target, dict) or part not in target:
                return Any
            target = target[part]

        self._resolving.add(ref)
        try:
            return self.annotation(target, schema_model_name(ref.rsplit("/", 1)[-1]), depth + 1)
        finally:
            self._resolving.discard(ref)


def json_schema_to_model(schema: Any, model_name: str = "ToolInput") -> type[BaseModel]:
    """Translate a tool's input schema into a pydantic model class.

    Args:
        schema: The tool's JSON Schema (normally ``{"type": "object", ...}``).
        model_name: Class name for the generated model.

    Returns:
        A model class.  If the schema is unusable as a whole, the model
        accepts any keyword arguments rather than rejecting the tool.
    """
    if isinstance(schema, dict):
        try:
            return _Translator(schema).model(schema, model_name)
        except Exception:
            logger.warning("Could not translate input schema for %s; accepting any arguments",
                           model_name, exc_info=True)

    return create_model(
        model_name,
        __config__=ConfigDict(extra="allow", protected_namespaces=()),
    )
