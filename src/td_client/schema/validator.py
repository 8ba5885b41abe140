"""Schema validator for API responses.

Walks a decoded JSON value and a descriptor in lock-step and returns the
canonical value: plain dicts and lists of coerced scalars. Validation is
all-or-nothing; the first failure raises and no partial result is returned.

  Descriptor       -> Rule
  -----------------------------------------------
  MappingNode      -> every declared field must resolve; extra input fields are ignored
  OptionalNode     -> absent or null yields the default
  ScalarNode       -> value is coerced (see coercion.py)
  EmbeddedNode     -> string is parsed as JSON, then validated against inner
  SequenceNode     -> every element is validated; index is appended to the path

Errors carry the path of the failing field from the root, e.g. `tables[0].id`.
"""

import copy
import json
from typing import Any

from td_client.errors import (
    MalformedDocumentError,
    MalformedEmbeddedDocumentError,
    SchemaMismatchError,
)
from td_client.schema.coercion import coerce_scalar, json_kind
from td_client.schema.descriptor import (
    Descriptor,
    EmbeddedNode,
    MappingNode,
    OptionalNode,
    ScalarNode,
    SequenceNode,
    describe,
)

_IMMUTABLE_DEFAULTS = (type(None), bool, int, float, str, bytes, tuple, frozenset)


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _default_value(node: OptionalNode) -> Any:
    # Mutable defaults are copied so results never share state with the descriptor
    if isinstance(node.default, _IMMUTABLE_DEFAULTS):
        return node.default
    return copy.deepcopy(node.default)


def _validate_mapping(value: Any, node: MappingNode, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaMismatchError(path, "object", json_kind(value))

    result: dict[str, Any] = {}
    for name, child in node.fields:
        child_path = _join(path, name)

        # --- Missing field ---
        # Trigger: the declared field is not a key of the input object
        # Why: optional fields fall back to their default, required ones are errors
        # Outcome: default substituted, or SchemaMismatchError naming the field
        if name not in value:
            if isinstance(child, OptionalNode):
                result[name] = _default_value(child)
                continue
            raise SchemaMismatchError(child_path, describe(child), "missing")

        result[name] = validate(value[name], child, child_path)
    return result


def _validate_sequence(value: Any, node: SequenceNode, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaMismatchError(path, "array", json_kind(value))
    return [validate(item, node.element, f"{path}[{index}]") for index, item in enumerate(value)]


def _validate_embedded(value: Any, node: EmbeddedNode, path: str) -> Any:
    if not isinstance(value, str):
        raise SchemaMismatchError(path, "embedded JSON string", json_kind(value))
    try:
        document = json.loads(value)
    except json.JSONDecodeError as e:
        raise MalformedEmbeddedDocumentError(path, e) from e
    return validate(document, node.inner, path)


def validate(value: Any, descriptor: Descriptor, path: str = "") -> Any:
    """Validate and normalize a decoded JSON value against a descriptor.

    Args:
        value: Decoded JSON value (as produced by json.loads)
        descriptor: Expected shape
        path: Path of `value` from the document root; empty for the root

    Returns:
        The canonical value

    Raises:
        SchemaMismatchError: If a field is missing or has the wrong type
        MalformedEmbeddedDocumentError: If an embedded JSON string fails to parse
    """
    match descriptor:
        case OptionalNode():
            if value is None:
                return _default_value(descriptor)
            return validate(value, descriptor.inner, path)
        case ScalarNode(kind=kind):
            return coerce_scalar(value, kind, path)
        case EmbeddedNode():
            return _validate_embedded(value, descriptor, path)
        case MappingNode():
            return _validate_mapping(value, descriptor, path)
        case SequenceNode():
            return _validate_sequence(value, descriptor, path)
    raise TypeError(f"Not a schema descriptor: {descriptor!r}")


def validate_json(body: str | bytes | bytearray, descriptor: Descriptor) -> Any:
    """Parse a raw JSON body and validate it against a descriptor.

    Raises:
        MalformedDocumentError: If the body is not valid JSON
        SchemaMismatchError: If the document does not match the descriptor
        MalformedEmbeddedDocumentError: If an embedded JSON string fails to parse
    """
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocumentError("", e) from e
    return validate(document, descriptor)
