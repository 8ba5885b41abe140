"""Compact descriptor notation.

Response schemas are written as plain Python literals and compiled once, at
import time, into descriptor trees:

  Notation                          -> Descriptor
  -----------------------------------------------
  "string" / "integer" / "float"    -> ScalarNode
  "timestamp" / "boolean" / "any"   -> ScalarNode
  {"name": ..., "flag?": ...}       -> MappingNode ("?" suffix = optional, default None)
  [element]                         -> SequenceNode
  OptionalValue(zero_value, default)-> OptionalNode
  EmbeddedDocument(inner)           -> EmbeddedNode

Example:
    TABLE = parse_descriptor({
        "id": "integer",
        "type": OptionalValue("string", "?"),
        "schema": OptionalValue(EmbeddedDocument(["any"]), None),
    })
"""

from dataclasses import dataclass
from typing import Any

from td_client.schema.descriptor import (
    Descriptor,
    EmbeddedNode,
    MappingNode,
    OptionalNode,
    ScalarKind,
    ScalarNode,
    SequenceNode,
)


# --- Value wrappers ---
# Pure metadata: they only mark how the wrapped notation should be compiled.


@dataclass(frozen=True)
class OptionalValue:
    """Marks a field that may be absent.

    `zero_value` is the notation for the field's type; `default` is what the
    validator substitutes when the field is missing or null.
    """

    zero_value: Any
    default: Any = None


@dataclass(frozen=True)
class EmbeddedDocument:
    """Marks a string field whose content is a JSON document described by `inner`."""

    inner: Any


SCALAR_TYPES = {kind.value: ScalarNode(kind) for kind in ScalarKind}

_DESCRIPTOR_TYPES = (ScalarNode, OptionalNode, EmbeddedNode, MappingNode, SequenceNode)


def _parse_field_key(key: str) -> tuple[str, bool]:
    """Split a mapping key into (name, required).

    Examples:
        "name"   -> ("name", True)
        "count?" -> ("count", False)
    """
    if key.endswith("?"):
        return key[:-1], False
    return key, True


def parse_descriptor(notation: Any) -> Descriptor:
    """Compile descriptor notation into a descriptor tree.

    Args:
        notation: A scalar type name, dict, one-element list, value wrapper,
            or an already compiled descriptor node.

    Returns:
        The equivalent immutable descriptor.

    Raises:
        ValueError: If the notation contains an unknown type name or a list
            that does not have exactly one element.
    """
    if isinstance(notation, _DESCRIPTOR_TYPES):
        return notation

    if isinstance(notation, OptionalValue):
        return OptionalNode(parse_descriptor(notation.zero_value), notation.default)

    if isinstance(notation, EmbeddedDocument):
        return EmbeddedNode(parse_descriptor(notation.inner))

    if isinstance(notation, str):
        try:
            return SCALAR_TYPES[notation]
        except KeyError:
            raise ValueError(
                f"Unknown scalar type {notation!r}; expected one of {sorted(SCALAR_TYPES)}"
            ) from None

    if isinstance(notation, dict):
        fields: list[tuple[str, Descriptor]] = []
        for key, value in notation.items():
            name, required = _parse_field_key(key)
            child = parse_descriptor(value)
            # Trigger: "name?" key whose value is not already optional
            # Outcome: wrap it so a missing field yields None
            if not required and not isinstance(child, OptionalNode):
                child = OptionalNode(child, None)
            fields.append((name, child))
        return MappingNode(tuple(fields))

    if isinstance(notation, list):
        if len(notation) != 1:
            raise ValueError(
                f"Sequence notation takes exactly one element descriptor, got {len(notation)}"
            )
        return SequenceNode(parse_descriptor(notation[0]))

    raise ValueError(f"Unsupported descriptor notation: {notation!r}")
