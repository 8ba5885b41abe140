"""Schema descriptors for API responses.

A descriptor is an immutable tree describing the expected shape of a decoded
JSON value. Each node is one of:

  Node            -> Meaning
  -----------------------------------------------
  ScalarNode      -> string, integer, float, timestamp, boolean or any
  OptionalNode    -> field may be absent or null; substitute a default
  EmbeddedNode    -> value is a string holding a JSON document
  MappingNode     -> object with named, fixed fields
  SequenceNode    -> homogeneous array

Descriptors hold no runtime state and are shared freely between calls and
threads. Build them with the node classes directly or with
`td_client.schema.parser.parse_descriptor`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ScalarKind(Enum):
    """Scalar types a leaf value can be coerced into."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    ANY = "any"


@dataclass(frozen=True)
class ScalarNode:
    kind: ScalarKind


@dataclass(frozen=True)
class OptionalNode:
    """A field that may be missing or null.

    `default` is returned as-is for immutable values and deep-copied otherwise.
    """

    inner: "Descriptor"
    default: Any = None


@dataclass(frozen=True)
class EmbeddedNode:
    """A string value that must itself parse as JSON matching `inner`."""

    inner: "Descriptor"


@dataclass(frozen=True)
class MappingNode:
    """An object with named fields, in declaration order.

    Input fields not listed here are ignored.
    """

    fields: tuple[tuple[str, "Descriptor"], ...]

    @classmethod
    def of(cls, fields: dict[str, "Descriptor"]) -> "MappingNode":
        return cls(tuple(fields.items()))

    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]


@dataclass(frozen=True)
class SequenceNode:
    element: "Descriptor"


type Descriptor = ScalarNode | OptionalNode | EmbeddedNode | MappingNode | SequenceNode


STRING = ScalarNode(ScalarKind.STRING)
INTEGER = ScalarNode(ScalarKind.INTEGER)
FLOAT = ScalarNode(ScalarKind.FLOAT)
TIMESTAMP = ScalarNode(ScalarKind.TIMESTAMP)
BOOLEAN = ScalarNode(ScalarKind.BOOLEAN)
ANY = ScalarNode(ScalarKind.ANY)


def describe(descriptor: Descriptor) -> str:
    """Human-readable name of the kind a descriptor expects, used in error messages."""
    match descriptor:
        case ScalarNode(kind=kind):
            return kind.value
        case OptionalNode(inner=inner):
            return describe(inner)
        case EmbeddedNode():
            return "embedded JSON string"
        case MappingNode():
            return "object"
        case SequenceNode():
            return "array"
    raise TypeError(f"Not a schema descriptor: {descriptor!r}")
