"""Schema system for td-client.

Declarative descriptors for API responses plus the validator that normalizes
decoded JSON against them.
"""

from td_client.schema.descriptor import (
    ANY,
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    TIMESTAMP,
    Descriptor,
    EmbeddedNode,
    MappingNode,
    OptionalNode,
    ScalarKind,
    ScalarNode,
    SequenceNode,
    describe,
)
from td_client.schema.parser import (
    EmbeddedDocument,
    OptionalValue,
    parse_descriptor,
)
from td_client.schema.coercion import (
    coerce_scalar,
    format_timestamp,
    parse_timestamp,
)
from td_client.schema.validator import (
    validate,
    validate_json,
)

__all__ = [
    # Descriptor
    "ANY",
    "BOOLEAN",
    "FLOAT",
    "INTEGER",
    "STRING",
    "TIMESTAMP",
    "Descriptor",
    "EmbeddedNode",
    "MappingNode",
    "OptionalNode",
    "ScalarKind",
    "ScalarNode",
    "SequenceNode",
    "describe",
    # Parser
    "EmbeddedDocument",
    "OptionalValue",
    "parse_descriptor",
    # Coercion
    "coerce_scalar",
    "format_timestamp",
    "parse_timestamp",
    # Validator
    "validate",
    "validate_json",
]
