"""
Synthesizes GraphQL enumerations from JSON Schema string enumerations and
converts enumeration members back to the original JSON values.
"""

import re
from typing import Any, Dict, List, Optional

from graphql import GraphQLEnumType, GraphQLEnumValue

from graphqlize.common import normalized_type_name, process_template, render_template
from graphqlize.registry import TypeRegistry

COMPARISON_SYMBOLS = {
    '<': 'LT',
    '<=': 'LTE',
    '>=': 'GTE',
    '>': 'GT',
}
LEADING_DIGIT_PREFIX = 'VALUE_'
ENUM_CODEC_TEMPLATE = 'enumcodec/enum_codec.py.jinja'


def enum_member_name(value: Any) -> str:
    """
    Convert a JSON enumeration value into a legal GraphQL enumeration member.

    Args:
        value: The raw enumeration value.

    Returns:
        str: The member name.
    """
    text = str(value)
    if text in COMPARISON_SYMBOLS:
        return COMPARISON_SYMBOLS[text]
    member = re.sub(r'[^_a-zA-Z0-9]', '_', text)
    if not re.match(r'^[_a-zA-Z]', member):
        member = LEADING_DIGIT_PREFIX + member
    return member


def build_enum(registry: TypeRegistry, path: str, raw_values: List[Any]) -> GraphQLEnumType:
    """
    Return the enumeration for the attribute at `path`, synthesizing it once.

    The member-to-value table is recorded in the registry under the same path.
    """
    def create() -> GraphQLEnumType:
        value_map: Dict[str, Any] = {}
        for raw_value in raw_values:
            value_map[enum_member_name(raw_value)] = raw_value
        registry.record_enum_codec(path, value_map)
        return GraphQLEnumType(normalized_type_name(path),
                               {member: GraphQLEnumValue(value) for member, value in value_map.items()})

    return registry.get_or_create_enum(path, create, raw_values)


def convert_enum_from_graphql(registry: TypeRegistry, path: str, member: str) -> Any:
    """Return the JSON value behind a member of the enumeration at `path`."""
    codec = registry.enum_codec(path)
    if codec is None:
        raise ValueError(f"No enumeration was converted for attribute {path}")
    if member not in codec:
        raise ValueError(f"{member} is not a member of the enumeration for attribute {path}")
    return codec[member]


def get_convert_enum_from_graphql_code(registry: TypeRegistry, path: Optional[str] = None) -> str:
    """
    Generate a Python module that converts enumeration members back to JSON values.

    Args:
        registry (TypeRegistry): The registry holding the enumeration tables.
        path (str): Only include the enumeration at this attribute path and add
            a `convert_enum_from_graphql(member)` function for it.

    Returns:
        str: The Python source code.
    """
    if path is None:
        codecs = registry.enum_codecs
    else:
        codec = registry.enum_codec(path)
        if codec is None:
            raise ValueError(f"No enumeration was converted for attribute {path}")
        codecs = {path: codec}
    return process_template(ENUM_CODEC_TEMPLATE, codecs=codecs, default_path=path)


def write_enum_codecs(registry: TypeRegistry, output_path: str) -> None:
    """Write the codecs of all enumerations in the registry to a Python module."""
    render_template(ENUM_CODEC_TEMPLATE, output_path, codecs=registry.enum_codecs, default_path=None)
