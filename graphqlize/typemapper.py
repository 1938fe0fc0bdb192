"""
Maps JSON Schema fragments to GraphQL types.

Every fragment is classified into a `SchemaKind` and mapped by the matching
branch of `map_type`. Object and union types are created with thunks so that a
type can be registered before the types of its fields exist; the thunks are
resolved when the finished type graph is assembled or printed.
"""

# pylint: disable=line-too-long

from enum import Enum
from typing import Any, Dict, Optional

from graphql import (GraphQLBoolean, GraphQLField, GraphQLFloat, GraphQLInputField,
                     GraphQLInputObjectType, GraphQLInt, GraphQLList, GraphQLNonNull,
                     GraphQLObjectType, GraphQLString, GraphQLUnionType)

from graphqlize.common import INPUT_SUFFIX, graphql_type_name, normalized_type_name, qualify, validate_field_name
from graphqlize.enums import build_enum
from graphqlize.errors import UnknownTypeReference, UnmappedScalarKind, UnsupportedEnumBase
from graphqlize.registry import TypeRegistry
from graphqlize.unions import build_union

PLACEHOLDER_FIELD = '_typesWithoutFieldsAreNotAllowed_'
DEFINITIONS_POINTER = '/definitions/'

SCALAR_TYPES = {
    'string': GraphQLString,
    'integer': GraphQLInt,
    'number': GraphQLFloat,
    'boolean': GraphQLBoolean,
}


class SchemaKind(Enum):
    """Shape of a schema fragment, in the order the shapes are tested."""
    ARRAY = 'array'
    OBJECT = 'object'
    ENUM = 'enum'
    REFERENCE = 'reference'
    UNION = 'union'
    SCALAR = 'scalar'


class DropMarker:
    """Result for a fragment that has no representation in the requested universe."""

    def __repr__(self) -> str:
        return 'DROP'


DROP = DropMarker()


def is_union_fragment(fragment: Dict[str, Any]) -> bool:
    return 'switch' in fragment or 'oneOf' in fragment


def schema_kind(fragment: Dict[str, Any]) -> SchemaKind:
    """Classify a schema fragment; the first matching shape wins."""
    json_type = fragment.get('type')
    if json_type == 'array':
        return SchemaKind.ARRAY
    if json_type == 'object' and '$ref' not in fragment and \
            ('properties' in fragment or not is_union_fragment(fragment)):
        return SchemaKind.OBJECT
    if 'enum' in fragment:
        return SchemaKind.ENUM
    if '$ref' in fragment:
        return SchemaKind.REFERENCE
    if is_union_fragment(fragment):
        return SchemaKind.UNION
    return SchemaKind.SCALAR


def item_path(items: Dict[str, Any], path: str) -> str:
    """Array items are named after the array, unless they refer to a named type."""
    return path if '$ref' in items else qualify(path, 'Item')


def map_scalar(json_type: Any, path: str):
    """Map a JSON Schema primitive type to the GraphQL scalar."""
    scalar = SCALAR_TYPES.get(json_type) if isinstance(json_type, str) else None
    if scalar is None:
        raise UnmappedScalarKind(
            f"A JSON Schema attribute type {json_type} on attribute {path} does not have a known GraphQL mapping")
    return scalar


def check_enum_base(fragment: Dict[str, Any], path: str) -> None:
    if fragment.get('type') != 'string':
        raise UnsupportedEnumBase(
            f"The attribute {path} not supported because only conversion of string based enumerations are implemented")


def is_external_reference(reference: str) -> bool:
    return reference.startswith(('http://', 'https://'))


def reference_type_name(reference: str) -> Optional[str]:
    """
    Translate a `$ref` into the name its target is registered under.

    `#/definitions/X` (optionally prefixed by a document id) becomes the name of
    the definition `X`; a plain id or file name becomes its normalized type
    name. Returns None for references that can never be resolved.
    """
    if is_external_reference(reference):
        return None
    document, _, pointer = reference.partition('#')
    if pointer:
        if not pointer.startswith(DEFINITIONS_POINTER):
            return None
        return graphql_type_name(qualify('Definition', pointer[len(DEFINITIONS_POINTER):]))
    if not document:
        return None
    return graphql_type_name(document)


def unknown_reference(reference: str, path: str) -> UnknownTypeReference:
    sub_message = None
    if is_external_reference(reference):
        sub_message = ("References to external URIs are not supported. "
                       "Duplicate the referenced schema locally and refer to it by its id")
    return UnknownTypeReference(reference, path, sub_message=sub_message)


def resolve_reference(registry: TypeRegistry, reference: str, path: str, is_input: bool):
    """
    Look up the type a `$ref` points to.

    Unions only exist in the output universe, so an input lookup of a union
    yields DROP.
    """
    name = reference_type_name(reference)
    if name:
        found = registry.lookup_input(name) if is_input else registry.lookup_output(name)
        if found is not None:
            return found
        if is_input and isinstance(registry.lookup_output(name), GraphQLUnionType):
            return DROP
    raise unknown_reference(reference, path)


def object_fields(registry: TypeRegistry, fragment: Dict[str, Any], path: str, is_input: bool) -> Dict[str, Any]:
    """Build the field map of an object or input object type."""
    field_class = GraphQLInputField if is_input else GraphQLField
    properties = fragment.get('properties') or {}
    required = fragment.get('required', [])
    if not isinstance(required, list):
        required = []

    fields = {}
    for field_name, field_schema in properties.items():
        attribute = qualify(path, field_name)
        validate_field_name(field_name, attribute)
        field_type = map_type(registry, field_schema, attribute, is_input)
        if field_type is DROP:
            continue
        if field_name in required:
            field_type = GraphQLNonNull(field_type)
        fields[field_name] = field_class(field_type)

    if not fields:
        # GraphQL does not allow types without fields
        fields[PLACEHOLDER_FIELD] = field_class(GraphQLString)
    return fields


def build_object(registry: TypeRegistry, fragment: Dict[str, Any], path: str, is_input: bool):
    """Return the object type (or input object type) named after `path`."""
    type_name = normalized_type_name(path)
    if is_input:
        return registry.get_or_create_type(path, True, lambda: GraphQLInputObjectType(
            type_name + INPUT_SUFFIX, fields=lambda: object_fields(registry, fragment, path, True)), fragment)
    return registry.get_or_create_type(path, False, lambda: GraphQLObjectType(
        type_name, fields=lambda: object_fields(registry, fragment, path, False)), fragment)


def map_type(registry: TypeRegistry, fragment: Dict[str, Any], path: str, is_input: bool = False):
    """
    Map a JSON Schema fragment to a GraphQL type.

    Args:
        registry (TypeRegistry): The registry of the current batch.
        fragment (dict): The schema fragment.
        path (str): The qualified attribute path of the fragment.
        is_input (bool): Build the input universe variant.

    Returns:
        The GraphQL type, or DROP when the fragment has no input representation.
    """
    kind = schema_kind(fragment)
    if kind is SchemaKind.ARRAY:
        items = fragment.get('items') or {}
        element_type = map_type(registry, items, item_path(items, path), is_input)
        if element_type is DROP:
            return DROP
        return GraphQLList(GraphQLNonNull(element_type))
    if kind is SchemaKind.OBJECT:
        return build_object(registry, fragment, path, is_input)
    if kind is SchemaKind.ENUM:
        check_enum_base(fragment, path)
        return build_enum(registry, path, fragment['enum'])
    if kind is SchemaKind.REFERENCE:
        return resolve_reference(registry, fragment['$ref'], path, is_input)
    if kind is SchemaKind.UNION:
        if is_input:
            return DROP
        return build_union(registry, path, fragment)
    return map_scalar(fragment.get('type'), path)
