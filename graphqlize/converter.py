"""
Converts one top-level JSON schema into registered GraphQL types.
"""

# pylint: disable=line-too-long

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

import jsonpointer
from jsonpointer import JsonPointerException
from graphql import GraphQLInputType, GraphQLOutputType

from graphqlize.common import graphql_type_name, normalized_type_name, qualify, validate_field_name, validate_type_name
from graphqlize.errors import MissingTopLevelIdentifier, NonObjectRoot, UndeclaredDefinitionType, UnknownTypeReference
from graphqlize.registry import TypeRegistry
from graphqlize.typemapper import (DEFINITIONS_POINTER, DROP, SchemaKind, check_enum_base, item_path, map_scalar,
                                   map_type, reference_type_name, schema_kind, unknown_reference)
from graphqlize.unions import branch_path, union_branches

logger = logging.getLogger(__name__)

LOCAL_DEFINITIONS_PREFIX = '#' + DEFINITIONS_POINTER


@dataclass
class Resolved:
    """A schema whose types are registered."""
    name: str
    output: GraphQLOutputType
    input: Optional[GraphQLInputType]


@dataclass
class Deferred:
    """A schema that refers to a type which is not known yet. Nothing was registered."""
    name: str
    reference: UnknownTypeReference


ConversionResult = Resolved | Deferred


def schema_id(schema: Dict[str, Any]) -> Optional[str]:
    return schema.get('id') or schema.get('$id')


def schema_excerpt(schema: Any) -> str:
    return f"JSON schema starting with {json.dumps(schema)[:25]}..."


def validate_top_level(schema: Dict[str, Any]) -> str:
    """Check that the schema can become a named object type and return its id."""
    type_id = schema_id(schema)
    if not type_id:
        raise MissingTopLevelIdentifier("JSON-Schema must have a key 'id' or '$id' to identify the top-level schema",
                                        sub_location=schema_excerpt(schema))
    if schema.get('type') != 'object':
        raise NonObjectRoot(f"Top-level type must be 'object', not '{schema.get('type')}'",
                            sub_location=schema_excerpt(schema))
    return type_id


def validate_definitions(definitions: Dict[str, Any]) -> None:
    for key, definition in definitions.items():
        if not isinstance(definition, dict) or not definition.get('type'):
            raise UndeclaredDefinitionType("Each key in definitions must have a declared type",
                                           sub_location=f'Definition for "{key}" schema')


def definition_path(key: str) -> str:
    return qualify('Definition', key)


def eager_reference(fragment: Dict[str, Any]) -> Optional[str]:
    """
    Return the `$ref` a fragment resolves to when it is mapped, if any.

    Object and union fields are resolved lazily, but a fragment that is itself
    a reference (or an array of one) is looked up as soon as it is mapped.
    """
    kind = schema_kind(fragment)
    if kind is SchemaKind.ARRAY:
        return eager_reference(fragment.get('items') or {})
    if kind is SchemaKind.REFERENCE:
        return fragment['$ref']
    return None


def local_definition_key(reference: str) -> Optional[str]:
    if reference.startswith(LOCAL_DEFINITIONS_PREFIX):
        return reference[len(LOCAL_DEFINITIONS_PREFIX):]
    return None


def definition_order(definitions: Dict[str, Any]) -> List[str]:
    """Order definitions so that a definition aliasing a sibling comes after it."""
    ordered: List[str] = []
    visiting: Set[str] = set()

    def visit(key: str) -> None:
        if key in ordered or key in visiting:
            return
        visiting.add(key)
        reference = eager_reference(definitions[key])
        target = local_definition_key(reference) if reference else None
        if target in definitions:
            visit(target)
        visiting.discard(key)
        ordered.append(key)

    for key in definitions:
        visit(key)
    return ordered


class ReferenceCheck:
    """
    Walks a schema before anything is registered.

    Fatal problems (unmapped scalars, non-string enums, illegal names) are
    raised right away. References are only collected: the first one whose
    target is unknown is reported so the schema can be deferred.
    """

    def __init__(self, registry: TypeRegistry, document: Dict[str, Any]) -> None:
        self.registry = registry
        self.document = document
        self.ready_definitions: Set[str] = set()
        self.unresolved: Optional[UnknownTypeReference] = None

    def check(self, fragment: Dict[str, Any], path: str, eager: bool = False) -> None:
        kind = schema_kind(fragment)
        if kind is SchemaKind.ARRAY:
            items = fragment.get('items') or {}
            self.check(items, item_path(items, path), eager)
        elif kind is SchemaKind.OBJECT:
            validate_type_name(path, graphql_type_name(path))
            for field_name, field_schema in (fragment.get('properties') or {}).items():
                attribute = qualify(path, field_name)
                validate_field_name(field_name, attribute)
                self.check(field_schema, attribute)
        elif kind is SchemaKind.ENUM:
            check_enum_base(fragment, path)
            validate_type_name(path, graphql_type_name(path))
        elif kind is SchemaKind.REFERENCE:
            if not self.is_resolvable(fragment['$ref'], eager):
                self.unresolved = self.unresolved or unknown_reference(fragment['$ref'], path)
        elif kind is SchemaKind.UNION:
            validate_type_name(path, graphql_type_name(path))
            for index, branch in enumerate(union_branches(fragment)):
                self.check(branch, branch_path(path, index))
        else:
            map_scalar(fragment.get('type'), path)

    def is_resolvable(self, reference: str, eager: bool) -> bool:
        name = reference_type_name(reference)
        if name is None:
            return False
        if reference.startswith('#'):
            try:
                jsonpointer.resolve_pointer(self.document, reference[1:])
            except JsonPointerException:
                return False
            return not eager or local_definition_key(reference) in self.ready_definitions
        if eager:
            return self.registry.lookup_output(name) is not None
        return self.registry.is_known(name)


def register_both(registry: TypeRegistry, name: str, fragment: Dict[str, Any], path: str) -> Tuple[Any, Any]:
    """Map a fragment for both universes and register the results under `name`."""
    output = map_type(registry, fragment, path, False)
    registry.register_output(name, output)
    input_type = map_type(registry, fragment, path, True)
    if input_type is DROP:
        return output, None
    registry.register_input(name, input_type)
    return output, input_type


def convert_schema(registry: TypeRegistry, schema: Dict[str, Any]) -> ConversionResult:
    """
    Convert a top-level JSON schema and register its types.

    The schema's own name and the names of its definitions are declared in the
    registry first, so schemas converted later may refer to them. If the schema
    refers to a type that is not known yet, nothing is registered and a
    Deferred result is returned.

    Args:
        registry (TypeRegistry): The registry of the current batch.
        schema (dict): The top-level JSON schema.

    Returns:
        Resolved | Deferred: The conversion result.
    """
    type_id = validate_top_level(schema)
    name = normalized_type_name(type_id)
    definitions = schema.get('definitions') or {}
    validate_definitions(definitions)
    definition_names = {key: normalized_type_name(definition_path(key)) for key in definitions}

    registry.declare(name)
    for definition_name in definition_names.values():
        registry.declare(definition_name)

    ordered_keys = definition_order(definitions)
    reference_check = ReferenceCheck(registry, schema)
    for key in ordered_keys:
        reference_check.check(definitions[key], definition_path(key), eager=True)
        reference_check.ready_definitions.add(key)
    reference_check.check(schema, name, eager=True)
    if reference_check.unresolved is not None:
        logger.debug("Deferring schema %s: %s", name, reference_check.unresolved.message)
        return Deferred(name, reference_check.unresolved)

    for key in ordered_keys:
        register_both(registry, definition_names[key], definitions[key], definition_path(key))
    output, input_type = register_both(registry, name, schema, name)
    logger.debug("Converted schema %s", name)
    return Resolved(name, output, input_type)


def convert(registry: TypeRegistry, schema: Dict[str, Any]) -> Tuple[GraphQLOutputType, Optional[GraphQLInputType]]:
    """
    Convert a top-level JSON schema and return its output and input types.

    Raises UnknownTypeReference when the schema refers to a type that is not
    registered or declared.
    """
    result = convert_schema(registry, schema)
    if isinstance(result, Deferred):
        raise result.reference
    return result.output, result.input
