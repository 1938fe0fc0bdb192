""" JSON schemas to GraphQL schema converter. """

# pylint: disable=line-too-long

import logging
import os
import re
from typing import Any, Dict, List, Optional

from graphql import GraphQLArgument, GraphQLField, GraphQLObjectType, GraphQLSchema, GraphQLString, print_schema

from graphqlize.enums import write_enum_codecs
from graphqlize.errors import GraphqlizeError
from graphqlize.registry import TypeRegistry
from graphqlize.scheduler import convert_all
from graphqlize.validate import read_schemas

logger = logging.getLogger(__name__)

QUERY_TYPE_PATTERN = re.compile(r'^type Query\b(?: \{[^}]*\})?\n?', re.MULTILINE)
MUTATION_TYPE_PATTERN = re.compile(r'^type Mutation\b(?: \{[^}]*\})?\n?', re.MULTILINE)


def build_graphql_schema(registry: TypeRegistry, with_mutations: bool = True) -> GraphQLSchema:
    """
    Assemble the Query and Mutation root types over the registered types.

    The query type has one field per output type. The mutation type has one
    field per input type, taking it as the `input` argument.
    """
    query_type = GraphQLObjectType('Query', fields=lambda: {
        name: GraphQLField(output_type) for name, output_type in registry.output_types()
    })

    mutation_type = None
    if with_mutations and registry.input_types():
        mutation_type = GraphQLObjectType('Mutation', fields=lambda: {
            name: GraphQLField(GraphQLString, args={'input': GraphQLArgument(input_type)})
            for name, input_type in registry.input_types()
        })
    try:
        return GraphQLSchema(query=query_type, mutation=mutation_type)
    except TypeError as e:
        # graphql-core wraps errors raised while resolving field thunks
        cause = e.__cause__
        while cause is not None and not isinstance(cause, GraphqlizeError):
            cause = cause.__cause__
        if cause is None:
            raise
        raise cause from e


def tidy(printed: str) -> str:
    return re.sub(r'\n{3,}', '\n\n', printed).strip() + '\n'


def print_graphql_types(graphql_schema: GraphQLSchema, as_js: bool = False) -> str:
    """
    Print the type definitions of a schema without the Query type.

    :param graphql_schema: The assembled GraphQL schema.
    :param as_js: Also drop the Mutation type and wrap the definitions in a JavaScript module.
    :return: The printed definitions.
    """
    printed = QUERY_TYPE_PATTERN.sub('', print_schema(graphql_schema))
    if as_js:
        without_mutation = MUTATION_TYPE_PATTERN.sub('', printed)
        return f"'use strict';\nmodule.exports = `\n{tidy(without_mutation)}`;\n"
    return tidy(printed)


class JsonSchemasToGraphQLConverter:
    """
    Converts a batch of JSON schemas into one GraphQL schema.

    Attributes:
    with_mutations: Generate the Mutation root type over the input types.
    registry: The registry holding the converted types and enumeration codecs.
    """

    def __init__(self, with_mutations: bool = True) -> None:
        self.with_mutations = with_mutations
        self.registry = TypeRegistry()

    def convert_schemas(self, schemas: List[Dict[str, Any]]) -> GraphQLSchema:
        """Convert the schemas and assemble the root types."""
        convert_all(self.registry, schemas)
        return build_graphql_schema(self.registry, self.with_mutations)

    def convert_dir(self, input_dir: str, as_js: bool = False) -> str:
        """Convert all schemas in a directory and print the type definitions."""
        schemas = read_schemas(input_dir)
        logger.info("Converting %d schemas from %s", len(schemas), input_dir)
        return print_graphql_types(self.convert_schemas(schemas), as_js=as_js)


def json_schemas_to_graphql_schema(schemas: List[Dict[str, Any]], with_mutations: bool = True) -> GraphQLSchema:
    """Convert a batch of JSON schemas to a GraphQL schema."""
    return JsonSchemasToGraphQLConverter(with_mutations=with_mutations).convert_schemas(schemas)


def convert_jsons_to_graphql(input_dir: str, graphql_path: Optional[str] = None, as_js: bool = False,
                             exclude_mutations: bool = False, enum_codec_path: Optional[str] = None) -> str:
    """
    Convert a directory of JSON schema files to GraphQL type definitions.

    Args:
        input_dir (str): Directory holding the `.json` schema files.
        graphql_path (str): Write the definitions to this file.
        as_js (bool): Emit a JavaScript module exporting the definitions.
        exclude_mutations (bool): Do not generate the Mutation root type.
        enum_codec_path (str): Write the enumeration codecs to this Python module.

    Returns:
        str: The printed definitions.
    """
    converter = JsonSchemasToGraphQLConverter(with_mutations=not exclude_mutations)
    content = converter.convert_dir(input_dir, as_js=as_js)

    if graphql_path:
        out_dir = os.path.dirname(graphql_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(graphql_path, 'w', encoding='utf-8') as file:
            file.write(content)
    if enum_codec_path:
        write_enum_codecs(converter.registry, enum_codec_path)
    return content
