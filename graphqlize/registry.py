"""
Registry of the GraphQL types built for a batch of JSON schemas.
"""

from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from graphql import GraphQLEnumType, GraphQLInputType, GraphQLOutputType, GraphQLNamedType

from graphqlize.errors import DuplicateTypeName


class TypeRegistry:
    """
    Holds the output universe, the input universe and the synthesized enums.

    One registry is created per conversion batch and passed to every
    conversion call. Entries are only ever added.
    """

    def __init__(self) -> None:
        self.outputs: Dict[str, GraphQLOutputType] = {}
        self.inputs: Dict[str, GraphQLInputType] = {}
        self.enums: Dict[str, GraphQLEnumType] = {}
        self.enum_codecs: Dict[str, Dict[str, Any]] = {}
        self.declared: Set[str] = set()
        # (is_input, qualified path) -> synthesized object, input object or union
        self.nested: Dict[Tuple[bool, str], GraphQLNamedType] = {}
        self.nested_sources: Dict[Tuple[bool, str], Any] = {}
        self.enum_sources: Dict[str, Any] = {}
        # synthesized type name -> qualified path that claimed it
        self.claimed_names: Dict[str, str] = {}

    def register_output(self, name: str, graphql_type: GraphQLOutputType) -> None:
        if name in self.outputs:
            raise DuplicateTypeName(f"The type {name} is already registered",
                                    sub_message="Each schema id and definition name may only be converted once per batch")
        self.outputs[name] = graphql_type

    def register_input(self, name: str, graphql_type: GraphQLInputType) -> None:
        if name in self.inputs:
            raise DuplicateTypeName(f"The input type {name} is already registered",
                                    sub_message="Each schema id and definition name may only be converted once per batch")
        self.inputs[name] = graphql_type

    def lookup_output(self, name: str) -> Optional[GraphQLOutputType]:
        return self.outputs.get(name)

    def lookup_input(self, name: str) -> Optional[GraphQLInputType]:
        return self.inputs.get(name)

    def declare(self, name: str) -> None:
        """Mark a name as owned by a schema that is part of the batch."""
        self.declared.add(name)

    def is_known(self, name: str) -> bool:
        """True when the name is registered or declared by an attempted schema."""
        return name in self.outputs or name in self.declared

    def get_or_create_enum(self, path: str, factory: Callable[[], GraphQLEnumType],
                           source: Any = None) -> GraphQLEnumType:
        """Return the enum synthesized for `path`, creating it on first use."""
        enum_type = self.enums.get(path)
        if enum_type is None:
            enum_type = factory()
            self.claim_name(enum_type.name, path)
            self.enums[path] = enum_type
            self.enum_sources[path] = source
        elif source is not None and self.enum_sources.get(path) is not source:
            raise DuplicateTypeName(f"The enumeration {enum_type.name} is produced by two schemas at {path}",
                                    sub_message="Rename the schema or the definition so that their qualified paths differ")
        return enum_type

    def record_enum_codec(self, path: str, value_map: Dict[str, Any]) -> None:
        self.enum_codecs[path] = dict(value_map)

    def enum_codec(self, path: str) -> Optional[Dict[str, Any]]:
        return self.enum_codecs.get(path)

    def get_or_create_type(self, path: str, is_input: bool, factory: Callable[[], GraphQLNamedType],
                           source: Any = None) -> GraphQLNamedType:
        """
        Return the nested type synthesized for `path` in one universe, creating it on first use.

        `source` is the schema fragment the type is built from. A second
        fragment at the same path (a root named `Definition` and a definition
        of another document) is a name collision, not a cache hit.
        """
        key = (is_input, path)
        graphql_type = self.nested.get(key)
        if graphql_type is None:
            graphql_type = factory()
            self.claim_name(graphql_type.name, path)
            self.nested[key] = graphql_type
            self.nested_sources[key] = source
        elif source is not None and self.nested_sources.get(key) is not source:
            raise DuplicateTypeName(f"The type name {graphql_type.name} is produced by two schemas at {path}",
                                    sub_message="Rename the schema or the definition so that their qualified paths differ")
        return graphql_type

    def claim_name(self, name: str, path: str) -> None:
        """Reserve a synthesized type name for one qualified path."""
        owner = self.claimed_names.setdefault(name, path)
        if owner != path:
            raise DuplicateTypeName(f"The type name {name} is produced by both {owner} and {path}",
                                    sub_message="Rename one of the attributes so that their qualified paths differ")

    def output_types(self) -> List[Tuple[str, GraphQLOutputType]]:
        return list(self.outputs.items())

    def input_types(self) -> List[Tuple[str, GraphQLInputType]]:
        return list(self.inputs.items())
