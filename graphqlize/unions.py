"""
Synthesizes GraphQL unions from `switch` and `oneOf` schemas.
"""

from typing import Any, Dict, List

from graphql import GraphQLUnionType

from graphqlize.common import normalized_type_name, qualify
from graphqlize.registry import TypeRegistry


def union_branches(fragment: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Return the member schemas of a union fragment, in declaration order.

    For a `switch` only the `then` schema of each case counts; the `if`
    condition discriminates instances and does not affect the type.
    """
    if 'switch' in fragment:
        return [case.get('then') or {} for case in fragment['switch']]
    return list(fragment.get('oneOf') or [])


def branch_path(path: str, index: int) -> str:
    return qualify(path, f'Switch{index}')


def build_union(registry: TypeRegistry, path: str, fragment: Dict[str, Any]) -> GraphQLUnionType:
    """Return the union named after `path`; its members are mapped on first access."""
    from graphqlize.typemapper import map_type

    type_name = normalized_type_name(path)

    def members():
        return [map_type(registry, branch, branch_path(path, index), False)
                for index, branch in enumerate(union_branches(fragment))]

    return registry.get_or_create_type(path, False, lambda: GraphQLUnionType(type_name, types=members), fragment)
