"""
Converts a batch of JSON schemas that may refer to each other in any order.
"""

import logging
from typing import Any, Dict, List

from graphqlize.converter import ConversionResult, Deferred, convert_schema, schema_id
from graphqlize.errors import GraphqlizeError, SchemaConversionError
from graphqlize.registry import TypeRegistry

logger = logging.getLogger(__name__)


def attempt(registry: TypeRegistry, schema: Dict[str, Any]) -> ConversionResult:
    try:
        return convert_schema(registry, schema)
    except GraphqlizeError as e:
        raise SchemaConversionError(str(schema_id(schema)), e) from e


def convert_all(registry: TypeRegistry, schemas: List[Dict[str, Any]]) -> None:
    """
    Convert all schemas of a batch into the registry.

    Schemas that refer to a type which is not known yet are set aside and
    retried, as long as each pass converts at least one schema. When a pass
    makes no progress, the first remaining schema is converted once more and
    its unresolved reference is raised. Any other error aborts the batch.

    Args:
        registry (TypeRegistry): The registry of the batch.
        schemas (list): The top-level JSON schemas, in input order.

    Raises:
        UnknownTypeReference: A reference never resolved.
        SchemaConversionError: A schema could not be converted.
    """
    pending = list(schemas)
    while pending:
        deferred: List[Dict[str, Any]] = []
        for schema in pending:
            result = attempt(registry, schema)
            if isinstance(result, Deferred):
                logger.debug("Schema %s refers to %s, retrying after the other schemas",
                             result.name, result.reference.reference)
                deferred.append(schema)
        if deferred and len(deferred) == len(pending):
            result = attempt(registry, deferred[0])
            if isinstance(result, Deferred):
                raise result.reference
            deferred = deferred[1:]
        if deferred:
            logger.info("Retrying %d of %d schemas with forward references", len(deferred), len(pending))
        pending = deferred
