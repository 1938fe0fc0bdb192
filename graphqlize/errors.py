"""
Exceptions raised while converting JSON schemas to GraphQL types.
"""

from typing import Optional


class GraphqlizeError(Exception):
    """
    Base class for all conversion errors.

    Attributes:
        message: Human-readable error description
        sub_message: Optional explanation of how to fix the problem
        sub_location: Optional description of where the problem was found
    """

    def __init__(self, message: str, sub_message: Optional[str] = None,
                 sub_location: Optional[str] = None) -> None:
        self.message = message
        self.sub_message = sub_message
        self.sub_location = sub_location
        super().__init__(message)


class InputValidationError(GraphqlizeError):
    """A schema directory or file could not be read as JSON schemas."""


class NamingError(GraphqlizeError):
    """A schema id or attribute does not convert into a valid GraphQL name."""


class UnmappedScalarKind(GraphqlizeError):
    """A JSON Schema primitive type has no GraphQL scalar."""


class UnsupportedEnumBase(GraphqlizeError):
    """An enumeration is declared on a schema that is not a string."""


class UnknownTypeReference(GraphqlizeError):
    """
    A `$ref` points to a type that is not registered.

    This is the only error kind that the scheduler retries.

    Attributes:
        reference: The raw `$ref` value
        attribute: Qualified attribute path holding the reference
    """

    def __init__(self, reference: str, attribute: str, sub_message: Optional[str] = None) -> None:
        self.reference = reference
        self.attribute = attribute
        super().__init__(f"The referenced type {reference} is unknown",
                         sub_message=sub_message,
                         sub_location=f"Attribute {attribute}")


class MissingTopLevelIdentifier(GraphqlizeError):
    """A top-level schema has neither `id` nor `$id`."""


class NonObjectRoot(GraphqlizeError):
    """A top-level schema is not of type `object`."""


class UndeclaredDefinitionType(GraphqlizeError):
    """An entry of `definitions` does not declare a `type`."""


class DuplicateTypeName(GraphqlizeError):
    """A type name was registered twice in the same universe."""


class SchemaConversionError(GraphqlizeError):
    """
    A fatal error raised while converting one schema of a batch.

    Attributes:
        schema_id: The id of the schema that failed
        cause: The underlying conversion error
    """

    def __init__(self, schema_id: str, cause: GraphqlizeError) -> None:
        self.schema_id = schema_id
        self.cause = cause
        super().__init__(f"Failed to convert schema {schema_id}: {cause.message}",
                         sub_message=cause.sub_message,
                         sub_location=cause.sub_location)
