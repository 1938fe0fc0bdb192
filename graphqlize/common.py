"""
Common utility functions for graphqlize.
"""

# pylint: disable=line-too-long

import os
import re

import jinja2

from graphqlize.errors import NamingError

INPUT_SUFFIX = 'In'
TYPE_NAME_PATTERN = re.compile(r'^[_a-zA-Z][_a-zA-Z0-9]*$')
TYPE_NAME_REGEX_TEXT = '/^[_a-zA-Z][_a-zA-Z0-9]*$/'


def qualify(*parts: str) -> str:
    """Join name parts into a qualified attribute path."""
    return '.'.join(part for part in parts if part)


def graphql_type_name(identifier: str) -> str:
    """
    Convert a schema identifier into a PascalCase GraphQL type name.

    The identifier may be a URI or file name (the last path segment is used and
    a trailing `.schema.json` or `.json` is dropped), a plain id, or a dotted
    qualified attribute path. Dots, underscores, dashes and whitespace separate words; each
    word gets an upper-case first letter and the rest of it is kept as is.
    A leading underscore is kept.

    Args:
        identifier (str): The identifier to convert.

    Returns:
        str: The type name. It is not validated, see `validate_type_name`.
    """
    name = identifier
    if '/' in name:
        name = name.rstrip('/').rsplit('/', 1)[-1]
    name = name.split('#', 1)[0]
    for suffix in ('.schema.json', '.json'):
        if name.endswith(suffix):
            name = name[:-len(suffix)]
            break
    startswith_under = name.startswith('_')
    words = re.split(r'[._\-\s]+', name)
    pascal_name = ''.join(word[:1].upper() + word[1:] for word in words if word)
    return '_' + pascal_name if startswith_under else pascal_name


def validate_type_name(identifier: str, normalized: str) -> None:
    """Raise a NamingError when `normalized` is not a legal GraphQL name."""
    if not TYPE_NAME_PATTERN.match(normalized):
        raise NamingError(
            f"The id of {identifier} does not convert into a valid GraphQL type name",
            sub_message=f"The ID or .json file-name must match the regular expression {TYPE_NAME_REGEX_TEXT} but {normalized} does not")


def normalized_type_name(identifier: str) -> str:
    """Convert an identifier into a type name and validate it."""
    normalized = graphql_type_name(identifier)
    validate_type_name(identifier, normalized)
    return normalized


def validate_field_name(field_name: str, attribute: str) -> None:
    """Raise a NamingError when a property name is not a legal GraphQL field name."""
    if not TYPE_NAME_PATTERN.match(field_name):
        raise NamingError(
            f"The attribute {attribute} does not convert into a valid GraphQL field name",
            sub_message=f"Property names must match the regular expression {TYPE_NAME_REGEX_TEXT} but {field_name} does not")


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package.
        **kvargs: The keyword arguments to pass to the template.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, keep_trailing_newline=True)
    template_env.filters['type_name'] = graphql_type_name
    template_env.filters['pyrepr'] = repr

    template = template_env.get_template(file_path)
    return template.render(**kvargs)


def render_template(template: str, output: str, **kvargs):
    """
    Render a template and write it to a file

    Args:
        template (str): The template to render.
        output (str): The output file path.
        **kvargs: The keyword arguments to pass to the template.
    """
    out = process_template(template, **kvargs)
    out_dir = os.path.dirname(output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        f.write(out)
