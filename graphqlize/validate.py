"""Reads JSON schema files from a directory.

The converter only consumes parsed schemas; this module finds the schema
files, checks that they are JSON, and reports problems with the file they
were found in.
"""

import json
import os
from typing import Any, Dict, List

from graphqlize.errors import InputValidationError


def validate_path_name(directory: str) -> List[str]:
    """Lists the files below a directory.

    Args:
        directory: The schema directory

    Returns:
        The file paths relative to the directory, sorted, with `/` separators
    """
    if not directory:
        raise InputValidationError(
            "No schema directory was given",
            sub_message="Must include a directory name in the command 'graphqlize <directory-name>'")
    if not os.path.isdir(directory):
        raise InputValidationError(
            f"Cannot read the schema directory {directory}",
            sub_message=f'The path name "{directory}" is not a valid directory')

    files = []
    for root, _, names in os.walk(directory):
        for name in names:
            relative = os.path.relpath(os.path.join(root, name), directory)
            files.append(relative.replace(os.sep, '/'))
    return sorted(files)


def validate_array_of_schemas(schemas: List[Any], file: str) -> None:
    """Checks that every entry of a schema array is a JSON object."""
    for index, schema in enumerate(schemas):
        if not isinstance(schema, dict):
            raise InputValidationError(
                'Each entry in the JSON array must be an object type',
                sub_message=f'Check element with index {index} in file {file}')


def validate_json_syntax(file: str, directory: str) -> Dict[str, Any] | List[Dict[str, Any]]:
    """Parses one schema file.

    Args:
        file: The file path relative to the directory
        directory: The schema directory

    Returns:
        The parsed schema, or the list of schemas the file holds
    """
    location = os.path.join(directory, file)
    if os.path.splitext(file)[1] != '.json':
        raise InputValidationError('All files in directory must have .json extension', sub_location=location)

    try:
        with open(location, 'r', encoding='utf-8') as schema_file:
            content = json.load(schema_file)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InputValidationError(str(e), sub_message=f"Invalid JSON syntax in file '{file}'",
                                   sub_location=location) from e

    if isinstance(content, list):
        validate_array_of_schemas(content, file)
    elif not isinstance(content, dict):
        raise InputValidationError('Each file must hold a JSON object or an array of JSON objects',
                                   sub_location=location)
    return content


def read_schemas(directory: str) -> List[Dict[str, Any]]:
    """Reads all schemas below a directory, in file order.

    A file holding an array contributes each of its entries.
    """
    schemas: List[Dict[str, Any]] = []
    for file in validate_path_name(directory):
        content = validate_json_syntax(file, directory)
        if isinstance(content, list):
            schemas.extend(content)
        else:
            schemas.append(content)
    return schemas
