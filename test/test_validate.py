import os
import sys
import unittest

import pytest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from graphqlize.errors import InputValidationError
from graphqlize.validate import read_schemas, validate_json_syntax, validate_path_name


def get_schema_dir(name):
    """Provides the path of a fixture directory."""
    return os.path.join(os.path.dirname(__file__), 'schemas', name)


class TestValidate(unittest.TestCase):

    def test_missing_directory_name(self):
        with self.assertRaises(InputValidationError) as context:
            validate_path_name(None)
        self.assertEqual(context.exception.sub_message,
                         "Must include a directory name in the command 'graphqlize <directory-name>'")

    def test_not_a_directory(self):
        path = get_schema_dir('nowhere')
        with self.assertRaises(InputValidationError) as context:
            validate_path_name(path)
        self.assertEqual(context.exception.sub_message, f'The path name "{path}" is not a valid directory')

    def test_files_are_listed_recursively_and_sorted(self):
        self.assertEqual(validate_path_name(get_schema_dir('batch')),
                         ['address.schema.json', 'person.json', 'pet.json', 'pets/pets.json'])

    def test_wrong_extension(self):
        directory = get_schema_dir('invalid_extension')
        with self.assertRaises(InputValidationError) as context:
            read_schemas(directory)
        self.assertEqual(context.exception.message, 'All files in directory must have .json extension')
        self.assertEqual(context.exception.sub_location, os.path.join(directory, 'schema.txt'))

    def test_invalid_json_syntax(self):
        with self.assertRaises(InputValidationError) as context:
            validate_json_syntax('broken.json', get_schema_dir('invalid_syntax'))
        self.assertEqual(context.exception.sub_message, "Invalid JSON syntax in file 'broken.json'")
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def test_invalid_encoding(self):
        with self.assertRaises(InputValidationError) as context:
            read_schemas(get_schema_dir('invalid_encoding'))
        self.assertEqual(context.exception.sub_message, "Invalid JSON syntax in file 'latin1.json'")
        self.assertIsInstance(context.exception.__cause__, UnicodeDecodeError)

    def test_array_with_non_object(self):
        with self.assertRaises(InputValidationError) as context:
            read_schemas(get_schema_dir('invalid_array'))
        self.assertEqual(context.exception.message, 'Each entry in the JSON array must be an object type')
        self.assertEqual(context.exception.sub_message, 'Check element with index 1 in file schemas.json')

    def test_read_schemas(self):
        schemas = read_schemas(get_schema_dir('batch'))
        self.assertEqual([schema.get('id') or schema.get('$id') for schema in schemas],
                         ['Address', 'http://example.com/schemas/person.schema.json', 'Pet', 'Dog', 'Cat'])

    def test_array_file(self):
        content = validate_json_syntax('pets/pets.json', get_schema_dir('batch'))
        assert isinstance(content, list)
        assert len(content) == 2

    def test_scalar_file_content(self):
        with pytest.raises(InputValidationError):
            validate_json_syntax('number.json', get_schema_dir('scalar'))
