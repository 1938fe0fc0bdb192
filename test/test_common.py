import os
import sys
import unittest

import pytest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from graphqlize.common import graphql_type_name, normalized_type_name, qualify, validate_field_name
from graphqlize.errors import NamingError


class TestTypeNames(unittest.TestCase):

    def test_plain_id(self):
        self.assertEqual(graphql_type_name('Person'), 'Person')
        self.assertEqual(graphql_type_name('person'), 'Person')

    def test_qualified_path(self):
        self.assertEqual(graphql_type_name('Person.height'), 'PersonHeight')
        self.assertEqual(graphql_type_name('Definition.otherType'), 'DefinitionOtherType')
        self.assertEqual(graphql_type_name('Array.attribute.Item'), 'ArrayAttributeItem')
        self.assertEqual(graphql_type_name('OneOf.attribute.Switch0'), 'OneOfAttributeSwitch0')

    def test_uri_and_file_names(self):
        self.assertEqual(graphql_type_name('http://example.com/schemas/person.schema.json'), 'Person')
        self.assertEqual(graphql_type_name('address.json'), 'Address')
        self.assertEqual(graphql_type_name('schemas/order-line.schema.json#'), 'OrderLine')

    def test_dashes_and_spaces_are_word_breaks(self):
        self.assertEqual(graphql_type_name('order-line'), 'OrderLine')
        self.assertEqual(graphql_type_name('order line'), 'OrderLine')

    def test_snake_case(self):
        self.assertEqual(graphql_type_name('my_type'), 'MyType')
        self.assertEqual(graphql_type_name('order_line.json'), 'OrderLine')
        self.assertEqual(graphql_type_name('Person.first_name'), 'PersonFirstName')

    def test_leading_underscore_is_kept(self):
        self.assertEqual(graphql_type_name('_internal_type'), '_InternalType')

    def test_invalid_name(self):
        with self.assertRaises(NamingError) as context:
            normalized_type_name('boo(k')
        self.assertEqual(context.exception.message, 'The id of boo(k does not convert into a valid GraphQL type name')
        self.assertEqual(context.exception.sub_message,
                         'The ID or .json file-name must match the regular expression /^[_a-zA-Z][_a-zA-Z0-9]*$/ but Boo(k does not')

    def test_leading_digit_is_invalid(self):
        with pytest.raises(NamingError):
            normalized_type_name('3dModel')

    def test_field_names(self):
        validate_field_name('firstField', 'Object.firstField')
        with pytest.raises(NamingError, match='Object.first-field'):
            validate_field_name('first-field', 'Object.first-field')

    def test_qualify(self):
        self.assertEqual(qualify('Person', 'address', 'street'), 'Person.address.street')
        self.assertEqual(qualify('', 'Person'), 'Person')
