import argparse
import io
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from graphqlize.graphqlize import create_parser, main


def get_schema_dir(name):
    """Provides the path of a fixture directory."""
    return os.path.join(os.path.dirname(__file__), 'schemas', name)


class TestMain(unittest.TestCase):

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(version=True))
    def test_main_version(self, mock_parse_args):
        """Test printing the version."""
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            main()
        self.assertEqual(stdout.getvalue(), 'graphqlize 0.1.0\n')

    @patch('argparse.ArgumentParser.parse_args',
           return_value=argparse.Namespace(directory=get_schema_dir('batch'), out=None, as_js=False,
                                           exclude_mutations=False, enum_codecs=None, verbose=False))
    def test_main_to_stdout(self, mock_parse_args):
        """Test converting a directory and printing the definitions."""
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            main()
        printed = stdout.getvalue()
        self.assertIn('type Person {', printed)
        self.assertIn('type Mutation {', printed)
        self.assertNotIn('type Query', printed)

    @patch('argparse.ArgumentParser.parse_args',
           return_value=argparse.Namespace(directory=get_schema_dir('batch'), out=None, as_js=True))
    def test_main_as_js(self, mock_parse_args):
        """Test emitting a JavaScript module."""
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            main()
        printed = stdout.getvalue()
        self.assertTrue(printed.startswith("'use strict';\nmodule.exports = `\n"))
        self.assertNotIn('type Mutation', printed)

    def test_main_to_file(self):
        """Test writing the definitions and enumeration codecs to files."""
        with tempfile.TemporaryDirectory() as output_dir:
            out = os.path.join(output_dir, 'schema.graphql')
            codecs = os.path.join(output_dir, 'enums.py')
            args = argparse.Namespace(directory=get_schema_dir('batch'), out=out, as_js=False,
                                      exclude_mutations=True, enum_codecs=codecs, verbose=True)
            with patch('argparse.ArgumentParser.parse_args', return_value=args), \
                    patch('sys.stdout', new_callable=io.StringIO) as stdout:
                main()
            self.assertEqual(stdout.getvalue(), '')
            with open(out, 'r', encoding='utf-8') as file:
                content = file.read()
            self.assertTrue(os.path.exists(codecs))
        self.assertIn('enum PersonHeight {', content)
        self.assertNotIn('type Mutation', content)

    @patch('argparse.ArgumentParser.parse_args',
           return_value=argparse.Namespace(directory=get_schema_dir('unknown_reference'), out=None))
    def test_main_unknown_reference(self, mock_parse_args):
        """Test the error report for a reference that never resolves."""
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit) as context:
                main()
        self.assertEqual(context.exception.code, 1)
        self.assertIn('Error:  The referenced type Missing is unknown', stdout.getvalue())
        self.assertIn('Attribute Orphan.parent', stdout.getvalue())

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(directory=None))
    def test_main_no_directory(self, mock_parse_args):
        """Test the error report when no directory is given."""
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit):
                main()
        self.assertIn("Must include a directory name in the command 'graphqlize <directory-name>'", stdout.getvalue())

    def test_parser_aliases(self):
        """Test the camel-case spellings of the flags."""
        args = create_parser().parse_args(['schemas', '--asJs', '--excludeMutations'])
        self.assertEqual(args.directory, 'schemas')
        self.assertTrue(args.as_js)
        self.assertTrue(args.exclude_mutations)


if __name__ == '__main__':
    unittest.main()
