"""

Command line utility to convert a directory of JSON schemas to GraphQL types.

"""


import argparse
import logging
import sys

from graphqlize import _version
from graphqlize.errors import GraphqlizeError
from graphqlize.jsonstographql import convert_jsons_to_graphql


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description='Convert a directory of JSON schemas to GraphQL types.')
    parser.add_argument('--version', action='store_true', help='Print the version of graphqlize.')
    parser.add_argument('directory', nargs='?', help='Directory holding the .json schema files.')
    parser.add_argument('--out', help='Write the GraphQL definitions to this file instead of stdout.')
    parser.add_argument('--as-js', '--asJs', dest='as_js', action='store_true',
                        help='Emit a JavaScript module exporting the definitions, without the Mutation type.')
    parser.add_argument('--exclude-mutations', '--excludeMutations', dest='exclude_mutations', action='store_true',
                        help='Do not generate the Mutation type over the input types.')
    parser.add_argument('--enum-codecs', dest='enum_codecs',
                        help='Write a Python module converting enum members back to JSON values.')
    parser.add_argument('--verbose', action='store_true', help='Log the conversion passes.')
    return parser


def main():
    """Main function for the command line utility."""
    parser = create_parser()
    args = parser.parse_args()

    if getattr(args, 'version', False):
        print(f'graphqlize {_version.version}')
        return

    if getattr(args, 'verbose', False):
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    out = getattr(args, 'out', None)
    try:
        content = convert_jsons_to_graphql(getattr(args, 'directory', None), out,
                                           as_js=getattr(args, 'as_js', False),
                                           exclude_mutations=getattr(args, 'exclude_mutations', False),
                                           enum_codec_path=getattr(args, 'enum_codecs', None))
        if not out:
            sys.stdout.write(content)
    except GraphqlizeError as e:
        print("Error: ", e.message)
        if e.sub_message:
            print(e.sub_message)
        if e.sub_location:
            print(e.sub_location)
        sys.exit(1)
    except OSError as e:
        print("Error: ", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
