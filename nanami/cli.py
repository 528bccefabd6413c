"""
# Nanami: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import os
import re
import sys

from nanami._version import __version__
from nanami.constants import (
    COMMAND_LINE_ERROR_EXIT_CODE,
    GENERIC_ERROR_EXIT_CODE,
    HTML_FILE_EXTENSION,
    NAMA_FILE_EXTENSION,
)
from nanami.core import nama_to_html
from nanami.exceptions import ParseError, RenderError
from nanami.utilities import prettify_html

DESCRIPTION = '''
    Convert Nama to HTML.
'''
NAMA_FILE_NAME_HELP = '''
    name of Nama file to be converted
    (can be abbreviated as `file` or `file.` for increased productivity)
'''
ALL_MODE_HELP = '''
    convert all Nama files under the working directory
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints the syntax tree and raw HTML of every file)
'''
NO_FORMAT_HELP = '''
    write the HTML as rendered, without pretty-printing
'''


def is_nama_file(file_name: str) -> bool:
    return file_name.endswith(NAMA_FILE_EXTENSION)


def extract_nama_name(nama_file_name_argument: str) -> str:
    """
    Extract name-without-extension from a Nama file name argument.

    Here, Nama file name argument may be of the form `«nama_name».nama`, `«nama_name».`, or `«nama_name»`.
    The path is normalised by resolving `./` and `../`.
    """
    nama_file_name_argument = os.path.normpath(nama_file_name_argument)
    nama_name = re.sub(pattern=r'[.](nama)? \Z', repl='', string=nama_file_name_argument, flags=re.VERBOSE)

    return nama_name


def parse_command_line_arguments(arguments=None) -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(prog='nanami', description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-a', '--all',
        dest='all_mode_enabled',
        action='store_true',
        help=ALL_MODE_HELP,
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        '--no-format',
        dest='formatting_enabled',
        action='store_false',
        help=NO_FORMAT_HELP,
    )
    argument_parser.add_argument(
        'nama_file_name_arguments',
        default=[],
        help=NAMA_FILE_NAME_HELP,
        metavar='file.nama',
        nargs='*',
    )

    return argument_parser.parse_args(arguments)


def generate_html_file(nama_file_name_argument: str, verbose_mode_enabled: bool, formatting_enabled: bool,
                       uses_command_line_argument: bool):
    nama_name = extract_nama_name(nama_file_name_argument)
    nama_file_name = f'{nama_name}{NAMA_FILE_EXTENSION}'
    try:
        with open(nama_file_name, 'r', encoding='utf-8') as nama_file:
            nama = nama_file.read()
    except FileNotFoundError as file_not_found_error:
        if uses_command_line_argument:
            print(f'error: argument `{nama_file_name_argument}`: file `{nama_file_name}` not found', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)
        else:
            error_message = f'file `{nama_file_name}` found under the working directory no longer exists'
            raise FileNotFoundError(error_message) from file_not_found_error

    formatter = prettify_html if formatting_enabled else None
    try:
        html = nama_to_html(nama, formatter, verbose_mode_enabled)
    except (ParseError, RenderError) as conversion_error:
        message = re.sub(pattern=r'\A error: [ ]', repl='', string=str(conversion_error), flags=re.VERBOSE)
        print(f'error: `{nama_file_name}`: {message}', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)

    html_file_name = f'{nama_name}{HTML_FILE_EXTENSION}'
    try:
        with open(html_file_name, 'w', encoding='utf-8') as html_file:
            html_file.write(html)
        print(f'success: wrote to `{html_file_name}`')
    except IOError:
        print(f'error: cannot write to `{html_file_name}`', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def main(arguments=None):
    parsed_arguments = parse_command_line_arguments(arguments)
    nama_file_name_arguments = parsed_arguments.nama_file_name_arguments
    all_mode_enabled = parsed_arguments.all_mode_enabled
    verbose_mode_enabled = parsed_arguments.verbose_mode_enabled
    formatting_enabled = parsed_arguments.formatting_enabled

    if all_mode_enabled:
        if len(nama_file_name_arguments) > 0:
            print('error: option -a (or --all) cannot be used with positional argument', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

        nama_file_names = [
            os.path.join(path, file_name)
            for path, _, file_names in os.walk(os.curdir)
            for file_name in file_names
            if is_nama_file(file_name)
        ]
        for nama_file_name in sorted(nama_file_names):
            generate_html_file(nama_file_name, verbose_mode_enabled, formatting_enabled,
                               uses_command_line_argument=False)

    else:
        for nama_file_name_argument in nama_file_name_arguments:
            generate_html_file(nama_file_name_argument, verbose_mode_enabled, formatting_enabled,
                               uses_command_line_argument=True)


if __name__ == '__main__':
    main()
