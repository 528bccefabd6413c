"""
# Nanami: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core conversion logic.

Nama files are parsed as
````
title: «title»
!nlp                      (optional)
content {
  case(«name»)(«url») {   (url optional)
    text { «inline content» }
    case(...) { ... }
    sources { {footnotes} }
  }
}
````
and rendered to an HTML5 document.
Webography files are parsed as blank-line-separated records of the form
````
T: «title»
L: «link»
N: «name»
D: «date»
````
and are not rendered.

All functions here are pure: they read no files and hold no state between calls.
"""

import pprint
from typing import Callable, Optional

from nanami.constants import DEFAULT_MAX_RULE_DEPTH, VERBOSE_MODE_DIVIDER_SYMBOL_COUNT
from nanami.grammars import NAMA_GRAMMAR, WEBOGRAPHY_GRAMMAR
from nanami.nodes import Document, Webography
from nanami.renderers import HtmlRenderer


def parse_document(nama: str, max_depth: int = DEFAULT_MAX_RULE_DEPTH, memoise: bool = False) -> Document:
    """
    Parse Nama source into a Document, raising ParseError on failure.
    """
    return NAMA_GRAMMAR.parse(nama, max_depth=max_depth, memoise=memoise)


def parse_webography(webography: str, max_depth: int = DEFAULT_MAX_RULE_DEPTH, memoise: bool = False) -> Webography:
    """
    Parse webography source into a Webography, raising ParseError on failure.
    """
    return WEBOGRAPHY_GRAMMAR.parse(webography, max_depth=max_depth, memoise=memoise)


def render(document: Document) -> str:
    """
    Render a Document to unformatted HTML, raising RenderError on failure.
    """
    return HtmlRenderer().render(document)


def print_verbose_dump(label: str, value: object):
    try:
        print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BEGIN {label}')
        print(value if isinstance(value, str) else pprint.pformat(value))
        print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' END {label}')
        print('\n\n')
    except UnicodeEncodeError as unicode_encode_error:
        error_message = (
            'bad print due to non-Unicode terminal encoding. '
            'Try setting the `PYTHONIOENCODING` environment variable to `utf-8`.'
        )
        raise UnicodeError(error_message) from unicode_encode_error


def nama_to_html(nama: str, formatter: Optional[Callable[[str], str]] = None,
                 verbose_mode_enabled: bool = False) -> str:
    """
    Convert Nama to HTML.

    If `formatter` is given, the rendered HTML is passed through it (e.g. a pretty-printer).
    """
    document = parse_document(nama)
    if verbose_mode_enabled:
        print_verbose_dump('SYNTAX TREE', document)

    html = render(document)
    if verbose_mode_enabled:
        print_verbose_dump('RAW HTML', html)

    if formatter is not None:
        html = formatter(html)

    return html
