"""
# Nanami: test_core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `core.py`.
"""

import contextlib
import io
import unittest

from nanami.core import nama_to_html, parse_document, parse_webography, render
from nanami.exceptions import ParseError
from nanami.nodes import Case, Content, Document, Entry, Plain, Text, Webography
from nanami.utilities import prettify_html

SAMPLE_NAMA = '''\
title: Sample
!nlp
content {
    case(intro)(https://example.com/intro) {
        text {
            Welcome to <em>Nama</em>, see ${smith_2021}.
        }
        sources {}
    }
}
'''


class TestCore(unittest.TestCase):
    def test_parse_document(self):
        document = parse_document(SAMPLE_NAMA)
        self.assertEqual(document.title, 'Sample')
        self.assertTrue(document.nlp_flag)
        self.assertEqual(len(document.content.cases), 1)

        intro_case = document.content.cases[0]
        self.assertEqual(intro_case.name, 'intro')
        self.assertEqual(intro_case.url, 'https://example.com/intro')
        self.assertEqual(len(intro_case.body), 2)

        self.assertEqual(parse_document(SAMPLE_NAMA, memoise=True), document)

        with self.assertRaises(ParseError):
            parse_document('content {}')

    def test_parse_webography(self):
        self.assertEqual(
            parse_webography('T: a\nL: https://a.example\nN: b\nD: 2025\n'),
            Webography(entries=(Entry(title='a', link='https://a.example', name='b', date='2025'),)),
        )
        with self.assertRaises(ParseError):
            parse_webography('L: https://a.example\n')

    def test_render(self):
        document = Document(
            title='Rendered',
            content=Content(cases=(Case(name='a', body=(Text(inline=(Plain('x'),)),)),)),
        )
        html = render(document)
        self.assertIn('<title>Rendered</title>', html)
        self.assertIn('<h1>Rendered</h1>', html)
        self.assertIn('<div class="content"><div class="case" data-name="a">x</div></div>', html)
        self.assertEqual(render(document), html)

    def test_nama_to_html(self):
        html = nama_to_html(SAMPLE_NAMA)
        self.assertEqual(html, render(parse_document(SAMPLE_NAMA)))
        self.assertIn(
            '<div class="case" data-name="intro" data-url="https://example.com/intro">'
            'Welcome to <em>Nama</em>, see smith_2021.'
            '<div class="sources"></div>'
            '</div>',
            html,
        )

        self.assertEqual(nama_to_html(SAMPLE_NAMA, formatter=str.upper), html.upper())

    def test_nama_to_html_prettified(self):
        html = nama_to_html(SAMPLE_NAMA, formatter=prettify_html)
        self.assertTrue(html.startswith('<!DOCTYPE html>\n'))
        self.assertIn('<h1>\n', html)
        self.assertIn('Sample', html)

    def test_nama_to_html_verbose(self):
        standard_output = io.StringIO()
        with contextlib.redirect_stdout(standard_output):
            nama_to_html(SAMPLE_NAMA, verbose_mode_enabled=True)

        verbose_output = standard_output.getvalue()
        self.assertIn('BEGIN SYNTAX TREE', verbose_output)
        self.assertIn("title='Sample'", verbose_output)
        self.assertIn('BEGIN RAW HTML', verbose_output)


if __name__ == '__main__':
    unittest.main()
