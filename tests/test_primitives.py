"""
# Nanami: test_primitives.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `primitives.py`.
"""

import unittest

from nanami.exceptions import CommittedMutateException, ParseDepthError, ParseError, UncommittedApplyException
from nanami.primitives import (
    Captures,
    Grammar,
    Outcome,
    ParseContext,
    Rule,
    absent,
    any_character,
    build,
    capture,
    character_class,
    choice,
    collapse_fragments,
    end_of_input,
    exactly,
    literal,
    maybe,
    one_or_more,
    sequence,
    zero_or_more,
)


def build_parentheses_grammar() -> Grammar:
    nested = Rule('nested')
    nested.define(sequence(literal('('), maybe(nested), literal(')')))

    return Grammar('parentheses', [nested], root_rule_name='nested')


class TestPrimitives(unittest.TestCase):
    def test_literal(self):
        self.assertEqual(literal('ab').match(ParseContext('abc'), 0), Outcome(2, ()))
        self.assertEqual(literal('bc').match(ParseContext('abc'), 1), Outcome(3, ()))
        self.assertIsNone(literal('ab').match(ParseContext('a'), 0))

    def test_character_class(self):
        digit = character_class(r'[0-9]', 'digit')
        self.assertEqual(digit.match(ParseContext('7x'), 0), Outcome(1, ()))
        self.assertIsNone(digit.match(ParseContext('7x'), 1))
        self.assertIsNone(digit.match(ParseContext('7'), 1))
        self.assertEqual(character_class(r'[^\n]').match(ParseContext('\t'), 0), Outcome(1, ()))
        self.assertIsNone(character_class(r'[^\n]').match(ParseContext('\n'), 0))

    def test_any_character_and_end_of_input(self):
        self.assertEqual(any_character().match(ParseContext('x'), 0), Outcome(1, ()))
        self.assertIsNone(any_character().match(ParseContext('x'), 1))
        self.assertEqual(end_of_input().match(ParseContext('x'), 1), Outcome(1, ()))
        self.assertIsNone(end_of_input().match(ParseContext('x'), 0))

    def test_sequence(self):
        self.assertEqual(sequence(literal('a'), literal('b')).match(ParseContext('abc'), 0), Outcome(2, ()))
        self.assertIsNone(sequence(literal('a'), literal('c')).match(ParseContext('abc'), 0))
        self.assertEqual(sequence().match(ParseContext('abc'), 1), Outcome(1, ()))

    def test_choice_is_ordered(self):
        self.assertEqual(choice(literal('a'), literal('ab')).match(ParseContext('ab'), 0), Outcome(1, ()))
        self.assertEqual(choice(literal('ab'), literal('a')).match(ParseContext('ab'), 0), Outcome(2, ()))
        self.assertEqual(choice(literal('x'), literal('a')).match(ParseContext('ab'), 0), Outcome(1, ()))
        self.assertIsNone(choice(literal('x'), literal('y')).match(ParseContext('ab'), 0))

    def test_repetition(self):
        a = literal('a')
        self.assertEqual(zero_or_more(a).match(ParseContext('aaab'), 0), Outcome(3, ()))
        self.assertEqual(zero_or_more(a).match(ParseContext('b'), 0), Outcome(0, ()))
        self.assertEqual(one_or_more(a).match(ParseContext('aab'), 0), Outcome(2, ()))
        self.assertIsNone(one_or_more(a).match(ParseContext('b'), 0))
        self.assertEqual(exactly(2, a).match(ParseContext('aaa'), 0), Outcome(2, ()))
        self.assertIsNone(exactly(3, a).match(ParseContext('aa'), 0))
        self.assertEqual(maybe(a).match(ParseContext('aa'), 0), Outcome(1, ()))
        self.assertEqual(maybe(a).match(ParseContext('b'), 0), Outcome(0, ()))

    def test_repetition_of_empty_match_terminates(self):
        self.assertEqual(zero_or_more(maybe(literal('x'))).match(ParseContext('y'), 0), Outcome(0, ()))
        self.assertEqual(one_or_more(zero_or_more(literal('x'))).match(ParseContext('xxy'), 0), Outcome(2, ()))

    def test_absent(self):
        self.assertEqual(absent(literal('a')).match(ParseContext('b'), 0), Outcome(0, ()))
        self.assertIsNone(absent(literal('a')).match(ParseContext('a'), 0))

        everything_but_semicolon = one_or_more(sequence(absent(literal(';')), any_character()))
        self.assertEqual(everything_but_semicolon.match(ParseContext('abc;d'), 0), Outcome(3, ()))

    def test_capture(self):
        word = capture('word', one_or_more(character_class(r'[a-z]')))
        self.assertEqual(word.match(ParseContext('abc1'), 0), Outcome(3, (('word', 'abc'),)))
        self.assertIsNone(word.match(ParseContext('1abc'), 0))

        pair = capture('pair', sequence(capture('left', literal('a')), literal('='), capture('right', literal('b'))))
        self.assertEqual(
            pair.match(ParseContext('a=b'), 0),
            Outcome(3, (('pair', Captures((('left', 'a'), ('right', 'b')))),)),
        )

    def test_build(self):
        shout = build(capture('word', literal('hey')), lambda captures: captures.get('word').upper())
        self.assertEqual(shout.match(ParseContext('hey'), 0), Outcome(3, ((None, 'HEY'),)))

        shouts = capture('shouts', one_or_more(sequence(shout, maybe(literal(' ')))))
        self.assertEqual(
            shouts.match(ParseContext('hey hey'), 0),
            Outcome(7, (('shouts', Captures(((None, 'HEY'), (None, 'HEY')))),)),
        )

    def test_captures(self):
        captures = Captures((('name', 'x'), (None, 1), ('name', 'y'), (None, 2)))
        self.assertTrue(captures.has('name'))
        self.assertFalse(captures.has('url'))
        self.assertEqual(captures.get('name'), 'x')
        self.assertIsNone(captures.get('url'))
        self.assertEqual(captures.get('url', ''), '')
        self.assertEqual(captures.nodes(), (1, 2))

    def test_collapse_fragments(self):
        self.assertEqual(collapse_fragments('abc', ()), 'abc')
        self.assertEqual(collapse_fragments('abc', ((None, 42),)), 42)
        self.assertEqual(collapse_fragments('abc', (('n', 'a'),)), Captures((('n', 'a'),)))
        self.assertEqual(collapse_fragments('abc', ((None, 1), (None, 2))), Captures(((None, 1), (None, 2))))

    def test_rule_definition(self):
        rule = Rule('rule')
        with self.assertRaises(UncommittedApplyException):
            rule.match(ParseContext(''), 0)
        with self.assertRaises(UncommittedApplyException):
            Grammar('broken', [rule], root_rule_name='rule')

        rule.define(literal('x'))
        with self.assertRaises(CommittedMutateException):
            rule.define(literal('y'))

    def test_grammar_parse(self):
        grammar = build_parentheses_grammar()
        self.assertEqual(grammar.parse('()'), '()')
        self.assertEqual(grammar.parse('((()))'), '((()))')

        with self.assertRaises(ParseError):
            grammar.parse('')
        with self.assertRaises(ParseError):
            grammar.parse('())')
        with self.assertRaises(KeyError):
            grammar.parse_rule('absent_rule', '()')

    def test_grammar_parse_error_reports_furthest_failure(self):
        grammar = build_parentheses_grammar()
        with self.assertRaises(ParseError) as context_manager:
            grammar.parse('(()')

        parse_error = context_manager.exception
        self.assertEqual(parse_error.offset, 3)
        self.assertEqual(parse_error.line_number, 1)
        self.assertEqual(parse_error.column_number, 4)
        self.assertEqual(parse_error.expected, ('`)`',))
        self.assertEqual(parse_error.rule_stack, ('nested',))
        self.assertEqual(str(parse_error), 'error: line 1, column 4: expected `)` (in rule nested)')

    def test_grammar_parse_depth_budget(self):
        grammar = build_parentheses_grammar()
        self.assertEqual(grammar.parse('((()))', max_depth=4), '((()))')

        with self.assertRaises(ParseDepthError) as context_manager:
            grammar.parse('((()))', max_depth=3)
        self.assertEqual(context_manager.exception.max_depth, 3)
        self.assertEqual(context_manager.exception.offset, 3)

    def test_grammar_parse_memoised(self):
        grammar = build_parentheses_grammar()
        self.assertEqual(grammar.parse('((()))', memoise=True), grammar.parse('((()))'))
        with self.assertRaises(ParseError):
            grammar.parse('(()', memoise=True)


if __name__ == '__main__':
    unittest.main()
