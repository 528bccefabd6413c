"""
# Nanami: primitives.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Parsing-expression primitives.

A grammar is built by composing parsing expressions:
````
Literal            `«string»`
CharacterClass     one character matching `[«class»]`
AnyCharacter       one character
EndOfInput         the end of the buffer
Sequence           «e1» «e2» ...        (all, in order)
Choice             «e1» | «e2» | ...    (first success wins)
Repetition         «e»{min,max}         (greedy)
Absent             !«e»                 (negative lookahead)
Capture            «name»:«e»           (named fragment)
Build              «factory»(«e»)       (syntax-tree node)
Rule               «name» = «e»         (named, recursive, memoisable)
````
Matching never raises on an ordinary failure: an expression either returns an Outcome
(new position and the fragments produced) or None, in which case the caller's position is untouched.
The only exception raised while matching a defined grammar is ParseDepthError, when the rule-depth budget
or the interpreter stack is exhausted, whichever comes first.

All mutable state of a single parse lives in ParseContext,
so a built grammar is read-only and may be shared between threads.
"""

import abc
import re
from typing import Any, Callable, Iterable, NamedTuple, Optional

from nanami.constants import DEFAULT_MAX_RULE_DEPTH
from nanami.exceptions import (
    CommittedMutateException,
    ParseDepthError,
    ParseError,
    UncommittedApplyException,
    UnknownRuleError,
)

Fragment = tuple[Optional[str], Any]


class Outcome(NamedTuple):
    position: int
    fragments: tuple[Fragment, ...]


class Captures:
    """
    Read-only view over the fragments produced by a successful match.

    Named fragments come from Capture; anonymous fragments (name None) are nodes emitted by Build.
    """
    _fragments: tuple[Fragment, ...]

    def __init__(self, fragments: tuple[Fragment, ...]):
        self._fragments = fragments

    @property
    def fragments(self) -> tuple[Fragment, ...]:
        return self._fragments

    def has(self, name: str) -> bool:
        return any(fragment_name == name for fragment_name, _ in self._fragments)

    def get(self, name: str, default: Any = None) -> Any:
        for fragment_name, value in self._fragments:
            if fragment_name == name:
                return value

        return default

    def nodes(self) -> tuple[Any, ...]:
        return tuple(
            value
            for fragment_name, value in self._fragments
            if fragment_name is None
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Captures):
            return NotImplemented

        return self._fragments == other._fragments

    def __repr__(self) -> str:
        return f'Captures({self._fragments!r})'


def collapse_fragments(matched_text: str, fragments: tuple[Fragment, ...]) -> Any:
    """
    Reduce the result of a match to a single value.

    Specifically:
    - the matched text if there are no fragments
    - the node if there is exactly one anonymous fragment
    - a Captures view otherwise
    """
    if len(fragments) == 0:
        return matched_text

    if len(fragments) == 1:
        name, value = fragments[0]
        if name is None:
            return value

    return Captures(fragments)


class ParseContext:
    """
    Mutable state of a single parse over an immutable text buffer.
    """
    _text: str
    _max_depth: int
    _memo: Optional[dict[tuple['Rule', int], Optional[Outcome]]]
    _rule_stack: list[str]
    _lookahead_depth: int
    _furthest_position: int
    _furthest_expected: set[str]
    _furthest_rule_stack: tuple[str, ...]

    def __init__(self, text: str, max_depth: int = DEFAULT_MAX_RULE_DEPTH, memoise: bool = False):
        self._text = text
        self._max_depth = max_depth
        self._memo = {} if memoise else None
        self._rule_stack = []
        self._lookahead_depth = 0
        self._furthest_position = -1
        self._furthest_expected = set()
        self._furthest_rule_stack = ()

    @property
    def text(self) -> str:
        return self._text

    def record_failure(self, position: int, description: str):
        if self._lookahead_depth > 0:
            return

        if position > self._furthest_position:
            self._furthest_position = position
            self._furthest_expected = {description}
            self._furthest_rule_stack = tuple(self._rule_stack)
        elif position == self._furthest_position:
            self._furthest_expected.add(description)
            if len(self._rule_stack) > len(self._furthest_rule_stack):
                self._furthest_rule_stack = tuple(self._rule_stack)

    def enter_lookahead(self):
        self._lookahead_depth += 1

    def exit_lookahead(self):
        self._lookahead_depth -= 1

    def enter_rule(self, rule_name: str, position: int):
        if len(self._rule_stack) >= self._max_depth:
            raise self.build_depth_error(position, self._max_depth, (*self._rule_stack, rule_name))

        self._rule_stack.append(rule_name)

    def exit_rule(self):
        self._rule_stack.pop()

    def is_memoising(self) -> bool:
        return self._memo is not None

    def load_memo(self, rule: 'Rule', position: int) -> tuple[bool, Optional[Outcome]]:
        try:
            return True, self._memo[(rule, position)]
        except KeyError:
            return False, None

    def store_memo(self, rule: 'Rule', position: int, outcome: Optional[Outcome]):
        self._memo[(rule, position)] = outcome

    def compute_line_and_column(self, position: int) -> tuple[int, int]:
        line_number = self._text.count('\n', 0, position) + 1
        line_start = self._text.rfind('\n', 0, position) + 1
        column_number = position - line_start + 1

        return line_number, column_number

    def build_error(self) -> ParseError:
        position = max(self._furthest_position, 0)
        line_number, column_number = self.compute_line_and_column(position)

        return ParseError(
            position,
            line_number,
            column_number,
            expected=tuple(sorted(self._furthest_expected)),
            rule_stack=self._furthest_rule_stack,
        )

    def build_depth_error(self, position: int, max_depth: int, rule_stack: tuple[str, ...]) -> ParseDepthError:
        line_number, column_number = self.compute_line_and_column(position)
        return ParseDepthError(position, line_number, column_number, max_depth, rule_stack=rule_stack)

    def build_stack_exhausted_error(self, position: int) -> ParseDepthError:
        """
        Report running out of interpreter stack as the rule depth actually reached.
        """
        return self.build_depth_error(position, len(self._rule_stack), tuple(self._rule_stack))


class ParsingExpression(abc.ABC):
    """
    Base class for a parsing expression.
    """
    def match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        return self._match(context, position)

    @property
    @abc.abstractmethod
    def description(self) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        """
        Match at `position`, returning None on failure.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.description}>'


class Literal(ParsingExpression):
    _string: str

    def __init__(self, string: str):
        self._string = string

    @property
    def description(self) -> str:
        return f'`{self._string}`'

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        if context.text.startswith(self._string, position):
            return Outcome(position + len(self._string), ())

        context.record_failure(position, self.description)
        return None


class CharacterClass(ParsingExpression):
    """
    Consumes exactly one character belonging to a regular-expression character class.
    """
    _pattern_compiled: re.Pattern
    _description: str

    def __init__(self, character_class_regex: str, description: Optional[str] = None):
        self._pattern_compiled = re.compile(character_class_regex)
        if description is None:
            description = character_class_regex
        self._description = description

    @property
    def description(self) -> str:
        return self._description

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        text = context.text
        if position < len(text) and self._pattern_compiled.fullmatch(text[position]):
            return Outcome(position + 1, ())

        context.record_failure(position, self.description)
        return None


class AnyCharacter(ParsingExpression):
    @property
    def description(self) -> str:
        return 'any character'

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        if position < len(context.text):
            return Outcome(position + 1, ())

        context.record_failure(position, self.description)
        return None


class EndOfInput(ParsingExpression):
    @property
    def description(self) -> str:
        return 'end of input'

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        if position == len(context.text):
            return Outcome(position, ())

        context.record_failure(position, self.description)
        return None


class Sequence(ParsingExpression):
    _expressions: tuple[ParsingExpression, ...]

    def __init__(self, expressions: Iterable[ParsingExpression]):
        self._expressions = tuple(expressions)

    @property
    def description(self) -> str:
        return ' '.join(expression.description for expression in self._expressions)

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        fragments: list[Fragment] = []

        for expression in self._expressions:
            outcome = expression.match(context, position)
            if outcome is None:
                return None

            position = outcome.position
            fragments.extend(outcome.fragments)

        return Outcome(position, tuple(fragments))


class Choice(ParsingExpression):
    """
    Ordered choice: alternatives are tried left to right, and the first success is final.
    """
    _alternatives: tuple[ParsingExpression, ...]

    def __init__(self, alternatives: Iterable[ParsingExpression]):
        self._alternatives = tuple(alternatives)

    @property
    def description(self) -> str:
        return ' | '.join(alternative.description for alternative in self._alternatives)

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        for alternative in self._alternatives:
            outcome = alternative.match(context, position)
            if outcome is not None:
                return outcome

        return None


class Repetition(ParsingExpression):
    """
    Greedy repetition, between `min_count` and `max_count` (unbounded if None) times.

    An iteration that succeeds without consuming anything ends the repetition,
    so that repeating an expression which can match empty still terminates.
    """
    _expression: ParsingExpression
    _min_count: int
    _max_count: Optional[int]

    def __init__(self, expression: ParsingExpression, min_count: int = 0, max_count: Optional[int] = None):
        self._expression = expression
        self._min_count = min_count
        self._max_count = max_count

    @property
    def description(self) -> str:
        max_count = '' if self._max_count is None else self._max_count
        return f'({self._expression.description}){{{self._min_count},{max_count}}}'

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        fragments: list[Fragment] = []
        count = 0

        while self._max_count is None or count < self._max_count:
            outcome = self._expression.match(context, position)
            if outcome is None:
                break

            fragments.extend(outcome.fragments)
            count += 1

            if outcome.position == position:
                break
            position = outcome.position

        if count < self._min_count:
            return None

        return Outcome(position, tuple(fragments))


class Absent(ParsingExpression):
    """
    Negative lookahead: succeeds, consuming nothing, iff the expression fails here.
    """
    _expression: ParsingExpression

    def __init__(self, expression: ParsingExpression):
        self._expression = expression

    @property
    def description(self) -> str:
        return f'not {self._expression.description}'

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        context.enter_lookahead()
        try:
            outcome = self._expression.match(context, position)
        finally:
            context.exit_lookahead()

        if outcome is None:
            return Outcome(position, ())

        return None


class Capture(ParsingExpression):
    """
    Tags the value of a successful match with a field name.

    See `collapse_fragments` for what the value is.
    """
    _name: str
    _expression: ParsingExpression

    def __init__(self, name: str, expression: ParsingExpression):
        self._name = name
        self._expression = expression

    @property
    def description(self) -> str:
        return self._expression.description

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        outcome = self._expression.match(context, position)
        if outcome is None:
            return None

        value = collapse_fragments(context.text[position:outcome.position], outcome.fragments)

        return Outcome(outcome.position, ((self._name, value),))


class Build(ParsingExpression):
    """
    Converts the fragments of a successful match into a single anonymous fragment via a factory.
    """
    _expression: ParsingExpression
    _factory: Callable[[Captures], Any]

    def __init__(self, expression: ParsingExpression, factory: Callable[[Captures], Any]):
        self._expression = expression
        self._factory = factory

    @property
    def description(self) -> str:
        return self._expression.description

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        outcome = self._expression.match(context, position)
        if outcome is None:
            return None

        node = self._factory(Captures(outcome.fragments))

        return Outcome(outcome.position, ((None, node),))


class Rule(ParsingExpression):
    """
    A named parsing expression.

    A rule may be referenced before it is defined (which is how recursive rules are written),
    but must be defined exactly once before it is matched.
    """
    _name: str
    _expression: Optional[ParsingExpression]

    def __init__(self, name: str, expression: Optional[ParsingExpression] = None):
        self._name = name
        self._expression = expression

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._name

    @property
    def is_defined(self) -> bool:
        return self._expression is not None

    def define(self, expression: ParsingExpression):
        if self._expression is not None:
            raise CommittedMutateException(f'error: rule `{self._name}` is already defined')

        self._expression = expression

    def _match(self, context: ParseContext, position: int) -> Optional[Outcome]:
        if self._expression is None:
            raise UncommittedApplyException(f'error: rule `{self._name}` matched before being defined')

        context.enter_rule(self._name, position)
        try:
            if context.is_memoising():
                is_cached, outcome = context.load_memo(self, position)
                if is_cached:
                    return outcome

                outcome = self._expression.match(context, position)
                context.store_memo(self, position, outcome)
                return outcome

            return self._expression.match(context, position)
        except RecursionError as recursion_error:
            # if building the error overflows too, the next enclosing rule retries with more stack
            raise context.build_stack_exhausted_error(position) from recursion_error
        finally:
            context.exit_rule()


class Grammar:
    """
    A set of named rules with a root rule.

    Parsing a text requires the rule to consume all of it.
    """
    _name: str
    _rule_from_name: dict[str, 'Rule']
    _root_rule_name: str

    def __init__(self, name: str, rules: Iterable['Rule'], root_rule_name: str):
        self._name = name
        self._rule_from_name = {}
        for rule in rules:
            if not rule.is_defined:
                raise UncommittedApplyException(f'error: grammar `{name}`: rule `{rule.name}` is never defined')
            self._rule_from_name[rule.name] = rule

        if root_rule_name not in self._rule_from_name:
            raise UnknownRuleError(root_rule_name)
        self._root_rule_name = root_rule_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(self._rule_from_name)

    def rule(self, rule_name: str) -> 'Rule':
        try:
            return self._rule_from_name[rule_name]
        except KeyError:
            raise UnknownRuleError(rule_name)

    def parse(self, text: str, max_depth: int = DEFAULT_MAX_RULE_DEPTH, memoise: bool = False) -> Any:
        return self.parse_rule(self._root_rule_name, text, max_depth, memoise)

    def parse_rule(self, rule_name: str, text: str,
                   max_depth: int = DEFAULT_MAX_RULE_DEPTH, memoise: bool = False) -> Any:
        """
        Parse the whole of `text` as `rule_name`.

        Returns the collapsed value of the match (see `collapse_fragments`), or raises ParseError.
        """
        rule = self.rule(rule_name)
        context = ParseContext(text, max_depth, memoise)

        outcome = Sequence([rule, EndOfInput()]).match(context, 0)
        if outcome is None:
            raise context.build_error()

        return collapse_fragments(text, outcome.fragments)


def literal(string: str) -> Literal:
    return Literal(string)


def character_class(character_class_regex: str, description: Optional[str] = None) -> CharacterClass:
    return CharacterClass(character_class_regex, description)


def any_character() -> AnyCharacter:
    return AnyCharacter()


def end_of_input() -> EndOfInput:
    return EndOfInput()


def sequence(*expressions: ParsingExpression) -> Sequence:
    return Sequence(expressions)


def choice(*alternatives: ParsingExpression) -> Choice:
    return Choice(alternatives)


def zero_or_more(expression: ParsingExpression) -> Repetition:
    return Repetition(expression, min_count=0)


def one_or_more(expression: ParsingExpression) -> Repetition:
    return Repetition(expression, min_count=1)


def exactly(count: int, expression: ParsingExpression) -> Repetition:
    return Repetition(expression, min_count=count, max_count=count)


def maybe(expression: ParsingExpression) -> Repetition:
    return Repetition(expression, min_count=0, max_count=1)


def absent(expression: ParsingExpression) -> Absent:
    return Absent(expression)


def capture(name: str, expression: ParsingExpression) -> Capture:
    return Capture(name, expression)


def build(expression: ParsingExpression, factory: Callable[[Captures], Any]) -> Build:
    return Build(expression, factory)
