"""
# Nanami: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.
"""

from typing import Any


class CommittedMutateException(Exception):
    pass


class UncommittedApplyException(Exception):
    pass


class ParseError(Exception):
    """
    No grammar alternative matched at a required position.

    Reports the furthest position reached by any alternative (not merely where the root rule gave up),
    together with what was expected there and the stack of rules active at that point.
    """
    _offset: int
    _line_number: int
    _column_number: int
    _expected: tuple[str, ...]
    _rule_stack: tuple[str, ...]

    def __init__(self, offset: int, line_number: int, column_number: int,
                 expected: tuple[str, ...] = (), rule_stack: tuple[str, ...] = ()):
        self._offset = offset
        self._line_number = line_number
        self._column_number = column_number
        self._expected = expected
        self._rule_stack = rule_stack
        super().__init__(self.build_message())

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def column_number(self) -> int:
        return self._column_number

    @property
    def expected(self) -> tuple[str, ...]:
        return self._expected

    @property
    def rule_stack(self) -> tuple[str, ...]:
        return self._rule_stack

    def build_message(self) -> str:
        location = f'line {self._line_number}, column {self._column_number}'

        if len(self._expected) == 0:
            problem = 'no match'
        elif len(self._expected) == 1:
            problem = f'expected {self._expected[0]}'
        else:
            problem = f'expected one of {", ".join(self._expected)}'

        if len(self._rule_stack) > 0:
            rule_trail = ' > '.join(self._rule_stack)
            return f'error: {location}: {problem} (in rule {rule_trail})'

        return f'error: {location}: {problem}'


class ParseDepthError(ParseError):
    """
    Rule nesting went deeper than the depth budget of the parse.
    """
    _max_depth: int

    def __init__(self, offset: int, line_number: int, column_number: int, max_depth: int,
                 rule_stack: tuple[str, ...] = ()):
        self._max_depth = max_depth
        super().__init__(offset, line_number, column_number, rule_stack=rule_stack)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def build_message(self) -> str:
        message = (
            f'error: line {self.line_number}, column {self.column_number}: '
            f'nesting exceeds the maximum rule depth of {self._max_depth}'
        )
        if len(self.rule_stack) > 0:
            message += f' (at rule {self.rule_stack[-1]})'

        return message


class UnknownRuleError(KeyError):
    pass


class RenderError(Exception):
    pass


class UnhandledNodeError(RenderError):
    _node: Any

    def __init__(self, node: Any):
        self._node = node
        super().__init__(f'error: no rendering rule for node of type `{type(node).__name__}`')

    @property
    def node(self) -> Any:
        return self._node


class RenderDepthError(RenderError):
    _node: Any

    def __init__(self, node: Any):
        self._node = node
        super().__init__(f'error: node of type `{type(node).__name__}` is nested too deeply to render')

    @property
    def node(self) -> Any:
        return self._node
