"""Statement grammar used to split a buffer into top-level statements.

The editor only needs three answers from a grammar: the buffer splits into
statements, the buffer is definitely malformed, or the buffer is still open
(an unclosed bracket, quote or block comment). ``StatementGrammar`` captures
that contract; ``LarkStatementGrammar`` answers it for a small Scala-flavoured
statement language.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Iterator, Optional, Protocol, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from lark.lark import PostLex
from lark.lexer import PatternStr

STATEMENT_GRAMMAR = r'''
start: _sep* (stmt _sep+)* stmt?

stmt: value_def
    | method_def
    | import_stmt
    | assignment
    | expr

_sep: ";" | _NL

value_def: ("val" | "var") pattern [":" type] "=" expr
pattern: NAME
       | "(" NAME ("," NAME)+ ")"
method_def: "def" NAME [params] [":" type] "=" expr
params: "(" [param ("," param)*] ")"
param: NAME ":" type
type: NAME ("." NAME)* [type_args]
type_args: "[" type ("," type)* "]"

import_stmt: "import" import_path
import_path: NAME ("." NAME)* ["." import_selectors]
import_selectors: "{" NAME ("," NAME)* "}"

assignment: postfix "=" expr

?expr: "if" "(" expr ")" expr "else" expr -> if_expr
     | disjunction

?disjunction: disjunction "||" conjunction
            | conjunction

?conjunction: conjunction "&&" comparison
            | comparison

?comparison: comparison "==" sum -> eq
           | comparison "!=" sum -> ne
           | comparison "<" sum -> lt
           | comparison "<=" sum -> le
           | comparison ">" sum -> gt
           | comparison ">=" sum -> ge
           | sum

?sum: sum "+" product -> add
    | sum "-" product -> sub
    | product

?product: product "*" unary -> mul
        | product "/" unary -> div
        | product "%" unary -> mod
        | unary

?unary: "-" unary -> neg
      | "!" unary -> not_
      | postfix

?postfix: postfix "." NAME -> member
        | postfix "(" [arguments] ")" -> call
        | atom

arguments: expr ("," expr)*

?atom: NUMBER
     | STRING
     | CHAR
     | NAME
     | "true"
     | "false"
     | "null"
     | "(" ")" -> unit
     | "(" expr ")" -> group
     | "(" expr ("," expr)+ ")" -> tuple
     | block

block: "{" _sep* (stmt _sep+)* stmt? "}"

NAME: /[A-Za-z_$][A-Za-z0-9_$]*/
NUMBER: /\d+(?:\.\d+)?(?:[eE][+-]?\d+)?[lLfFdD]?/
STRING: /"""[\s\S]*?"""|"(?:\\.|[^"\\\n])*"/
CHAR: /'(?:\\.|[^'\\\n])'/

_NL: /(\r?\n)+/
WS: /[ \t\f\r]+/
LINE_COMMENT: /\/\/[^\n]*/
BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

%ignore WS
%ignore LINE_COMMENT
%ignore BLOCK_COMMENT
'''

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")": "(", "]": "[", "}": "{"}
_LITERAL_TYPES = {"NAME", "NUMBER", "STRING", "CHAR"}
# a newline directly after one of these keeps the statement going
_CONTINUATION_VALUES = frozenset(
    "+ - * / % = == != < <= > >= && || ! , . else".split()
)
_CHAR_LITERAL = re.compile(r"'(?:\\.|[^'\\\n])'")
_SNIPPET_WIDTH = 10


@dataclass(frozen=True, slots=True)
class Matched:
    """Every statement span the grammar consumed, plus the consumed length."""

    spans: tuple[tuple[int, int], ...]
    end: int


@dataclass(frozen=True, slots=True)
class Violation:
    expected: tuple[str, ...]
    found: str
    position: int

    @property
    def message(self) -> str:
        alternatives = " | ".join(self.expected) if self.expected else "nothing"
        return f"found {self.found}, expected {alternatives} at index {self.position}"


GrammarResult = Union[Matched, Violation]


class StatementGrammar(Protocol):
    """Oracle deciding how a buffer splits into statements.

    ``split`` returns ``None`` when the buffer is structurally unterminated.
    """

    def split(self, text: str) -> Optional[GrammarResult]:
        ...


class StatementLayout(PostLex):
    """Drops newlines that cannot end a statement.

    Newlines inside ``(`` or ``[`` and newlines following an infix operator
    are layout; inside ``{`` they separate the block's statements.
    """

    always_accept = ("_NL",)

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        nesting: list[str] = []
        previous: Optional[Token] = None
        for token in stream:
            if token.type == "_NL":
                if nesting and nesting[-1] != "{":
                    continue
                if previous is not None and _continues_statement(previous):
                    continue
                yield token
                continue
            if token.type not in _LITERAL_TYPES:
                if token.value in _OPENERS:
                    nesting.append(token.value)
                elif token.value in _CLOSERS and nesting:
                    nesting.pop()
            previous = token
            yield token


def _continues_statement(token: Token) -> bool:
    return token.type not in _LITERAL_TYPES and token.value in _CONTINUATION_VALUES


def is_unterminated(text: str) -> bool:
    """True when ``text`` ends inside a bracket, string or block comment.

    A closer that does not match the innermost opener stops the scan; that
    input is malformed rather than unfinished.
    """

    nesting: list[str] = []
    index, length = 0, len(text)
    while index < length:
        char = text[index]
        if text.startswith("//", index):
            newline = text.find("\n", index)
            index = length if newline < 0 else newline
            continue
        if text.startswith("/*", index):
            close = text.find("*/", index + 2)
            if close < 0:
                return True
            index = close + 2
            continue
        if text.startswith('"""', index):
            close = text.find('"""', index + 3)
            if close < 0:
                return True
            index = close + 3
            continue
        if char == '"':
            index += 1
            while index < length and text[index] not in '"\n':
                index += 2 if text[index] == "\\" else 1
            if index >= length:
                return True
            index += 1
            continue
        if char == "'":
            literal = _CHAR_LITERAL.match(text, index)
            index = literal.end() if literal else index + 1
            continue
        if char in _OPENERS:
            nesting.append(char)
        elif char in _CLOSERS:
            if not nesting or nesting[-1] != _CLOSERS[char]:
                return False
            nesting.pop()
        index += 1
    return bool(nesting)


class LarkStatementGrammar:
    """LALR statement grammar; one instance is safe to share."""

    def __init__(self, grammar: str = STATEMENT_GRAMMAR) -> None:
        self._lark = Lark(
            grammar,
            start="start",
            parser="lalr",
            lexer="basic",
            postlex=StatementLayout(),
            propagate_positions=True,
            keep_all_tokens=True,
            maybe_placeholders=False,
        )

    def split(self, text: str) -> Optional[GrammarResult]:
        if is_unterminated(text):
            return None
        try:
            tree = self._lark.parse(text)
        except UnexpectedInput as exc:
            return self._violation(text, exc)
        spans = tuple(
            (child.meta.start_pos, child.meta.end_pos)
            for child in tree.children
            if isinstance(child, Tree) and child.data == "stmt"
        )
        return Matched(spans=spans, end=len(text))

    def _violation(self, text: str, exc: UnexpectedInput) -> Violation:
        expected: Iterable[str]
        if isinstance(exc, UnexpectedToken):
            token = exc.token
            position = len(text) if token.type == "$END" else token.start_pos
            expected = exc.expected or ()
        elif isinstance(exc, UnexpectedCharacters):
            position = exc.pos_in_stream
            expected = exc.allowed or ()
        else:
            position = len(text)
            expected = getattr(exc, "expected", None) or ()
        return Violation(
            expected=tuple(sorted({self._describe(name) for name in expected})),
            found=_snippet(text, position),
            position=position,
        )

    def _describe(self, terminal_name: str) -> str:
        if terminal_name == "$END":
            return "end-of-input"
        try:
            terminal = self._lark.get_terminal(terminal_name)
        except KeyError:
            return terminal_name
        if isinstance(terminal.pattern, PatternStr):
            return f'"{terminal.pattern.value}"'
        return terminal_name


def _snippet(text: str, position: int) -> str:
    chunk = text[position : position + _SNIPPET_WIDTH]
    if not chunk:
        return "end-of-input"
    escaped = chunk.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')
    return f'"{escaped}"'


@lru_cache(maxsize=None)
def default_grammar() -> LarkStatementGrammar:
    return LarkStatementGrammar()


__all__ = [
    "GrammarResult",
    "LarkStatementGrammar",
    "Matched",
    "STATEMENT_GRAMMAR",
    "StatementGrammar",
    "StatementLayout",
    "Violation",
    "default_grammar",
    "is_unterminated",
]
