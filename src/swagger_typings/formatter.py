"""
Formatting of candidate declaration text.

``BuiltinFormatter`` understands the TypeScript subset the emitters
produce: interface and type alias declarations built from object types,
unions, arrays, indexed access, names and literals. It doubles as a syntax
check: anything outside that grammar raises ``FormatError``.
``PrettierFormatter`` delegates to an installed prettier instead.
"""

import re
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple, Union

from .config import StyleOptions, SwaggerTypingsConfig
from .exceptions import FormatError

INDENT = "  "

_TOKEN_RE = re.compile(
    r"""
      (?P<newline>\n)
    | (?P<space>[ \t\r\f\v]+)
    | (?P<comment>/\*.*?\*/|//[^\n]*)
    | (?P<string>'(?:[^'\\\n]|\\.)*'|"(?:[^"\\\n]|\\.)*")
    | (?P<number>\d+(?:\.\d+)?)
    | (?P<ident>[A-Za-z_$][\w$]*)
    | (?P<punct>[{}\[\]()<>:;,|&?=.])
    """,
    re.VERBOSE | re.DOTALL,
)

_MODIFIERS = ("export", "declare")


class Formatter(Protocol):
    def format(self, text: str, style: StyleOptions) -> str:
        ...


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int
    column: int
    newline_before: bool = False
    comments: Tuple[str, ...] = ()


def tokenize(text: str) -> List[Token]:
    """Split text into tokens, attaching comments to the token that follows them.

    Raises:
        FormatError: On characters outside the grammar, unterminated strings
            or unterminated comments
    """
    tokens = []
    comments: List[str] = []
    newline = False
    pos, line, line_start = 0, 1, 0

    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise FormatError(
                f"Unexpected character {text[pos]!r}", line, pos - line_start + 1
            )
        kind, value = match.lastgroup, match.group()
        if kind == "newline":
            newline = True
            line += 1
            line_start = match.end()
        elif kind == "comment":
            comments.append(value)
            if "\n" in value:
                newline = True
                line += value.count("\n")
                line_start = pos + value.rindex("\n") + 1
        elif kind != "space":
            tokens.append(
                Token(kind, value, line, pos - line_start + 1, newline, tuple(comments))
            )
            newline = False
            comments = []
        pos = match.end()

    tokens.append(Token("eof", "", line, pos - line_start + 1, newline, tuple(comments)))
    return tokens


# Syntax tree


@dataclass(frozen=True)
class _Object:
    members: Tuple["_Member", ...]
    trailing: Tuple[str, ...] = ()


@dataclass(frozen=True)
class _Member:
    comments: Tuple[str, ...]
    key: Token
    optional: bool
    type: "_Type"


@dataclass(frozen=True)
class _Union:
    items: Tuple["_Type", ...]


@dataclass(frozen=True)
class _Array:
    inner: "_Type"


@dataclass(frozen=True)
class _Index:
    inner: "_Type"
    key: Token


@dataclass(frozen=True)
class _Paren:
    inner: "_Type"


@dataclass(frozen=True)
class _Name:
    text: str


@dataclass(frozen=True)
class _Literal:
    token: Token


_Type = Union[_Object, _Union, _Array, _Index, _Paren, _Name, _Literal]


@dataclass(frozen=True)
class _Declaration:
    comments: Tuple[str, ...]
    modifiers: Tuple[str, ...]
    keyword: str
    name: str
    body: _Type


class _Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "eof":
            self.pos += 1
        return token

    def at(self, value: str) -> bool:
        token = self.peek()
        return token.kind == "punct" and token.value == value

    def error(self, token: Token, message: str) -> FormatError:
        found = "end of input" if token.kind == "eof" else repr(token.value)
        return FormatError(f"{message}, found {found}", token.line, token.column)

    def expect(self, value: str) -> Token:
        token = self.advance()
        if token.kind != "punct" or token.value != value:
            raise self.error(token, f"Expected {value!r}")
        return token

    def program(self) -> Tuple[List[_Declaration], Tuple[str, ...]]:
        declarations = []
        while self.peek().kind != "eof":
            declarations.append(self.declaration())
        return declarations, self.peek().comments

    def declaration(self) -> _Declaration:
        first = self.peek()
        modifiers = []
        while self.peek().kind == "ident" and self.peek().value in _MODIFIERS:
            modifiers.append(self.advance().value)

        keyword = self.advance()
        if keyword.kind != "ident" or keyword.value not in ("interface", "type"):
            raise self.error(keyword, "Expected 'interface' or 'type'")
        name = self.advance()
        if name.kind != "ident":
            raise self.error(name, "Expected identifier")

        if keyword.value == "interface":
            body = self.object()
        else:
            self.expect("=")
            body = self.type()
        if self.at(";"):
            self.advance()
        return _Declaration(first.comments, tuple(modifiers), keyword.value, name.value, body)

    def object(self) -> _Object:
        self.expect("{")
        members = []
        while not self.at("}"):
            if self.peek().kind == "eof":
                raise self.error(self.peek(), "Expected '}'")
            members.append(self.member())
            if self.at(";") or self.at(","):
                self.advance()
            elif not self.at("}") and not self.peek().newline_before:
                raise self.error(self.peek(), "Expected ';'")
        closing = self.advance()
        return _Object(tuple(members), closing.comments)

    def member(self) -> _Member:
        key = self.advance()
        if key.kind not in ("ident", "string", "number"):
            raise self.error(key, "Expected property name")
        optional = False
        if self.at("?"):
            self.advance()
            optional = True
        self.expect(":")
        return _Member(key.comments, key, optional, self.type())

    def type(self) -> _Type:
        if self.at("|"):
            self.advance()
        items = [self.postfix()]
        while self.at("|"):
            self.advance()
            items.append(self.postfix())
        if len(items) == 1:
            return items[0]
        return _Union(tuple(items))

    def postfix(self) -> _Type:
        node = self.primary()
        while self.at("["):
            self.advance()
            if self.at("]"):
                self.advance()
                node = _Array(node)
                continue
            key = self.advance()
            if key.kind not in ("string", "number"):
                raise self.error(key, "Expected index key")
            self.expect("]")
            node = _Index(node, key)
        return node

    def primary(self) -> _Type:
        if self.at("{"):
            return self.object()
        if self.at("("):
            self.advance()
            inner = self.type()
            self.expect(")")
            return _Paren(inner)

        token = self.advance()
        if token.kind == "ident":
            parts = [token.value]
            while self.at("."):
                self.advance()
                part = self.advance()
                if part.kind != "ident":
                    raise self.error(part, "Expected identifier")
                parts.append(part.value)
            return _Name(".".join(parts))
        if token.kind in ("string", "number"):
            return _Literal(token)
        raise self.error(token, "Expected type")


def requote(literal: str, quote: str) -> str:
    """Re-delimit a string literal with ``quote``, fixing escapes of both quote kinds."""
    body = literal[1:-1]
    out = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            following = body[index + 1]
            if following in "'\"":
                out.append("\\" + following if following == quote else following)
            else:
                out.append(char + following)
            index += 2
            continue
        out.append("\\" + char if char == quote else char)
        index += 1
    return quote + "".join(out) + quote


class _Printer:
    def __init__(self, style: StyleOptions):
        self.terminator = ";" if style.semi else ""
        self.quote = "'" if style.single_quote else '"'

    def program(self, declarations: Sequence[_Declaration], trailing: Sequence[str]) -> str:
        blocks = [self.declaration(declaration) for declaration in declarations]
        if trailing:
            blocks.append("\n".join(self.comment(text, 0) for text in trailing))
        if not blocks:
            return ""
        return "\n\n".join(blocks) + "\n"

    def declaration(self, declaration: _Declaration) -> str:
        lines = [self.comment(text, 0) for text in declaration.comments]
        head = " ".join(declaration.modifiers + (declaration.keyword, declaration.name))
        if declaration.keyword == "interface":
            lines.append(f"{head} {self.type(declaration.body, 0)}")
        else:
            lines.append(f"{head} = {self.type(declaration.body, 0)}{self.terminator}")
        return "\n".join(lines)

    def comment(self, text: str, level: int) -> str:
        pad = INDENT * level
        lines = [line.strip() for line in text.splitlines()]
        return "\n".join([pad + lines[0]] + [f"{pad} {line}" for line in lines[1:]])

    def token(self, token: Token) -> str:
        if token.kind == "string":
            return requote(token.value, self.quote)
        return token.value

    def object(self, node: _Object, level: int) -> str:
        if not node.members and not node.trailing:
            return "{}"
        inner = INDENT * (level + 1)
        lines = ["{"]
        for member in node.members:
            lines.extend(self.comment(text, level + 1) for text in member.comments)
            mark = "?" if member.optional else ""
            type_ = self.type(member.type, level + 1)
            lines.append(f"{inner}{self.token(member.key)}{mark}: {type_}{self.terminator}")
        lines.extend(self.comment(text, level + 1) for text in node.trailing)
        lines.append(INDENT * level + "}")
        return "\n".join(lines)

    def type(self, node: _Type, level: int) -> str:
        if isinstance(node, _Object):
            return self.object(node, level)
        if isinstance(node, _Union):
            return " | ".join(self.type(item, level) for item in node.items)
        if isinstance(node, _Array):
            return f"{self.type(node.inner, level)}[]"
        if isinstance(node, _Index):
            return f"{self.type(node.inner, level)}[{self.token(node.key)}]"
        if isinstance(node, _Paren):
            return f"({self.type(node.inner, level)})"
        if isinstance(node, _Name):
            return node.text
        return self.token(node.token)


class BuiltinFormatter:
    """Pretty-prints declaration text without external tooling."""

    def format(self, text: str, style: StyleOptions) -> str:
        declarations, trailing = _Parser(tokenize(text)).program()
        return _Printer(style).program(declarations, trailing)


class PrettierFormatter:
    """Formats through an installed ``prettier`` executable."""

    def __init__(self, command: Optional[Sequence[str]] = None, timeout: float = 60.0):
        self.command = list(command or ["npx", "--no-install", "prettier"])
        self.timeout = timeout

    def arguments(self, style: StyleOptions) -> List[str]:
        args = self.command + ["--parser", "typescript"]
        args.append("--semi" if style.semi else "--no-semi")
        if style.single_quote:
            args.append("--single-quote")
        return args

    def format(self, text: str, style: StyleOptions) -> str:
        try:
            completed = subprocess.run(
                self.arguments(style),
                input=text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise FormatError(f"Failed to run prettier: {e}")
        if completed.returncode != 0:
            raise FormatError(completed.stderr.strip() or "prettier failed")
        return completed.stdout


def create_formatter(config: SwaggerTypingsConfig) -> Formatter:
    if config.formatter == "prettier":
        return PrettierFormatter(config.prettier_command, timeout=config.timeout)
    return BuiltinFormatter()
