"""Tests for the declaration formatters."""

import subprocess

import pytest

from swagger_typings.config import StyleOptions, SwaggerTypingsConfig
from swagger_typings.exceptions import FormatError
from swagger_typings.formatter import (
    BuiltinFormatter,
    PrettierFormatter,
    create_formatter,
    requote,
    tokenize,
)

DEFAULT = StyleOptions()
SEMI_DOUBLE = StyleOptions(semi=True, single_quote=False)


def fmt(text, style=DEFAULT):
    return BuiltinFormatter().format(text, style)


def test_default_style():
    """No terminators, single quotes, two-space indentation."""
    text = "export interface A { 'x'?: string; y: { 'z': number | string; }; }"

    assert fmt(text) == (
        "export interface A {\n"
        "  'x'?: string\n"
        "  y: {\n"
        "    'z': number | string\n"
        "  }\n"
        "}\n"
    )


def test_semicolons_and_double_quotes():
    text = "export interface A { 'x'?: string; y: { 'z': number | string; }; }"

    assert fmt(text, SEMI_DOUBLE) == (
        "export interface A {\n"
        '  "x"?: string;\n'
        "  y: {\n"
        '    "z": number | string;\n'
        "  };\n"
        "}\n"
    )


def test_declarations_are_separated_by_blank_line():
    text = "export interface A {} export interface B { 'b': A['x']; }"

    assert fmt(text) == "export interface A {}\n\nexport interface B {\n  'b': A['x']\n}\n"


def test_members_may_be_separated_by_newlines_or_commas():
    assert fmt("interface A {\n x: string\n y: number\n}") == "interface A {\n  x: string\n  y: number\n}\n"
    assert fmt("interface A { x: string, y: number }") == "interface A {\n  x: string\n  y: number\n}\n"


def test_comments_are_kept():
    text = "/** Doc */ export interface A { /** Field */ x: string; // trailing\n }"

    assert fmt(text) == (
        "/** Doc */\n"
        "export interface A {\n"
        "  /** Field */\n"
        "  x: string\n"
        "  // trailing\n"
        "}\n"
    )


def test_type_aliases():
    assert fmt("type Status = 'on' | 'off'") == "type Status = 'on' | 'off'\n"
    assert fmt("type Status = 'on' | 'off'", SEMI_DOUBLE) == 'type Status = "on" | "off";\n'
    assert fmt("type T = | 'a' | 'b'") == "type T = 'a' | 'b'\n"
    assert fmt("type L = ('a' | 'b')[]") == "type L = ('a' | 'b')[]\n"
    assert fmt("declare type R = Api.Definitions['User'][]") == "declare type R = Api.Definitions['User'][]\n"


def test_empty_input():
    assert fmt("") == ""
    assert fmt("  \n") == ""


@pytest.mark.parametrize("style", [DEFAULT, SEMI_DOUBLE])
def test_formatting_is_idempotent(style, users_fixture):
    _, expected = users_fixture
    once = fmt(expected, style)

    assert fmt(once, style) == once


def test_requote():
    assert requote("'it\\'s'", '"') == '"it\'s"'
    assert requote('"say \\"hi\\""', "'") == "'say \"hi\"'"
    assert requote("'a\"b'", '"') == '"a\\"b"'
    assert requote("'back\\\\slash'", '"') == '"back\\\\slash"'


def test_tokenize_attaches_comments():
    tokens = tokenize("/* a */ x\n// b\ny")

    assert [t.value for t in tokens] == ["x", "y", ""]
    assert tokens[0].comments == ("/* a */",)
    assert tokens[1].comments == ("// b",)
    assert tokens[1].newline_before is True
    assert tokens[1].line == 3


@pytest.mark.parametrize(
    "text",
    [
        "export interface A { x: string",
        "export interface A.B {}",
        "export interface A { x: }",
        "export interface A { x: 'oops }",
        "export interface A { x: string y: number }",
        "export interface A { x: Foo<T> }",
        "export interface A { x: string } }",
        "export const a = 1",
        "export interface A { /* open x: string }",
        "export interface 9Lives {}",
        "export interface A { x: B[C] }",
    ],
)
def test_syntax_errors(text):
    with pytest.raises(FormatError):
        fmt(text)


def test_syntax_error_position():
    with pytest.raises(FormatError) as exc_info:
        fmt("export interface A {\n  x: string\n  y number\n}")

    assert exc_info.value.line == 3
    assert exc_info.value.column == 5
    assert "Expected ':'" in str(exc_info.value)


def test_prettier_arguments():
    formatter = PrettierFormatter(["prettier"])

    assert formatter.arguments(DEFAULT) == ["prettier", "--parser", "typescript", "--no-semi", "--single-quote"]
    assert formatter.arguments(SEMI_DOUBLE) == ["prettier", "--parser", "typescript", "--semi"]


def test_prettier_output(monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs["input"]))
        return subprocess.CompletedProcess(args, 0, stdout="formatted\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert PrettierFormatter(["prettier"]).format("interface A {}", DEFAULT) == "formatted\n"
    assert calls[0][1] == "interface A {}"


def test_prettier_failure(monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 2, stdout="", stderr="SyntaxError: '}' expected")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(FormatError, match="SyntaxError"):
        PrettierFormatter(["prettier"]).format("interface A {", DEFAULT)


def test_prettier_missing_executable():
    with pytest.raises(FormatError, match="Failed to run prettier"):
        PrettierFormatter(["swagger-typings-no-such-prettier"]).format("interface A {}", DEFAULT)


def test_create_formatter():
    assert isinstance(create_formatter(SwaggerTypingsConfig()), BuiltinFormatter)

    prettier = create_formatter(SwaggerTypingsConfig(formatter="prettier", prettier_command=["prettier"]))
    assert isinstance(prettier, PrettierFormatter)
    assert prettier.command == ["prettier"]


def test_prettier_exchanges_utf8(monkeypatch):
    def fake_run(args, **kwargs):
        assert kwargs["encoding"] == "utf-8"
        return subprocess.CompletedProcess(args, 0, stdout=kwargs["input"], stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    text = "/** 用户列表 */ interface A {}"
    assert PrettierFormatter(["prettier"]).format(text, DEFAULT) == text
