import pytest

from admonfence.conversion.lexer import MarkerLexer
from admonfence.conversion.resolver import TitleResolver, capitalize_first
from admonfence.conversion.stack import BlockStack, fence_for_depth
from admonfence.core.models import LineKind, TypeMap


@pytest.fixture
def lexer():
    return MarkerLexer()


def test_open_marker_is_tokenized(lexer):
    line = lexer.classify('    !!! Warning "Mind the gap"')
    assert line.kind is LineKind.OPEN
    assert line.indent == 4
    assert line.indent_str == "    "
    assert line.raw_type == "Warning"
    assert line.title == "Mind the gap"


def test_open_marker_without_title(lexer):
    line = lexer.classify("!!!   tip")
    assert line.is_open
    assert line.raw_type == "tip"
    assert line.title is None


@pytest.mark.parametrize("text, kind, indent", [
    ("", LineKind.BLANK, 0),
    ("   ", LineKind.BLANK, 3),
    ("plain", LineKind.CONTENT, 0),
    ("      deep", LineKind.CONTENT, 6),
    ("!!!tip", LineKind.CONTENT, 0),
    ("  ??? note", LineKind.CONTENT, 2),
    ("!!! ", LineKind.CONTENT, 0),
])
def test_non_marker_lines(lexer, text, kind, indent):
    line = lexer.classify(text)
    assert line.kind is kind
    assert line.indent == indent
    assert line.raw_line == text


def test_split_lines_handles_crlf_and_bom(lexer):
    assert lexer.split_lines("\ufeffa\r\nb\nc\r\n") == ["a", "b", "c", ""]


def test_lone_carriage_return_is_not_a_break(lexer):
    assert lexer.split_lines("a\rb") == ["a\rb"]


def test_stack_fence_lengths_mirror_push_and_pop():
    stack = BlockStack()
    assert stack.open_fence() == ":::"
    outer = stack.push(0, "note")
    assert stack.open_fence() == "::::"
    inner = stack.push(4, "tip")
    assert (outer.depth, inner.depth) == (0, 1)
    assert inner.content_indent == 5

    assert stack.pop() is inner
    assert stack.close_marker(inner) == "    ::::"
    assert stack.pop() is outer
    assert stack.close_marker(outer) == ":::"
    assert not stack


def test_stack_pop_empty_raises():
    stack = BlockStack()
    assert stack.peek() is None
    with pytest.raises(IndexError):
        stack.pop()


def test_fence_for_depth():
    assert [fence_for_depth(d) for d in range(3)] == [":::", "::::", ":::::"]


@pytest.mark.parametrize("raw_type, title, expected", [
    ("note", None, ("note", None, True)),
    ("bug", None, ("danger", "Bug", True)),
    ("bug", "Known Issue", ("danger", "Known Issue", True)),
    ("note", "Custom", ("note", "Custom", True)),
    ("weird", None, ("note", "Weird", False)),
    ("Tldr", "", ("note", "Tldr", True)),
])
def test_title_resolution(raw_type, title, expected):
    assert TitleResolver().resolve(raw_type, title) == expected


def test_capitalize_first_preserves_tail():
    assert capitalize_first("tlDR") == "TlDR"
    assert capitalize_first("") == ""


def test_type_map_lowercases_keys():
    type_map = TypeMap(mapping={"ToDo": "warning"})
    assert "TODO" in type_map
    assert type_map.resolve("todo") == ("warning", True)
    assert type_map.resolve("nope") == ("note", False)


def test_only_one_leading_bom_is_stripped(lexer):
    assert lexer.split_lines("\ufeff\ufeffa") == ["\ufeffa"]
