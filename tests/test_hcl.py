"""Tests for the HCL attribute writer."""

from __future__ import annotations

import io
import logging
from typing import Any

import pytest

from core.hcl import format_hcl, is_identifier, quote_string, render_expression, write_attr_line


def render(name: str, value: Any, indent: str = "") -> str:
    out = io.StringIO()
    write_attr_line(name, value, indent, out)
    return out.getvalue()


_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}


def unquote(literal: str) -> str:
    """Decode an HCL quoted string the way Terraform reads it back."""
    assert literal[0] == literal[-1] == '"'
    body = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            code = body[i + 1]
            if code == "u":
                out.append(chr(int(body[i + 2 : i + 6], 16)))
                i += 6
            else:
                out.append(_ESCAPES[code])
                i += 2
            continue
        if ch in "$%" and body.startswith(ch * 2 + "{", i):
            out.append(ch + "{")
            i += 3
            continue
        assert ch != '"'
        out.append(ch)
        i += 1
    return "".join(out)


@pytest.mark.parametrize(
    ("value", "want"),
    [
        pytest.param("b", 'a = "b"\n', id="string"),
        pytest.param(1, "a = 1\n", id="int"),
        pytest.param(1.0, "a = 1\n", id="whole float"),
        pytest.param(2.5, "a = 2.5\n", id="float"),
        pytest.param(True, "a = true\n", id="bool true"),
        pytest.param(False, "a = false\n", id="bool false"),
        pytest.param(["b", "c", "d"], 'a = ["b", "c", "d"]\n', id="list of strings"),
        pytest.param({"c": "d", "e": "f"}, 'a = {\n  c = "d"\n  e = "f"\n}\n', id="mapping of strings"),
        pytest.param(None, "", id="absent"),
        pytest.param([], "", id="empty list"),
        pytest.param({}, "", id="empty mapping"),
    ],
)
def test_write_attr_line(value: Any, want: str) -> None:
    assert render("a", value) == want


class TestWriteAttrLine:
    def test_indent_prefixes_every_line(self) -> None:
        """Test the indentation string starts each emitted line."""
        assert render("a", {"c": "d"}, indent="  ") == '  a = {\n    c = "d"\n  }\n'

    def test_mixed_scalar_list(self) -> None:
        assert render("a", [1, "two", True, 4.0]) == 'a = [1, "two", true, 4]\n'

    def test_list_of_mappings_becomes_blocks(self) -> None:
        """Test repeated nested blocks for a list of mappings."""
        got = render("origins", [{"name": "a", "weight": 1}, {"name": "b", "weight": 0.5}], indent="  ")
        assert got == (
            "  origins {\n"
            '    name = "a"\n'
            "    weight = 1\n"
            "  }\n"
            "  origins {\n"
            '    name = "b"\n'
            "    weight = 0.5\n"
            "  }\n"
        )

    def test_nested_blocks(self) -> None:
        got = render("item", [{"value": [{"ip": "192.0.2.1"}]}])
        assert got == 'item {\n  value {\n    ip = "192.0.2.1"\n  }\n}\n'

    def test_absent_values_inside_blocks_are_omitted(self) -> None:
        assert render("item", [{"comment": None, "ip": "192.0.2.1"}]) == 'item {\n  ip = "192.0.2.1"\n}\n'

    def test_empty_collections_inside_mapping_are_omitted(self) -> None:
        got = render("a", {"allowed_idps": [], "cors": {}, "name": "app", "saml": {"attrs": None}})
        assert got == 'a = {\n  name = "app"\n}\n'

    def test_mapping_of_empty_values_writes_nothing(self) -> None:
        assert render("a", {"b": [], "c": None}) == ""

    def test_empty_collections_inside_blocks_are_omitted(self) -> None:
        got = render("rule", [{"check_regions": [], "expression": "true"}])
        assert got == 'rule {\n  expression = "true"\n}\n'

    def test_nested_mapping(self) -> None:
        got = render("a", {"b": {"c": 1}, "d": None})
        assert got == "a = {\n  b = {\n    c = 1\n  }\n}\n"

    def test_mapping_quotes_non_identifier_keys(self) -> None:
        assert render("headers", {"Content-Type": "text/html", "X Custom": "1"}) == (
            'headers = {\n  Content-Type = "text/html"\n  "X Custom" = "1"\n}\n'
        )

    def test_list_of_mappings_inside_mapping_is_a_tuple(self) -> None:
        """Test block syntax is never used inside an object expression."""
        got = render("a", {"rules": [{"x": 1}]})
        assert got == "a = {\n  rules = [\n    {\n      x = 1\n    },\n  ]\n}\n"

    def test_unknown_kind_is_skipped_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="core.hcl"):
            assert render("a", object()) == ""
        assert "got unknown attribute configuration" in caplog.text

    def test_non_finite_float_is_skipped(self) -> None:
        assert render("a", float("nan")) == ""

    def test_invalid_attribute_name_is_skipped(self) -> None:
        assert render("not valid", "x") == ""

    def test_deterministic(self) -> None:
        value = {"b": [1, 2], "a": {"z": True}}
        assert render("x", value) == render("x", value)


class TestQuoteString:
    @pytest.mark.parametrize(
        ("raw", "want"),
        [
            ("plain", '"plain"'),
            ('say "hi"', '"say \\"hi\\""'),
            ("back\\slash", '"back\\\\slash"'),
            ("two\nlines", '"two\\nlines"'),
            ("tab\there", '"tab\\there"'),
            ("\x01", '"\\u0001"'),
            ("${var.name}", '"$${var.name}"'),
            ("%{ if true }", '"%%{ if true }"'),
            ("cost: $5 and 100%", '"cost: $5 and 100%"'),
        ],
    )
    def test_escaping(self, raw: str, want: str) -> None:
        assert quote_string(raw) == want

    def test_unicode_passes_through(self) -> None:
        assert quote_string("café") == '"café"'

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            'a"b\\c\n\t\r',
            "\x00\x1f\x7f",
            "${x} and %{ y }",
            "$${already}",
            "%%{",
            "ends with $",
            "{$}",
            "café ☃",
        ],
    )
    def test_unquote_round_trip(self, raw: str) -> None:
        assert unquote(quote_string(raw)) == raw


class TestRenderExpression:
    def test_none_is_null(self) -> None:
        assert render_expression(None) == "null"

    def test_unrenderable(self) -> None:
        assert render_expression({1, 2}) is None


@pytest.mark.parametrize(
    ("name", "valid"),
    [("zone_id", True), ("_x", True), ("a-b", True), ("1abc", False), ("a b", False), ("", False)],
)
def test_is_identifier(name: str, valid: bool) -> None:
    assert is_identifier(name) is valid


class TestFormatHcl:
    def test_aligns_consecutive_attributes(self) -> None:
        text = 'a = 1\nlonger = "x"\n'
        assert format_hcl(text) == 'a      = 1\nlonger = "x"\n'

    def test_blocks_break_alignment_runs(self) -> None:
        text = "  a = 1\n  bb = 2\n  c {\n    dddd = 3\n  }\n  eeeee = 4\n"
        assert format_hcl(text) == "  a  = 1\n  bb = 2\n  c {\n    dddd = 3\n  }\n  eeeee = 4\n"

    def test_string_with_equals_sign(self) -> None:
        text = 'k = "a = b"\nlong = 1\n'
        assert format_hcl(text) == 'k    = "a = b"\nlong = 1\n'

    def test_idempotent(self) -> None:
        text = "a = 1\nbbb = 2\n"
        assert format_hcl(format_hcl(text)) == format_hcl(text)
