"""HCL rendering for Terraform configuration.

Turns loosely typed values decoded from JSON API responses into attribute
assignments, list literals, object expressions and nested blocks.

Rules (block level):
- `None` and empty lists or mappings write nothing.
- Strings are quoted and escaped; booleans are `true`/`false`.
- Integers and whole floats are integer literals (`1.0` -> `1`).
- A sequence of scalars is a one-line list literal.
- A mapping is an object expression, one line per key in insertion order.
- A sequence made only of mappings becomes repeated nested blocks.
- Anything else is skipped and logged at DEBUG.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Protocol

logger = logging.getLogger(__name__)

INDENT = "  "

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_ATTRIBUTE_LINE_RE = re.compile(
    r'^(?P<indent>[ ]*)(?P<name>[A-Za-z_][A-Za-z0-9_-]*|"(?:[^"\\]|\\.)*")[ ]*=[ ]*(?P<expr>.*)$'
)


class TextSink(Protocol):
    """Anything with `write(str)`: `io.StringIO`, an open file, `sys.stdout`."""

    def write(self, text: str, /) -> Any: ...


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))


def quote_string(value: str) -> str:
    """Quote `value` as an HCL string literal.

    Template introducers are doubled (`${` -> `$${`, `%{` -> `%%{`) so the
    value round-trips as literal text instead of being interpolated.
    """

    out = ['"']
    last = len(value) - 1
    for i, ch in enumerate(value):
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ch in "$%" and i < last and value[i + 1] == "{":
            out.append(ch * 2)
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _render_number(value: int | float) -> str | None:
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _render_tuple(values: list[Any] | tuple[Any, ...], indent: str) -> str:
    if not values:
        return "[]"

    if not any(isinstance(v, Mapping) for v in values):
        items = []
        for v in values:
            expr = render_expression(v, indent)
            if expr is None:
                logger.debug("skipping list element of type %s", type(v).__name__)
                continue
            items.append(expr)
        return "[" + ", ".join(items) + "]"

    inner = indent + INDENT
    lines = ["["]
    for v in values:
        expr = render_expression(v, inner)
        if expr is None:
            logger.debug("skipping list element of type %s", type(v).__name__)
            continue
        lines.append(f"{inner}{expr},")
    lines.append(f"{indent}]")
    return "\n".join(lines)


def _is_empty(value: Any) -> bool:
    return isinstance(value, (list, tuple, Mapping)) and len(value) == 0


def _render_object(mapping: Mapping[Any, Any], indent: str) -> str:
    inner = indent + INDENT
    lines = ["{"]
    for key, v in mapping.items():
        if v is None or _is_empty(v):
            continue
        expr = render_expression(v, inner)
        if expr is None:
            logger.debug("skipping object key %s of type %s", key, type(v).__name__)
            continue
        if expr == "{}":
            continue
        name = str(key)
        if not is_identifier(name):
            name = quote_string(name)
        lines.append(f"{inner}{name} = {expr}")

    if len(lines) == 1:
        return "{}"
    lines.append(f"{indent}}}")
    return "\n".join(lines)


def render_expression(value: Any, indent: str = "") -> str | None:
    """Render `value` as an HCL expression.

    `indent` is the indentation of the line the expression starts on; nested
    lines of objects and tuples are indented relative to it. Returns `None`
    when the value has no HCL representation.
    """

    if value is None:
        return "null"
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _render_number(value)
    if isinstance(value, Mapping):
        return _render_object(value, indent)
    if isinstance(value, (list, tuple)):
        return _render_tuple(value, indent)
    return None


def _is_block_list(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and all(isinstance(v, Mapping) for v in value)
    )


def write_attr_line(name: str, value: Any, indent: str, out: TextSink) -> None:
    """Append the HCL for attribute `name` = `value` to `out`.

    Every line starts with `indent`. Absent values and empty collections write
    nothing; a list of mappings is written as one nested `name { ... }` block
    per element.
    """

    if value is None or _is_empty(value):
        return

    if not is_identifier(name):
        logger.debug("skipping attribute with invalid name %r", name)
        return

    if _is_block_list(value):
        for item in value:
            out.write(f"{indent}{name} {{\n")
            for key, nested in item.items():
                write_attr_line(str(key), nested, indent + INDENT, out)
            out.write(f"{indent}}}\n")
        return

    expr = render_expression(value, indent)
    if expr is None:
        logger.debug(
            "got unknown attribute configuration: key %s, value %r, value type %s",
            name,
            value,
            type(value).__name__,
        )
        return
    if isinstance(value, Mapping) and expr == "{}":
        return
    out.write(f"{indent}{name} = {expr}\n")


def format_hcl(text: str) -> str:
    """Align `=` of consecutive attribute lines sharing one indentation.

    A run ends at any line that is not an attribute assignment or that sits at
    another indentation, which is how `terraform fmt` lays out a body.
    """

    lines = text.split("\n")
    out: list[str] = []
    run: list[re.Match[str]] = []

    def flush() -> None:
        if not run:
            return
        width = max(len(m.group("name")) for m in run)
        for m in run:
            out.append(f"{m.group('indent')}{m.group('name').ljust(width)} = {m.group('expr')}")
        run.clear()

    for line in lines:
        match = _ATTRIBUTE_LINE_RE.match(line)
        if match and (not run or run[0].group("indent") == match.group("indent")):
            run.append(match)
            continue
        flush()
        if match:
            run.append(match)
        else:
            out.append(line)
    flush()
    return "\n".join(out)
