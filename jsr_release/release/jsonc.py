"""Reader for JSON with comments (deno.json / deno.jsonc / jsr.json).

Comments (``//`` and ``/* */``) outside string literals and trailing commas
before ``]`` or ``}`` are blanked out, then the standard ``json`` decoder
does the rest. Blanking keeps offsets stable, so decoder errors still point
at the right line and column of the original text.
"""

from __future__ import annotations

import json

__all__ = ["JsoncError", "loads", "strip_comments"]


class JsoncError(ValueError):
    """Raised for documents that are not valid JSONC."""


def _blank(text: str) -> str:
    # Keep newlines so line numbers survive.
    return "".join(ch if ch in "\r\n" else " " for ch in text)


def _position(text: str, index: int) -> str:
    line = text.count("\n", 0, index) + 1
    col = index - (text.rfind("\n", 0, index) + 1) + 1
    return f"line {line} column {col}"


def strip_comments(text: str) -> str:
    """Return text with comments and trailing commas replaced by spaces."""
    out: list[str] = []
    i = 0
    n = len(text)
    pending_comma: int | None = None

    while i < n:
        ch = text[i]

        if ch == '"':
            pending_comma = None
            j = i + 1
            while j < n and text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i : j + 1])
            i = j + 1
            continue

        if text.startswith("//", i):
            end = text.find("\n", i)
            end = n if end < 0 else end
            out.append(_blank(text[i:end]))
            i = end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end < 0:
                raise JsoncError(f"unterminated comment at {_position(text, i)}")
            out.append(_blank(text[i : end + 2]))
            i = end + 2
            continue

        if ch == ",":
            pending_comma = len(out)
        elif ch in "]}" and pending_comma is not None:
            out[pending_comma] = " "
            pending_comma = None
        elif not ch.isspace():
            pending_comma = None

        out.append(ch)
        i += 1

    return "".join(out)


def loads(text: str) -> object:
    """Decode a JSONC document."""
    stripped = strip_comments(text)
    try:
        return json.loads(stripped)
    except json.JSONDecodeError as e:
        raise JsoncError(f"{e.msg}: {_position(text, e.pos)}") from e
