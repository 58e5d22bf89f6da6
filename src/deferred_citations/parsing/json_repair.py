r"""Heuristic JSON repair for citation blocks emitted by language models.

Models routinely produce almost-valid JSON: trailing commas, escapes JSON does
not know (``\~``, ``\x``, ``\u`` without four hex digits) and blocks cut off
before the closing brackets.  ``repair_json`` fixes those with one left-to-right
scan that knows whether it is inside a string literal, so string content is
never rewritten beyond dropping a stray backslash.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from deferred_citations.exceptions import CitationBlockError

_SIMPLE_ESCAPES = frozenset('"\\/bfnrt')
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_WHITESPACE = frozenset(" \t\r\n")
_CLOSERS = {"[": "]", "{": "}"}


@dataclass
class RepairReport:
    """Repaired text and the names of the repairs that changed it."""

    text: str
    repairs: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.repairs)


def _escape_length(text: str, pos: int) -> int:
    """Length of the valid escape sequence starting at ``text[pos]``, or 0."""
    following = text[pos + 1 : pos + 2]
    if not following:
        return 0
    if following in _SIMPLE_ESCAPES:
        return 2
    if following == "u":
        digits = text[pos + 2 : pos + 6]
        if len(digits) == 4 and all(ch in _HEX_DIGITS for ch in digits):
            return 6
    return 0


def _next_significant(text: str, pos: int) -> str:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return text[pos] if pos < len(text) else ""


def repair_json(text: str, *, close_brackets: bool = True) -> RepairReport:
    r"""Repair common LLM JSON malformations.

    * a comma directly before ``]`` or ``}`` (whitespace allowed) is dropped;
    * inside strings, a backslash that does not start a valid escape is
      dropped and the following character kept, so ``\~`` becomes ``~`` and
      ``\utest`` becomes ``utest``;
    * with ``close_brackets``, brackets still open at the end of the text are
      closed in nesting order.

    Valid JSON comes back unchanged.
    """
    out: list[str] = []
    open_brackets: list[str] = []
    in_string = False
    dropped_commas = 0
    dropped_escapes = 0
    pos = 0

    while pos < len(text):
        ch = text[pos]

        if in_string:
            if ch == "\\":
                length = _escape_length(text, pos)
                if length:
                    out.append(text[pos : pos + length])
                    pos += length
                else:
                    dropped_escapes += 1
                    pos += 1
                continue
            if ch == '"':
                in_string = False
            out.append(ch)
            pos += 1
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            open_brackets.append(ch)
        elif ch in "]}":
            if open_brackets and _CLOSERS[open_brackets[-1]] == ch:
                open_brackets.pop()
        elif ch == ",":
            following = _next_significant(text, pos + 1)
            if following in ("]", "}") or (not following and close_brackets and open_brackets):
                dropped_commas += 1
                pos += 1
                continue
        out.append(ch)
        pos += 1

    repairs: list[str] = []
    if dropped_commas:
        repairs.append(f"removed {dropped_commas} trailing comma(s)")
    if dropped_escapes:
        repairs.append(f"fixed {dropped_escapes} invalid escape sequence(s)")
    if close_brackets and open_brackets and not in_string:
        out.extend(_CLOSERS[b] for b in reversed(open_brackets))
        repairs.append(f"added {len(open_brackets)} closing bracket(s)")

    return RepairReport(text="".join(out), repairs=repairs)


def decode_citation_block(block: str, *, close_brackets: bool = True) -> tuple[Any, RepairReport]:
    """Repair and parse a citation block.

    Literal control characters inside strings (raw newlines, tabs) are
    accepted.

    Raises:
        CitationBlockError: The block is still not valid JSON after repair.
    """
    report = repair_json(block, close_brackets=close_brackets)
    try:
        parsed = json.loads(report.text, strict=False)
    except (ValueError, RecursionError) as exc:
        raise CitationBlockError(f"Failed to parse citation JSON: {exc}", raw_block=block) from exc
    return parsed, report
