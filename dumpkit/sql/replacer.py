"""Serialization-aware search/replace over one line of dump text.

Text outside serialized tokens gets plain cascading replacement. Inside a
token the escaped content is replaced the same way, then the length prefix is
recomputed from the decoded bytes so PHP can still unserialize the value.
A candidate token that does not check out ends token handling for the rest
of the line; that tail is treated as ordinary text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .escape import decoded_length
from .rules import ReplacementRule, normalize_rules, replace_literal
from .scanner import CLOSER, OPENER, SerializedToken, scan_token


@dataclass
class LineResult:
    text: bytes
    rewritten: int = 0
    abandoned: int = 0


def rewrite_token(content: bytes, rules: Sequence[ReplacementRule]) -> bytes:
    """Return the full serialized token for escaped content after replacement."""
    new_content = replace_literal(content, rules)
    size = decoded_length(new_content)
    return b"s:" + str(size).encode("ascii") + b":" + OPENER + new_content + CLOSER


def rewrite_line(line: bytes, rules: Sequence[ReplacementRule]) -> LineResult:
    """Run the token/literal alternation over line with already-normalized rules."""
    parts: list[bytes] = []
    rewritten = 0
    abandoned = 0
    pos = 0
    n = len(line)
    while pos < n:
        token: SerializedToken | None = scan_token(line, pos)
        if token is None or token.resume < 0:
            if token is not None:
                abandoned += 1
            parts.append(replace_literal(line[pos:], rules))
            break
        parts.append(replace_literal(line[pos : token.start], rules))
        parts.append(rewrite_token(line[token.content_start : token.content_end], rules))
        rewritten += 1
        pos = token.resume
    return LineResult(b"".join(parts), rewritten, abandoned)


def process_line(line: bytes | str, rules: Iterable[Any] | None) -> bytes:
    """Replace strings inside a line or chunk of SQL text.

    Accepts raw rules (validated and normalized here). str input is UTF-8
    encoded; the result is always bytes.
    """
    if isinstance(line, str):
        line = line.encode("utf-8")
    if not line:
        return b""
    normalized = normalize_rules(rules)
    if not normalized:
        return line
    return rewrite_line(line, normalized).text
