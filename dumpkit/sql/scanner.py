"""Locate PHP serialized-string tokens inside a line of dump text.

A token in a dump looks like ``s:<N>:\\"<escaped content>\\";`` where N is the
byte length of the content after unescaping. Finding the prefix is cheap;
proving where the content ends needs a byte walk that honors escapes, because
both ``"`` and ``;`` may legitimately appear inside the content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .escape import BACKSLASH, decode_pair

QUOTE = 0x22
SEMICOLON = 0x3B
COLON = 0x3A
TOKEN_MARK = b"s:"
OPENER = b'\\"'
CLOSER = b'\\";'


@dataclass
class SerializedToken:
    """One candidate token; offsets index into the scanned line.

    start: offset of the leading 's'.
    declared_length: N as written in the dump, not yet verified.
    content_start: first byte after the opening \\".
    content_end: offset of the closing \\" (exclusive end of content).
    resume: first byte after the closing \\";.
    content_end/resume stay -1 until walk_token succeeds.
    """

    start: int
    declared_length: int
    content_start: int
    content_end: int = -1
    resume: int = -1


def _is_digit(b: int) -> bool:
    return 0x30 <= b <= 0x39


def find_token(line: bytes, pos: int = 0) -> Optional[SerializedToken]:
    """Return the first token prefix at or after pos, or None.

    Only the prefix is checked here (s:, digits, :, \\"). Candidates that
    break off early are skipped and the search continues after their 's:'.
    """
    n = len(line)
    idx = line.find(TOKEN_MARK, pos)
    while idx != -1:
        digit_start = idx + 2
        digit_end = digit_start
        while digit_end < n and _is_digit(line[digit_end]):
            digit_end += 1
        if digit_end == digit_start or digit_end >= n or line[digit_end] != COLON:
            idx = line.find(TOKEN_MARK, idx + 1)
            continue
        if digit_end + 2 >= n:
            # Not even room for the opener; nothing later can fit either.
            return None
        if line[digit_end + 1 : digit_end + 3] != OPENER:
            idx = line.find(TOKEN_MARK, idx + 1)
            continue
        return SerializedToken(
            start=idx,
            declared_length=_declared_length(line[digit_start:digit_end], n),
            content_start=digit_end + 3,
        )
    return None


def _declared_length(digits: bytes, n: int) -> int:
    # Content can't decode to more bytes than the line holds, so any run
    # longer than len(str(n)) is just "too long"; n + 1 fails the walk.
    significant = digits.lstrip(b"0") or b"0"
    if len(significant) > len(str(n)):
        return n + 1
    return int(significant)


def walk_token(line: bytes, token: SerializedToken) -> bool:
    """Find the closing \\"; of token, filling content_end and resume.

    Walks the escaped content counting decoded bytes. The closer only counts
    once the decoded count has reached the declared length; escapes are only
    consumed as pairs while the count is still below it. Returns False when
    the count overruns the declared length or the line ends first.
    """
    declared = token.declared_length
    n = len(line)
    i = token.content_start
    count = 0
    while True:
        if count > declared:
            logging.debug(
                "token at %d: decoded %d bytes past declared %d",
                token.start,
                count,
                declared,
            )
            return False
        if i >= n:
            logging.debug("token at %d: line ended before closing quote", token.start)
            return False
        b = line[i]
        if b == BACKSLASH:
            if count < declared:
                if i + 1 >= n:
                    return False
                count += len(decode_pair(line[i : i + 2]))
                i += 2
                continue
            if i + 2 < n and line[i + 1] == QUOTE and line[i + 2] == SEMICOLON:
                token.content_end = i
                token.resume = i + 3
                return True
        count += 1
        i += 1


def scan_token(line: bytes, pos: int = 0) -> Optional[SerializedToken]:
    """find_token + walk_token. None when there is no candidate at all.

    A candidate that fails the walk is still returned, with resume == -1, so
    the caller can tell "no token" from "malformed token".
    """
    token = find_token(line, pos)
    if token is None:
        return None
    walk_token(line, token)
    return token
