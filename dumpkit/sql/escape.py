"""Backslash escapes as mysqldump writes them inside quoted values.

Single-responsibility: byte mapping only. Callers do the scanning.
"""

from __future__ import annotations

BACKSLASH = 0x5C

# Second byte of an escape pair -> decoded byte.
# \0 decodes to the character '0', not NUL; serialized lengths in real dumps
# were computed against this table, so it stays as is.
_DECODE = {
    ord("\\"): b"\\",
    ord("'"): b"'",
    ord('"'): b'"',
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
    ord("b"): b"\x08",
    ord("f"): b"\x0c",
    ord("0"): b"0",
}

_ENCODE = {
    ord("\\"): b"\\\\",
    ord("'"): b"\\'",
    ord('"'): b'\\"',
    ord("\n"): b"\\n",
    ord("\r"): b"\\r",
    ord("\t"): b"\\t",
    0x08: b"\\b",
    0x0C: b"\\f",
}


def decode_pair(pair: bytes) -> bytes:
    """Decode a two-byte escape pair.

    Pairs outside the table (and anything not starting with a backslash)
    come back unchanged, so they count as two bytes.
    """
    if len(pair) < 2 or pair[0] != BACKSLASH:
        return pair
    return _DECODE.get(pair[1], pair)


def decode(escaped: bytes) -> bytes:
    out = bytearray()
    i = 0
    n = len(escaped)
    while i < n:
        if escaped[i] == BACKSLASH and i + 1 < n:
            out += decode_pair(escaped[i : i + 2])
            i += 2
            continue
        out.append(escaped[i])
        i += 1
    return bytes(out)


def decoded_length(escaped: bytes) -> int:
    return len(decode(escaped))


def encode(raw: bytes) -> bytes:
    out = bytearray()
    for b in raw:
        esc = _ENCODE.get(b)
        if esc is None:
            out.append(b)
        else:
            out += esc
    return bytes(out)
