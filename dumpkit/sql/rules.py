"""Replacement rules: validation, normalization and cascading substitution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .escape import encode


class ConfigurationError(ValueError):
    """A supplied replacement rule is malformed."""


@dataclass(frozen=True)
class ReplacementRule:
    src: bytes
    dst: bytes


def _as_bytes(value: Any, what: str, rule: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise ConfigurationError(
        f"Replacement {what!r} must be str or bytes, got {type(value).__name__}: {rule!r}"
    )


def _coerce_rule(rule: Any) -> ReplacementRule:
    if isinstance(rule, ReplacementRule):
        return ReplacementRule(
            _as_bytes(rule.src, "from", rule), _as_bytes(rule.dst, "to", rule)
        )
    if isinstance(rule, Mapping):
        if "from" not in rule or "to" not in rule:
            raise ConfigurationError(
                f'Replacements must have "from" and "to" keys: {rule!r}'
            )
        return ReplacementRule(
            _as_bytes(rule["from"], "from", rule), _as_bytes(rule["to"], "to", rule)
        )
    if isinstance(rule, (tuple, list)):
        if len(rule) != 2:
            raise ConfigurationError(
                f"Replacement pairs need exactly a from and a to value: {rule!r}"
            )
        return ReplacementRule(
            _as_bytes(rule[0], "from", rule), _as_bytes(rule[1], "to", rule)
        )
    raise ConfigurationError(f"Unsupported replacement rule: {rule!r}")


def normalize_rules(rules: Iterable[Any] | None) -> list[ReplacementRule]:
    """Validate every rule, drop empty-from rules, keep the order.

    Raises ConfigurationError on the first malformed rule, before callers
    touch any file.
    """
    normalized: list[ReplacementRule] = []
    if rules is None:
        return normalized
    for rule in rules:
        coerced = _coerce_rule(rule)
        if not coerced.src:
            continue
        normalized.append(coerced)
    return normalized


def replace_literal(part: bytes, rules: Sequence[ReplacementRule]) -> bytes:
    # Each rule runs over the previous rule's output, so {A->B, B->C} maps A to C.
    for rule in rules:
        part = part.replace(rule.src, rule.dst)
    return part


def url_rules(old: str | bytes, new: str | bytes) -> list[ReplacementRule]:
    """Rules for a site URL move, covering JSON blobs stored in the dump.

    WordPress stores JSON with escaped slashes (``http:\\/\\/``) and mysqldump
    escapes those backslashes again, so the dump holds ``http:\\\\/\\\\/``.
    Returns the plain rule plus that variant when it differs.
    """
    src = _as_bytes(old, "from", (old, new))
    dst = _as_bytes(new, "to", (old, new))
    out = [ReplacementRule(src, dst)]
    esc_src = encode(src.replace(b"/", b"\\/"))
    esc_dst = encode(dst.replace(b"/", b"\\/"))
    if esc_src != src:
        out.append(ReplacementRule(esc_src, esc_dst))
    return out


def rules_from_pairs(values: Sequence[str], urls: bool = False) -> list[ReplacementRule]:
    """Build rules from a flat FROM TO FROM TO ... list (CLI order)."""
    if len(values) % 2:
        raise ConfigurationError(
            f"Replacement {values[-1]!r} has a from value but no to value"
        )
    out: list[ReplacementRule] = []
    for i in range(0, len(values), 2):
        if urls:
            out.extend(url_rules(values[i], values[i + 1]))
            continue
        out.append(_coerce_rule((values[i], values[i + 1])))
    return out
