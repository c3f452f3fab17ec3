import pytest

from dumpkit.sql.replacer import process_line, rewrite_line, rewrite_token
from dumpkit.sql.rules import ConfigurationError, normalize_rules

URL_RULE = [{"from": "http://a.com", "to": "https://b.org"}]


def test_length_repair():
    line = rb's:21:\"http://automattic.com\";'
    rules = [{"from": "http://automattic.com", "to": "https://automattic.com"}]
    assert process_line(line, rules) == rb's:22:\"https://automattic.com\";'


def test_literal_and_token_coexist():
    line = (
        rb"INSERT INTO wp_options VALUES "
        rb"(1,'home','http://a.com','s:12:\"http://a.com\";');" + b"\n"
    )
    expected = (
        rb"INSERT INTO wp_options VALUES "
        rb"(1,'home','https://b.org','s:13:\"https://b.org\";');" + b"\n"
    )
    assert process_line(line, URL_RULE) == expected


def test_multi_token_line_gets_independent_lengths():
    line = rb'a:2:{i:0;s:12:\"http://a.com\";i:1;s:17:\"http://a.com/page\";}'
    expected = rb'a:2:{i:0;s:13:\"https://b.org\";i:1;s:18:\"https://b.org/page\";}'
    assert process_line(line, URL_RULE) == expected


def test_multibyte_content_counts_bytes():
    line = r's:17:\"http://a.com 😀\";'.encode("utf-8")
    expected = r's:18:\"https://b.org 😀\";'.encode("utf-8")
    assert process_line(line, URL_RULE) == expected


def test_malformed_token_falls_back_to_literal():
    line = rb"(1,'s:999:\"short\";','http://a.com');" + b"\n"
    expected = rb"(1,'s:999:\"short\";','https://b.org');" + b"\n"
    result = rewrite_line(line, normalize_rules(URL_RULE))
    assert result.text == expected
    assert result.abandoned == 1
    assert result.rewritten == 0


def test_unquoted_lookalike_is_plain_text():
    line = b's:999:"short";'
    assert process_line(line, [("short", "long")]) == b's:999:"long";'


def test_fallback_stops_token_handling_for_rest_of_line():
    line = rb's:12:\"http://a.com\"; s:99:\"x\"; s:12:\"http://a.com\";'
    expected = rb's:13:\"https://b.org\"; s:99:\"x\"; s:12:\"https://b.org\";'
    result = rewrite_line(line, normalize_rules(URL_RULE))
    assert result.text == expected
    assert result.rewritten == 1
    assert result.abandoned == 1


def test_cascading_rules_inside_and_outside_tokens():
    rules = [("A", "B"), ("B", "C")]
    assert process_line(b'"A"', rules) == b'"C"'
    assert process_line(rb's:1:\"A\";', rules) == rb's:1:\"C\";'


def test_cascading_rules_change_length():
    rules = [("A", "BB"), ("B", "CCC")]
    assert process_line(rb's:1:\"A\";', rules) == rb's:6:\"CCCCCC\";'


def test_escaped_content_length_uses_decoded_bytes():
    line = rb's:4:\"it\'s\";'
    assert process_line(line, [("it", "that")]) == rb's:6:\"that\'s\";'


def test_rules_match_escaped_bytes_inside_tokens():
    line = rb's:4:\"a\";b\";'
    assert process_line(line, [("b", "cc")]) == rb's:5:\"a\";cc\";'


def test_shorter_replacement_shrinks_length():
    line = rb's:5:\"hello\";'
    assert process_line(line, [("hello", "hi")]) == rb's:2:\"hi\";'


def test_untouched_token_keeps_prefix():
    line = rb's:5:\"hello\";'
    assert process_line(line, [("zzz", "y")]) == line


def test_replacement_into_escape_sequence_relengths():
    line = rb's:1:\"X\";'
    assert process_line(line, [("X", r"a\nb")]) == rb's:3:\"a\nb\";'


def test_rewrite_token_builds_token():
    rules = normalize_rules([("old", "new!")])
    assert rewrite_token(b"old", rules) == rb's:4:\"new!\";'


def test_process_line_empty_inputs():
    assert process_line(b"", URL_RULE) == b""
    assert process_line(b"plain text line", []) == b"plain text line"
    assert process_line("plain", None) == b"plain"


def test_process_line_rejects_invalid_replacements():
    with pytest.raises(ConfigurationError):
        process_line("anything", [{"from": "only-from"}])


def test_idempotent_after_success():
    line = rb"(1,'http://a.com','s:12:\"http://a.com\";')"
    once = process_line(line, URL_RULE)
    assert process_line(once, URL_RULE) == once
