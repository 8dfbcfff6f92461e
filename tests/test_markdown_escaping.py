from __future__ import annotations

from docmark.markdown.escaping import (
    escape_code,
    escape_underscores,
    escape_urls,
    unencode_apostrophes,
    unencode_quotes,
    unescape_urls,
)


def test_escape_underscores_only_inside_inline_tags() -> None:
    source = "snake_case text with {@link module_name~inner_member} and more_words"

    escaped = escape_underscores(source)

    assert escaped == "snake_case text with {@link module\\_name~inner\\_member} and more_words"


def test_escape_underscores_leaves_escaped_underscores_alone() -> None:
    assert escape_underscores("{@link foo\\_bar}") == "{@link foo\\_bar}"
    assert escape_underscores("{@link a__b}") == "{@link a\\_\\_b}"


def test_escape_underscores_ignores_tags_spanning_lines() -> None:
    source = "{@link foo_\nbar}"
    assert escape_underscores(source) == source


def test_escape_urls_escapes_scheme_slashes() -> None:
    source = "See http://example.com and https://example.org/a_b."

    assert escape_urls(source) == "See http:\\/\\/example.com and https:\\/\\/example.org/a_b."


def test_unescape_urls_reverses_escape_urls() -> None:
    samples = [
        "",
        "plain text",
        "http://example.com",
        "mixed https://a.test/x_y and http://b.test?q=1 {@link http://c.test}",
    ]
    for sample in samples:
        assert unescape_urls(escape_urls(sample)) == sample


def test_unescape_urls_handles_percent_encoded_backslashes() -> None:
    assert unescape_urls('<a href="https:%5C/%5C/example.com">') == '<a href="https://example.com">'


def test_unencode_quotes_only_inside_inline_tags() -> None:
    source = "&quot;outside&quot; {@link &quot;module:a/b&quot;}"

    assert unencode_quotes(source) == '&quot;outside&quot; {@link "module:a/b"}'


def test_unencode_apostrophes_is_global() -> None:
    assert unencode_apostrophes("<p>it&#39;s {@link a&#39;b}</p>") == "<p>it's {@link a'b}</p>"


def test_escape_code_escapes_markup_characters() -> None:
    assert escape_code("<a>'\"") == "&lt;a&gt;&#39;&quot;"


def test_escape_code_does_not_double_escape() -> None:
    assert escape_code("a &amp; b") == "a &amp; b"
    assert escape_code("&lt;") == "&lt;"
