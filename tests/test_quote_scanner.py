"""Unit tests for the quote scanner."""

from __future__ import annotations

import pytest

from domain.text_segmentation import Span, SpanMode
from service.quote_scanner import quoted_block_text, scan_spans

COVERAGE_CORPUS = (
    "",
    "plain words only",
    'Missing "quote here',
    'say "hi" now',
    "There's some credibility to 'this time it's different'",
    "rock 'n' roll",
    '"He said \'no\' twice" and left',
    "'42' is the answer",
    '""',
    '"',
    "これは \"Special Case\" です。",
    "trailing quote'",
)


def span_summary(spans: tuple[Span, ...]) -> list[tuple[str, SpanMode]]:
    """Reduce spans to text and mode pairs."""
    return [(span.text, span.mode) for span in spans]


@pytest.mark.parametrize("text_value", COVERAGE_CORPUS)
def test_spans_partition_input(text_value: str) -> None:
    """Concatenated spans reproduce the input with contiguous offsets."""
    spans = scan_spans(text_value)
    assert "".join(span.text for span in spans) == text_value
    expected_start = 0
    for span in spans:
        assert span.start == expected_start
        assert text_value[span.start : span.end] == span.text
        expected_start = span.end
    assert expected_start == len(text_value)


def test_empty_input_has_no_spans() -> None:
    """Empty input yields zero spans."""
    assert scan_spans("") == ()


def test_balanced_double_quote() -> None:
    """A closed double quote becomes one quoted span with its delimiters."""
    assert span_summary(scan_spans('say "hi" now')) == [
        ("say ", SpanMode.UNQUOTED),
        ('"hi"', SpanMode.QUOTED),
        (" now", SpanMode.UNQUOTED),
    ]


def test_unterminated_quote_runs_to_end() -> None:
    """An unclosed quote becomes a trailing quoted span."""
    assert span_summary(scan_spans('Missing "quote here')) == [
        ("Missing ", SpanMode.UNQUOTED),
        ('"quote here', SpanMode.QUOTED),
    ]


def test_contraction_apostrophes_stay_in_span() -> None:
    """Apostrophes followed by a letter do not open a quote."""
    assert span_summary(scan_spans("There's 'tis it's")) == [
        ("There's 'tis it's", SpanMode.UNQUOTED),
    ]


def test_apostrophe_before_non_letter_opens_quote() -> None:
    """An apostrophe followed by a digit opens a single-quoted span."""
    assert span_summary(scan_spans("'42' is")) == [
        ("'42'", SpanMode.QUOTED),
        (" is", SpanMode.UNQUOTED),
    ]


def test_other_quote_is_content_inside_quote() -> None:
    """Only the opening quote character closes a quoted span."""
    assert span_summary(scan_spans('"He said \'no\' twice" ok')) == [
        ('"He said \'no\' twice"', SpanMode.QUOTED),
        (" ok", SpanMode.UNQUOTED),
    ]


def test_trailing_apostrophe_opens_empty_quote() -> None:
    """A final apostrophe with nothing after it is an unterminated quote."""
    assert span_summary(scan_spans("different'")) == [
        ("different", SpanMode.UNQUOTED),
        ("'", SpanMode.QUOTED),
    ]


@pytest.mark.parametrize(
    ("span_text", "expected"),
    [
        ('"hi there"', '"hi there"'),
        ('""', '""'),
        ('"quote here', '"quote here'),
        ('"quote here \n', '"quote here \n'),
        ('"   ', None),
        ("'", None),
    ],
)
def test_quoted_block_text(span_text: str, expected: str | None) -> None:
    """Quoted blocks keep delimiters and drop empty unterminated quotes."""
    span = Span(text=span_text, mode=SpanMode.QUOTED, start=0, end=len(span_text))
    assert quoted_block_text(span) == expected
