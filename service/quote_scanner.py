"""Quote-aware span scanning for segment_text."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from domain.text_segmentation import (
    QUOTE_MARKS,
    Span,
    SpanMode,
    is_contraction_apostrophe,
)


class ScannerState(Enum):
    """States of the quote scanner."""

    UNQUOTED = "unquoted"
    QUOTED = "quoted"


def scan_spans(text_value: str) -> Tuple[Span, ...]:
    """Partition text into quoted and unquoted spans in input order.

    A quoted span keeps both delimiters and is closed only by the quote
    character that opened it. An unterminated quote runs to the end of the
    input as a final quoted span.
    """
    spans: list[Span] = []
    state = ScannerState.UNQUOTED
    opening_quote: str | None = None
    span_start = 0

    for index, character in enumerate(text_value):
        if state == ScannerState.UNQUOTED:
            if character not in QUOTE_MARKS:
                continue
            if is_contraction_apostrophe(text_value, index):
                continue
            if index > span_start:
                spans.append(
                    Span(
                        text=text_value[span_start:index],
                        mode=SpanMode.UNQUOTED,
                        start=span_start,
                        end=index,
                    )
                )
            state = ScannerState.QUOTED
            opening_quote = character
            span_start = index
        elif character == opening_quote:
            spans.append(
                Span(
                    text=text_value[span_start : index + 1],
                    mode=SpanMode.QUOTED,
                    start=span_start,
                    end=index + 1,
                )
            )
            state = ScannerState.UNQUOTED
            opening_quote = None
            span_start = index + 1

    if span_start < len(text_value):
        final_mode = (
            SpanMode.QUOTED if state == ScannerState.QUOTED else SpanMode.UNQUOTED
        )
        spans.append(
            Span(
                text=text_value[span_start:],
                mode=final_mode,
                start=span_start,
                end=len(text_value),
            )
        )

    return tuple(spans)


def is_terminated(span: Span) -> bool:
    """Return True when a quoted span ends with its opening quote."""
    return len(span.text) >= 2 and span.text[-1] == span.text[0]


def quoted_block_text(span: Span) -> str | None:
    """Return the display text for a quoted span, or None when it is empty.

    Blocks are returned verbatim. An unterminated block with nothing visible
    after its opening quote yields None.
    """
    if is_terminated(span) or span.text[1:].strip():
        return span.text
    return None
