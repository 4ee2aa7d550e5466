"""Text segmentation pipeline for segment_text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from domain.text_segmentation import DisplayToken, SegmenterConfig, Span
from service.quote_scanner import quoted_block_text, scan_spans
from service.token_merger import merge_tokens
from service.tokenizers import JiebaWordCutter, WordCutter, tokenize_span


@dataclass(frozen=True)
class Segmenter:
    """Turn raw text into display words for timed presentation.

    Text is scanned into quoted and unquoted spans; quoted spans become one
    word each, unquoted spans are tokenized by script and merged. The
    segmenter holds no per-call state and may be shared across threads.
    """

    config: SegmenterConfig = field(default_factory=SegmenterConfig)
    cutter: WordCutter | None = None

    def __post_init__(self) -> None:
        if self.cutter is None:
            object.__setattr__(
                self, "cutter", JiebaWordCutter(self.config.dictionary_path)
            )

    def span_words(self, span: Span) -> Tuple[str, ...]:
        """Return the display words produced by one span."""
        if span.is_quoted:
            block_text = quoted_block_text(span)
            return (block_text,) if block_text is not None else ()
        script, tokens = tokenize_span(span.text, self.cutter, self.config.use_hmm)
        return merge_tokens(tokens, script)

    def segment_display_tokens(self, text_value: str) -> Tuple[DisplayToken, ...]:
        """Segment text into positioned display tokens."""
        words = [word for span in scan_spans(text_value) for word in self.span_words(span)]
        return tuple(
            DisplayToken(text=word, position=position)
            for position, word in enumerate(words)
        )

    def segment(self, text_value: str) -> Tuple[str, ...]:
        """Segment text into display words."""
        return tuple(token.text for token in self.segment_display_tokens(text_value))


DEFAULT_SEGMENTER = Segmenter()


def segment(text_value: str) -> Tuple[str, ...]:
    """Segment text into display words with the default configuration."""
    return DEFAULT_SEGMENTER.segment(text_value)


def segment_display_tokens(text_value: str) -> Tuple[DisplayToken, ...]:
    """Segment text into positioned display tokens with the default configuration."""
    return DEFAULT_SEGMENTER.segment_display_tokens(text_value)
