"""Domain types and character classes for segment_text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os

EMPTY_TEXT_CODE = "segment_text.input.empty_text"
INPUT_FILE_CODE = "segment_text.input.file_error"
INVALID_CONFIG_CODE = "segment_text.input.invalid_config"
DICTIONARY_MISSING_CODE = "segment_text.input.dictionary_missing"
DICTIONARY_LOAD_CODE = "segment_text.input.dictionary_unloadable"
INVALID_TOKEN_CODE = "segment_text.internal.invalid_token"

DOUBLE_QUOTE = '"'
APOSTROPHE = "'"
QUOTE_MARKS = frozenset({DOUBLE_QUOTE, APOSTROPHE})
CONNECTOR_MARK = "-"
PUNCTUATION_MARKS = frozenset({",", ".", "!", "?", "。", "、", "！", "？"})
CJK_RANGES = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3040, 0x30FF),  # Hiragana, Katakana
)


class SegmentationInputError(ValueError):
    """Validation error with a stable error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class SpanMode(str, Enum):
    """Quote-scanner span modes."""

    QUOTED = "quoted"
    UNQUOTED = "unquoted"


class ScriptMode(str, Enum):
    """Tokenization strategy chosen for an unquoted span."""

    CJK = "cjk"
    LATIN = "latin"


class TokenClass(str, Enum):
    """Coarse class of a raw token."""

    WORD = "word"
    PUNCTUATION = "punctuation"
    CONNECTOR = "connector"
    WHITESPACE = "whitespace"
    SYMBOL_ONLY = "symbol_only"
    QUOTED_BLOCK = "quoted_block"


@dataclass(frozen=True)
class Span:
    """A contiguous slice of the input tagged quoted or unquoted.

    ``start`` and ``end`` are character offsets into the scanned text, so
    ``text[span.start:span.end] == span.text`` always holds.
    """

    text: str
    mode: SpanMode
    start: int
    end: int

    def __post_init__(self) -> None:
        if not self.text:
            raise SegmentationInputError(INVALID_TOKEN_CODE, "span must be non-empty")
        if self.start < 0 or self.end - self.start != len(self.text):
            raise SegmentationInputError(
                INVALID_TOKEN_CODE, "span offsets do not match span text"
            )

    @property
    def is_quoted(self) -> bool:
        """Return True for quoted spans."""
        return self.mode == SpanMode.QUOTED


@dataclass(frozen=True)
class RawToken:
    """A classified unit produced by a tokenizer for one span.

    Offsets are relative to the owning span's text.
    """

    text: str
    token_class: TokenClass
    start: int
    end: int

    def __post_init__(self) -> None:
        if not self.text:
            raise SegmentationInputError(
                INVALID_TOKEN_CODE, "raw token must be non-empty"
            )
        if self.start < 0 or self.end < self.start:
            raise SegmentationInputError(
                INVALID_TOKEN_CODE, "raw token offsets are out of order"
            )


@dataclass(frozen=True)
class DisplayToken:
    """A final display word with its position in the output."""

    text: str
    position: int

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise SegmentationInputError(
                INVALID_TOKEN_CODE, "display token must contain visible text"
            )
        if self.position < 0:
            raise SegmentationInputError(
                INVALID_TOKEN_CODE, "display token position must be non-negative"
            )


@dataclass(frozen=True)
class SegmenterConfig:
    """Validated configuration for the segmenter."""

    use_hmm: bool = True
    dictionary_path: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.use_hmm, bool):
            raise SegmentationInputError(INVALID_CONFIG_CODE, "use_hmm must be a bool")
        if self.dictionary_path is not None and not self.dictionary_path.strip():
            raise SegmentationInputError(
                INVALID_CONFIG_CODE, "dictionary_path must be non-empty"
            )

    def validate_files(self) -> None:
        """Ensure referenced files exist on disk."""
        if self.dictionary_path is None:
            return
        if not os.path.isfile(self.dictionary_path):
            raise SegmentationInputError(
                DICTIONARY_MISSING_CODE,
                f"dictionary file not found: {self.dictionary_path}",
            )


def is_cjk_character(character: str) -> bool:
    """Return True when the character falls in a CJK routing range."""
    code_point = ord(character)
    return any(low <= code_point <= high for low, high in CJK_RANGES)


def contains_cjk(text_value: str) -> bool:
    """Return True when any character of the text is CJK."""
    return any(is_cjk_character(character) for character in text_value)


def classify_script(text_value: str) -> ScriptMode:
    """Choose the tokenization strategy for an unquoted span."""
    if contains_cjk(text_value):
        return ScriptMode.CJK
    return ScriptMode.LATIN


def has_alphanumeric(text_value: str) -> bool:
    """Return True when the text carries at least one letter or digit."""
    return any(character.isalnum() for character in text_value)


def is_contraction_apostrophe(text_value: str, index: int) -> bool:
    """Return True when the apostrophe at index is part of a contraction.

    Only the following character is inspected, so a leading apostrophe
    such as the one in ``'tis`` also counts as a contraction.
    """
    if text_value[index] != APOSTROPHE:
        return False
    next_index = index + 1
    return next_index < len(text_value) and text_value[next_index].isalpha()
