"""Per-span tokenizers for segment_text."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
import time
from typing import Iterable, Protocol, Tuple

import jieba
import regex

from domain.text_segmentation import (
    CONNECTOR_MARK,
    DICTIONARY_LOAD_CODE,
    PUNCTUATION_MARKS,
    RawToken,
    ScriptMode,
    SegmentationInputError,
    TokenClass,
    classify_script,
    has_alphanumeric,
)

LOGGER = logging.getLogger("segment_text")

WORD_BOUNDARY_PATTERN = regex.compile(r"(?w)\b")
DEFAULT_DICTIONARY_KEY = "<default>"

_DICTIONARY_MODELS: dict[str, jieba.Tokenizer] = {}
_DICTIONARY_LOCK = threading.Lock()

jieba.setLogLevel(logging.INFO)


class WordCutter(Protocol):
    """Word-boundary oracle for CJK text."""

    def cut(self, text: str, use_hmm: bool) -> Iterable[str]:
        """Cut text into units that cover it exactly."""


def load_dictionary_model(dictionary_path: str | None = None) -> jieba.Tokenizer:
    """Return the shared jieba model for a dictionary, building it once."""
    cache_key = dictionary_path or DEFAULT_DICTIONARY_KEY
    model = _DICTIONARY_MODELS.get(cache_key)
    if model is not None:
        return model
    with _DICTIONARY_LOCK:
        model = _DICTIONARY_MODELS.get(cache_key)
        if model is not None:
            return model
        start = time.monotonic()
        try:
            if dictionary_path is None:
                model = jieba.Tokenizer()
            else:
                model = jieba.Tokenizer(dictionary=dictionary_path)
            model.initialize()
        except Exception as exc:
            raise SegmentationInputError(
                DICTIONARY_LOAD_CODE,
                f"dictionary load failed for {cache_key}: {exc}",
            ) from exc
        LOGGER.info(
            "segment_text.dictionary.loaded: %s in %.2fs",
            cache_key,
            time.monotonic() - start,
        )
        _DICTIONARY_MODELS[cache_key] = model
        return model


@dataclass(frozen=True)
class JiebaWordCutter:
    """WordCutter backed by a lazily loaded jieba dictionary."""

    dictionary_path: str | None = None

    def cut(self, text: str, use_hmm: bool) -> Iterable[str]:
        return load_dictionary_model(self.dictionary_path).cut(text, HMM=use_hmm)


def classify_cjk_unit(unit: str) -> TokenClass:
    """Classify a trimmed CJK cut unit."""
    if unit == CONNECTOR_MARK:
        return TokenClass.CONNECTOR
    if unit in PUNCTUATION_MARKS:
        return TokenClass.PUNCTUATION
    return TokenClass.WORD


def classify_latin_unit(unit: str) -> TokenClass:
    """Classify a trimmed Latin boundary unit."""
    if not unit:
        return TokenClass.WHITESPACE
    if unit == CONNECTOR_MARK:
        return TokenClass.CONNECTOR
    if unit in PUNCTUATION_MARKS:
        return TokenClass.PUNCTUATION
    if has_alphanumeric(unit):
        return TokenClass.WORD
    return TokenClass.SYMBOL_ONLY


def tokenize_cjk(
    text_value: str, cutter: WordCutter, use_hmm: bool
) -> Tuple[RawToken, ...]:
    """Tokenize a CJK span with the word-cut oracle."""
    tokens: list[RawToken] = []
    offset = 0
    for unit in cutter.cut(text_value, use_hmm):
        unit_start = offset
        offset += len(unit)
        trimmed = unit.strip()
        if not trimmed:
            continue
        leading = len(unit) - len(unit.lstrip())
        start = unit_start + leading
        tokens.append(
            RawToken(
                text=trimmed,
                token_class=classify_cjk_unit(trimmed),
                start=start,
                end=start + len(trimmed),
            )
        )
    return tuple(tokens)


def word_boundary_offsets(text_value: str) -> Tuple[int, ...]:
    """Return sorted Unicode word-boundary offsets including both ends."""
    offsets = {0, len(text_value)}
    offsets.update(match.start() for match in WORD_BOUNDARY_PATTERN.finditer(text_value))
    return tuple(sorted(offsets))


def tokenize_latin(text_value: str) -> Tuple[RawToken, ...]:
    """Tokenize a span without CJK characters on Unicode word boundaries.

    Whitespace and symbol-only units are dropped here; connectors and the
    recognized punctuation marks are kept for merging.
    """
    tokens: list[RawToken] = []
    offsets = word_boundary_offsets(text_value)
    for unit_start, unit_end in zip(offsets, offsets[1:]):
        for start, piece in split_boundary_unit(text_value[unit_start:unit_end]):
            token_class = classify_latin_unit(piece)
            if token_class in (TokenClass.WHITESPACE, TokenClass.SYMBOL_ONLY):
                continue
            tokens.append(
                RawToken(
                    text=piece,
                    token_class=token_class,
                    start=unit_start + start,
                    end=unit_start + start + len(piece),
                )
            )
    return tuple(tokens)


def split_boundary_unit(unit: str) -> Tuple[Tuple[int, str], ...]:
    """Split a boundary unit into trimmed pieces with their offsets.

    Units without letters or digits break between every character, so runs
    such as ``?!`` or `` - `` become one piece per visible mark.
    """
    if has_alphanumeric(unit):
        trimmed = unit.strip()
        if not trimmed:
            return ()
        return ((len(unit) - len(unit.lstrip()), trimmed),)
    return tuple(
        (index, character)
        for index, character in enumerate(unit)
        if not character.isspace()
    )


def tokenize_span(
    text_value: str, cutter: WordCutter, use_hmm: bool
) -> Tuple[ScriptMode, Tuple[RawToken, ...]]:
    """Route an unquoted span to the CJK or Latin tokenizer."""
    script = classify_script(text_value)
    if script == ScriptMode.CJK:
        return script, tokenize_cjk(text_value, cutter, use_hmm)
    return script, tokenize_latin(text_value)
