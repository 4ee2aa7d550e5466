#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.11"
# dependencies = [
#   "jieba>=0.42",
#   "regex>=2023.0",
# ]
# ///
"""Split text into display words for word-by-word video rendering."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
import json
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from domain.text_segmentation import (
    EMPTY_TEXT_CODE,
    INPUT_FILE_CODE,
    INVALID_CONFIG_CODE,
    SegmentationInputError,
    SegmenterConfig,
)
from service.segmenter import Segmenter

LOGGER = logging.getLogger("segment_text")


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    LINES = "lines"


@dataclass(frozen=True)
class SegmentRequest:
    """Parsed CLI request."""

    config: SegmenterConfig
    input_text: str
    output_format: OutputFormat


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )


def read_input_file(file_path: str) -> str:
    """Read an input text file as UTF-8, dropping a leading byte order mark."""
    try:
        raw_text = Path(file_path).read_bytes()
    except OSError as exc:
        raise SegmentationInputError(
            INPUT_FILE_CODE, f"cannot read input text file {file_path}: {exc.strerror}"
        ) from exc
    try:
        return raw_text.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SegmentationInputError(
            INPUT_FILE_CODE,
            f"{file_path} is not UTF-8 (bad byte at offset {exc.start})",
        ) from exc


def normalize_input_text(text_value: str) -> str:
    """Strip byte order marks and the final line ending from input text."""
    normalized = text_value.replace("\ufeff", "")
    if normalized.endswith("\r\n"):
        return normalized[:-2]
    if normalized.endswith("\n"):
        return normalized[:-1]
    return normalized


def read_piped_text(stream: TextIO) -> str:
    """Read input text from a pipe."""
    if stream.isatty():
        raise SegmentationInputError(
            EMPTY_TEXT_CODE,
            "no input detected via pipe; use --text, --input-text-file or pipe text in",
        )
    return stream.read()


def parse_output_format(value: str) -> OutputFormat:
    """Parse an output format name."""
    normalized = value.strip().lower()
    try:
        return OutputFormat(normalized)
    except ValueError as exc:
        raise SegmentationInputError(
            INVALID_CONFIG_CODE, f"invalid output format: {value!r}"
        ) from exc


def parse_args(argv: Sequence[str], stdin: TextIO) -> SegmentRequest:
    """Parse CLI arguments into a SegmentRequest."""
    parser = argparse.ArgumentParser(prog="segment_text.py", add_help=True)
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("--text", default=None)
    input_group.add_argument("--input-text-file", default=None)
    parser.add_argument("--no-hmm", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--dictionary-file", default=None)
    parser.add_argument("--output-format", default=OutputFormat.JSON.value)

    parsed = parser.parse_args(argv)
    output_format = parse_output_format(parsed.output_format)
    config = SegmenterConfig(
        use_hmm=not parsed.no_hmm, dictionary_path=parsed.dictionary_file
    )
    config.validate_files()

    if parsed.text is not None:
        input_text = parsed.text
    elif parsed.input_text_file is not None:
        input_text = read_input_file(parsed.input_text_file)
    else:
        input_text = read_piped_text(stdin)

    input_text = normalize_input_text(input_text)
    if not input_text.strip():
        raise SegmentationInputError(EMPTY_TEXT_CODE, "input text contains no words")

    return SegmentRequest(
        config=config, input_text=input_text, output_format=output_format
    )


def emit_words(words: Sequence[str], output_format: OutputFormat, stream: TextIO) -> None:
    """Write display words to the output stream."""
    if output_format == OutputFormat.LINES:
        for word in words:
            stream.write(f"{word}\n")
        return
    stream.write(json.dumps({"words": list(words)}, ensure_ascii=True))
    stream.write("\n")


def main() -> int:
    """CLI entrypoint."""
    configure_logging("--verbose" in sys.argv[1:])

    try:
        request = parse_args(sys.argv[1:], sys.stdin)
        words = Segmenter(config=request.config).segment(request.input_text)
        LOGGER.debug(
            "segment_text.segmented: %d words from %d characters",
            len(words),
            len(request.input_text),
        )
        if not words:
            LOGGER.warning("%s: input produced no display words", EMPTY_TEXT_CODE)
        emit_words(words, request.output_format, sys.stdout)
        return 0
    except SegmentationInputError as exc:
        LOGGER.error("%s: %s", exc.code, str(exc).strip())
        return 1
    except Exception as exc:
        LOGGER.error("segment_text.unhandled_error: %s", str(exc).strip())
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
