"""Reattach punctuation and fuse hyphen compounds within one span."""

from __future__ import annotations

from typing import Sequence, Tuple

from domain.text_segmentation import (
    CONNECTOR_MARK,
    RawToken,
    ScriptMode,
    TokenClass,
    has_alphanumeric,
)


def is_tight_successor(connector: RawToken, successor: RawToken | None) -> bool:
    """Return True when the successor starts right where the connector ends."""
    return successor is not None and successor.start == connector.end


def is_displayable(token: RawToken, script: ScriptMode) -> bool:
    """Return True when a token may open a new display word."""
    if script == ScriptMode.CJK and token.token_class == TokenClass.WORD:
        return True
    return has_alphanumeric(token.text)


def merge_tokens(tokens: Sequence[RawToken], script: ScriptMode) -> Tuple[str, ...]:
    """Merge the raw tokens of one span into display words.

    Rules in precedence order: a connector with an earlier word and a tight
    right neighbour fuses both into the earlier word; punctuation after an
    earlier word is appended to it; anything else opens a new word when it
    is displayable and is dropped otherwise.
    """
    words: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        successor = tokens[index + 1] if index + 1 < len(tokens) else None

        if (
            token.token_class == TokenClass.CONNECTOR
            and words
            and is_tight_successor(token, successor)
        ):
            words[-1] = f"{words[-1]}{CONNECTOR_MARK}{successor.text}"
            index += 2
            continue

        if token.token_class == TokenClass.PUNCTUATION and words:
            words[-1] = words[-1] + token.text
        elif is_displayable(token, script):
            words.append(token.text)
        index += 1

    return tuple(words)
